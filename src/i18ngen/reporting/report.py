"""Run report data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class LanguageReport:
    """Outcome of the pipeline for one target language."""

    lang: str
    status: str = "pending"  # pending|skipped|succeeded|failed
    messages: int = 0
    chunks: int = 0
    model_calls: int = 0
    warnings: list[str] = field(default_factory=list)
    error: str = ""

    def to_dict(self) -> dict:
        return {
            "lang": self.lang,
            "status": self.status,
            "messages": self.messages,
            "chunks": self.chunks,
            "model_calls": self.model_calls,
            "warnings": self.warnings,
            "error": self.error,
        }


@dataclass
class RunReport:
    """Collects statistics about one i18ngen run."""

    source_lang: str = ""
    output_dir: str = ""
    backend: str = ""
    target_langs: list[str] = field(default_factory=list)
    languages: list[LanguageReport] = field(default_factory=list)

    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    errors: list[str] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    @property
    def messages_translated(self) -> int:
        return sum(r.messages for r in self.languages if r.status == "succeeded")

    @property
    def model_calls(self) -> int:
        return sum(r.model_calls for r in self.languages)

    def language(self, lang: str) -> LanguageReport:
        """Return the entry for ``lang``, creating it if needed."""
        for entry in self.languages:
            if entry.lang == lang:
                return entry
        entry = LanguageReport(lang=lang)
        self.languages.append(entry)
        return entry

    def finish(self) -> None:
        self.finished_at = datetime.now()

    def to_dict(self) -> dict:
        return {
            "source_lang": self.source_lang,
            "output_dir": self.output_dir,
            "backend": self.backend,
            "target_langs": self.target_langs,
            "languages": [r.to_dict() for r in self.languages],
            "messages_translated": self.messages_translated,
            "model_calls": self.model_calls,
            "duration_seconds": self.duration_seconds,
            "errors": self.errors,
        }
