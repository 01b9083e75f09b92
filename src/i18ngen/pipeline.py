"""Extract → merge → translate → merge pipeline, one target language at a time.

Used by the CLI. Progress is reported through an optional callback and the
whole run honours a shared cancel event.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path
from threading import Event

from i18ngen.backends.base import ModelBackend
from i18ngen.core.language import parse_language_tag
from i18ngen.core.resource import (
    active_path,
    read_messages,
    remove_if_exists,
    touch,
    translate_path,
    write_messages,
)
from i18ngen.errors import ConfigError, check_cancel
from i18ngen.external import Goi18nTool
from i18ngen.reporting.report import LanguageReport, RunReport
from i18ngen.translation.chunker import CHUNK_SIZE, count_chunks
from i18ngen.translation.translator import ChunkTranslator

logger = logging.getLogger(__name__)

PROVIDERS = ("google", "vertexai", "openai", "anthropic", "dummy")


class LanguageStatus(str, Enum):
    """Terminal state of one language."""
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# Type alias for progress callback: (phase, current, total, message)
ProgressCallback = Callable[[str, int, int, str], None]


def _notify(on_progress: ProgressCallback | None, phase: str, current: int, total: int, message: str) -> None:
    logger.info(message)
    if on_progress is not None:
        on_progress(phase, current, total, message)


# ── Backend creation ──


def create_backend(provider: str, model: str) -> ModelBackend:
    """Create a model backend for ``provider`` (case-insensitive).

    Raises:
        ConfigError: If the provider is unknown or the model name is empty.
    """
    name = provider.strip().lower()
    if name not in PROVIDERS:
        raise ConfigError(
            f"unknown provider {provider!r}, must be one of GOOGLE, VERTEXAI, OPENAI, ANTHROPIC"
        )
    if name == "dummy":
        from i18ngen.backends.dummy import DummyBackend
        return DummyBackend(tag=True)

    if not model:
        raise ConfigError(f"a model name is required for provider {provider!r}")
    if name in ("google", "vertexai"):
        from i18ngen.backends.google import GoogleGenAIBackend
        return GoogleGenAIBackend(model, vertexai=name == "vertexai")
    elif name == "openai":
        from i18ngen.backends.openai import OpenAIBackend
        return OpenAIBackend(model)
    else:
        from i18ngen.backends.anthropic import AnthropicBackend
        return AnthropicBackend(model)


# ── Per-language state machine ──


def translate_language(
    lang: str,
    *,
    source_lang: str,
    output_dir: Path,
    tool: Goi18nTool,
    translator: ChunkTranslator,
    report: LanguageReport | None = None,
    cancel_event: Event | None = None,
    on_progress: ProgressCallback | None = None,
) -> LanguageStatus:
    """Bring ``active.<lang>.toml`` up to date with the baseline.

    Steps: touch the active file, drop any stale delta, merge to produce a
    fresh delta, translate it chunk by chunk, write it back, merge it into
    the active file and delete it. No delta after the first merge means
    there is nothing to translate.
    """
    output_dir = Path(output_dir)
    report = report if report is not None else LanguageReport(lang=lang)
    baseline = active_path(output_dir, source_lang)
    active = active_path(output_dir, lang)
    delta = translate_path(output_dir, lang)

    touch(active)
    remove_if_exists(delta)

    check_cancel(cancel_event)
    _notify(on_progress, "step", 0, 3, f"generating required translations for {lang!r}")
    tool.merge(source_lang, output_dir, baseline, active)
    check_cancel(cancel_event)

    if not delta.exists():
        _notify(on_progress, "step", 3, 3, f"no translations needed for {lang!r}, skipping")
        report.status = LanguageStatus.SKIPPED.value
        return LanguageStatus.SKIPPED

    to_translate = read_messages(delta)
    report.messages = len(to_translate)
    report.chunks = count_chunks(len(to_translate), translator.chunk_size)

    _notify(
        on_progress, "step", 1, 3,
        f"asking the model to translate {len(to_translate)} messages to {lang!r}",
    )
    calls_before = translator.model_calls
    warnings_before = len(translator.warnings)
    translated = translator.translate(lang, to_translate)
    report.model_calls = translator.model_calls - calls_before
    report.warnings.extend(translator.warnings[warnings_before:])

    write_messages(delta, translated)

    touch(active)
    check_cancel(cancel_event)
    _notify(on_progress, "step", 2, 3, f"merging translations for {lang!r}")
    tool.merge(source_lang, output_dir, baseline, active, delta)
    check_cancel(cancel_event)

    _notify(on_progress, "step", 3, 3, f"deleting the temporary translation file for {lang!r}")
    remove_if_exists(delta)
    report.status = LanguageStatus.SUCCEEDED.value
    logger.info("translations for %r generated successfully", lang)
    return LanguageStatus.SUCCEEDED


# ── Whole run ──


def generate(
    backend: ModelBackend,
    *,
    source_lang: str,
    output_dir: Path,
    target_langs: Sequence[str] = (),
    tool: Goi18nTool | None = None,
    install: bool = True,
    chunk_size: int = CHUNK_SIZE,
    cancel_event: Event | None = None,
    on_progress: ProgressCallback | None = None,
    report: RunReport | None = None,
) -> RunReport:
    """Extract the baseline once, then update every target language in order.

    Languages are processed strictly one after another; the first error
    aborts the run and is re-raised after being recorded in ``report``.

    Raises:
        ConfigError: Empty output directory or unparseable language tag.
        ExternalToolError, ModelCallError, DeserializationError,
        CancelledError, OSError: From the individual steps.
    """
    report = report if report is not None else RunReport()
    report.backend = backend.label

    if not str(output_dir).strip():
        raise ConfigError("output directory is required")
    output_dir = Path(output_dir)

    try:
        source = parse_language_tag(source_lang)
        targets = [parse_language_tag(lang) for lang in target_langs]
    except ConfigError as e:
        report.errors.append(str(e))
        raise

    report.source_lang = source
    report.output_dir = str(output_dir)
    report.target_langs = targets

    output_dir.mkdir(parents=True, exist_ok=True)
    tool = tool if tool is not None else Goi18nTool(cancel_event=cancel_event)
    translator = ChunkTranslator(backend, chunk_size=chunk_size, cancel_event=cancel_event)

    try:
        if install:
            _notify(on_progress, "install", 0, 1, "installing goi18n tool")
            tool.install()
            check_cancel(cancel_event)

        _notify(on_progress, "extract", 0, 1, f"extracting translations for {source!r}")
        tool.extract(source, output_dir)
        check_cancel(cancel_event)

        for i, lang in enumerate(targets):
            _notify(on_progress, "language", i, len(targets), f"processing {lang!r}")
            entry = report.language(lang)
            try:
                translate_language(
                    lang,
                    source_lang=source,
                    output_dir=output_dir,
                    tool=tool,
                    translator=translator,
                    report=entry,
                    cancel_event=cancel_event,
                    on_progress=on_progress,
                )
            except Exception as e:
                entry.status = LanguageStatus.FAILED.value
                entry.error = str(e)
                raise
            _notify(on_progress, "language", i + 1, len(targets), f"{lang!r}: {entry.status}")
    except Exception as e:
        report.errors.append(str(e))
        raise
    finally:
        report.finish()

    logger.info("translation files generated successfully")
    return report
