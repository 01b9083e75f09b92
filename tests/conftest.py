"""Shared test fixtures for i18ngen tests."""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from i18ngen.backends.base import GenerationRequest, ModelBackend
from i18ngen.core.message import FIELD_ORDER, PLURAL_FORMS, Message
from i18ngen.core.resource import loads_messages, read_messages, translate_path, write_messages


def make_messages(count: int, prefix: str = "Msg") -> dict[str, Message]:
    """Build ``count`` simple messages keyed ``Msg0``, ``Msg1``, ..."""
    return {
        f"{prefix}{i}": Message(id=f"{prefix}{i}", hash=f"sha1-{i}", other=f"Text {i}")
        for i in range(count)
    }


def content_hash(message: Message) -> str:
    """Hash of the source content, in the style goi18n writes."""
    digest = hashlib.sha1()
    digest.update(message.description.encode("utf-8"))
    for form in PLURAL_FORMS:
        digest.update(getattr(message, form).encode("utf-8"))
    return "sha1-" + digest.hexdigest()


def _lang_of(path: Path) -> str:
    # active.<lang>.toml / translate.<lang>.toml
    return Path(path).name.split(".", 1)[1].rsplit(".", 1)[0]


class FakeGoi18nTool:
    """In-process stand-in for ``goi18n extract`` / ``goi18n merge``.

    ``extract`` writes the configured source messages as the baseline.
    ``merge`` with two files writes a translate delta for missing or stale
    messages (and nothing when the target is complete); with three files it
    folds the delta into the active file.
    """

    def __init__(self, source_messages: Mapping[str, Message] | None = None) -> None:
        self.source_messages = dict(source_messages or {})
        self.calls: list[tuple] = []

    def install(self) -> None:
        self.calls.append(("install",))

    def extract(self, source_lang: str, output_dir: Path) -> None:
        self.calls.append(("extract", source_lang))
        baseline = {
            key: Message(id=key, description=m.description, hash=content_hash(m),
                         **{form: getattr(m, form) for form in PLURAL_FORMS})
            for key, m in self.source_messages.items()
        }
        write_messages(Path(output_dir) / f"active.{source_lang}.toml", dict(sorted(baseline.items())))

    def merge(self, source_lang: str, output_dir: Path, *files: Path) -> None:
        self.calls.append(("merge", source_lang, *(Path(f).name for f in files)))
        baseline_file, active_file, *rest = files
        baseline = read_messages(baseline_file)
        active = read_messages(active_file)
        lang = _lang_of(active_file)

        if rest:
            for key, message in read_messages(rest[0]).items():
                source = baseline.get(key)
                if source is not None:
                    active[key] = Message(id=key, hash=source.hash, **message.variants())
            write_messages(active_file, dict(sorted(active.items())))
            return

        delta = {
            key: source
            for key, source in baseline.items()
            if key not in active or active[key].hash != source.hash
        }
        current = {key: m for key, m in active.items() if key in baseline and key not in delta}
        write_messages(active_file, dict(sorted(current.items())))
        if delta:
            write_messages(translate_path(output_dir, lang), dict(sorted(delta.items())))


class StubBackend(ModelBackend):
    """Backend driven by a function from (lang, messages) to translated messages."""

    def __init__(self, translate: Callable[[str, dict[str, Message]], Mapping[str, Message]] | None = None) -> None:
        self.label = "stub"
        self._translate = translate or (lambda lang, messages: messages)
        self.requests: list[GenerationRequest] = []

    def generate(self, request: GenerationRequest) -> dict[str, dict[str, str]]:
        self.requests.append(request)
        messages = loads_messages(request.source_text)
        result = self._translate(request.target_lang, messages)
        return {key: {name: getattr(m, name) for name in FIELD_ORDER} for key, m in result.items()}


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "locales"
    path.mkdir()
    return path


@pytest.fixture
def hello_messages() -> dict[str, Message]:
    return {
        "A": Message(id="A", other="Hello"),
        "B": Message(id="B", other="Bye {{.Name}}"),
    }


@pytest.fixture
def fake_tool(hello_messages) -> FakeGoi18nTool:
    return FakeGoi18nTool(hello_messages)
