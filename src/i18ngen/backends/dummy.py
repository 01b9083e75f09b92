"""Dummy backend for offline runs and tests: echoes the chunk back."""

from __future__ import annotations

from dataclasses import replace

from i18ngen.backends.base import GenerationRequest, ModelBackend
from i18ngen.core.message import FIELD_ORDER
from i18ngen.core.resource import loads_messages


class DummyBackend(ModelBackend):
    """Returns every record unchanged, optionally tagging the plural forms.

    Example with ``tag=True`` and target "fr": "Hello" → "[FR] Hello"
    """

    def __init__(self, tag: bool = False) -> None:
        self.tag = tag
        self.label = "dummy"
        self.requests: list[GenerationRequest] = []

    def generate(self, request: GenerationRequest) -> dict[str, dict[str, str]]:
        self.requests.append(request)
        messages = loads_messages(request.source_text)
        result = {}
        for key, message in messages.items():
            if self.tag:
                prefix = f"[{request.target_lang.upper()}] "
                message = replace(message, **{
                    form: prefix + text for form, text in message.variants().items()
                })
            result[key] = {name: getattr(message, name) for name in FIELD_ORDER}
        return result
