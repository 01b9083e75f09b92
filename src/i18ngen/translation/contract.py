"""Output contract for a single chunk translation call.

The model must return exactly the keys of the chunk it was given, each shaped
like a message record. The shape is built per call because the key set
changes from chunk to chunk.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model, field_validator

from i18ngen.core.message import FIELD_ORDER, Message
from i18ngen.errors import DeserializationError

SYSTEM_PROMPT = """\
You are a professional software localization translator.

You receive a go-i18n message file in TOML format and translate it into the
requested language. Follow these rules exactly:

1. Every table key (the message id written in brackets, e.g. [HelloWorld])
   must be kept exactly as it is. Never translate, rename, add or remove keys.
2. The "description" and "hash" fields must be copied through unchanged.
   They are context for you, not text to translate.
3. Only the values of the plural forms "zero", "one", "two", "few", "many"
   and "other" are translated. Fill in the plural forms the target language
   needs; leave a form empty if the language does not use it.
4. Template placeholders such as {{.Name}} or {{.Count}} must be kept
   verbatim in the translated text. Never translate, reorder the inside of,
   or remove a placeholder.
5. Return one record per key, with the same structure as the input.
"""

PROMPT_TEMPLATE = "Translate the following text to {lang}:\n\n{text}"

PLACEHOLDER_RE = re.compile(r"\{\{\s*\.[A-Za-z_][A-Za-z0-9_]*\s*\}\}")


class MessageFields(BaseModel):
    """Shape of one record in the model output."""

    model_config = ConfigDict(extra="ignore")

    description: str = ""
    hash: str = ""
    zero: str = ""
    one: str = ""
    two: str = ""
    few: str = ""
    many: str = ""
    other: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


def _message_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {name: {"type": "string"} for name in FIELD_ORDER},
        "required": list(FIELD_ORDER),
        "additionalProperties": False,
    }


class ChunkContract:
    """Output model whose field set equals the chunk's message ids."""

    def __init__(self, chunk: Mapping[str, Message]) -> None:
        if not chunk:
            raise ValueError("Cannot build a contract for an empty chunk")
        self.keys = list(chunk)
        # Message ids are not necessarily valid identifiers, so fields get
        # positional names and the id becomes the alias.
        field_definitions: dict[str, Any] = {
            f"m{i}": (MessageFields, Field(alias=key)) for i, key in enumerate(self.keys)
        }
        self.model: type[BaseModel] = create_model(
            "ChunkTranslation",
            __config__=ConfigDict(extra="forbid"),
            **field_definitions,
        )

    def json_schema(self) -> dict[str, Any]:
        """JSON schema handed to the model as its output constraint."""
        return {
            "type": "object",
            "properties": {key: _message_schema() for key in self.keys},
            "required": list(self.keys),
            "additionalProperties": False,
        }

    def parse(self, payload: str | Mapping[str, Any]) -> dict[str, Message]:
        """Validate the model output and convert it back into messages.

        Raises:
            DeserializationError: If the payload is not JSON or does not have
                exactly the expected keys and record shape.
        """
        if isinstance(payload, str):
            try:
                payload = json.loads(_strip_code_fence(payload))
            except json.JSONDecodeError as e:
                raise DeserializationError(f"Model output is not valid JSON: {e}") from e
        if not isinstance(payload, Mapping):
            raise DeserializationError(
                f"Model output must be an object, got {type(payload).__name__}"
            )

        try:
            validated = self.model.model_validate(payload)
        except ValidationError as e:
            raise DeserializationError(f"Model output does not match the chunk: {e}") from e

        records = validated.model_dump(by_alias=True)
        return {key: Message(id=key, **records[key]) for key in self.keys}


def build_prompt(lang: str, text: str) -> str:
    """Task prompt naming the target language and embedding the chunk."""
    return PROMPT_TEMPLATE.format(lang=lang, text=text)


def find_contract_violations(
    source: Mapping[str, Message],
    translated: Mapping[str, Message],
) -> list[str]:
    """Describe rule breaks the output shape cannot catch.

    Reports changed ``description``/``hash`` values and placeholders that
    are present in the source text but missing from a translated form.
    """
    problems: list[str] = []
    for key, original in source.items():
        result = translated.get(key)
        if result is None:
            problems.append(f"{key}: missing from translation")
            continue
        if result.description != original.description:
            problems.append(f"{key}: description was changed")
        if result.hash != original.hash:
            problems.append(f"{key}: hash was changed")

        expected = set()
        for text in original.variants().values():
            expected.update(PLACEHOLDER_RE.findall(text))
        for form, text in result.variants().items():
            missing = expected - set(PLACEHOLDER_RE.findall(text))
            if missing:
                problems.append(f"{key}.{form}: missing placeholder(s) {', '.join(sorted(missing))}")
    return problems


def _strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence some models add."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped
