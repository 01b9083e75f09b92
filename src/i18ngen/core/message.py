"""Message records as stored in go-i18n TOML resource files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

from i18ngen.errors import DeserializationError

# Plural forms in CLDR order. Only these fields are ever translated.
PLURAL_FORMS = ("zero", "one", "two", "few", "many", "other")

# Serialization order inside a record table.
FIELD_ORDER = ("description", "hash", *PLURAL_FORMS)


@dataclass(frozen=True)
class Message:
    """One localizable string entry.

    ``id`` is the table key in the resource file and is not written inside
    the table. Empty fields are omitted on write and read back as "".
    """

    id: str
    hash: str = ""
    description: str = ""
    zero: str = ""
    one: str = ""
    two: str = ""
    few: str = ""
    many: str = ""
    other: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Message id must not be empty")

    @classmethod
    def from_dict(cls, message_id: str, data: object) -> Message:
        """Build a message from a decoded TOML value.

        A bare string is the short form go-i18n uses for messages that only
        have an ``other`` variant.
        """
        if not message_id:
            raise DeserializationError("Message id must not be empty")
        if isinstance(data, str):
            return cls(id=message_id, other=data)
        if not isinstance(data, Mapping):
            raise DeserializationError(
                f"Message {message_id!r}: expected a table, got {type(data).__name__}"
            )

        values: dict[str, str] = {}
        for name in FIELD_ORDER:
            value = data.get(name, "")
            if not isinstance(value, str):
                raise DeserializationError(
                    f"Message {message_id!r}: field {name!r} must be a string,"
                    f" got {type(value).__name__}"
                )
            values[name] = value
        return cls(id=message_id, **values)

    def to_dict(self) -> dict[str, str]:
        """Sparse representation: only non-empty fields, in file order."""
        return {name: getattr(self, name) for name in FIELD_ORDER if getattr(self, name)}

    def variants(self) -> dict[str, str]:
        """Non-empty plural forms."""
        return {form: getattr(self, form) for form in PLURAL_FORMS if getattr(self, form)}

    def with_variants(self, other: Message) -> Message:
        """Copy of self with the plural forms taken from ``other``."""
        return replace(self, **{form: getattr(other, form) for form in PLURAL_FORMS})


def messages_from_dict(data: Mapping[str, object]) -> dict[str, Message]:
    """Convert a decoded resource file into ``{id: Message}``."""
    return {message_id: Message.from_dict(message_id, value) for message_id, value in data.items()}


def messages_to_dict(messages: Mapping[str, Message]) -> dict[str, dict[str, str]]:
    """Convert ``{id: Message}`` into a TOML-serializable mapping."""
    return {message_id: message.to_dict() for message_id, message in messages.items()}

