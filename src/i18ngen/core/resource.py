"""Reading and writing go-i18n TOML resource files."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import tomli_w

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from i18ngen.core.message import Message, messages_from_dict, messages_to_dict
from i18ngen.errors import DeserializationError

logger = logging.getLogger(__name__)


def active_path(output_dir: Path, lang: str) -> Path:
    """Merged, persistent translations for ``lang``."""
    return Path(output_dir) / f"active.{lang}.toml"


def translate_path(output_dir: Path, lang: str) -> Path:
    """Transient delta of messages that still need translating."""
    return Path(output_dir) / f"translate.{lang}.toml"


def loads_messages(text: str, source: str = "<string>") -> dict[str, Message]:
    """Parse TOML text into ``{id: Message}``."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise DeserializationError(f"Invalid TOML in {source}: {e}") from e
    return messages_from_dict(data)


def dumps_messages(messages: Mapping[str, Message]) -> str:
    """Serialize ``{id: Message}`` to TOML, one table per message id."""
    return tomli_w.dumps(messages_to_dict(messages))


def read_messages(path: Path) -> dict[str, Message]:
    """Load a resource file. An empty file yields an empty mapping."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DeserializationError(f"Invalid UTF-8 in {path}: {e}") from e
    return loads_messages(text, source=str(path))


def write_messages(path: Path, messages: Mapping[str, Message]) -> None:
    """Overwrite ``path`` with the serialized messages."""
    Path(path).write_text(dumps_messages(messages), encoding="utf-8")
    logger.debug("Wrote %d messages to %s", len(messages), path)


def touch(path: Path) -> None:
    """Make sure the file exists without changing its contents."""
    with open(path, "a", encoding="utf-8") as f:
        f.flush()
        os.fsync(f.fileno())


def remove_if_exists(path: Path) -> bool:
    """Delete ``path``. A missing file is not an error.

    Returns True if a file was removed.
    """
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    logger.debug("Removed %s", path)
    return True
