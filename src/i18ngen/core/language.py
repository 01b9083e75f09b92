"""BCP 47 language tag parsing.

Only well-formedness is checked; subtags are not validated against the
IANA registry. Tags are returned with canonical casing (``pt-br`` becomes
``pt-BR``, ``zh-hant-tw`` becomes ``zh-Hant-TW``) so file names stay stable.
"""

from __future__ import annotations

import re

from i18ngen.errors import ConfigError

_LANGTAG_RE = re.compile(
    r"""
    ^
    (?P<language>[a-z]{2,3}(?:-[a-z]{3}){0,3}|[a-z]{4}|[a-z]{5,8})
    (?:-(?P<script>[a-z]{4}))?
    (?:-(?P<region>[a-z]{2}|[0-9]{3}))?
    (?P<variants>(?:-(?:[a-z0-9]{5,8}|[0-9][a-z0-9]{3}))*)
    (?P<extensions>(?:-[0-9a-wy-z](?:-[a-z0-9]{2,8})+)*)
    (?P<private>-x(?:-[a-z0-9]{1,8})+)?
    $
    """,
    re.VERBOSE | re.IGNORECASE,
)

_PRIVATE_RE = re.compile(r"^x(?:-[a-z0-9]{1,8})+$", re.IGNORECASE)


def parse_language_tag(tag: str) -> str:
    """Validate ``tag`` and return it in canonical case.

    Underscores are accepted as separators (``en_US``).

    Raises:
        ConfigError: If the tag is empty or not a well-formed BCP 47 tag.
    """
    cleaned = tag.strip().replace("_", "-")
    if not cleaned:
        raise ConfigError("Language tag must not be empty")

    if _PRIVATE_RE.match(cleaned):
        return cleaned.lower()

    match = _LANGTAG_RE.match(cleaned)
    if match is None:
        raise ConfigError(f"Invalid language tag {tag!r}")

    parts = [match.group("language").lower()]
    if match.group("script"):
        parts.append(match.group("script").title())
    if match.group("region"):
        parts.append(match.group("region").upper())
    for group in ("variants", "extensions", "private"):
        if match.group(group):
            parts.append(match.group(group).lstrip("-").lower())
    return "-".join(parts)


def split_language_list(values: list[str] | None) -> list[str]:
    """Flatten repeated and comma-separated language options.

    ``["fr,de", "es"]`` becomes ``["fr", "de", "es"]``. Blank entries are
    dropped; duplicates keep their first position.
    """
    result: list[str] = []
    for value in values or []:
        for item in value.split(","):
            item = item.strip()
            if item and item not in result:
                result.append(item)
    return result
