"""Split a translate delta into fixed-size chunks, one model call each."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping

from i18ngen.core.message import Message

# Messages per model call.
CHUNK_SIZE = 15

Chunk = dict[str, Message]


def _check_size(size: int) -> None:
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")


def iter_chunks(messages: Mapping[str, Message], size: int = CHUNK_SIZE) -> Iterator[Chunk]:
    """Yield chunks of at most ``size`` messages in iteration order.

    A chunk is sealed as soon as the running count reaches a multiple of
    ``size``; the remainder is yielded last. Empty chunks are never yielded,
    so an empty mapping produces no chunks at all.
    """
    _check_size(size)

    chunk: Chunk = {}
    for count, (message_id, message) in enumerate(messages.items(), start=1):
        chunk[message_id] = message
        if count % size == 0:
            yield chunk
            chunk = {}

    if chunk:
        yield chunk


def count_chunks(total: int, size: int = CHUNK_SIZE) -> int:
    """Number of chunks ``iter_chunks`` produces for ``total`` messages."""
    _check_size(size)
    return -(-total // size)


def translate_in_chunks(
    messages: Mapping[str, Message],
    translate_chunk: Callable[[Chunk], Mapping[str, Message]],
    size: int = CHUNK_SIZE,
) -> dict[str, Message]:
    """Run ``translate_chunk`` on each chunk sequentially and merge the results."""
    translated: dict[str, Message] = {}
    for chunk in iter_chunks(messages, size):
        translated.update(translate_chunk(chunk))
    return translated
