"""Chunk translator: one model call per chunk under the output contract."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from threading import Event, Thread
from typing import TypeVar

from i18ngen.backends.base import GenerationRequest, ModelBackend
from i18ngen.core.message import Message
from i18ngen.core.resource import dumps_messages
from i18ngen.errors import CancelledError, DeserializationError, ModelCallError, check_cancel
from i18ngen.translation.chunker import CHUNK_SIZE, Chunk, count_chunks, translate_in_chunks
from i18ngen.translation.contract import (
    SYSTEM_PROMPT,
    ChunkContract,
    build_prompt,
    find_contract_violations,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Seconds between cancel checks while a model call is in flight.
_POLL_INTERVAL = 0.2

# Callback: (chunks_done, chunks_total)
ChunkCallback = Callable[[int, int], None]


def call_cancellable(fn: Callable[[], T], cancel_event: Event | None) -> T:
    """Run ``fn`` in a daemon thread, giving up when ``cancel_event`` is set.

    An abandoned call keeps running in the background until the SDK
    returns; its result is discarded.
    """
    if cancel_event is None:
        return fn()

    check_cancel(cancel_event)
    outcome: dict[str, object] = {}
    done = Event()

    def _target() -> None:
        try:
            outcome["result"] = fn()
        except BaseException as e:  # re-raised in the calling thread
            outcome["error"] = e
        finally:
            done.set()

    Thread(target=_target, name="i18ngen-model", daemon=True).start()
    while not done.wait(_POLL_INTERVAL):
        if cancel_event.is_set():
            raise CancelledError("Model call cancelled")

    if "error" in outcome:
        raise outcome["error"]  # type: ignore[misc]
    return outcome["result"]  # type: ignore[return-value]


class ChunkTranslator:
    """Translates go-i18n messages with a model backend, one chunk per call."""

    def __init__(
        self,
        backend: ModelBackend,
        *,
        chunk_size: int = CHUNK_SIZE,
        cancel_event: Event | None = None,
        on_chunk: ChunkCallback | None = None,
    ) -> None:
        self.backend = backend
        self.chunk_size = chunk_size
        self.cancel_event = cancel_event
        self.on_chunk = on_chunk
        self.model_calls = 0
        self.warnings: list[str] = []

    def translate_chunk(self, lang: str, chunk: Mapping[str, Message]) -> dict[str, Message]:
        """Translate one chunk into ``lang``.

        An empty chunk is a no-op and makes no model call.

        Raises:
            ModelCallError: The backend call failed.
            DeserializationError: The response did not match the chunk.
            CancelledError: The cancel event was set during the call.
        """
        if not chunk:
            return {}

        contract = ChunkContract(chunk)
        source_text = dumps_messages(chunk)
        request = GenerationRequest(
            system=SYSTEM_PROMPT,
            prompt=build_prompt(lang, source_text),
            output_schema=contract.json_schema(),
            target_lang=lang,
            source_text=source_text,
        )

        self.model_calls += 1
        try:
            payload = call_cancellable(lambda: self.backend.generate(request), self.cancel_event)
        except CancelledError:
            raise
        except Exception as e:
            raise ModelCallError(
                f"Calling {self.backend.label} for {lang!r} failed: {e}", language=lang,
            ) from e

        try:
            translated = contract.parse(payload)
        except DeserializationError as e:
            raise DeserializationError(f"Unmarshalling response for {lang!r}: {e}") from e

        for problem in find_contract_violations(chunk, translated):
            logger.warning("%s: %s", lang, problem)
            self.warnings.append(f"{lang}: {problem}")
        return translated

    def translate(self, lang: str, messages: Mapping[str, Message]) -> dict[str, Message]:
        """Translate a whole delta, chunk by chunk, and merge the results."""
        total = count_chunks(len(messages), self.chunk_size)
        done = 0

        def _one(chunk: Chunk) -> dict[str, Message]:
            nonlocal done
            check_cancel(self.cancel_event)
            logger.debug("Translating chunk %d/%d (%d messages) to %s", done + 1, total, len(chunk), lang)
            result = self.translate_chunk(lang, chunk)
            done += 1
            if self.on_chunk is not None:
                self.on_chunk(done, total)
            return result

        return translate_in_chunks(messages, _one, self.chunk_size)
