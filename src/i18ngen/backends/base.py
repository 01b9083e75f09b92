"""Abstract base class for model backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GenerationRequest:
    """One structured generation call.

    Attributes:
        system: Fixed system-level instructions.
        prompt: Task prompt with the serialized chunk embedded.
        output_schema: JSON schema the response must follow.
        target_lang: Language tag the chunk is translated into.
        source_text: The serialized chunk on its own (TOML).
    """

    system: str
    prompt: str
    output_schema: dict[str, Any] = field(default_factory=dict)
    target_lang: str = ""
    source_text: str = ""


class ModelBackend(ABC):
    """Interface for language model providers."""

    #: Label used in logs and reports, e.g. "openai:gpt-4o-mini".
    label: str = "model"

    @abstractmethod
    def generate(self, request: GenerationRequest) -> str | Mapping[str, Any]:
        """Run one generation call.

        Returns:
            The structured output, either as JSON text or already decoded.
            Transport and API errors propagate unchanged.
        """
        ...
