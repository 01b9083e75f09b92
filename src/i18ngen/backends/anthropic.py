"""Anthropic backend: structured output through a forced tool call."""

from __future__ import annotations

import logging
from typing import Any

from i18ngen.backends.base import GenerationRequest, ModelBackend

logger = logging.getLogger(__name__)

TOOL_NAME = "submit_translation"
MAX_TOKENS = 8192


class AnthropicBackend(ModelBackend):
    """The output schema becomes the input schema of a single required tool.

    The API key is read from ``ANTHROPIC_API_KEY``.
    """

    def __init__(self, model: str, max_tokens: int = MAX_TOKENS) -> None:
        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "Anthropic backend requires the 'anthropic' package. "
                "Install it with: pip install i18ngen[anthropic]"
            ) from None
        self._client = anthropic.Anthropic()
        self.model = model
        self.max_tokens = max_tokens
        self.label = f"anthropic:{model}"

    def generate(self, request: GenerationRequest) -> dict[str, Any]:
        logger.debug("Calling %s (%d prompt chars)", self.label, len(request.prompt))
        response = self._client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=request.system,
            messages=[{"role": "user", "content": request.prompt}],
            tools=[{
                "name": TOOL_NAME,
                "description": "Submit the translated messages.",
                "input_schema": request.output_schema,
            }],
            tool_choice={"type": "tool", "name": TOOL_NAME},
        )
        for block in response.content:
            if block.type == "tool_use" and block.name == TOOL_NAME:
                return block.input
        raise RuntimeError(f"{self.label} did not return a {TOOL_NAME} tool call")
