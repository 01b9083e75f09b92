"""OpenAI backend using chat completions with a strict JSON schema."""

from __future__ import annotations

import logging

from i18ngen.backends.base import GenerationRequest, ModelBackend

logger = logging.getLogger(__name__)


class OpenAIBackend(ModelBackend):
    """Structured generation via ``response_format={"type": "json_schema"}``.

    The API key is read by the SDK from ``OPENAI_API_KEY``.
    """

    def __init__(self, model: str) -> None:
        try:
            import openai
        except ImportError:
            raise ImportError(
                "OpenAI backend requires the 'openai' package. "
                "Install it with: pip install i18ngen[openai]"
            ) from None
        self._client = openai.OpenAI()
        self.model = model
        self.label = f"openai:{model}"

    def generate(self, request: GenerationRequest) -> str:
        logger.debug("Calling %s (%d prompt chars)", self.label, len(request.prompt))
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": request.system},
                {"role": "user", "content": request.prompt},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "chunk_translation",
                    "schema": request.output_schema,
                    "strict": True,
                },
            },
        )
        message = response.choices[0].message
        if getattr(message, "refusal", None):
            raise RuntimeError(f"{self.label} refused the request: {message.refusal}")
        if not message.content:
            raise RuntimeError(f"Empty response from {self.label}")
        return message.content
