"""Gemini backend (Google AI Studio or Vertex AI) using the google-genai SDK."""

from __future__ import annotations

import logging

from i18ngen.backends.base import GenerationRequest, ModelBackend

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


class GoogleGenAIBackend(ModelBackend):
    """Structured generation through ``client.models.generate_content``.

    The API key is read by the SDK from ``GEMINI_API_KEY`` / ``GOOGLE_API_KEY``.
    With ``vertexai=True`` the project and location come from
    ``GOOGLE_CLOUD_PROJECT`` / ``GOOGLE_CLOUD_LOCATION``.
    """

    def __init__(self, model: str = DEFAULT_MODEL, *, vertexai: bool = False) -> None:
        try:
            from google import genai
            from google.genai import types
        except ImportError:
            raise ImportError(
                "Gemini backend requires the 'google-genai' package. "
                "Install it with: pip install i18ngen[google]"
            ) from None
        self._types = types
        self._client = genai.Client(vertexai=True) if vertexai else genai.Client()
        self.model = model
        self.label = f"{'vertexai' if vertexai else 'google'}:{model}"

    def generate(self, request: GenerationRequest) -> str:
        logger.debug("Calling %s (%d prompt chars)", self.label, len(request.prompt))
        response = self._client.models.generate_content(
            model=self.model,
            contents=request.prompt,
            config=self._types.GenerateContentConfig(
                system_instruction=request.system,
                response_mime_type="application/json",
                response_json_schema=request.output_schema,
            ),
        )
        text = response.text
        if not text:
            raise RuntimeError(f"Empty response from {self.label}")
        return text
