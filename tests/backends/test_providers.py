"""Tests for the SDK-backed model backends (mocked)."""

from types import ModuleType, SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from i18ngen.backends.base import GenerationRequest

SCHEMA = {"type": "object", "properties": {}, "required": [], "additionalProperties": False}
REQUEST = GenerationRequest(
    system="rules", prompt="Translate the following text to fr:\n\n...",
    output_schema=SCHEMA, target_lang="fr", source_text="...",
)


def _make_mock_genai():
    google = ModuleType("google")
    genai = ModuleType("google.genai")
    types = ModuleType("google.genai.types")
    genai.Client = MagicMock()  # type: ignore[attr-defined]
    types.GenerateContentConfig = MagicMock(side_effect=lambda **kw: kw)  # type: ignore[attr-defined]
    genai.types = types  # type: ignore[attr-defined]
    google.genai = genai  # type: ignore[attr-defined]
    return {"google": google, "google.genai": genai, "google.genai.types": types}


class TestGoogleGenAIBackend:
    def test_generate(self):
        modules = _make_mock_genai()
        client = modules["google.genai"].Client.return_value
        client.models.generate_content.return_value = SimpleNamespace(text='{"A": {}}')

        with patch.dict("sys.modules", modules):
            from i18ngen.backends.google import GoogleGenAIBackend
            backend = GoogleGenAIBackend("gemini-2.5-flash")
            result = backend.generate(REQUEST)

        assert result == '{"A": {}}'
        assert backend.label == "google:gemini-2.5-flash"
        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["contents"] == REQUEST.prompt
        assert kwargs["config"]["system_instruction"] == "rules"
        assert kwargs["config"]["response_json_schema"] == SCHEMA
        assert kwargs["config"]["response_mime_type"] == "application/json"

    def test_vertexai_client(self):
        modules = _make_mock_genai()
        with patch.dict("sys.modules", modules):
            from i18ngen.backends.google import GoogleGenAIBackend
            backend = GoogleGenAIBackend("gemini-2.5-pro", vertexai=True)

        modules["google.genai"].Client.assert_called_once_with(vertexai=True)
        assert backend.label == "vertexai:gemini-2.5-pro"

    def test_empty_response(self):
        modules = _make_mock_genai()
        client = modules["google.genai"].Client.return_value
        client.models.generate_content.return_value = SimpleNamespace(text=None)

        with patch.dict("sys.modules", modules):
            from i18ngen.backends.google import GoogleGenAIBackend
            backend = GoogleGenAIBackend()
            with pytest.raises(RuntimeError, match="Empty response"):
                backend.generate(REQUEST)


class TestOpenAIBackend:
    def _backend(self, message):
        mock_openai = ModuleType("openai")
        mock_openai.OpenAI = MagicMock()  # type: ignore[attr-defined]
        client = mock_openai.OpenAI.return_value
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=message)],
        )
        with patch.dict("sys.modules", {"openai": mock_openai}):
            from i18ngen.backends.openai import OpenAIBackend
            return OpenAIBackend("gpt-4o-mini"), client

    def test_generate(self):
        backend, client = self._backend(SimpleNamespace(content='{"A": {}}', refusal=None))
        assert backend.generate(REQUEST) == '{"A": {}}'

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["messages"][0] == {"role": "system", "content": "rules"}
        assert kwargs["messages"][1]["role"] == "user"
        fmt = kwargs["response_format"]
        assert fmt["type"] == "json_schema"
        assert fmt["json_schema"]["schema"] == SCHEMA
        assert fmt["json_schema"]["strict"] is True

    def test_refusal(self):
        backend, _ = self._backend(SimpleNamespace(content=None, refusal="no"))
        with pytest.raises(RuntimeError, match="refused"):
            backend.generate(REQUEST)


class TestAnthropicBackend:
    def _backend(self, content):
        mock_anthropic = ModuleType("anthropic")
        mock_anthropic.Anthropic = MagicMock()  # type: ignore[attr-defined]
        client = mock_anthropic.Anthropic.return_value
        client.messages.create.return_value = SimpleNamespace(content=content)
        with patch.dict("sys.modules", {"anthropic": mock_anthropic}):
            from i18ngen.backends.anthropic import AnthropicBackend
            return AnthropicBackend("claude-sonnet-4-5"), client

    def test_generate_uses_forced_tool(self):
        tool_use = SimpleNamespace(type="tool_use", name="submit_translation", input={"A": {"other": "x"}})
        backend, client = self._backend([SimpleNamespace(type="text", text="..."), tool_use])

        assert backend.generate(REQUEST) == {"A": {"other": "x"}}
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["system"] == "rules"
        assert kwargs["tools"][0]["input_schema"] == SCHEMA
        assert kwargs["tool_choice"] == {"type": "tool", "name": "submit_translation"}

    def test_missing_tool_call(self):
        backend, _ = self._backend([SimpleNamespace(type="text", text="Sorry")])
        with pytest.raises(RuntimeError, match="did not return"):
            backend.generate(REQUEST)


class TestMissingSDK:
    def test_import_error_has_install_hint(self):
        with patch.dict("sys.modules", {"openai": None}):
            from i18ngen.backends.openai import OpenAIBackend
            with pytest.raises(ImportError, match=r"i18ngen\[openai\]"):
                OpenAIBackend("gpt-4o-mini")
