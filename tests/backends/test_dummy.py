"""Tests for the dummy backend."""

from i18ngen.backends.base import GenerationRequest
from i18ngen.backends.dummy import DummyBackend

SOURCE = '[Hello]\nhash = "sha1-1"\nother = "Hello"\n\n[Cats]\none = "cat"\nother = "cats"\n'


def _request(lang="fr"):
    return GenerationRequest(system="", prompt="", target_lang=lang, source_text=SOURCE)


class TestDummyBackend:
    def test_echo(self):
        result = DummyBackend().generate(_request())
        assert result["Hello"]["other"] == "Hello"
        assert result["Hello"]["hash"] == "sha1-1"
        assert result["Cats"]["one"] == "cat"

    def test_tagged(self):
        result = DummyBackend(tag=True).generate(_request("de"))
        assert result["Hello"]["other"] == "[DE] Hello"
        assert result["Hello"]["hash"] == "sha1-1"
        assert result["Cats"]["one"] == "[DE] cat"
        assert result["Cats"]["zero"] == ""

    def test_records_requests(self):
        backend = DummyBackend()
        backend.generate(_request())
        assert len(backend.requests) == 1
