"""Tests for BCP 47 language tag parsing."""

import pytest

from i18ngen.core.language import parse_language_tag, split_language_list
from i18ngen.errors import ConfigError


class TestParseLanguageTag:
    @pytest.mark.parametrize("tag, expected", [
        ("en", "en"),
        ("FR", "fr"),
        ("pt-br", "pt-BR"),
        ("en_US", "en-US"),
        ("zh-hant-tw", "zh-Hant-TW"),
        ("es-419", "es-419"),
        ("sr-Latn", "sr-Latn"),
        ("de-CH-1996", "de-CH-1996"),
        ("x-klingon", "x-klingon"),
    ])
    def test_valid(self, tag, expected):
        assert parse_language_tag(tag) == expected

    @pytest.mark.parametrize("tag", ["", "   ", "e", "english-language-tag-x", "en--US", "123", "en-US-"])
    def test_invalid(self, tag):
        with pytest.raises(ConfigError):
            parse_language_tag(tag)


class TestSplitLanguageList:
    def test_comma_separated(self):
        assert split_language_list(["fr,de"]) == ["fr", "de"]

    def test_repeated_and_blank(self):
        assert split_language_list(["fr", " de , ,es", "fr"]) == ["fr", "de", "es"]

    def test_none(self):
        assert split_language_list(None) == []
