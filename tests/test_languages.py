"""
Tests for language code resolution.
"""

import pytest

from lingograph.i18n.languages import (
    LOCALE_VARIANTS,
    SUPPORTED_LANGUAGES,
    Language,
    get_language,
    get_language_code,
    get_language_name,
    is_source_language,
    normalize_language_code,
)


class TestGetLanguage:
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("en", Language.EN),
            ("en-us", Language.EN),
            ("en-cb", Language.EN),
            ("en-tt", Language.EN),
            ("it", Language.IT),
            ("it-ch", Language.IT),
            ("fr", Language.FR),
            ("fr-ca", Language.FR),
            ("es", Language.ES),
            ("es-mx", Language.ES),
            ("es-ve", Language.ES),
            ("pt", Language.PT),
            ("pt-br", Language.PT),
            ("zh-Hans", Language.ZH),
            ("zh-cn", Language.ZH),
            ("zh-hant", Language.ZH),
            ("zh-tw", Language.ZH),
            ("ru", Language.RU),
            ("ru-ru", Language.RU),
        ],
    )
    def test_codes_and_variants(self, code, expected):
        assert get_language(code) is expected

    def test_case_whitespace_and_underscores(self):
        assert get_language("  FR-CA ") is Language.FR
        assert get_language("es_MX") is Language.ES
        assert normalize_language_code(" zh_Hant ") == "zh-hant"

    def test_english_names(self):
        assert get_language("French") is Language.FR
        assert get_language("chinese") is Language.ZH

    @pytest.mark.parametrize("code", [None, "", "xx", "de", "klingon"])
    def test_unknown_falls_back_to_english(self, code):
        assert get_language(code) is Language.EN

    def test_language_passes_through(self):
        assert get_language(Language.PT) is Language.PT


class TestLanguageInfo:
    def test_service_codes(self):
        assert get_language_code(Language.ZH) == "zh-Hans"
        assert get_language_code(Language.FR) == "fr"

    def test_names(self):
        assert get_language_name(Language.RU) == "Russian"

    def test_every_language_has_variants(self):
        assert set(LOCALE_VARIANTS) == set(SUPPORTED_LANGUAGES)
        assert all(variant == variant.lower() for variants in LOCALE_VARIANTS.values() for variant in variants)

    def test_is_source_language(self):
        assert is_source_language("en-gb")
        assert is_source_language("unknown")
        assert not is_source_language("fr")
