"""
Supported languages and utilities.

Text is always translated from English. Locale codes coming from callers
(`fr-ca`, `es_MX`, `zh-hant`) are folded onto the language the translation
service knows; anything unrecognized falls back to English, which means
"leave the text alone".
"""

from enum import Enum


class Language(str, Enum):
    """Supported languages, valued by the code the translation service expects."""

    EN = "en"        # English
    IT = "it"        # Italian
    FR = "fr"        # French
    ES = "es"        # Spanish
    PT = "pt"        # Portuguese
    ZH = "zh-Hans"   # Chinese (Simplified)
    RU = "ru"        # Russian


# Everything is translated from this language
SOURCE_LANGUAGE = Language.EN


# Human-readable names
LANGUAGE_NAMES: dict[Language, str] = {
    Language.EN: "English",
    Language.IT: "Italian",
    Language.FR: "French",
    Language.ES: "Spanish",
    Language.PT: "Portuguese",
    Language.ZH: "Chinese",
    Language.RU: "Russian",
}


# =============================================================================
# Locale variants
# =============================================================================


LOCALE_VARIANTS: dict[Language, list[str]] = {
    Language.EN: [
        "en-us",  # United States
        "en-gb",  # United Kingdom
        "en-ca",  # Canada
        "en-au",  # Australia
        "en-nz",  # New Zealand
        "en-ie",  # Ireland
        "en-za",  # South Africa
        "en-jm",  # Jamaica
        "en-bz",  # Belize
        "en-ph",  # Philippines
        "en-zw",  # Zimbabwe
        "en-cb",  # Caribbean
        "en-tt",  # Trinidad and Tobago
    ],
    Language.IT: [
        "it-it",  # Italy
        "it-ch",  # Switzerland
    ],
    Language.FR: [
        "fr-fr",  # France
        "fr-be",  # Belgium
        "fr-ca",  # Canada
        "fr-lu",  # Luxembourg
        "fr-mc",  # Monaco
        "fr-ch",  # Switzerland
    ],
    Language.ES: [
        "es-es",  # Spain
        "es-mx",  # Mexico
        "es-ar",  # Argentina
        "es-bo",  # Bolivia
        "es-cl",  # Chile
        "es-co",  # Colombia
        "es-cr",  # Costa Rica
        "es-do",  # Dominican Republic
        "es-ec",  # Ecuador
        "es-sv",  # El Salvador
        "es-gt",  # Guatemala
        "es-hn",  # Honduras
        "es-ni",  # Nicaragua
        "es-pa",  # Panama
        "es-py",  # Paraguay
        "es-pe",  # Peru
        "es-pr",  # Puerto Rico
        "es-uy",  # Uruguay
        "es-ve",  # Venezuela
    ],
    Language.PT: [
        "pt-br",  # Brazil
        "pt-pt",  # Portugal
    ],
    Language.ZH: [
        "zh-cn",    # China
        "zh-sg",    # Singapore
        "zh-hans",  # Simplified
        "zh-hk",    # Hong Kong SAR
        "zh-mo",    # Macau SAR
        "zh-tw",    # Taiwan
        "zh-hant",  # Traditional
    ],
    Language.RU: [
        "ru-ru",  # Russia
    ],
}


# Lookup table: every code and variant -> language
_CODE_TABLE: dict[str, Language] = {}
for _language, _variants in LOCALE_VARIANTS.items():
    _CODE_TABLE[_language.value.lower()] = _language
    _CODE_TABLE[LANGUAGE_NAMES[_language].lower()] = _language
    for _variant in _variants:
        _CODE_TABLE[_variant] = _language


# All supported (for API)
SUPPORTED_LANGUAGES = list(Language)


# =============================================================================
# Utilities
# =============================================================================


def normalize_language_code(code: str) -> str:
    """Normalize a language code: trimmed, lowercase, `-` as separator."""
    return code.strip().lower().replace("_", "-")


def get_language(code: str | Language | None) -> Language:
    """
    Get the Language for a code, locale or English language name.

    Unrecognized or empty codes map to English.
    """
    if isinstance(code, Language):
        return code
    if not code:
        return SOURCE_LANGUAGE
    return _CODE_TABLE.get(normalize_language_code(code), SOURCE_LANGUAGE)


def get_language_code(language: Language) -> str:
    """Get the code the translation service expects for a language."""
    return Language(language).value


def get_language_name(language: Language) -> str:
    """Get human-readable language name."""
    return LANGUAGE_NAMES[Language(language)]


def is_source_language(language: str | Language | None) -> bool:
    """Whether translating to this language would be a no-op."""
    return get_language(language) is SOURCE_LANGUAGE
