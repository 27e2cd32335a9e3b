"""
Internationalization - translating whole object graphs through a service.

Design:
1. Translate anything (pydantic models, dataclasses, plain objects, dicts)
2. Address every text by its path in the graph
3. One request per entity, no matter how many texts it holds
4. Never touch the caller's object; fall back to it on any failure

Usage:
    from lingograph.i18n import EntityTranslator, Language
    from lingograph.config import TranslatorConfig

    translator = EntityTranslator(TranslatorConfig(base_address=url))
    employee_fr = await translator.translate(employee, Language.FR)

    # Locale codes work too
    employee_es = await translator.translate(employee, "es-mx")
"""

from lingograph.i18n.translator import (
    EntityTranslator,
    translate_entity,
)
from lingograph.i18n.client import (
    TranslationClient,
    TranslationServiceError,
)
from lingograph.i18n.message import TranslationMessage
from lingograph.i18n.languages import (
    Language,
    SOURCE_LANGUAGE,
    SUPPORTED_LANGUAGES,
    LOCALE_VARIANTS,
    get_language,
    get_language_code,
    get_language_name,
    is_source_language,
)

__all__ = [
    # Translation
    "EntityTranslator",
    "translate_entity",
    # Service
    "TranslationClient",
    "TranslationServiceError",
    "TranslationMessage",
    # Language utilities
    "Language",
    "SOURCE_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "LOCALE_VARIANTS",
    "get_language",
    "get_language_code",
    "get_language_name",
    "is_source_language",
]
