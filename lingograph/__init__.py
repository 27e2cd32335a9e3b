"""
Lingograph - translate the text inside any object graph.

Text leaves are found by introspection, addressed by their path
(`Employee.Orders[2].Name`), translated in one request, and written back
into a clone at the same addresses.
"""

from lingograph.config import TranslatorConfig
from lingograph.core.filters import FilterSpec
from lingograph.i18n import EntityTranslator, Language, translate_entity

__version__ = "0.1.0"

__all__ = [
    "EntityTranslator",
    "FilterSpec",
    "Language",
    "TranslatorConfig",
    "translate_entity",
]
