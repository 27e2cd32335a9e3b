"""
Entity translator - translates every text inside an object graph.

Pipeline per call:
1. Clone the entity (the caller's object is never written to)
2. Walk the clone and collect eligible text by address
3. Send the texts to the translation service in one request
4. Write the translations back into the clone by address

Any failure along the way returns the original entity untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from lingograph.config import TranslatorConfig
from lingograph.core.cloning import CloneError, clone
from lingograph.core.filters import FilterSpec
from lingograph.core.mapper import ResultMapper
from lingograph.core.walker import ExtractionSet, GraphWalker
from lingograph.i18n.client import TranslationClient
from lingograph.i18n.languages import Language, get_language, is_source_language
from lingograph.i18n.message import TranslationMessage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityTranslator:
    """
    Translates arbitrary entities through the translation service.

    Usage:
        translator = EntityTranslator(TranslatorConfig(base_address=url))

        # Everything
        employee_fr = await translator.translate(employee, Language.FR)

        # Only some members
        employee_es = await translator.translate(
            employee,
            "es-mx",
            translate_properties=["Manager.Description"],
        )

    The translator holds no per-call state, so one instance can serve
    concurrent translations.
    """

    def __init__(
        self,
        config: TranslatorConfig,
        client: TranslationClient | None = None,
        default_filter: FilterSpec | None = None,
    ):
        self.config = config
        self.client = client or TranslationClient(config)
        self.default_filter = default_filter or FilterSpec()

    async def translate(
        self,
        entity: T,
        language: str | Language,
        entity_name: str | None = None,
        filter_spec: FilterSpec | None = None,
        translate_properties: Iterable[str] | None = None,
        ignore_properties: Iterable[str] | None = None,
    ) -> T:
        """
        Translate an entity into `language`.

        Args:
            entity: Any object graph (models, dataclasses, lists, dicts, ...)
            language: Target Language, code or locale ("fr", "es-mx")
            entity_name: Root name of the addresses (defaults to the class name)
            filter_spec: Include/exclude patterns; overrides the lists below
            translate_properties: Only translate these address patterns
            ignore_properties: Never translate these address patterns

        Returns:
            A translated clone, or `entity` itself when there is nothing to
            do or anything fails.
        """
        if entity is None or is_source_language(language):
            return entity

        target = get_language(language)
        name = entity_name or type(entity).__name__
        spec = self._resolve_filter(filter_spec, translate_properties, ignore_properties)

        try:
            translated = clone(entity)
        except CloneError:
            logger.warning(f"Could not clone '{name}', returning it untranslated", exc_info=True)
            return entity

        try:
            return await self._translate_clone(translated, name, target, spec)
        except Exception:
            logger.warning(
                f"Translation of '{name}' to {target.value} failed, returning original",
                exc_info=True,
            )
            return entity

    async def _translate_clone(
        self,
        translated: Any,
        name: str,
        target: Language,
        spec: FilterSpec,
    ) -> Any:
        items = self.extract(translated, name, spec)
        if not items:
            logger.debug(f"Nothing to translate in '{name}'")
            return translated

        request = TranslationMessage.for_language(target, items.as_dict())
        response = await self.client.send(request)

        if response is None or response.is_empty:
            logger.info(f"No translations returned for '{name}' ({target.value})")
            return translated

        logger.info(
            f"Translated {len(response.translations)} of {len(items)} items "
            f"in '{name}' to {target.value}"
        )
        return ResultMapper(name).apply(translated, response.translations)

    def extract(self, entity: Any, entity_name: str, spec: FilterSpec | None = None) -> ExtractionSet:
        """Collect the texts that a translation of `entity` would send."""
        spec = (spec or self.default_filter).expanded()
        return GraphWalker(spec).extract(entity, entity_name)

    def _resolve_filter(
        self,
        filter_spec: FilterSpec | None,
        translate_properties: Iterable[str] | None,
        ignore_properties: Iterable[str] | None,
    ) -> FilterSpec:
        if filter_spec is not None:
            return filter_spec
        if translate_properties or ignore_properties:
            return FilterSpec.of(translate_properties, ignore_properties)
        return self.default_filter


# =============================================================================
# Module-level convenience functions
# =============================================================================


async def translate_entity(
    entity: T,
    language: str | Language,
    config: TranslatorConfig,
    entity_name: str | None = None,
    translate_properties: Iterable[str] | None = None,
    ignore_properties: Iterable[str] | None = None,
) -> T:
    """Translate an entity (convenience function)."""
    return await EntityTranslator(config).translate(
        entity,
        language,
        entity_name=entity_name,
        translate_properties=translate_properties,
        ignore_properties=ignore_properties,
    )
