"""
FastAPI application exposing entity translation over HTTP.

Run with:
    uvicorn lingograph.api.app:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Header, HTTPException, Query
from pydantic import ValidationError

from lingograph.api.models import (
    ENTITY_MODELS,
    Employee,
    LanguageResponse,
    TranslateRequest,
    TranslateResponse,
)
from lingograph.config import TranslatorConfig, get_settings
from lingograph.config_loader import ConfigLoader
from lingograph.core.filters import FilterSpec
from lingograph.i18n import (
    LOCALE_VARIANTS,
    EntityTranslator,
    Language,
    get_language,
    get_language_name,
)

logger = logging.getLogger(__name__)


# =============================================================================
# App State
# =============================================================================


class AppState:
    """Application state - initialized at startup."""

    translator: EntityTranslator
    config_loader: ConfigLoader


state = AppState()


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize app resources."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    state.translator = EntityTranslator(
        TranslatorConfig.from_settings(settings),
        default_filter=FilterSpec.of(
            settings.translate_properties_list,
            settings.ignore_properties_list,
        ),
    )

    state.config_loader = ConfigLoader(settings.filter_profiles_dir or None)
    state.config_loader.load_all()

    logger.info(
        f"Translation API starting in {settings.environment} mode "
        f"(service: {settings.translation_base_address})"
    )

    yield

    logger.info("Translation API shutting down")


# =============================================================================
# App Setup
# =============================================================================


app = FastAPI(
    title="Lingograph API",
    description="Translate every text of an object graph through a translation service",
    version="0.1.0",
    lifespan=lifespan,
)


# =============================================================================
# Dependencies
# =============================================================================


def get_translator() -> EntityTranslator:
    return state.translator


def get_config_loader() -> ConfigLoader:
    return state.config_loader


def language_from_header(accept_language: str | None) -> str | None:
    """First language of an Accept-Language header, quality ignored."""
    if not accept_language:
        return None
    first = accept_language.split(",")[0].split(";")[0].strip()
    return first or None


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "lingograph-api"}


# =============================================================================
# Languages
# =============================================================================


@app.get("/languages", response_model=list[LanguageResponse])
async def list_languages():
    """List supported languages and the locale codes folded onto them."""
    return [
        LanguageResponse(
            language=language.name,
            code=language.value,
            name=get_language_name(language),
            variants=LOCALE_VARIANTS[language],
        )
        for language in Language
    ]


# =============================================================================
# Translation
# =============================================================================


@app.get("/employee", response_model=Employee)
async def get_employee(
    language: str | None = Query(default=None),
    accept_language: str | None = Header(default=None),
    translator: EntityTranslator = Depends(get_translator),
):
    """Sample employee, translated to `language` or the Accept-Language header."""
    employee = Employee(id=1, name="test", description="Text to translate")
    target = get_language(language or language_from_header(accept_language))
    return await translator.translate(employee, target, entity_name="employee")


@app.post("/translate", response_model=TranslateResponse)
async def translate_payload(
    request: TranslateRequest,
    translator: EntityTranslator = Depends(get_translator),
    config_loader: ConfigLoader = Depends(get_config_loader),
):
    """
    Translate a JSON payload.

    When `entity_name` names a known entity model the payload is validated
    into it first, so filters can address its members. Anything else is
    translated as plain JSON, where object keys are indices.

    Without explicit filter lists, the filter profile registered for the
    entity name applies (if any).
    """
    if request.translate_properties or request.ignore_properties:
        filter_spec = FilterSpec.of(request.translate_properties, request.ignore_properties)
    else:
        filter_spec = config_loader.get_profile(request.entity_name)

    model = ENTITY_MODELS.get(request.entity_name.lower())
    entity = request.payload
    if model is not None:
        try:
            entity = model.model_validate(request.payload)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=f"Invalid {request.entity_name}: {e}")

    target = get_language(request.language)
    translated = await translator.translate(
        entity,
        target,
        entity_name=request.entity_name,
        filter_spec=filter_spec,
    )

    return TranslateResponse(
        entity_name=request.entity_name,
        language=target.value,
        payload=translated.model_dump() if model is not None else translated,
    )
