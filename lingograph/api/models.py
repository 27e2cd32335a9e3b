"""
Request/response models of the HTTP API, and the sample entity it serves.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class Employee(BaseModel):
    """Sample entity used by the /employee endpoint."""

    id: int
    name: str
    description: str | None = None
    manager: Employee | None = None


class TranslateRequest(BaseModel):
    entity_name: str = "entity"
    language: str
    payload: Any
    translate_properties: list[str] | None = None
    ignore_properties: list[str] | None = None


class TranslateResponse(BaseModel):
    entity_name: str
    language: str
    payload: Any


class LanguageResponse(BaseModel):
    language: str
    code: str
    name: str
    variants: list[str]


# Entity names accepted by POST /translate as typed models (lowercase)
ENTITY_MODELS: dict[str, type[BaseModel]] = {
    "employee": Employee,
}
