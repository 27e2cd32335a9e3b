"""
Request and response message of the translation service.

Both directions share one shape:

    {"from": "en", "to": "fr", "translations": {"Employee.Name": "..."}}

Keys are addresses, values are the text to translate (request) or the
translated text (response).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from lingograph.i18n.languages import SOURCE_LANGUAGE, Language, get_language_code


class TranslationMessage(BaseModel):
    """A batch of addressed texts for one target language."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(default=SOURCE_LANGUAGE.value, alias="from")
    to: str = SOURCE_LANGUAGE.value
    translations: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def for_language(cls, language: Language, translations: dict[str, str]) -> TranslationMessage:
        """Build a request to translate `translations` from English into `language`."""
        return cls(to=get_language_code(language), translations=dict(translations))

    def to_payload(self) -> dict:
        """JSON body as sent over the wire."""
        return self.model_dump(by_alias=True)

    @property
    def is_empty(self) -> bool:
        return not self.translations
