"""
Tests for settings and per-translation configuration.
"""

import pytest

from lingograph.config import Settings, TranslatorConfig


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("TRANSLATION_BASE_ADDRESS", "TRANSLATE_PROPERTIES", "ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.translation_base_address == "http://localhost:5000/api/translate"
        assert settings.translate_properties_list == []
        assert not settings.is_production

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("TRANSLATION_BASE_ADDRESS", "https://translator.example/api")
        monkeypatch.setenv("TRANSLATE_PROPERTIES", "Name, Manager.Description,,")
        monkeypatch.setenv("IGNORE_PROPERTIES", "Orders")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.translation_base_address == "https://translator.example/api"
        assert settings.translate_properties_list == ["Name", "Manager.Description"]
        assert settings.ignore_properties_list == ["Orders"]
        assert settings.is_production


class TestTranslatorConfig:
    def test_headers_carry_api_version(self):
        config = TranslatorConfig(base_address="http://x", api_version="application/vnd.translator.v2+json")
        assert config.headers == {"Accept": "application/vnd.translator.v2+json"}

    def test_single_attempt_by_default(self):
        assert TranslatorConfig(base_address="http://x").retry_attempts == 1

    def test_from_settings(self):
        settings = Settings(
            _env_file=None,
            translation_base_address="http://svc/api",
            translation_api_version="application/vnd.v3+json",
            translation_retry_attempts=5,
        )
        config = TranslatorConfig.from_settings(settings)

        assert config.base_address == "http://svc/api"
        assert config.api_version == "application/vnd.v3+json"
        assert config.retry_attempts == 5

    def test_frozen(self):
        config = TranslatorConfig(base_address="http://x")
        with pytest.raises(Exception):
            config.base_address = "http://y"
