"""Unit tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from editorial_workflow.core.config import Settings


def _settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite://",
        "jwt_secret": "x" * 40,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_content_types_parse_from_csv(monkeypatch):
    monkeypatch.setenv("CONTENT_TYPES", "post, page ,, recipe")

    settings = _settings()

    assert settings.content_types == ["post", "page", "recipe"]


def test_defaults_cover_post_and_page():
    settings = _settings()

    assert settings.content_types == ["post", "page"]
    assert settings.admin_role_key == "SysAdmin"
    assert settings.notification_category == "workflow"


def test_production_rejects_weak_jwt_secret():
    with pytest.raises(ValidationError):
        _settings(environment="production", jwt_secret="changeme")


def test_production_rejects_wildcard_cors():
    with pytest.raises(ValidationError):
        _settings(environment="production", cors_allow_origins="*")
