import pytest
from pydantic import ValidationError

from app.core.config import Settings


def _settings(**overrides) -> Settings:
    values = {"JWT_SECRET": "secret"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_cors_origins_comma_separated():
    s = _settings(CORS_ORIGINS="https://a.example.com, https://b.example.com,")
    assert s.get_cors_origins() == ["https://a.example.com", "https://b.example.com"]


def test_cors_origins_json_array():
    s = _settings(CORS_ORIGINS='["https://a.example.com"]')
    assert s.get_cors_origins() == ["https://a.example.com"]


def test_cors_origins_unset():
    assert _settings(CORS_ORIGINS=None).get_cors_origins() == []
    assert _settings(CORS_ORIGINS="   ").get_cors_origins() == []


def test_database_url_follows_env():
    local = _settings(ENV="local", DATABASE_URL_LOCAL="sqlite://", DATABASE_URL_PROD="postgresql://prod/db")
    prod = _settings(ENV="prod", DATABASE_URL_LOCAL="sqlite://", DATABASE_URL_PROD="postgresql://prod/db")
    assert local.DATABASE_URL == "sqlite://"
    assert prod.DATABASE_URL == "postgresql://prod/db"


def test_prod_without_prod_url_falls_back_to_local():
    s = _settings(ENV="prod", DATABASE_URL_LOCAL="sqlite://", DATABASE_URL_PROD=None)
    assert s.DATABASE_URL == "sqlite://"


def test_message_max_length_must_be_positive():
    assert _settings(MESSAGE_MAX_LENGTH=500).MESSAGE_MAX_LENGTH == 500
    with pytest.raises(ValidationError):
        _settings(MESSAGE_MAX_LENGTH=0)


def test_log_level_normalized():
    assert _settings(LOG_LEVEL=" debug ").LOG_LEVEL == "DEBUG"
