# tests/test_config.py
import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_secret_key_is_required(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_short_secret_key_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, SECRET_KEY="short")


def test_cors_origins_split():
    settings = Settings(
        _env_file=None,
        SECRET_KEY="a-long-enough-secret-key",
        CORS_ORIGINS="http://portal.local, http://localhost:5500 ,",
    )
    assert settings.cors_origins == ["http://portal.local", "http://localhost:5500"]
