# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./intranet.db")
    APP_NAME: str = "Intranet Help Desk"
    APP_DESC: str = "Session-authenticated ticketing backend for the intranet portal"
    APP_VERSION: str = "1.0.0"

    # Signs the session cookie, required
    SECRET_KEY: str = Field(..., min_length=16)
    SESSION_COOKIE: str = "intranet_session"
    SESSION_MAX_AGE: int = 8 * 60 * 60

    # Comma separated list. "*" allows any origin but disables credentialed
    # requests, so a cross-origin frontend needs its origin listed here to
    # send the session cookie.
    CORS_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"

    # Department a ticket lands in when the creator does not pick one
    DEFAULT_DEPARTMENT: str = "Sistemas"

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
