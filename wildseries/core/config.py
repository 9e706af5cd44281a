# wildseries/core/config.py
from __future__ import annotations

"""
# Wild Series · Centralized Configuration (Pydantic v2)

Single `settings` object with strongly-typed, environment-driven config.

## Goals
- Safe defaults for local/dev; explicit where prod needs secrets.
- CSV → list helpers for CORS origins.
- Mail is optional so imports never crash in dev (emails are logged instead).

## Usage
    from wildseries.core.config import settings
"""

import logging
from pathlib import Path
from typing import List, Optional, Literal

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)
load_dotenv()  # harmless in prod; convenient in dev


# ─────────────────────────────────────────────────────────────
# Small helpers
# ─────────────────────────────────────────────────────────────
def _split_csv(v: str | None) -> list[str]:
    """Split a comma-separated string into a trimmed list (empty-safe)."""
    if not v:
        return []
    return [s.strip() for s in str(v).split(",") if s and s.strip()]


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Global application settings sourced from environment.

    Security:
        - JWT and CSRF secrets have dev defaults; override both in production.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App meta ──────────────────────────────────────────────
    PROJECT_NAME: str = "Wild Series"
    VERSION: str = "1.0.0"
    API_V1_STR: str = ""
    ENV: Literal["development", "staging", "production"] = "development"
    ENABLE_DOCS: bool = True

    # ── Security / JWT / CSRF ─────────────────────────────────
    JWT_SECRET_KEY: SecretStr = SecretStr("dev-jwt-secret-change-me")
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60, ge=5, le=24 * 60)
    CSRF_SECRET: SecretStr = SecretStr("dev-csrf-secret-change-me")

    # ── Rate limiting ─────────────────────────────────────────
    DEFAULT_RATE_LIMIT: Optional[str] = None  # e.g., "200/minute"
    RATELIMIT_STORAGE_URI: Optional[str] = None  # memory:// when unset

    # ── Database (PostgreSQL) ─────────────────────────────────
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = SecretStr("postgres")
    POSTGRES_DB: str = "wildseries"

    # ── CORS ─────────────────────────────────────────────────
    BACKEND_CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:8000", "http://localhost:5173"]
    )

    # ── Email (new program / new episode notifications) ───────
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[SecretStr] = None
    MAIL_FROM: str = "no-reply@wildseries.local"
    MAIL_FROM_NAME: str = "Wild Series"
    NOTIFY_EMAIL: str = "4d1b675774ca56@smtp.mailtrap.io"
    EMAIL_TEMPLATE_DIR: Path = Path(__file__).resolve().parent.parent / "templates" / "emails"
    EMAIL_SEND_IN_DEV: bool = False

    # ── Validators / normalizers ──────────────────────────────
    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def _assemble_cors_origins(cls, v: str | List[str]):
        if isinstance(v, str):
            return _split_csv(v)
        return v

    # ── Derived / convenience properties ─────────────────────
    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENV.lower() == "development"

    @property
    def DATABASE_URL(self) -> str:
        """Sync DSN."""
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def ASYNC_DATABASE_URL(self) -> str:
        """Async SQLAlchemy DSN."""
        return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")

    @property
    def ratelimit_storage(self) -> str:
        return self.RATELIMIT_STORAGE_URI or "memory://"

    @property
    def mail_enabled(self) -> bool:
        """True when SMTP is configured and we're allowed to send from this env."""
        if not self.SMTP_HOST:
            return False
        return not self.is_development or self.EMAIL_SEND_IN_DEV


# Singleton instance
settings = Settings()
