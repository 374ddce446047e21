"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - admin_emails is read once; the allowlist built from it is immutable

Design Decisions:
    - admin_emails accepts a JSON list or a comma-separated string, so a single
      operator address can be set without JSON quoting
"""

import json
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://backoffice:backoffice@db:5432/backoffice"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Authorization
    admin_emails: Annotated[list[str], NoDecode] = []
    identity_header: str = "X-Forwarded-Email"

    @field_validator("admin_emails", mode="before")
    @classmethod
    def split_admin_emails(cls, v: object) -> object:
        """Accept "a@x.org,b@y.org" as well as a JSON list."""
        if isinstance(v, str) and v.strip().startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            return [e.strip() for e in v.split(",") if e.strip()]
        return v

    # Listing
    page_size: int = Field(20, ge=1)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
