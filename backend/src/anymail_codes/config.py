"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

import re
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .codes.extractor import parse_domains

DEFAULT_TTL_SECONDS = 600

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)", re.ASCII)


def normalize_ttl_seconds(value: Optional[str]) -> int:
    """Resolve the effective code TTL from a raw configuration value.

    Parses a leading integer (``"120"``, ``" 120s"``, ``"12.9"`` -> 12).
    Anything that does not yield a positive integer falls back to
    ``DEFAULT_TTL_SECONDS``.

    Args:
        value: Raw TTL string (may be None)

    Returns:
        int: TTL in seconds, always > 0
    """
    if not value:
        return DEFAULT_TTL_SECONDS
    match = _LEADING_INTEGER.match(value)
    if not match:
        return DEFAULT_TTL_SECONDS
    parsed = int(match.group(1))
    if parsed > 0:
        return parsed
    return DEFAULT_TTL_SECONDS


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings are frozen: build them once at process start and pass the
    instance to the inbound and lookup handlers.

    Environment Variables:
        ACCESS_KEY: Shared secret for the lookup API (unset => all lookups 401)
        CODE_TTL_SECONDS: Code lifetime override in seconds (default 600)
        DOMAINS: Comma-separated list of allowed domains (display only)
        CODE_STORE_BACKEND: "redis" or "memory"
        REDIS_URL: Redis connection string
        SMTP_HOST / SMTP_PORT / SMTP_DOMAIN / SMTP_MAX_SIZE: SMTP listener
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default true)
        METRICS_PORT: Expose Prometheus metrics on this port when set
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # Lookup API
    ACCESS_KEY: Optional[str] = None
    CODE_TTL_SECONDS: Optional[str] = None
    DOMAINS: Optional[str] = None

    # Code store
    CODE_STORE_BACKEND: str = "redis"
    REDIS_URL: str = "redis://localhost:6379/0"

    # Email (SMTP ingest)
    SMTP_HOST: str = "0.0.0.0"
    SMTP_PORT: int = 2525
    SMTP_DOMAIN: str = "anymail.local"
    SMTP_MAX_SIZE: int = 26_214_400  # 25 MB

    # Application
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    METRICS_PORT: Optional[int] = None
    ENVIRONMENT: str = "development"

    @field_validator("METRICS_PORT", mode="before")
    @classmethod
    def blank_metrics_port_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def code_ttl_seconds(self) -> int:
        return normalize_ttl_seconds(self.CODE_TTL_SECONDS)

    @property
    def allowed_domains(self) -> List[str]:
        return parse_domains(self.DOMAINS)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
