"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    public_base_url: str | None = None
    couple_store: Literal["memory", "supabase"] = "memory"
    seed_demo_space: bool = True
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_couples_table: str = "couples"
    supabase_photo_bucket: str = "couple-photos"
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    caption_count: int = 3
    page_cache_ttl_seconds: int = 30
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str | None) -> str | None:
    """Return the configured public base URL without a trailing slash."""
    if raw is None:
        return None
    cleaned = raw.strip().rstrip("/")
    return cleaned or None
