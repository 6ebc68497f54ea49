"""Load .env and settings.yaml, expose all configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from fplsync.api.client import BASE_URL, USER_AGENT

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _load_env() -> None:
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)


def _load_yaml() -> dict:
    settings_path = PROJECT_ROOT / "settings.yaml"
    if settings_path.exists():
        try:
            with open(settings_path) as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError:
            log.warning("Failed to parse settings.yaml, using defaults")
            return {}
    return {}


class Settings(BaseModel):
    base_url: str = BASE_URL
    user_agent: str = USER_AGENT
    request_timeout: float = 15.0

    # Cache TTLs in seconds
    bootstrap_ttl: float = 6 * 60 * 60
    live_ttl: float = 15 * 60
    fixtures_ttl: float = 30 * 60
    cache_max_entries: int | None = 128

    rate_limit: int = 10
    rate_window: float = 60.0
    max_attempts: int = 3
    backoff_base: float = 1.0

    monitor_refresh_interval: int = 30
    log_file: str = "fplsync.log"
    log_level: str = "INFO"

    @field_validator("base_url", "user_agent")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def drop_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("bootstrap_ttl", "live_ttl", "fixtures_ttl", "rate_window")
    @classmethod
    def positive_seconds(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("cache_max_entries")
    @classmethod
    def at_least_one_entry(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("must be at least 1, or null for no bound")
        return v

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.strip().upper()


def load_settings() -> Settings:
    _load_env()
    raw = _load_yaml()
    if os.getenv("FPL_BASE_URL"):
        raw["base_url"] = os.environ["FPL_BASE_URL"]
    if os.getenv("FPL_USER_AGENT"):
        raw["user_agent"] = os.environ["FPL_USER_AGENT"]
    return Settings(**raw)
