# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific settings: the tracked
parameters contract, the store backend and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from swarmcache.cache.models import CacheOptions
from swarmcache.logging.handlers import parse_size


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Tracked contract ===
    parameters_contract: str = ""
    parameters_contract_start_block: int = Field(default=0, ge=0)

    # === Store ===
    store_backend: Literal["memory", "sqlite", "redis"] = "sqlite"
    store_path: Path = Path("~/.swarmcache/cache.db")
    store_redis_url: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("log_rotation")
    @classmethod
    def validate_log_rotation(cls, v: str) -> str:  # noqa: N805
        parse_size(v)
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.log_file is not None and self.log_retention < 1:
            errors.append("LOG_RETENTION must be >= 1 when LOG_FILE is set")

        if self.store_redis_url and self.store_backend != "redis":
            errors.append("STORE_REDIS_URL is set but STORE_BACKEND is not redis")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    def cache_options(self) -> CacheOptions:
        """Options consumed by CacheStore."""
        return CacheOptions(
            parameters_contract=self.parameters_contract,
            parameters_contract_start_block=self.parameters_contract_start_block,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
