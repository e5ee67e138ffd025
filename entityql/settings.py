"""Adapter-level configuration loaded from the environment.

Values come from ``ENTITYQL_*`` environment variables or a ``.env`` file::

    ENTITYQL_BULK_LOAD_ENABLED=true
    ENTITYQL_READ_LIMIT_ENABLED=true
    ENTITYQL_READ_LIMIT=250
    ENTITYQL_DIALECT=postgres

Settings are read-only inputs to a compilation; the compiler never writes to
them.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdapterSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ENTITYQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bulk_load_enabled: bool = Field(
        default=False,
        description="Collection SELECTs fetch every column rather than only primary keys",
    )
    read_limit_enabled: bool = Field(
        default=False,
        description="Cap the number of rows returned by collection SELECTs",
    )
    read_limit: int = Field(
        default=1000,
        gt=0,
        description="Row cap applied when read_limit_enabled is set",
    )
    command_timeout: float = Field(
        default=30.0,
        ge=0,
        description="Command timeout in seconds attached to every rendered query (0 = provider default)",
    )
    dialect: str = Field(
        default="sqlserver",
        description="Name of the SQL dialect used when none is passed explicitly",
    )
    log_level: str = Field(default="INFO", description="Log level for configure_logging")

    @field_validator("dialect")
    @classmethod
    def normalise_dialect(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("dialect cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> AdapterSettings:
    """Return the process-wide settings, loaded once."""
    return AdapterSettings()
