"""Typed configuration models for Cadence runtime settings."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar, Literal
from urllib.parse import quote_plus
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "cadence" / "cadence.yaml"

_SSL_MODES = ("disable", "allow", "prefer", "require", "verify-ca", "verify-full")


class LoggingSettings(BaseModel):
    """Structured logging configuration shared by Cadence components."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "cadence"
    environment: str = "dev"


class HttpSettings(BaseModel):
    """HTTP listener and application metadata."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)
    title: str = "cadence"
    version: str = "0.1.0"


class PostgresSettings(BaseModel):
    """Connection and pool settings for the Postgres substrate.

    ``url`` wins when set; otherwise a psycopg URL is assembled from the split
    host/port/database/user/password values.
    """

    url: str = ""
    host: str = "localhost"
    port: int = 5432
    database: str = "cadence"
    user: str = "cadence"
    password: str = "cadence"
    pool_size: int = Field(default=5, gt=0)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout_seconds: float = Field(default=30.0, gt=0)
    pool_pre_ping: bool = True
    connect_timeout_seconds: float = Field(default=10.0, gt=0)
    sslmode: str = "prefer"

    @field_validator("sslmode")
    @classmethod
    def _check_sslmode(cls, value: str) -> str:
        if value not in _SSL_MODES:
            raise ValueError(f"postgres.sslmode must be one of: {', '.join(_SSL_MODES)}")
        return value

    @model_validator(mode="after")
    def _assemble_url(self) -> "PostgresSettings":
        if self.url.strip():
            return self
        if not self.host.strip():
            raise ValueError("postgres.host is required when postgres.url is unset")
        if not self.database.strip():
            raise ValueError("postgres.database is required when postgres.url is unset")
        self.url = (
            "postgresql+psycopg://"
            f"{quote_plus(self.user)}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/{quote_plus(self.database)}"
        )
        return self


class AuthSettings(BaseModel):
    """External identity provider used to verify bearer access tokens."""

    issuer_url: str = "https://cadence.example.auth0.com"
    userinfo_path: str = "/userinfo"
    timeout_seconds: float = Field(default=5.0, gt=0)


class EnergySettings(BaseModel):
    """Energy pattern and retention knobs."""

    pattern_window_days: int = Field(default=30, gt=0)
    retention_days: int = Field(default=90, gt=0)
    default_timezone: str = "UTC"

    @field_validator("default_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone: {value}") from None
        return value


class TeamSettings(BaseModel):
    """Team collaboration settings."""

    invite_ttl_days: int = Field(default=7, gt=0)


class CadenceSettings(BaseSettings):
    """Root runtime settings resolved from init/env/yaml/defaults sources."""

    model_config = SettingsConfigDict(
        env_prefix="CADENCE_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    postgres: PostgresSettings = Field(default_factory=PostgresSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    energy: EnergySettings = Field(default_factory=EnergySettings)
    teams: TeamSettings = Field(default_factory=TeamSettings)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Apply Cadence precedence: init > env > yaml > defaults."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=cls._config_path,
                yaml_file_encoding="utf-8",
            ),
        )
