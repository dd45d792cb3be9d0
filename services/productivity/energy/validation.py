"""Pydantic request-validation models for the Energy service."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _ValidationModel(BaseModel):
    """Base request model with strict shape semantics."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class LogEnergyRequest(_ValidationModel):
    """Validated energy reading."""

    energy_level: int = Field(ge=1, le=5)
    mood_tags: list[str] | None = None
    notes: str | None = Field(default=None, max_length=500)


class ListEnergyLogsRequest(_ValidationModel):
    """Pagination for energy log listing."""

    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class EnergyRangeRequest(_ValidationModel):
    """Inclusive time range for energy log reads."""

    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        """Read naive bounds as UTC."""
        return value if value.tzinfo is not None else value.replace(tzinfo=UTC)

    @model_validator(mode="after")
    def _ordered(self) -> "EnergyRangeRequest":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class CleanupRequest(_ValidationModel):
    """Retention horizon for old energy logs."""

    days_to_keep: int = Field(ge=1)
