"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, model_validator


class BucketingSettings(BaseModel):
    trailing_months: int = Field(default=6, ge=1)
    custom_from: date | None = None
    custom_to: date | None = None

    @model_validator(mode="after")
    def _check_custom_range(self) -> "BucketingSettings":
        if (self.custom_from is None) != (self.custom_to is None):
            raise ValueError("custom_from and custom_to must be given together")
        if self.custom_from and self.custom_to and self.custom_from > self.custom_to:
            raise ValueError("custom_from must not be after custom_to")
        return self


class FilterSettings(BaseModel):
    clients: list[str] = Field(default_factory=list)
    recruiters: list[str] = Field(default_factory=list)
    managers: list[str] = Field(default_factory=list)


class AppConfig(BaseModel):
    bucketing: BucketingSettings = Field(default_factory=BucketingSettings)
    filters: FilterSettings = Field(default_factory=FilterSettings)
    percentage: bool = False

    def to_settings(self) -> dict[str, Any]:
        """Return the container settings derived from this configuration."""
        return {
            "bucketing": {"trailing_months": self.bucketing.trailing_months},
        }


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)
