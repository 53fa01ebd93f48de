"""Pydantic schema definitions for records and configuration."""

from __future__ import annotations

from .config import AppConfig, BucketingSettings, FilterSettings, load_config
from .record import Record, normalize_date, normalize_round

__all__ = [
    "AppConfig",
    "BucketingSettings",
    "FilterSettings",
    "Record",
    "load_config",
    "normalize_date",
    "normalize_round",
]
