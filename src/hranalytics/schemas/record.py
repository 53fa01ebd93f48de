"""Canonical interview record consumed by the reporting engine."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

import pendulum
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .status import canonical_status

_ROUND_PATTERN = re.compile(r"\d+")
_NEGATIVE_NUMBER = re.compile(r"\s*-\d+\s*")


def normalize_round(value: Any) -> int:
    """Coerce an interview round to a 1-based integer.

    Stored rounds look like ``2``, ``"2"`` or ``"Round 2"``. Anything without a
    number in it, and anything below one, becomes round 1.
    """
    if value is None or isinstance(value, bool):
        return 1
    if isinstance(value, int):
        return max(1, value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 1
        return max(1, int(value))
    if isinstance(value, str):
        if _NEGATIVE_NUMBER.fullmatch(value):
            return 1
        match = _ROUND_PATTERN.search(value)
        if match is None:
            return 1
        try:
            return max(1, int(match.group()))
        except ValueError:
            # beyond the interpreter's int conversion limit
            return 1
    return 1


def normalize_date(value: Any) -> date | None:
    """Coerce a date-like value to a ``date``; unparsable input yields None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = pendulum.parse(value.strip(), exact=True)
    except ValueError:
        return None
    if isinstance(parsed, datetime):
        return parsed.date()
    if isinstance(parsed, date):
        return parsed
    # times and durations carry no calendar date
    return None


class Record(BaseModel):
    """Interview record with every field normalized at construction.

    Field names follow the reporting vocabulary; the camelCase and legacy
    ``status1``/``status2``/``dateInformed`` keys written by the data-entry
    application are accepted as aliases.
    """

    record_id: str = Field(validation_alias=AliasChoices("record_id", "recordId", "id"))
    status_primary: str = Field(
        default="",
        validation_alias=AliasChoices("status_primary", "statusPrimary", "status1"),
    )
    status_secondary: str = Field(
        default="",
        validation_alias=AliasChoices("status_secondary", "statusSecondary", "status2"),
    )
    interview_round: int = Field(
        default=1,
        validation_alias=AliasChoices("interview_round", "interviewRound"),
    )
    interview_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("interview_date", "interviewDate"),
    )
    reference_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("reference_date", "referenceDate", "dateInformed"),
    )
    client_name: str = Field(
        default="",
        validation_alias=AliasChoices("client_name", "clientName"),
    )
    recruiter_name: str = Field(
        default="",
        validation_alias=AliasChoices("recruiter_name", "recruiterName"),
    )
    manager_name: str = Field(
        default="",
        validation_alias=AliasChoices("manager_name", "managerName", "manager"),
    )

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("record_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("status_primary", "status_secondary", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> str:
        if value is None:
            return ""
        return canonical_status(str(value))

    @field_validator("interview_round", mode="before")
    @classmethod
    def _normalize_round(cls, value: Any) -> int:
        return normalize_round(value)

    @field_validator("interview_date", "reference_date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> date | None:
        return normalize_date(value)

    @field_validator("client_name", "recruiter_name", "manager_name", mode="before")
    @classmethod
    def _normalize_dimension(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    def date_for(self, field_name: str) -> date | None:
        """Return the value of ``interview_date`` or ``reference_date``."""
        if field_name == "interview_date":
            return self.interview_date
        if field_name == "reference_date":
            return self.reference_date
        raise ValueError(f"Unknown date field: {field_name!r}")
