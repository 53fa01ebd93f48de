"""Elapsed-day aging bins for pending-action views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..schemas import Record
from .classifier import DateField


@dataclass(frozen=True, slots=True)
class AgingBin:
    label: str
    lower: int
    upper: int | None = None

    def contains(self, days: int) -> bool:
        if days < self.lower:
            return False
        return self.upper is None or days <= self.upper


AGING_BINS: tuple[AgingBin, ...] = (
    AgingBin("Below 7 days", 0, 7),
    AgingBin("8-15 days", 8, 15),
    AgingBin("16-30 days", 16, 30),
    AgingBin("31-60 days", 31, 60),
    AgingBin("Above 60 days", 61, None),
)

AGING_LABELS: tuple[str, ...] = tuple(item.label for item in AGING_BINS)


def bucket_days(elapsed_days: int) -> str:
    """Return the aging bin label for a non-negative day count."""
    if elapsed_days < 0:
        raise ValueError(f"Elapsed days must be clamped to >= 0, got {elapsed_days}")
    for aging_bin in AGING_BINS:
        if aging_bin.contains(elapsed_days):
            return aging_bin.label
    raise AssertionError(f"No aging bin covers {elapsed_days} days")  # pragma: no cover


def anchor_date(record: Record, anchor: DateField, today: date) -> date:
    """Pick the date a record is aged from.

    The category's own anchor is preferred, then the record's other date, and
    finally ``today`` so that an undated pending record still shows up.
    """
    other: DateField = "reference_date" if anchor == "interview_date" else "interview_date"
    return record.date_for(anchor) or record.date_for(other) or today


def elapsed_days(record: Record, anchor: DateField, today: date) -> int:
    """Whole days from the anchor date to ``today``; future dates count as 0."""
    return max(0, today.toordinal() - anchor_date(record, anchor, today).toordinal())
