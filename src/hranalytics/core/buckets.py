"""Calendar bucketing of records by one of their dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence, Union

import pendulum

from ..schemas import Record
from .classifier import DATE_FIELDS, DateField
from .errors import BucketConfigurationError

DEFAULT_MONTH_LABEL = "MMM YYYY"


@dataclass(frozen=True, slots=True)
class TimeBucket:
    """Inclusive ``[start, end]`` date range with a display label."""

    label: str
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True, slots=True)
class TrailingMonths:
    """``count`` whole calendar months ending with the current one."""

    count: int
    label_format: str = DEFAULT_MONTH_LABEL

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise BucketConfigurationError(
                f"Trailing month count must be an integer, got {self.count!r}"
            )
        if self.count < 1:
            raise BucketConfigurationError(
                f"Trailing month count must be at least 1, got {self.count}"
            )


@dataclass(frozen=True, slots=True)
class CustomRange:
    """Single explicit ``[start, end]`` range."""

    start: date
    end: date
    label: str | None = None

    def __post_init__(self) -> None:
        start = _as_date(self.start)
        end = _as_date(self.end)
        if start > end:
            raise BucketConfigurationError(
                f"Custom range start {start.isoformat()} is after end {end.isoformat()}"
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)


BucketMode = Union[TrailingMonths, CustomRange]


def build_buckets(
    mode: BucketMode | None = None,
    *,
    custom_range: CustomRange | None = None,
    now: date | None = None,
) -> tuple[TimeBucket, ...]:
    """Return the chronologically ordered buckets for a bucketing request.

    A custom range, whether passed as ``mode`` or as ``custom_range``, always
    wins over a trailing-months request and yields a single bucket.
    """
    if custom_range is not None:
        return (_custom_bucket(custom_range),)
    if isinstance(mode, CustomRange):
        return (_custom_bucket(mode),)
    if isinstance(mode, TrailingMonths):
        today = _as_date(now) if now is not None else pendulum.now().date()
        return _trailing_buckets(mode, today)
    raise BucketConfigurationError("A trailing-months mode or a custom range is required")


def assign(
    record: Record,
    buckets: Sequence[TimeBucket],
    date_field: DateField = "interview_date",
) -> str | None:
    """Return the label of the bucket holding the record's ``date_field``."""
    if date_field not in DATE_FIELDS:
        raise ValueError(f"Unknown date field: {date_field!r}")
    day = record.date_for(date_field)
    if day is None:
        return None
    for bucket in buckets:
        if bucket.contains(day):
            return bucket.label
    return None


def _trailing_buckets(mode: TrailingMonths, today: date) -> tuple[TimeBucket, ...]:
    current = pendulum.date(today.year, today.month, 1)
    buckets: list[TimeBucket] = []
    for offset in range(mode.count - 1, -1, -1):
        month_start = current.subtract(months=offset)
        buckets.append(
            TimeBucket(
                label=month_start.format(mode.label_format),
                start=month_start,
                end=month_start.end_of("month"),
            )
        )

    labels = [bucket.label for bucket in buckets]
    if len(set(labels)) != len(labels):
        raise BucketConfigurationError(
            f"Label format {mode.label_format!r} is ambiguous over {mode.count} months"
        )
    return tuple(buckets)


def _custom_bucket(custom: CustomRange) -> TimeBucket:
    start = pendulum.date(custom.start.year, custom.start.month, custom.start.day)
    end = pendulum.date(custom.end.year, custom.end.month, custom.end.day)
    label = custom.label or f"{start.format('MMM DD')} - {end.format('MMM DD, YYYY')}"
    return TimeBucket(label=label, start=start, end=end)


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise BucketConfigurationError(f"Expected a date, got {value!r}")
