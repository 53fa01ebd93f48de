"""Fold records into a bucket x category count matrix."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Protocol, runtime_checkable

import structlog

from ..schemas import Record
from .aging import AGING_LABELS, bucket_days, elapsed_days
from .buckets import TimeBucket, assign
from .classifier import DATE_FIELDS, ClassificationScheme, DateField
from .errors import BucketConfigurationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DateBucketing:
    """Bucket records by the calendar bucket containing ``date_field``."""

    buckets: tuple[TimeBucket, ...]
    date_field: DateField = "interview_date"

    def __post_init__(self) -> None:
        object.__setattr__(self, "buckets", tuple(self.buckets))
        if not self.buckets:
            raise BucketConfigurationError("Date bucketing needs at least one bucket")
        if self.date_field not in DATE_FIELDS:
            raise BucketConfigurationError(f"Unknown date field: {self.date_field!r}")

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(bucket.label for bucket in self.buckets)

    def locate(self, record: Record, scheme: ClassificationScheme) -> tuple[str, str] | None:
        bucket = assign(record, self.buckets, self.date_field)
        if bucket is None:
            return None
        return bucket, scheme.classify(record)


@dataclass(frozen=True, slots=True)
class AgingBucketing:
    """Bucket records by days elapsed since their category's anchor date."""

    today: date

    @property
    def labels(self) -> tuple[str, ...]:
        return AGING_LABELS

    def locate(self, record: Record, scheme: ClassificationScheme) -> tuple[str, str]:
        category, anchor = scheme.resolve(record)
        return bucket_days(elapsed_days(record, anchor, self.today)), category


@runtime_checkable
class Bucketing(Protocol):
    """Strategy that places a record in one of an ordered set of buckets."""

    @property
    def labels(self) -> tuple[str, ...]:
        """Bucket labels in display order."""

    def locate(self, record: Record, scheme: ClassificationScheme) -> tuple[str, str] | None:
        """Return ``(bucket, category)`` or None when the record has no bucket."""


def percentage(count: int, total: int) -> int:
    """Whole percent of ``count`` in ``total``, rounded half up; 0 if empty."""
    if total <= 0:
        return 0
    return (200 * count + total) // (2 * total)


@dataclass(slots=True)
class CountMatrix:
    """Per-bucket category counts plus derived (overlapping) statistics.

    Every bucket holds every category, zero-filled. Derived statistics are kept
    apart from ``counts`` so they never enter a bucket total.
    """

    scheme: str
    buckets: tuple[str, ...]
    categories: tuple[str, ...]
    counts: dict[str, dict[str, int]]
    derived: dict[str, dict[str, int]] = field(default_factory=dict)
    derived_labels: tuple[str, ...] = ()
    skipped: int = 0

    @property
    def keys(self) -> tuple[str, ...]:
        return self.categories + self.derived_labels

    def total(self, bucket: str) -> int:
        return sum(self.counts[bucket].values())

    def grand_total(self) -> int:
        return sum(self.total(bucket) for bucket in self.buckets)

    def value(self, bucket: str, key: str) -> int:
        row = self.counts[bucket]
        if key in row:
            return row[key]
        derived_row = self.derived.get(bucket, {})
        if key in derived_row:
            return derived_row[key]
        raise KeyError(f"Unknown category {key!r} in matrix {self.scheme!r}")

    def percentage(self, bucket: str, key: str) -> int:
        return percentage(self.value(bucket, key), self.total(bucket))

    def percentages(self) -> dict[str, dict[str, int]]:
        """Per-bucket percentages for every category and derived statistic.

        Each value is rounded on its own; a bucket's percentages need not add
        up to exactly 100.
        """
        return {
            bucket: {key: self.percentage(bucket, key) for key in self.keys}
            for bucket in self.buckets
        }


def aggregate(
    records: Iterable[Record],
    scheme: ClassificationScheme,
    bucketing: Bucketing,
) -> CountMatrix:
    """Count records per bucket and category.

    Records that cannot be placed in a bucket (no usable date) are left out of
    the matrix and only reflected in ``CountMatrix.skipped``.
    """
    buckets = bucketing.labels
    counts = {bucket: dict.fromkeys(scheme.categories, 0) for bucket in buckets}
    skipped = 0

    for record in records:
        located = bucketing.locate(record, scheme)
        if located is None:
            skipped += 1
            continue
        bucket, category = located
        counts[bucket][category] += 1

    derived = {
        bucket: {
            stat.label: sum(counts[bucket][component] for component in stat.components)
            for stat in scheme.derived
        }
        for bucket in buckets
    }

    if skipped:
        logger.debug("aggregate.skipped_records", scheme=scheme.name, skipped=skipped)

    return CountMatrix(
        scheme=scheme.name,
        buckets=buckets,
        categories=scheme.categories,
        counts=counts,
        derived=derived,
        derived_labels=scheme.derived_labels,
        skipped=skipped,
    )
