"""Core aggregation engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .aggregator import (
    AgingBucketing,
    Bucketing,
    CountMatrix,
    DateBucketing,
    aggregate,
    percentage,
)
from .aging import AGING_BINS, AGING_LABELS, AgingBin, bucket_days, elapsed_days
from .buckets import CustomRange, TimeBucket, TrailingMonths, assign, build_buckets
from .classifier import (
    ClassificationScheme,
    DerivedStatistic,
    Rule,
    classify,
)
from .errors import AnalyticsError, BucketConfigurationError, SchemeConfigurationError
from .export import to_category_rows, to_rows
from .pending import PendingActionEntry, pending_action_details
from .schemes import (
    ATTENDANCE_SCHEME,
    CONVERSION_SCHEME,
    OUTCOME_SCHEME,
    PENDING_SCHEME,
    STANDARD_SCHEMES,
    is_pending,
)
from .summary import CategorySummary, summarize

__all__ = [
    "AGING_BINS",
    "AGING_LABELS",
    "ATTENDANCE_SCHEME",
    "AgingBin",
    "AgingBucketing",
    "AnalyticsError",
    "BucketConfigurationError",
    "Bucketing",
    "CONVERSION_SCHEME",
    "CategorySummary",
    "ClassificationScheme",
    "CountMatrix",
    "CustomRange",
    "DateBucketing",
    "DerivedStatistic",
    "OUTCOME_SCHEME",
    "PENDING_SCHEME",
    "PendingActionEntry",
    "Rule",
    "STANDARD_SCHEMES",
    "SchemeConfigurationError",
    "TimeBucket",
    "TrailingMonths",
    "aggregate",
    "assign",
    "bucket_days",
    "build_buckets",
    "classify",
    "elapsed_days",
    "is_pending",
    "pending_action_details",
    "percentage",
    "summarize",
    "to_category_rows",
    "to_rows",
]
