"""Exceptions raised by the aggregation engine."""

from __future__ import annotations


class AnalyticsError(ValueError):
    """Base class for engine configuration errors."""


class SchemeConfigurationError(AnalyticsError):
    """Raised when a classification scheme is malformed."""


class BucketConfigurationError(AnalyticsError):
    """Raised when a bucketing mode cannot produce a valid bucket sequence."""
