"""Per-category statistics across the buckets of a matrix."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .aggregator import CountMatrix


@dataclass(frozen=True, slots=True)
class CategorySummary:
    category: str
    total: int
    peak: int
    average: float
    average_percentage: float


def summarize(
    matrix: CountMatrix,
    category_order: Iterable[str] | None = None,
) -> list[CategorySummary]:
    """Total, busiest-bucket count and per-bucket averages for each category.

    Averages are rounded to one decimal place.
    """
    order = tuple(category_order) if category_order is not None else matrix.keys
    bucket_count = len(matrix.buckets)
    summaries: list[CategorySummary] = []
    for key in order:
        values = [matrix.value(bucket, key) for bucket in matrix.buckets]
        shares = [matrix.percentage(bucket, key) for bucket in matrix.buckets]
        total = sum(values)
        summaries.append(
            CategorySummary(
                category=key,
                total=total,
                peak=max(values, default=0),
                average=round(total / bucket_count, 1) if bucket_count else 0.0,
                average_percentage=round(sum(shares) / bucket_count, 1) if bucket_count else 0.0,
            )
        )
    return summaries
