"""Flatten count matrices into row-shaped records for tabular export."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .aggregator import CountMatrix


def to_rows(
    matrix: CountMatrix,
    category_order: Iterable[str],
    label_column: str,
    *,
    percentage: bool = False,
    total_column: str | None = None,
    column_titles: Mapping[str, str] | None = None,
) -> list[dict[str, Any]]:
    """One row per bucket, columns in the caller's ``category_order``.

    With ``percentage`` the category cells hold strings such as ``"30%"``;
    the optional total column always holds the bucket's record count.
    """
    order = tuple(category_order)
    titles = dict(column_titles or {})
    _check_columns(matrix, order, label_column, total_column, titles)

    rows: list[dict[str, Any]] = []
    for bucket in matrix.buckets:
        row: dict[str, Any] = {label_column: bucket}
        if total_column is not None:
            row[total_column] = matrix.total(bucket)
        for key in order:
            column = titles.get(key, key)
            if percentage:
                row[column] = f"{matrix.percentage(bucket, key)}%"
            else:
                row[column] = matrix.value(bucket, key)
        rows.append(row)
    return rows


def to_category_rows(
    matrix: CountMatrix,
    category_order: Iterable[str],
    label_column: str,
    *,
    total_column: str | None = None,
    column_titles: Mapping[str, str] | None = None,
) -> list[dict[str, Any]]:
    """One row per category, one count column per bucket in bucket order."""
    order = tuple(category_order)
    titles = dict(column_titles or {})
    _check_keys(matrix, order)
    reserved = {label_column} | ({total_column} if total_column else set())
    clashes = sorted(reserved.intersection(matrix.buckets))
    if clashes:
        raise ValueError(f"Bucket labels clash with reserved columns: {clashes}")

    rows: list[dict[str, Any]] = []
    for key in order:
        row: dict[str, Any] = {label_column: titles.get(key, key)}
        for bucket in matrix.buckets:
            row[bucket] = matrix.value(bucket, key)
        if total_column is not None:
            row[total_column] = sum(matrix.value(bucket, key) for bucket in matrix.buckets)
        rows.append(row)
    return rows


def _check_keys(matrix: CountMatrix, order: tuple[str, ...]) -> None:
    unknown = [key for key in order if key not in matrix.keys]
    if unknown:
        raise KeyError(f"Unknown categories for matrix {matrix.scheme!r}: {unknown}")
    if len(set(order)) != len(order):
        raise ValueError(f"Category order repeats entries: {list(order)}")


def _check_columns(
    matrix: CountMatrix,
    order: tuple[str, ...],
    label_column: str,
    total_column: str | None,
    titles: dict[str, str],
) -> None:
    _check_keys(matrix, order)
    columns = [label_column]
    if total_column is not None:
        columns.append(total_column)
    columns.extend(titles.get(key, key) for key in order)
    if len(set(columns)) != len(columns):
        raise ValueError(f"Export columns are not unique: {columns}")
