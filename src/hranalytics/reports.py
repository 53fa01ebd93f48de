"""Report definitions and the engine that runs them over in-memory records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Iterable, List, Literal, Mapping

import pendulum
import structlog

from .core import (
    ATTENDANCE_SCHEME,
    CONVERSION_SCHEME,
    OUTCOME_SCHEME,
    PENDING_SCHEME,
    AgingBucketing,
    Bucketing,
    CategorySummary,
    ClassificationScheme,
    CountMatrix,
    CustomRange,
    DateBucketing,
    PendingActionEntry,
    TrailingMonths,
    aggregate,
    build_buckets,
    is_pending,
    pending_action_details,
    summarize,
    to_category_rows,
    to_rows,
)
from .core.buckets import DEFAULT_MONTH_LABEL
from .core.classifier import DateField, Predicate
from .core.schemes import PENDING_TITLES
from .schemas import Record

ReportView = Literal["monthly", "aging"]


@dataclass(frozen=True)
class ReportDefinition:
    """How one report classifies, buckets and lays out its records."""

    name: str
    scheme: ClassificationScheme
    view: ReportView = "monthly"
    date_field: DateField = "interview_date"
    label_column: str = "Month"
    total_column: str | None = None
    columns: tuple[str, ...] | None = None
    column_titles: Mapping[str, str] = field(default_factory=dict)
    record_filter: Predicate | None = None

    @property
    def category_order(self) -> tuple[str, ...]:
        if self.columns is not None:
            return self.columns
        return self.scheme.categories + self.scheme.derived_labels


DEFAULT_REPORTS: tuple[ReportDefinition, ...] = (
    ReportDefinition(
        name="conversion",
        scheme=CONVERSION_SCHEME,
        total_column="Total Interview Cases",
    ),
    ReportDefinition(name="outcome", scheme=OUTCOME_SCHEME),
    ReportDefinition(
        name="attendance",
        scheme=ATTENDANCE_SCHEME,
        date_field="reference_date",
    ),
    ReportDefinition(
        name="pending",
        scheme=PENDING_SCHEME,
        view="aging",
        label_column="Interview Status",
        columns=tuple(rule.label for rule in PENDING_SCHEME.rules),
        column_titles=PENDING_TITLES,
        record_filter=is_pending,
    ),
)


class ReportRegistry:
    """Registry mapping report names to definitions."""

    def __init__(self, reports: Iterable[ReportDefinition]):
        self._reports = {report.name: report for report in reports}

    def get(self, name: str) -> ReportDefinition:
        try:
            return self._reports[name]
        except KeyError as exc:
            raise KeyError(f"Unknown report: {name!r}") from exc

    def names(self) -> List[str]:
        return list(self._reports.keys())


@dataclass(frozen=True)
class ReportOptions:
    """Per-run bucketing and layout choices."""

    trailing_months: int | None = None
    custom_range: CustomRange | None = None
    percentage: bool = False
    label_format: str = DEFAULT_MONTH_LABEL


@dataclass
class ReportResult:
    report: str
    matrix: CountMatrix
    rows: list[dict[str, Any]]
    summary: list[CategorySummary]
    details: list[PendingActionEntry] = field(default_factory=list)


class ReportEngine:
    """Runs registered reports over a list of already-filtered records."""

    DEFAULT_TRAILING_MONTHS = 6

    def __init__(
        self,
        registry: ReportRegistry,
        *,
        now_provider: Callable[[], Any] | None = None,
        trailing_months: int | None = None,
    ) -> None:
        self._registry = registry
        self._now_provider = now_provider or pendulum.now
        self._trailing_months = trailing_months or self.DEFAULT_TRAILING_MONTHS
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        report: str,
        records: Iterable[Record],
        options: ReportOptions | None = None,
    ) -> ReportResult:
        definition = self._registry.get(report)
        options = options or ReportOptions()
        if options.percentage and definition.view == "aging":
            raise ValueError(f"Report {report!r} has no percentage layout")

        today = self._today()
        selected = list(records)
        if definition.record_filter is not None:
            selected = [record for record in selected if definition.record_filter(record)]

        bucketing = self._bucketing(definition, options, today)
        matrix = aggregate(selected, definition.scheme, bucketing)

        if definition.view == "aging":
            rows = to_category_rows(
                matrix,
                definition.category_order,
                definition.label_column,
                column_titles=definition.column_titles,
            )
            details = pending_action_details(selected, today, scheme=definition.scheme)
        else:
            rows = to_rows(
                matrix,
                definition.category_order,
                definition.label_column,
                percentage=options.percentage,
                total_column=definition.total_column,
                column_titles=definition.column_titles,
            )
            details = []

        self._logger.info(
            "report.completed",
            report=report,
            buckets=len(matrix.buckets),
            records=len(selected),
            counted=matrix.grand_total(),
            skipped=matrix.skipped,
        )

        return ReportResult(
            report=report,
            matrix=matrix,
            rows=rows,
            summary=summarize(matrix, definition.category_order),
            details=details,
        )

    def _bucketing(
        self,
        definition: ReportDefinition,
        options: ReportOptions,
        today: date,
    ) -> Bucketing:
        if definition.view == "aging":
            return AgingBucketing(today=today)
        mode = TrailingMonths(
            options.trailing_months or self._trailing_months,
            label_format=options.label_format,
        )
        buckets = build_buckets(mode, custom_range=options.custom_range, now=today)
        return DateBucketing(buckets=buckets, date_field=definition.date_field)

    def _today(self) -> date:
        now = self._now_provider()
        if isinstance(now, datetime):
            return now.date()
        return now
