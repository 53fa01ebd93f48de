"""Typer CLI entrypoint for the report pipeline."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .core import BucketConfigurationError, CustomRange
from .filters import DimensionFilter
from .logging import configure_logging
from .reports import ReportOptions
from .schemas import AppConfig, FilterSettings, load_config, normalize_date

app = typer.Typer(help="Recruitment analytics report CLI.")


def _parse_date(value: Optional[str], param_name: str) -> Optional[date]:
    if value is None:
        return None
    parsed = normalize_date(value)
    if parsed is None:
        raise typer.BadParameter(f"Not a date: {value!r}", param_name=param_name)
    return parsed


def _load_app_config(path: Optional[Path]) -> AppConfig:
    if path is None:
        return AppConfig()
    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    try:
        return load_config(loaded)
    except (ValidationError, ValueError) as exc:
        raise typer.BadParameter(f"Invalid config: {exc}", param_name="config") from exc


@app.command()
def run(
    records: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Records JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    report: str = typer.Option("conversion", help="Report name (conversion, outcome, attendance, pending)."),
    months: Optional[int] = typer.Option(None, min=1, help="Number of trailing calendar months."),
    date_from: Optional[str] = typer.Option(None, "--from", help="Custom range start (ISO date)."),
    date_to: Optional[str] = typer.Option(None, "--to", help="Custom range end (ISO date)."),
    percentage: Optional[bool] = typer.Option(
        None, "--percentage/--counts", help="Export percentages instead of counts."
    ),
    client: Optional[List[str]] = typer.Option(None, help="Only include this client; repeatable."),
    recruiter: Optional[List[str]] = typer.Option(None, help="Only include this recruiter; repeatable."),
    manager: Optional[List[str]] = typer.Option(None, help="Only include this manager; repeatable."),
    as_of: Optional[str] = typer.Option(None, help="Date to treat as today (ISO)."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Run one report over a records file."""
    app_config = _load_app_config(config)
    configure_logging(log_level)

    start = _parse_date(date_from, "from")
    end = _parse_date(date_to, "to")
    if start is None and end is None:
        start = app_config.bucketing.custom_from
        end = app_config.bucketing.custom_to
    if (start is None) != (end is None):
        raise typer.BadParameter("--from and --to must be given together", param_name="from")

    try:
        custom_range = CustomRange(start, end) if start is not None else None
    except BucketConfigurationError as exc:
        raise typer.BadParameter(str(exc), param_name="from") from exc

    container = create_container(
        settings=app_config.to_settings(),
        as_of=_parse_date(as_of, "as-of"),
    )
    registry = container.report_registry()
    if report not in registry.names():
        raise typer.BadParameter(f"Choose one of {registry.names()}", param_name="report")

    use_percentage = app_config.percentage if percentage is None else percentage
    if use_percentage and registry.get(report).view == "aging":
        raise typer.BadParameter(f"Report {report!r} only exports counts", param_name="percentage")

    filters = app_config.filters
    record_filter = DimensionFilter.from_settings(
        FilterSettings(
            clients=client or filters.clients,
            recruiters=recruiter or filters.recruiters,
            managers=manager or filters.managers,
        )
    )
    options = ReportOptions(
        trailing_months=months,
        custom_range=custom_range,
        percentage=use_percentage,
    )

    result = container.pipeline().run(
        records_path=records,
        report=report,
        output_path=output,
        options=options,
        record_filter=None if record_filter.is_empty else record_filter,
    )
    typer.echo(f"Report {report!r}: {len(result.rows)} rows saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
