"""Dependency injection container for the reporting system."""

from __future__ import annotations

from datetime import date

import pendulum
from dependency_injector import containers, providers

from .pipeline import OutputWriter, RecordLoader, ReportPipeline
from .reports import DEFAULT_REPORTS, ReportEngine, ReportRegistry


class ReportingContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    now_provider = providers.Object(pendulum.now)

    report_registry = providers.Singleton(
        ReportRegistry,
        reports=DEFAULT_REPORTS,
    )

    report_engine = providers.Singleton(
        ReportEngine,
        registry=report_registry,
        now_provider=now_provider,
        trailing_months=config.bucketing.trailing_months,
    )

    record_loader = providers.Singleton(RecordLoader)
    output_writer = providers.Singleton(OutputWriter)

    pipeline = providers.Factory(
        ReportPipeline,
        engine=report_engine,
        loader=record_loader,
        writer=output_writer,
    )


def create_container(
    *,
    settings: dict | None = None,
    as_of: date | None = None,
) -> ReportingContainer:
    """Instantiate container with optional overrides.

    ``as_of`` pins "today" for every report, which makes trailing-month and
    aging views reproducible.
    """

    container = ReportingContainer()

    if settings:
        container.config.override(settings)

    if as_of is not None:
        pinned = pendulum.datetime(as_of.year, as_of.month, as_of.day)
        container.now_provider.override(providers.Object(lambda: pinned))

    return container
