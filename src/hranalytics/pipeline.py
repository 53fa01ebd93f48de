"""Report pipeline assembly and execution."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import pendulum
import structlog
from pydantic import ValidationError

from . import __version__
from .filters import DimensionFilter
from .reports import ReportEngine, ReportOptions, ReportResult
from .schemas import Record


class RecordLoadError(ValueError):
    """Raised when record loading encounters invalid lines."""

    def __init__(self, errors: list[str], partial: list[Record]):
        super().__init__("Record loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Record loading failed: {self.errors}"


class RecordLoader:
    """Load interview records from a JSON lines file."""

    def load(self, path: Path) -> list[Record]:
        records: list[Record] = []
        errors: list[str] = []
        with path.open("rb") as handle:
            for idx, line in enumerate(handle, start=1):
                try:
                    raw = line.decode("utf-8").strip()
                except UnicodeDecodeError:
                    errors.append(f"line {idx}: invalid UTF-8")
                    continue
                if not raw:
                    continue
                try:
                    payload = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(payload, dict):
                    errors.append(f"line {idx}: expected a JSON object")
                    continue
                try:
                    records.append(Record.model_validate(payload))
                except ValidationError as exc:
                    errors.append(f"line {idx}: {exc.error_count()} invalid field(s): {exc}")
        if errors:
            raise RecordLoadError(errors, records)
        return records


class OutputWriter:
    """Persist report payloads as JSON."""

    def write(self, path: Path, payload: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class ReportPipeline:
    """Load records, pre-filter them, run one report and write the result."""

    def __init__(
        self,
        *,
        engine: ReportEngine,
        loader: RecordLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._engine = engine
        self._loader = loader or RecordLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        records_path: Path,
        report: str,
        output_path: Path,
        options: ReportOptions | None = None,
        record_filter: DimensionFilter | None = None,
    ) -> ReportResult:
        load_errors: list[str] = []
        try:
            records = self._loader.load(records_path)
        except RecordLoadError as exc:
            records = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("records.partial_load", errors=exc.errors)

        selected = record_filter.apply(records) if record_filter else records
        result = self._engine.run(report, selected, options)

        metadata = {
            "report": report,
            "record_count": len(records),
            "selected_count": len(selected),
            "skipped_count": result.matrix.skipped,
            "buckets": list(result.matrix.buckets),
            "errors": load_errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        payload = {
            "metadata": metadata,
            "rows": result.rows,
            "summary": [asdict(item) for item in result.summary],
        }
        if result.details:
            payload["details"] = [entry.to_row() for entry in result.details]

        self._writer.write(output_path, payload)
        return result
