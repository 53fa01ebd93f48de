"""Per-record view of outstanding actions and how long they have waited."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping

from ..schemas import Record
from .aging import bucket_days, elapsed_days
from .classifier import ClassificationScheme
from .schemes import PENDING_SCHEME, PENDING_TITLES


@dataclass(frozen=True, slots=True)
class PendingActionEntry:
    record_id: str
    category: str
    status: str
    days_pending: int
    aging_bin: str
    client_name: str
    recruiter_name: str
    interview_date: date | None

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.record_id,
            "status": self.status,
            "client": self.client_name,
            "recruiter": self.recruiter_name,
            "interview_date": self.interview_date.isoformat() if self.interview_date else None,
            "days_pending": self.days_pending,
            "time_period": self.aging_bin,
        }


def pending_action_details(
    records: Iterable[Record],
    today: date,
    *,
    scheme: ClassificationScheme = PENDING_SCHEME,
    titles: Mapping[str, str] = PENDING_TITLES,
) -> list[PendingActionEntry]:
    """List every record that matches a pending rule, in input order."""
    entries: list[PendingActionEntry] = []
    for record in records:
        rule = scheme.match(record)
        if rule is None:
            continue
        days = elapsed_days(record, rule.anchor, today)
        entries.append(
            PendingActionEntry(
                record_id=record.record_id,
                category=rule.label,
                status=titles.get(rule.label, rule.label),
                days_pending=days,
                aging_bin=bucket_days(days),
                client_name=record.client_name,
                recruiter_name=record.recruiter_name,
                interview_date=record.interview_date,
            )
        )
    return entries
