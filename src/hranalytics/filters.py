"""Dimension pre-filtering applied before records reach the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .schemas import FilterSettings, Record


@dataclass(frozen=True)
class DimensionFilter:
    """Keep records whose client, recruiter and manager are all selected.

    An empty selection for a dimension means "no filtering" on it.
    """

    clients: frozenset[str] = field(default_factory=frozenset)
    recruiters: frozenset[str] = field(default_factory=frozenset)
    managers: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_settings(cls, settings: FilterSettings) -> "DimensionFilter":
        return cls(
            clients=frozenset(settings.clients),
            recruiters=frozenset(settings.recruiters),
            managers=frozenset(settings.managers),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.clients or self.recruiters or self.managers)

    def accepts(self, record: Record) -> bool:
        if self.clients and record.client_name not in self.clients:
            return False
        if self.recruiters and record.recruiter_name not in self.recruiters:
            return False
        if self.managers and record.manager_name not in self.managers:
            return False
        return True

    def apply(self, records: Iterable[Record]) -> list[Record]:
        return [record for record in records if self.accepts(record)]
