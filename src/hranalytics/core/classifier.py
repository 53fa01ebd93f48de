"""Ordered first-match classification of records into categories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Literal

from ..schemas import Record
from .errors import SchemeConfigurationError

DateField = Literal["interview_date", "reference_date"]
DATE_FIELDS: tuple[DateField, ...] = ("interview_date", "reference_date")

Predicate = Callable[[Record], bool]

DEFAULT_CATCH_ALL = "Others"


@dataclass(frozen=True, slots=True)
class Rule:
    """A category label guarded by a predicate.

    ``anchor`` names the date a record of this category is aged from when the
    scheme drives a pending-action (aging) view.
    """

    label: str
    predicate: Predicate
    anchor: DateField = "interview_date"

    def matches(self, record: Record) -> bool:
        return bool(self.predicate(record))


@dataclass(frozen=True, slots=True)
class DerivedStatistic:
    """Sum of other categories, reported alongside them.

    Derived statistics overlap their components, so they are never part of
    a bucket total.
    """

    label: str
    components: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ClassificationScheme:
    """Named, ordered rule list with a trailing catch-all category."""

    name: str
    rules: tuple[Rule, ...]
    catch_all: str = DEFAULT_CATCH_ALL
    catch_all_anchor: DateField = "interview_date"
    derived: tuple[DerivedStatistic, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "derived", tuple(self.derived))
        self._validate()

    def _validate(self) -> None:
        if not self.rules:
            raise SchemeConfigurationError(f"Scheme {self.name!r} declares no rules")

        labels = [rule.label for rule in self.rules]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise SchemeConfigurationError(
                f"Scheme {self.name!r} repeats category labels: {duplicates}"
            )
        if self.catch_all in labels:
            raise SchemeConfigurationError(
                f"Scheme {self.name!r} catch-all {self.catch_all!r} shadows a rule"
            )
        for rule in self.rules:
            if rule.anchor not in DATE_FIELDS:
                raise SchemeConfigurationError(
                    f"Rule {rule.label!r} anchors to unknown date field {rule.anchor!r}"
                )

        categories = set(self.categories)
        for stat in self.derived:
            if stat.label in categories:
                raise SchemeConfigurationError(
                    f"Derived statistic {stat.label!r} collides with a category"
                )
            if not stat.components:
                raise SchemeConfigurationError(
                    f"Derived statistic {stat.label!r} has no components"
                )
            unknown = [c for c in stat.components if c not in categories]
            if unknown:
                raise SchemeConfigurationError(
                    f"Derived statistic {stat.label!r} references unknown categories: {unknown}"
                )

    @property
    def categories(self) -> tuple[str, ...]:
        """Category labels in match order, catch-all last."""
        return tuple(rule.label for rule in self.rules) + (self.catch_all,)

    @property
    def derived_labels(self) -> tuple[str, ...]:
        return tuple(stat.label for stat in self.derived)

    def match(self, record: Record) -> Rule | None:
        for rule in self.rules:
            if rule.matches(record):
                return rule
        return None

    def classify(self, record: Record) -> str:
        rule = self.match(record)
        return rule.label if rule is not None else self.catch_all

    def resolve(self, record: Record) -> tuple[str, DateField]:
        """Return the record's category together with its aging anchor."""
        rule = self.match(record)
        if rule is None:
            return self.catch_all, self.catch_all_anchor
        return rule.label, rule.anchor


def classify(record: Record, scheme: ClassificationScheme) -> str:
    """Return the single category ``scheme`` assigns to ``record``."""
    return scheme.classify(record)


def primary_is(*statuses: str) -> Predicate:
    wanted = frozenset(statuses)

    def predicate(record: Record) -> bool:
        return record.status_primary in wanted

    return predicate


def secondary_is(*statuses: str) -> Predicate:
    wanted = frozenset(statuses)

    def predicate(record: Record) -> bool:
        return record.status_secondary in wanted

    return predicate


def round_at_least(minimum: int) -> Predicate:
    def predicate(record: Record) -> bool:
        return record.interview_round >= minimum

    return predicate


def round_below(limit: int) -> Predicate:
    def predicate(record: Record) -> bool:
        return record.interview_round < limit

    return predicate


def all_of(*predicates: Predicate) -> Predicate:
    def predicate(record: Record) -> bool:
        return all(check(record) for check in predicates)

    return predicate


def any_of(*predicates: Predicate) -> Predicate:
    def predicate(record: Record) -> bool:
        return any(check(record) for check in predicates)

    return predicate


def status_scheme(
    name: str,
    statuses: Iterable[str],
    *,
    field: Literal["primary", "secondary"],
    derived: Iterable[DerivedStatistic] = (),
) -> ClassificationScheme:
    """Build a scheme with one category per status value of one field."""
    build = primary_is if field == "primary" else secondary_is
    return ClassificationScheme(
        name=name,
        rules=tuple(Rule(status, build(status)) for status in statuses),
        derived=tuple(derived),
    )
