from __future__ import annotations

import itertools
from typing import Any

import pytest

from hranalytics.core import (
    CONVERSION_SCHEME,
    OUTCOME_SCHEME,
    PENDING_SCHEME,
    STANDARD_SCHEMES,
    ClassificationScheme,
    DerivedStatistic,
    Rule,
    SchemeConfigurationError,
    classify,
    is_pending,
)
from hranalytics.core.classifier import primary_is, secondary_is
from hranalytics.schemas import Record
from hranalytics.schemas.status import PRIMARY_STATUSES, SECONDARY_STATUSES


def build_record(**kwargs: Any) -> Record:
    defaults: dict[str, Any] = {"record_id": "R-001"}
    defaults.update(kwargs)
    return Record(**defaults)


def test_attended_wins_over_rejected():
    record = build_record(status_primary="Attended", status_secondary="Interview Reject")

    assert classify(record, CONVERSION_SCHEME) == "Attended"


def test_advanced_round_wins_over_selected_or_offered():
    record = build_record(interview_round=2, status_secondary="Selected")

    assert classify(record, CONVERSION_SCHEME) == "AdvancedRound"


def test_hyphenated_round_label_counts_as_advanced_round():
    record = build_record(interview_round="Round-2", status_secondary="Selected")

    assert classify(record, CONVERSION_SCHEME) == "AdvancedRound"


@pytest.mark.parametrize(
    ("fields", "expected"),
    [
        ({"status_secondary": "Final Reject"}, "Rejected"),
        ({"status_secondary": "Interview Reject", "interview_round": 3}, "Rejected"),
        ({"status_secondary": "Selected"}, "SelectedOrOffered"),
        ({"status_secondary": "Selected", "interview_round": "Round 1"}, "SelectedOrOffered"),
        ({"status_secondary": "Offered", "interview_round": 3}, "SelectedOrOffered"),
        ({"status_secondary": "Feedback Awaited"}, "FeedbackAwaited"),
        ({"status_primary": "Confirmed", "status_secondary": "Hold"}, "Others"),
        ({"status_secondary": "Something New"}, "Others"),
        ({}, "Others"),
    ],
)
def test_conversion_scheme_categories(fields, expected):
    assert classify(build_record(**fields), CONVERSION_SCHEME) == expected


def test_outcome_scheme_uses_canonical_status_labels():
    record = build_record(status_secondary="offered DROP")

    assert classify(record, OUTCOME_SCHEME) == "Offered Drop"
    assert OUTCOME_SCHEME.derived_labels == ("ShortlistedOrDocumentation",)
    assert "ShortlistedOrDocumentation" not in OUTCOME_SCHEME.categories


def test_pending_scheme_prefers_scheduling_state():
    record = build_record(status_primary="Reschedule", status_secondary="Feedback Awaited")

    assert classify(record, PENDING_SCHEME) == "Reschedule"
    assert PENDING_SCHEME.resolve(build_record(status_primary="Client Conf Pending")) == (
        "Client Conf Pending",
        "reference_date",
    )
    assert is_pending(build_record(status_secondary="Feedback Awaited"))
    assert not is_pending(build_record(status_primary="Attended"))


@pytest.mark.parametrize("scheme", STANDARD_SCHEMES, ids=lambda scheme: scheme.name)
def test_every_record_gets_exactly_one_declared_category(scheme: ClassificationScheme):
    primaries = PRIMARY_STATUSES + ("", "Unknown")
    secondaries = SECONDARY_STATUSES + ("", "Unknown")
    for primary, secondary, round_ in itertools.product(primaries, secondaries, (1, 2, 3)):
        record = build_record(
            status_primary=primary,
            status_secondary=secondary,
            interview_round=round_,
        )
        label = classify(record, scheme)

        assert label in scheme.categories
        winners = [rule.label for rule in scheme.rules if rule.matches(record)]
        if winners:
            assert label == winners[0]
        else:
            assert label == scheme.catch_all


def test_classification_is_stable():
    record = build_record(status_secondary="Selected", interview_round=2)

    assert {classify(record, CONVERSION_SCHEME) for _ in range(5)} == {"AdvancedRound"}


def test_scheme_without_rules_fails_fast():
    with pytest.raises(SchemeConfigurationError):
        ClassificationScheme(name="empty", rules=())


def test_scheme_rejects_duplicate_labels():
    with pytest.raises(SchemeConfigurationError):
        ClassificationScheme(
            name="dupes",
            rules=(
                Rule("Hold", secondary_is("Hold")),
                Rule("Hold", primary_is("Position Hold")),
            ),
        )


def test_scheme_rejects_catch_all_shadowing_a_rule():
    with pytest.raises(SchemeConfigurationError):
        ClassificationScheme(
            name="shadow",
            rules=(Rule("Others", secondary_is("Hold")),),
        )


def test_scheme_rejects_derived_statistic_over_unknown_category():
    with pytest.raises(SchemeConfigurationError):
        ClassificationScheme(
            name="derived",
            rules=(Rule("Hold", secondary_is("Hold")),),
            derived=(DerivedStatistic("HoldOrDrop", ("Hold", "Drop")),),
        )


def test_scheme_errors_are_value_errors():
    with pytest.raises(ValueError):
        ClassificationScheme(name="empty", rules=[])
