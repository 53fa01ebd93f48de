from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from hranalytics.core import (
    AGING_LABELS,
    CONVERSION_SCHEME,
    OUTCOME_SCHEME,
    PENDING_SCHEME,
    AgingBucketing,
    BucketConfigurationError,
    CustomRange,
    DateBucketing,
    TrailingMonths,
    aggregate,
    assign,
    build_buckets,
    percentage,
)
from hranalytics.schemas import Record

TODAY = date(2024, 3, 15)


def build_record(record_id: str, **kwargs: Any) -> Record:
    return Record(record_id=record_id, **kwargs)


def march_bucketing() -> DateBucketing:
    return DateBucketing(buckets=build_buckets(CustomRange(date(2024, 3, 1), date(2024, 3, 31))))


def mixed_records() -> list[Record]:
    return [
        build_record("1", status_primary="Attended", interview_date=date(2024, 1, 4)),
        build_record("2", status_secondary="Final Reject", interview_date=date(2024, 1, 9)),
        build_record("3", status_secondary="Selected", interview_round=2, interview_date=date(2024, 2, 1)),
        build_record("4", status_secondary="Selected", interview_date=date(2024, 2, 29)),
        build_record("5", status_secondary="Offered", interview_date=date(2024, 3, 1)),
        build_record("6", status_secondary="Feedback Awaited", interview_date=date(2024, 3, 15)),
        build_record("7", status_secondary="Hold", interview_date=date(2024, 3, 20)),
        build_record("8", status_secondary="Hold", interview_date=date(2023, 12, 31)),
        build_record("9", status_secondary="Hold"),
    ]


def test_percentages_for_rejected_and_others():
    records = [
        build_record(f"R-{idx}", status_secondary="Interview Reject", interview_date=date(2024, 3, 3))
        for idx in range(3)
    ] + [
        build_record(f"O-{idx}", status_secondary="Hold", interview_date=date(2024, 3, 20))
        for idx in range(7)
    ]
    records.append(build_record("undated", status_secondary="Interview Reject"))

    matrix = aggregate(records, CONVERSION_SCHEME, march_bucketing())
    bucket = matrix.buckets[0]

    assert matrix.total(bucket) == 10
    assert matrix.skipped == 1
    assert matrix.counts[bucket]["Rejected"] == 3
    assert matrix.counts[bucket]["Others"] == 7
    assert matrix.percentage(bucket, "Rejected") == 30
    assert matrix.percentage(bucket, "Others") == 70


def test_bucket_totals_match_assigned_records():
    records = mixed_records()
    buckets = build_buckets(TrailingMonths(3), now=TODAY)

    matrix = aggregate(records, CONVERSION_SCHEME, DateBucketing(buckets=buckets))

    for bucket in matrix.buckets:
        assigned = [record for record in records if assign(record, buckets) == bucket]
        assert matrix.total(bucket) == len(assigned)
    assert matrix.grand_total() + matrix.skipped == len(records)
    assert matrix.skipped == 2
    assert matrix.counts["Mar 2024"] == {
        "Attended": 0,
        "Rejected": 0,
        "AdvancedRound": 0,
        "SelectedOrOffered": 1,
        "FeedbackAwaited": 1,
        "Others": 1,
    }


def test_aggregate_is_idempotent():
    records = mixed_records()
    bucketing = DateBucketing(buckets=build_buckets(TrailingMonths(3), now=TODAY))

    first = aggregate(records, CONVERSION_SCHEME, bucketing)
    second = aggregate(records, CONVERSION_SCHEME, bucketing)

    assert first == second
    assert first.percentages() == second.percentages()


def test_empty_bucket_has_zero_percentages():
    matrix = aggregate([], OUTCOME_SCHEME, march_bucketing())
    bucket = matrix.buckets[0]

    assert matrix.total(bucket) == 0
    assert set(matrix.percentages()[bucket].values()) == {0}
    assert set(matrix.percentages()[bucket]) == set(matrix.keys)


def test_derived_statistic_sits_outside_the_totals():
    day = date(2024, 3, 5)
    records = [
        build_record("1", status_secondary="Shortlisted", interview_date=day),
        build_record("2", status_secondary="Shortlisted", interview_date=day),
        build_record("3", status_secondary="Documentation", interview_date=day),
        build_record("4", status_secondary="Selected", interview_date=day),
    ]

    matrix = aggregate(records, OUTCOME_SCHEME, march_bucketing())
    bucket = matrix.buckets[0]

    assert matrix.total(bucket) == 4
    assert matrix.value(bucket, "ShortlistedOrDocumentation") == 3
    assert matrix.percentage(bucket, "ShortlistedOrDocumentation") == 75
    assert "ShortlistedOrDocumentation" not in matrix.counts[bucket]


def test_aging_view_anchors_each_category():
    records = [
        build_record(
            "ccp",
            status_primary="Client Conf Pending",
            reference_date=date(2024, 3, 10),
            interview_date=date(2024, 1, 1),
        ),
        build_record("ytc", status_primary="Yet to Confirm", interview_date=date(2024, 2, 20)),
        build_record("fa", status_secondary="Feedback Awaited"),
        build_record("na", status_primary="Not Attended", interview_date=date(2024, 4, 1)),
        build_record("old", status_primary="Reschedule", interview_date=date(2023, 11, 1)),
    ]

    matrix = aggregate(records, PENDING_SCHEME, AgingBucketing(today=TODAY))

    assert matrix.buckets == AGING_LABELS
    assert matrix.skipped == 0
    assert matrix.counts["Below 7 days"]["Client Conf Pending"] == 1
    assert matrix.counts["Below 7 days"]["Feedback Awaited"] == 1
    assert matrix.counts["Below 7 days"]["Not Attended"] == 1
    assert matrix.counts["16-30 days"]["Yet to Confirm"] == 1
    assert matrix.counts["Above 60 days"]["Reschedule"] == 1
    assert matrix.grand_total() == len(records)


def test_date_bucketing_requires_buckets():
    with pytest.raises(BucketConfigurationError):
        DateBucketing(buckets=())


def test_unknown_matrix_key_raises():
    matrix = aggregate([], CONVERSION_SCHEME, march_bucketing())

    with pytest.raises(KeyError):
        matrix.value(matrix.buckets[0], "Joined")


@pytest.mark.parametrize(
    ("count", "total", "expected"),
    [
        (0, 0, 0),
        (5, 0, 0),
        (1, 8, 13),
        (1, 3, 33),
        (2, 3, 67),
        (1, 200, 1),
        (10, 10, 100),
    ],
)
def test_percentage_rounds_half_up(count, total, expected):
    assert percentage(count, total) == expected


def test_percentages_are_not_renormalized():
    day = date(2024, 3, 5)
    records = [
        build_record("1", status_primary="Attended", interview_date=day),
        build_record("2", status_secondary="Final Reject", interview_date=day),
        build_record("3", status_secondary="Hold", interview_date=day),
    ]

    matrix = aggregate(records, CONVERSION_SCHEME, march_bucketing())
    shares = matrix.percentages()[matrix.buckets[0]]

    assert shares["Attended"] == shares["Rejected"] == shares["Others"] == 33
    assert sum(shares.values()) == 99
