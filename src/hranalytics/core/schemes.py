"""Classification schemes used by the standard reports."""

from __future__ import annotations

from ..schemas import Record, status
from .classifier import (
    ClassificationScheme,
    DerivedStatistic,
    Rule,
    all_of,
    any_of,
    primary_is,
    round_at_least,
    round_below,
    secondary_is,
    status_scheme,
)

# Rule order matters: a record lands in the first category that matches.
CONVERSION_SCHEME = ClassificationScheme(
    name="conversion",
    rules=(
        Rule("Attended", primary_is(status.ATTENDED)),
        Rule("Rejected", secondary_is(status.INTERVIEW_REJECT, status.FINAL_REJECT)),
        Rule(
            "AdvancedRound",
            all_of(round_at_least(2), secondary_is(status.SELECTED)),
        ),
        Rule(
            "SelectedOrOffered",
            any_of(
                all_of(secondary_is(status.SELECTED), round_below(2)),
                secondary_is(status.OFFERED),
            ),
        ),
        Rule("FeedbackAwaited", secondary_is(status.FEEDBACK_AWAITED)),
    ),
)

SHORTLISTED_OR_DOCUMENTATION = DerivedStatistic(
    label="ShortlistedOrDocumentation",
    components=(status.SHORTLISTED, status.DOCUMENTATION),
)

OUTCOME_SCHEME = status_scheme(
    "outcome",
    status.SECONDARY_STATUSES,
    field="secondary",
    derived=(SHORTLISTED_OR_DOCUMENTATION,),
)

ATTENDANCE_SCHEME = status_scheme(
    "attendance",
    status.PRIMARY_STATUSES,
    field="primary",
)

# Primary-status rules come first, so a record pending on both statuses is
# counted once, under its scheduling state.
PENDING_SCHEME = ClassificationScheme(
    name="pending",
    rules=(
        Rule(
            status.CLIENT_CONF_PENDING,
            primary_is(status.CLIENT_CONF_PENDING),
            anchor="reference_date",
        ),
        Rule(status.YET_TO_CONFIRM, primary_is(status.YET_TO_CONFIRM)),
        Rule(status.NOT_ATTENDED, primary_is(status.NOT_ATTENDED)),
        Rule(status.RESCHEDULE, primary_is(status.RESCHEDULE)),
        Rule(status.FEEDBACK_AWAITED, secondary_is(status.FEEDBACK_AWAITED)),
    ),
)

PENDING_TITLES: dict[str, str] = {
    status.CLIENT_CONF_PENDING: "Client Confirmation",
}

STANDARD_SCHEMES: tuple[ClassificationScheme, ...] = (
    CONVERSION_SCHEME,
    OUTCOME_SCHEME,
    ATTENDANCE_SCHEME,
    PENDING_SCHEME,
)


def is_pending(record: Record) -> bool:
    """True when the record has an outstanding action in the pending scheme."""
    return PENDING_SCHEME.match(record) is not None
