"""Known interview status labels."""

from __future__ import annotations

# status 1: interview attendance / scheduling state
ATTENDED = "Attended"
CLIENT_CONF_PENDING = "Client Conf Pending"
CONFIRMED = "Confirmed"
NOT_ATTENDED = "Not Attended"
NOT_INTERESTED = "Not Interested"
POSITION_HOLD = "Position Hold"
RESCHEDULE = "Reschedule"
YET_TO_CONFIRM = "Yet to Confirm"

PRIMARY_STATUSES: tuple[str, ...] = (
    ATTENDED,
    CLIENT_CONF_PENDING,
    CONFIRMED,
    NOT_ATTENDED,
    NOT_INTERESTED,
    POSITION_HOLD,
    RESCHEDULE,
    YET_TO_CONFIRM,
)

# status 2: outcome / disposition
DOCUMENTATION = "Documentation"
DROP = "Drop"
FEEDBACK_AWAITED = "Feedback Awaited"
FINAL_REJECT = "Final Reject"
HOLD = "Hold"
INTERVIEW_REJECT = "Interview Reject"
JOINED = "Joined"
OFFERED = "Offered"
OFFERED_DROP = "Offered Drop"
SELECTED = "Selected"
SHORTLISTED = "Shortlisted"

SECONDARY_STATUSES: tuple[str, ...] = (
    DOCUMENTATION,
    DROP,
    FEEDBACK_AWAITED,
    FINAL_REJECT,
    HOLD,
    INTERVIEW_REJECT,
    JOINED,
    OFFERED,
    OFFERED_DROP,
    SELECTED,
    SHORTLISTED,
)

# Placeholder values the data-entry forms store when nothing was chosen.
UNSET_STATUSES = frozenset({"none", "choose_status1", "choose_status2"})

_CANONICAL = {
    label.lower(): label for label in PRIMARY_STATUSES + SECONDARY_STATUSES
}


def canonical_status(value: str) -> str:
    """Return the canonical spelling of a status label.

    Matching is case-insensitive and ignores surrounding whitespace. Unknown
    labels are returned stripped but otherwise untouched.
    """
    stripped = value.strip()
    if stripped.lower() in UNSET_STATUSES:
        return ""
    return _CANONICAL.get(stripped.lower(), stripped)
