"""Validators for football-data.org query parameters.

Each validator is a pure predicate over the serialized parameter value and
encodes the vocabulary the API accepts for that parameter.
"""

import re

PLANS = frozenset({"TIER_ONE", "TIER_TWO", "TIER_THREE", "TIER_FOUR"})
STANDING_TYPES = frozenset({"TOTAL", "HOME", "AWAY"})
STATUSES = frozenset(
    {
        "SCHEDULED",
        "LIVE",
        "IN_PLAY",
        "PAUSED",
        "FINISHED",
        "POSTPONED",
        "SUSPENDED",
        "CANCELED",
    },
)
VENUES = frozenset({"HOME", "AWAY"})

MIN_SEASON = 1111
MAX_SEASON = 2100

_INT_RE = re.compile(r"-?[0-9]+")
_DATE_RE = re.compile(r"(20[0-9]{2})-(0[1-9]|1[0-2])-(0[1-9]|[1-2][0-9]|3[0-1])")


def validate_string_ints(value: str) -> bool:
    """Check a comma separated list of ids (areas, competitions).

    Every segment must be a plain decimal integer other than zero.
    """
    return all(
        _INT_RE.fullmatch(segment) and int(segment) for segment in value.split(",")
    )


def validate_plan(value: str) -> bool:
    """Check a subscription tier: TIER_ONE | TIER_TWO | TIER_THREE | TIER_FOUR."""
    return value in PLANS


def validate_season(value: str) -> bool:
    """Check that a season is a plausible starting year (YYYY)."""
    if not _INT_RE.fullmatch(value):
        return False
    return MIN_SEASON < int(value) < MAX_SEASON


def validate_standing_type(value: str) -> bool:
    """Check a standing type: TOTAL | HOME | AWAY."""
    return value in STANDING_TYPES


def validate_date(value: str) -> bool:
    """Check a YYYY-MM-DD date in the 2000-2099 range.

    Only digit ranges are checked, so ``2024-02-30`` is accepted.
    """
    return _DATE_RE.fullmatch(value) is not None


def validate_status(value: str) -> bool:
    """Check a match status."""
    return value in STATUSES


def validate_venue(value: str) -> bool:
    """Check a venue: HOME | AWAY."""
    return value in VENUES
