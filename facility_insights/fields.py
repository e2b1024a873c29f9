"""
Helpers for sparse facility fields.
Upstream data marks an absent value as null, empty string, or the literal text "None";
the helpers here keep each consumer's exact check in one place.
"""

from facility_insights.models import Facility

MISSING_TEXT = "None"
UNKNOWN_REGION = "Unknown"


def is_missing(value: str | None) -> bool:
    """True for null, empty/blank, or the literal "None"."""
    if value is None:
        return True
    v = value.strip()
    return not v or v == MISSING_TEXT


def contains_ci(value: str | None, *needles: str) -> bool:
    """Case-insensitive substring match of any needle; null never matches."""
    if not value:
        return False
    text = value.lower()
    return any(n in text for n in needles)


def equipment_recorded(facility: Facility) -> bool:
    """Equipment present for counting/filtering: not null, not empty, not exactly "None" (case-sensitive)."""
    return bool(facility.equipment) and facility.equipment != MISSING_TEXT


def region_key(facility: Facility) -> str:
    """Region used for grouping; missing regions fall under "Unknown"."""
    return UNKNOWN_REGION if is_missing(facility.region) else facility.region


def split_list(value: str | None) -> list[str]:
    """Split a comma-joined field into trimmed, non-empty items."""
    if not value:
        return []
    return [p.strip() for p in value.split(",") if p.strip()]
