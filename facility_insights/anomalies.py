"""
Detect facilities whose claims don't match their records.
Suspicious: surgical capability claimed (specialties or procedures) while no equipment is reported.
Incomplete: no equipment, or no specialties. The two flags are evaluated independently;
single-badge displays give suspicious precedence over incomplete.
"""

from typing import Literal

from facility_insights.fields import contains_ci
from facility_insights.models import Facility

FacilityStatus = Literal["suspicious", "incomplete", "complete"]

SURGICAL_TERM = "surg"


def has_surgical_claim(facility: Facility) -> bool:
    return contains_ci(facility.specialties, SURGICAL_TERM) or contains_ci(facility.procedures, SURGICAL_TERM)


def has_no_equipment(facility: Facility) -> bool:
    eq = facility.equipment
    return eq is None or eq.strip() == "" or eq.lower() == "none"


def is_suspicious(facility: Facility) -> bool:
    return has_surgical_claim(facility) and has_no_equipment(facility)


def is_incomplete(facility: Facility) -> bool:
    return has_no_equipment(facility) or not facility.specialties


def facility_status(facility: Facility) -> FacilityStatus:
    """Single badge for list/detail views: suspicious > incomplete > complete."""
    if is_suspicious(facility):
        return "suspicious"
    if is_incomplete(facility):
        return "incomplete"
    return "complete"


def suspicious_facilities(facilities: list[Facility]) -> list[Facility]:
    """Suspicious facilities in input order."""
    return [f for f in facilities if is_suspicious(f)]
