"""
Search and filter over the facility snapshot.
Free-text query is plain case-insensitive substring containment over the joined text fields;
field filters narrow further (AND). Results keep input order; nothing is ranked.
"""

from typing import Any

from facility_insights.fields import equipment_recorded, is_missing, split_list
from facility_insights.models import Facility, SearchFilters

# Fields joined (in this order) for free-text matching
SEARCHABLE_FIELDS = ["name", "region", "specialties", "equipment", "procedures", "capability"]

SEARCH_SUGGESTIONS = [
    "Find hospitals with ICU in Northern Region",
    "Show facilities with cardiac surgery capabilities",
    "List clinics without proper equipment",
    "Which regions lack emergency services?",
    "Find suspicious equipment claims",
    "Facilities with maternal care in rural areas",
    "Show all diagnostic centers",
    "Regions with limited surgical access",
]
MAX_SUGGESTIONS = 5


def searchable_text(facility: Facility) -> str:
    parts = [getattr(facility, col) for col in SEARCHABLE_FIELDS]
    return " ".join(p for p in parts if p).lower()


def _as_filters(filters: SearchFilters | dict[str, Any] | None) -> SearchFilters:
    if filters is None:
        return SearchFilters()
    if isinstance(filters, SearchFilters):
        return filters
    return SearchFilters.model_validate(filters)


def matches(facility: Facility, filters: SearchFilters) -> bool:
    """True when the facility passes every active filter."""
    if filters.query and filters.query.lower() not in searchable_text(facility):
        return False
    if filters.region and facility.region != filters.region:
        return False
    # Raw substring checks on the comma-joined fields (case-sensitive, not split)
    if filters.specialty and filters.specialty not in (facility.specialties or ""):
        return False
    if filters.equipment and filters.equipment not in (facility.equipment or ""):
        return False
    if filters.procedure and filters.procedure not in (facility.procedures or ""):
        return False
    if filters.status:
        has_equipment = equipment_recorded(facility)
        if filters.status == "incomplete" and has_equipment:
            return False
        if filters.status == "complete" and not has_equipment:
            return False
    return True


def filter_facilities(
    facilities: list[Facility],
    filters: SearchFilters | dict[str, Any] | None = None,
) -> list[Facility]:
    """Narrow facilities by filters; empty filters return the input unchanged and in order."""
    f = _as_filters(filters)
    return [row for row in facilities if matches(row, f)]


def filter_options(facilities: list[Facility]) -> dict[str, list[str]]:
    """Distinct values for filter dropdowns: regions whole, list fields split on commas."""
    regions: set[str] = set()
    specialties: set[str] = set()
    equipment: set[str] = set()
    procedures: set[str] = set()
    for f in facilities:
        if not is_missing(f.region):
            regions.add(f.region)
        specialties.update(split_list(f.specialties))
        equipment.update(split_list(f.equipment))
        procedures.update(split_list(f.procedures))
    return {
        "regions": sorted(regions),
        "specialties": sorted(specialties),
        "equipment": sorted(equipment),
        "procedures": sorted(procedures),
    }


def suggestions(query: str = "") -> list[str]:
    """Canned queries containing the text (case-insensitive); first few when query is empty."""
    if not query:
        return SEARCH_SUGGESTIONS[:MAX_SUGGESTIONS]
    q = query.lower()
    return [s for s in SEARCH_SUGGESTIONS if q in s.lower()][:MAX_SUGGESTIONS]


class SearchSession:
    """
    Filter state for one search view. Idle while the query is empty, Filtering otherwise;
    changes go through update() and clear() only.
    """

    def __init__(self, filters: SearchFilters | None = None):
        self._filters = filters or SearchFilters()

    @property
    def filters(self) -> SearchFilters:
        return self._filters

    @property
    def is_filtering(self) -> bool:
        return bool(self._filters.query)

    def update(self, **changes: Any) -> SearchFilters:
        """Merge changes into the current filters (unknown keys rejected by validation)."""
        merged = {**self._filters.model_dump(), **changes}
        self._filters = SearchFilters.model_validate(merged)
        return self._filters

    def clear(self) -> SearchFilters:
        self._filters = SearchFilters()
        return self._filters

    def results(self, facilities: list[Facility]) -> list[Facility]:
        return filter_facilities(facilities, self._filters)

    def suggestions(self) -> list[str]:
        return suggestions(self._filters.query)
