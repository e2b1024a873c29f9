"""
Map markers: place each facility near its region's reference point.
Records carry no coordinates, so markers use a static region table and a small
index-based offset to keep facilities in the same region from overlapping.
"""

from facility_insights.anomalies import is_suspicious
from facility_insights.fields import equipment_recorded, is_missing, region_key, split_list
from facility_insights.models import Facility, MapMarker

# Reference points (lat, lng) per region
REGION_COORDINATES: dict[str, tuple[float, float]] = {
    "Northern Region": (9.4, -0.85),
    "Southern Region": (5.6, -0.18),
    "Eastern Region": (6.7, -0.45),
    "Western Region": (5.1, -1.98),
    "Central Region": (5.5, -1.05),
    "Greater Accra": (5.55, -0.2),
    "Ashanti Region": (6.75, -1.52),
    "Volta Region": (6.6, 0.47),
    "Upper East": (10.75, -0.85),
    "Upper West": (10.35, -2.28),
}
DEFAULT_REGION = "Central Region"
FALLBACK_COORDS = (7.9, -1.05)


def region_coords(region: str | None) -> tuple[float, float]:
    """Reference point for a region; missing regions use the default region."""
    return REGION_COORDINATES.get(DEFAULT_REGION if is_missing(region) else region, FALLBACK_COORDS)


def marker_status(facility: Facility) -> str:
    if is_suspicious(facility):
        return "suspicious"
    if not equipment_recorded(facility):
        return "incomplete"
    return "operational"


def to_marker(facility: Facility, index: int) -> MapMarker:
    lat, lng = region_coords(facility.region)
    offset = (index % 10) * 0.1
    return MapMarker(
        id=facility.id,
        name=facility.name,
        lat=lat + offset - 0.25,
        lng=lng + offset - 0.25,
        type="clinic" if "clinic" in facility.name.lower() else "hospital",
        status=marker_status(facility),
        specialties=split_list(facility.specialties),
        equipment=split_list(facility.equipment),
        region=region_key(facility),
    )


def map_markers(facilities: list[Facility]) -> list[MapMarker]:
    return [to_marker(f, i) for i, f in enumerate(facilities)]
