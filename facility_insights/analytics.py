"""Chart series for the analytics view, built from region statistics."""

from typing import Any

from facility_insights.models import ChartDataPoint, RegionStats

NAME_MAX_LEN = 15
NAME_TRUNCATE_TO = 12


def _short_name(region: str) -> str:
    return region[:NAME_TRUNCATE_TO] + "..." if len(region) > NAME_MAX_LEN else region


def coverage_series(stats: list[RegionStats]) -> list[dict[str, Any]]:
    """Coverage score by region (short label for the axis, full name for tooltips)."""
    return [
        {
            "name": _short_name(r.region),
            "full_name": r.region,
            "coverage": r.coverage_score,
            "facilities": r.total_facilities,
        }
        for r in stats
    ]


def specialty_distribution(stats: list[RegionStats]) -> list[ChartDataPoint]:
    return [
        ChartDataPoint(name="Cardiac", value=sum(r.with_cardiac for r in stats)),
        ChartDataPoint(name="Emergency", value=sum(r.with_emergency for r in stats)),
        ChartDataPoint(name="Surgical", value=sum(r.with_surgical for r in stats)),
    ]


def quality_distribution(stats: list[RegionStats], total_facilities: int) -> list[ChartDataPoint]:
    incomplete = sum(r.incomplete_data for r in stats)
    return [
        ChartDataPoint(name="Complete", value=total_facilities - incomplete),
        ChartDataPoint(name="Incomplete", value=incomplete),
    ]


def analytics_summary(stats: list[RegionStats], total_facilities: int) -> dict[str, Any]:
    """All analytics series in one JSON-friendly dict."""
    return {
        "coverage_by_region": coverage_series(stats),
        "specialty_distribution": [p.model_dump() for p in specialty_distribution(stats)],
        "quality_distribution": [p.model_dump() for p in quality_distribution(stats, total_facilities)],
    }
