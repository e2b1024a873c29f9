"""
Region aggregation: per-region capability counters and a 0–100 coverage score.
Counters use keyword heuristics over the raw specialties/procedures text; the score
awards fixed weights per capability present anywhere in the region, plus a bonus
when fewer than 30% of the region's records lack equipment.
"""

import logging

from facility_insights.anomalies import is_suspicious
from facility_insights.config import CRITICAL_COVERAGE
from facility_insights.fields import contains_ci, equipment_recorded, region_key
from facility_insights.models import Facility, RegionStats

logger = logging.getLogger(__name__)

# --- Weights (points awarded when the region-level condition holds) ---
CARDIAC_WEIGHT = 25
EMERGENCY_WEIGHT = 35
SURGICAL_WEIGHT = 25
COMPLETENESS_WEIGHT = 15
INCOMPLETE_RATIO_LIMIT = 0.3


def _is_cardiac(f: Facility) -> bool:
    return contains_ci(f.specialties, "cardiac", "cardio")


def _is_emergency(f: Facility) -> bool:
    return contains_ci(f.specialties, "emergency") or contains_ci(f.procedures, "emergency")


def _is_surgical(f: Facility) -> bool:
    return contains_ci(f.specialties, "surg") or contains_ci(f.procedures, "surg")


def coverage_score(stats: RegionStats) -> int:
    """Sum of weights for the region as a whole; always a subset-sum of {25, 35, 25, 15}."""
    score = 0
    if stats.with_cardiac > 0:
        score += CARDIAC_WEIGHT
    if stats.with_emergency > 0:
        score += EMERGENCY_WEIGHT
    if stats.with_surgical > 0:
        score += SURGICAL_WEIGHT
    if stats.incomplete_data < stats.total_facilities * INCOMPLETE_RATIO_LIMIT:
        score += COMPLETENESS_WEIGHT
    return score


def aggregate_regions(facilities: list[Facility]) -> list[RegionStats]:
    """One RegionStats per distinct region, in order of each region's first appearance."""
    by_region: dict[str, RegionStats] = {}
    for f in facilities:
        region = region_key(f)
        stats = by_region.get(region)
        if stats is None:
            stats = by_region[region] = RegionStats(region=region)
        stats.total_facilities += 1
        if _is_cardiac(f):
            stats.with_cardiac += 1
        if _is_emergency(f):
            stats.with_emergency += 1
        if _is_surgical(f):
            stats.with_surgical += 1
        if not equipment_recorded(f):
            stats.incomplete_data += 1
        if is_suspicious(f):
            stats.suspicious_claims += 1

    for stats in by_region.values():
        stats.coverage_score = coverage_score(stats)
    logger.debug("Aggregated %s facilities into %s regions", len(facilities), len(by_region))
    return list(by_region.values())


def coverage_label(score: int) -> str:
    if score >= 75:
        return "Good"
    if score >= 50:
        return "Limited"
    return "Critical"


def regions_by_coverage(stats: list[RegionStats]) -> list[RegionStats]:
    """Lowest coverage first (stable for ties)."""
    return sorted(stats, key=lambda r: r.coverage_score)


def critical_regions(stats: list[RegionStats], threshold: int = CRITICAL_COVERAGE) -> list[RegionStats]:
    """Regions whose coverage falls below threshold (planning view's urgent list)."""
    return [r for r in stats if r.coverage_score < threshold]
