"""
Alert generation and dashboard counters.
Order matters: equipment-mismatch warnings (facility order) come before medical-desert
criticals (region first-appearance order), and the list is cut at the limit without re-sorting.
"""

from datetime import datetime, timezone

from facility_insights.anomalies import is_incomplete, is_suspicious
from facility_insights.config import ALERT_LIMIT, DESERT_THRESHOLD
from facility_insights.fields import is_missing
from facility_insights.models import Alert, DashboardStats, Facility


def region_counts(facilities: list[Facility]) -> dict[str, int]:
    """Facility count per named region (records without a region are not counted)."""
    counts: dict[str, int] = {}
    for f in facilities:
        if is_missing(f.region):
            continue
        counts[f.region] = counts.get(f.region, 0) + 1
    return counts


def medical_deserts(facilities: list[Facility], threshold: int = DESERT_THRESHOLD) -> list[tuple[str, int]]:
    """(region, count) for regions with fewer than threshold facilities."""
    return [(region, n) for region, n in region_counts(facilities).items() if n < threshold]


def _mismatch_alert(f: Facility, now: datetime) -> Alert:
    return Alert(
        id=f"alert-{f.id}",
        type="warning",
        title="Equipment Mismatch",
        description=f"{f.name} claims surgical capabilities but reports no equipment",
        region=None if is_missing(f.region) else f.region,
        facility_id=f.id,
        timestamp=now,
    )


def _desert_alert(region: str, count: int, now: datetime) -> Alert:
    return Alert(
        id=f"desert-{region}",
        type="critical",
        title="Medical Desert Detected",
        description=f"{region} has severely limited healthcare access ({count} facility)",
        region=region,
        timestamp=now,
    )


def generate_alerts(
    facilities: list[Facility],
    limit: int = ALERT_LIMIT,
    now: datetime | None = None,
) -> list[Alert]:
    """Mismatch warnings then desert criticals, truncated to the first `limit`."""
    now = now or datetime.now(timezone.utc)
    alerts = [_mismatch_alert(f, now) for f in facilities if is_suspicious(f)]
    alerts.extend(_desert_alert(region, n, now) for region, n in medical_deserts(facilities))
    return alerts[:limit]


def dashboard_stats(
    facilities: list[Facility],
    limit: int = ALERT_LIMIT,
    now: datetime | None = None,
) -> DashboardStats:
    """Uncapped counters plus the capped alert list."""
    deserts = len(medical_deserts(facilities))
    return DashboardStats(
        total_facilities=len(facilities),
        medical_deserts=deserts,
        incomplete_records=sum(1 for f in facilities if is_incomplete(f)),
        suspicious_claims=sum(1 for f in facilities if is_suspicious(f)),
        regions_with_gaps=deserts,
        critical_alerts=generate_alerts(facilities, limit=limit, now=now),
    )
