"""
Resource planning: draft interventions against under-covered regions, run a quick
impact simulation, and export the plan list as CSV.
"""

import csv
import io
import logging
import uuid
from datetime import datetime, timezone

from facility_insights.models import RegionStats, ResourcePlan

logger = logging.getLogger(__name__)

# Intervention types offered in the planning form
PLAN_TYPES = [
    {"value": "mobile-clinic", "label": "Deploy Mobile Clinic"},
    {"value": "equipment-transfer", "label": "Equipment Transfer"},
    {"value": "staff-allocation", "label": "Staff Allocation"},
    {"value": "patient-routing", "label": "Patient Routing"},
]

EXPORT_HEADER = ["Name", "Type", "Region", "Description", "Impact", "Status", "Created"]
PENDING_IMPACT = "Impact analysis pending"


class PlanValidationError(ValueError):
    """A plan is missing required fields."""


def sample_plans() -> list[ResourcePlan]:
    return [
        ResourcePlan(
            id="1",
            name="Mobile Clinic - Upper East",
            type="mobile-clinic",
            target_region="Upper East",
            description="Deploy mobile clinic with basic diagnostic and emergency capabilities",
            estimated_impact="Serve ~5,000 underserved population",
            status="active",
            created_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
        ),
        ResourcePlan(
            id="2",
            name="Emergency Equipment - Northern",
            type="equipment-transfer",
            target_region="Northern Region",
            description="Transfer emergency response equipment from Central to Northern facility",
            estimated_impact="Enable 24/7 emergency response",
            status="pending",
            created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
        ),
    ]


def region_choices(stats: list[RegionStats]) -> list[tuple[str, str]]:
    """(region, label) pairs for the target-region dropdown."""
    return [(r.region, f"{r.region} ({r.coverage_score}% coverage)") for r in stats]


class PlanBook:
    """Plans for one planning session, newest first."""

    def __init__(self, plans: list[ResourcePlan] | None = None):
        self._plans = list(sample_plans() if plans is None else plans)

    @property
    def plans(self) -> list[ResourcePlan]:
        return list(self._plans)

    def get(self, plan_id: str) -> ResourcePlan:
        for p in self._plans:
            if p.id == plan_id:
                return p
        raise KeyError(plan_id)

    def create(
        self,
        name: str,
        type: str = "mobile-clinic",
        target_region: str = "",
        description: str = "",
        now: datetime | None = None,
    ) -> ResourcePlan:
        if not (name or "").strip() or not (target_region or "").strip():
            raise PlanValidationError("Please fill in all required fields")
        plan = ResourcePlan(
            id=uuid.uuid4().hex[:12],
            name=name.strip(),
            type=type,
            target_region=target_region.strip(),
            description=description or "",
            estimated_impact=PENDING_IMPACT,
            status="draft",
            created_at=now or datetime.now(timezone.utc),
        )
        self._plans.insert(0, plan)
        logger.info("Created plan %s for %s", plan.id, plan.target_region)
        return plan

    def simulate(self, plan_id: str) -> ResourcePlan:
        """Attach the projected impact and move the plan to pending review."""
        plan = self.get(plan_id)
        updated = plan.model_copy(update={
            "estimated_impact": f"Projected to improve coverage by 15-20% in {plan.target_region}",
            "status": "pending",
        })
        self._plans = [updated if p.id == plan_id else p for p in self._plans]
        return updated

    def export_csv(self) -> str:
        buf = io.StringIO()
        w = csv.writer(buf, lineterminator="\n")
        w.writerow(EXPORT_HEADER)
        for p in self._plans:
            w.writerow([
                p.name,
                p.type,
                p.target_region,
                p.description,
                p.estimated_impact,
                p.status,
                p.created_at.isoformat(),
            ])
        return buf.getvalue()
