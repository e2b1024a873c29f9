"""Data models for facilities, derived statistics and dashboard state."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Facility(BaseModel):
    """One healthcare facility record as delivered by the facility store (read-only here)."""
    id: str
    name: str
    region: str | None = None
    specialties: str | None = None  # comma-separated
    procedures: str | None = None   # comma-separated
    equipment: str | None = None    # comma-separated
    capability: str | None = None
    phone: str | None = None
    website: str | None = None
    source_url: str | None = None
    created_at: str = ""
    updated_at: str = ""


class RegionStats(BaseModel):
    """Per-region counters and coverage score, rebuilt from scratch on every snapshot."""
    region: str
    total_facilities: int = 0
    with_cardiac: int = 0
    with_emergency: int = 0
    with_surgical: int = 0
    incomplete_data: int = 0
    suspicious_claims: int = 0
    coverage_score: int = 0


AlertType = Literal["warning", "critical", "info"]


class Alert(BaseModel):
    id: str
    type: AlertType
    title: str
    description: str
    region: str | None = None
    facility_id: str | None = None
    timestamp: datetime


class DashboardStats(BaseModel):
    total_facilities: int = 0
    medical_deserts: int = 0
    incomplete_records: int = 0
    suspicious_claims: int = 0
    regions_with_gaps: int = 0
    critical_alerts: list[Alert] = Field(default_factory=list)


class SearchFilters(BaseModel):
    """Free-text query plus optional field filters (AND across all set filters)."""
    model_config = ConfigDict(extra="forbid")

    query: str = ""
    region: str | None = None
    specialty: str | None = None
    equipment: str | None = None
    procedure: str | None = None
    status: str | None = None


MarkerStatus = Literal["operational", "limited", "suspicious", "incomplete"]


class MapMarker(BaseModel):
    id: str
    name: str
    lat: float
    lng: float
    type: Literal["hospital", "clinic", "medical-desert", "mobile-clinic"] = "hospital"
    status: MarkerStatus = "operational"
    specialties: list[str] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    region: str = "Unknown"


PlanType = Literal["mobile-clinic", "equipment-transfer", "staff-allocation", "patient-routing"]
PlanStatus = Literal["draft", "pending", "approved", "active"]


class ResourcePlan(BaseModel):
    """An intervention planned against a target region (planning view)."""
    id: str
    name: str
    type: PlanType = "mobile-clinic"
    target_region: str
    description: str = ""
    estimated_impact: str = ""
    status: PlanStatus = "draft"
    created_at: datetime


class ChartDataPoint(BaseModel):
    name: str
    value: int
    color: str | None = None
