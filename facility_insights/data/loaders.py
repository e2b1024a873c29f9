"""Facility store loading (CSV or JSON array file) and uploaded-CSV parsing."""

import csv
import hashlib
import io
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from facility_insights.config import DATA_DIR, _find_facilities_file
from facility_insights.models import Facility

logger = logging.getLogger(__name__)

# Columns accepted by the upload form (others are ignored)
UPLOAD_COLUMNS = ["name", "region", "specialties", "procedures", "equipment", "phone", "website"]

FACILITY_COLUMNS = [
    "id", "name", "region", "specialties", "procedures", "equipment", "capability",
    "phone", "website", "source_url", "created_at", "updated_at",
]

# Header spellings seen in exported sheets → canonical column
COLUMN_ALIASES = {
    "procedure": "procedures",
    "specialty": "specialties",
    "address_stateorregion": "region",
    "state_or_region": "region",
    "phone_numbers": "phone",
    "websites": "website",
    "pk_unique_id": "id",
}


class FacilityStoreError(Exception):
    """The facility collection could not be fetched; str(err) is shown as-is."""


def _canonical(key: str) -> str:
    k = (key or "").strip().lower()
    return COLUMN_ALIASES.get(k, k)


def _row_id(row: dict[str, Any], index: int) -> str:
    raw = "|".join(str(row.get(c) or "") for c in ("name", "region", "phone", "website")) + f"|{index}"
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()[:12]


def row_to_facility(row: dict[str, Any], index: int = 0) -> Facility:
    """Normalize one raw row (CSV dict or JSON object) into a Facility. Values are kept verbatim."""
    data: dict[str, Any] = {}
    for key, val in row.items():
        col = _canonical(key)
        if col not in FACILITY_COLUMNS or col in data:
            continue
        data[col] = None if val is None else str(val)
    data["name"] = (data.get("name") or "").strip() or "Unknown"
    if not (data.get("id") or "").strip():
        data["id"] = _row_id(data, index)
    for ts in ("created_at", "updated_at"):
        data[ts] = data.get(ts) or ""
    return Facility(**data)


def _read_rows(path: Path) -> list[dict[str, Any]]:
    if path.suffix.lower() == ".json":
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            payload = payload.get("data") or payload.get("facilities") or []
        if not isinstance(payload, list):
            raise FacilityStoreError(f"Expected a JSON array of facilities in {path.name}")
        return [r for r in payload if isinstance(r, dict)]
    with open(path, encoding="utf-8", errors="replace", newline="") as f:
        return list(csv.DictReader(f))


def load_facilities(path: str | Path | None = None) -> list[Facility]:
    """
    Fetch the full facility collection, newest first (created_at descending).
    Raises FacilityStoreError on any failure; there is no retry.
    """
    p = Path(path) if path else _find_facilities_file()
    if p is None:
        raise FacilityStoreError(f"No facility data file found in {DATA_DIR}")
    if not p.exists():
        raise FacilityStoreError(f"Facility data not found at {p}")
    try:
        rows = _read_rows(p)
        facilities = [row_to_facility(row, i) for i, row in enumerate(rows)]
    except FacilityStoreError:
        raise
    except (OSError, ValueError, ValidationError) as e:
        raise FacilityStoreError(f"Failed to fetch facilities: {e}") from e
    facilities.sort(key=lambda f: f.created_at, reverse=True)
    logger.info("Loaded %s facilities from %s", len(facilities), p)
    return facilities


def parse_upload_csv(text: str, now: datetime | None = None) -> list[Facility]:
    """Parse an uploaded dataset (UPLOAD_COLUMNS). Rows without a name are skipped."""
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    reader = csv.DictReader(io.StringIO(text or ""))
    out: list[Facility] = []
    skipped = 0
    for i, row in enumerate(reader):
        clean = {_canonical(k): v for k, v in row.items() if k}
        if not (clean.get("name") or "").strip():
            skipped += 1
            continue
        record = {c: clean.get(c) for c in UPLOAD_COLUMNS}
        record["id"] = uuid.uuid4().hex[:12]
        record["created_at"] = stamp
        record["updated_at"] = stamp
        out.append(row_to_facility(record, i))
    if skipped:
        logger.warning("Skipped %s uploaded rows without a name", skipped)
    return out
