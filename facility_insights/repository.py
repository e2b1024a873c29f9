"""
Current facility snapshot plus everything derived from it.
Each change to the collection bumps a version counter; derived insights are
computed in full once per version and reused until the next change.
"""

import logging
from pathlib import Path
from typing import Any

from facility_insights.alerts import dashboard_stats
from facility_insights.analytics import analytics_summary
from facility_insights.data.loaders import FacilityStoreError, load_facilities
from facility_insights.geo import map_markers
from facility_insights.models import Facility
from facility_insights.regions import aggregate_regions
from facility_insights.search import filter_options

logger = logging.getLogger(__name__)


def compute_insights(facilities: list[Facility]) -> dict[str, Any]:
    """Every derived view of one snapshot (stats, regions, markers, analytics, filter options)."""
    regions = aggregate_regions(facilities)
    return {
        "stats": dashboard_stats(facilities),
        "regions": regions,
        "markers": map_markers(facilities),
        "analytics": analytics_summary(regions, len(facilities)),
        "filter_options": filter_options(facilities),
    }


class FacilityRepository:
    """Holds the facility collection, the last fetch error, and per-version derived insights."""

    def __init__(self, path: str | Path | None = None, facilities: list[Facility] | None = None):
        self.path = path
        self._facilities: list[Facility] = []
        self.version = 0
        self.error: str | None = None
        self._cache: tuple[int, dict[str, Any]] | None = None
        if facilities:
            self._set(list(facilities))

    @property
    def facilities(self) -> list[Facility]:
        return list(self._facilities)

    def refresh(self) -> bool:
        """Re-fetch from the store. On failure keep the previous snapshot and record the error."""
        try:
            loaded = load_facilities(self.path)
        except FacilityStoreError as e:
            self.error = str(e)
            logger.error("Facility fetch failed: %s", e)
            return False
        self._set(loaded)
        return True

    def replace(self, facilities: list[Facility]) -> None:
        self._set(list(facilities))

    def add(self, facilities: list[Facility]) -> int:
        """Prepend newly ingested facilities (newest first); returns how many were added."""
        if facilities:
            self._set(list(facilities) + self._facilities)
        return len(facilities)

    def get(self, facility_id: str) -> Facility | None:
        for f in self._facilities:
            if f.id == facility_id:
                return f
        return None

    def insights(self) -> dict[str, Any]:
        if self._cache is None or self._cache[0] != self.version:
            self._cache = (self.version, compute_insights(self._facilities))
        return self._cache[1]

    def _set(self, facilities: list[Facility]) -> None:
        self._facilities = facilities
        self.error = None
        self.version += 1
