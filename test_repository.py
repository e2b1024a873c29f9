"""Tests for the facility snapshot holder."""

from facility_insights.models import Facility
from facility_insights.repository import FacilityRepository, compute_insights


def _facility(id: str, **kw) -> Facility:
    kw.setdefault("name", f"Facility {id}")
    return Facility(id=id, **kw)


def test_insights_memoized_per_version():
    repo = FacilityRepository(facilities=[_facility("1", region="Upper East")])
    first = repo.insights()
    assert repo.insights() is first
    repo.add([_facility("2", region="Upper East")])
    second = repo.insights()
    assert second is not first
    assert second["stats"].total_facilities == 2
    assert second["stats"].medical_deserts == 0


def test_add_prepends_and_bumps_version():
    repo = FacilityRepository(facilities=[_facility("old")])
    version = repo.version
    assert repo.add([_facility("new")]) == 1
    assert [f.id for f in repo.facilities] == ["new", "old"]
    assert repo.version == version + 1
    assert repo.add([]) == 0
    assert repo.version == version + 1


def test_refresh_failure_keeps_snapshot(tmp_path):
    repo = FacilityRepository(path=tmp_path / "missing.csv", facilities=[_facility("1")])
    assert repo.refresh() is False
    assert repo.error
    assert [f.id for f in repo.facilities] == ["1"]


def test_refresh_success_clears_error(tmp_path):
    path = tmp_path / "facilities.csv"
    path.write_text("id,name,region\n1,Ridge,Greater Accra\n", encoding="utf-8")
    repo = FacilityRepository(path=tmp_path / "missing.csv")
    repo.refresh()
    assert repo.error
    repo.path = path
    assert repo.refresh() is True
    assert repo.error is None
    assert repo.get("1").name == "Ridge"
    assert repo.get("nope") is None


def test_compute_insights_on_empty_collection():
    insights = compute_insights([])
    assert insights["stats"].total_facilities == 0
    assert insights["stats"].critical_alerts == []
    assert insights["regions"] == []
    assert insights["markers"] == []


def test_seeded_repository_starts_past_version_zero():
    repo = FacilityRepository(facilities=[_facility("1")])
    assert repo.version == 1
    assert FacilityRepository().version == 0


def test_add_after_failed_refresh_clears_error(tmp_path):
    repo = FacilityRepository(path=tmp_path / "missing.csv")
    assert repo.refresh() is False
    assert repo.error
    repo.add([_facility("up")])
    assert repo.error is None
    assert [f.id for f in repo.facilities] == ["up"]
