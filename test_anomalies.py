"""Tests for suspicious/incomplete facility detection."""

from facility_insights.anomalies import (
    facility_status,
    has_no_equipment,
    is_incomplete,
    is_suspicious,
    suspicious_facilities,
)
from facility_insights.models import Facility


def _facility(**kw) -> Facility:
    kw.setdefault("id", "f1")
    kw.setdefault("name", "Facility")
    return Facility(**kw)


def test_surgical_specialty_without_equipment_is_suspicious():
    assert is_suspicious(_facility(specialties="Surgical Oncology", equipment="None"))


def test_surgical_procedure_without_equipment_is_suspicious():
    assert is_suspicious(_facility(procedures="Appendectomy, minor SURGERY", equipment=None))


def test_surgical_claim_with_equipment_is_not_suspicious():
    assert not is_suspicious(_facility(specialties="General Surgery", equipment="Operating theatre"))


def test_no_equipment_variants():
    assert has_no_equipment(_facility(equipment=None))
    assert has_no_equipment(_facility(equipment=""))
    assert has_no_equipment(_facility(equipment="   "))
    assert has_no_equipment(_facility(equipment="None"))
    assert has_no_equipment(_facility(equipment="NONE"))
    assert not has_no_equipment(_facility(equipment="MRI"))


def test_incomplete_when_specialties_missing_even_with_equipment():
    f = _facility(specialties=None, equipment="MRI")
    assert is_incomplete(f)
    assert not is_suspicious(f)


def test_flags_are_computed_independently():
    # Suspicious with specialties present: incomplete only through the equipment branch
    f = _facility(specialties="General Surgery", equipment="None")
    assert is_suspicious(f)
    assert is_incomplete(f)
    assert f.specialties

    # Incomplete without any surgical claim
    g = _facility(specialties="Pediatrics", equipment="")
    assert is_incomplete(g)
    assert not is_suspicious(g)


def test_status_gives_suspicious_precedence():
    assert facility_status(_facility(specialties="Surgery", equipment="None")) == "suspicious"
    assert facility_status(_facility(specialties=None, equipment="MRI")) == "incomplete"
    assert facility_status(_facility(specialties="Cardiology", equipment="ECG")) == "complete"


def test_suspicious_facilities_keeps_input_order():
    a = _facility(id="a", specialties="Surgery")
    b = _facility(id="b", specialties="Cardiology", equipment="ECG")
    c = _facility(id="c", procedures="surgical care", equipment="none")
    assert [f.id for f in suspicious_facilities([a, b, c])] == ["a", "c"]
