"""Tests for facility store loading and upload parsing."""

import json
from datetime import datetime, timezone

import pytest

from facility_insights.data.loaders import (
    FacilityStoreError,
    load_facilities,
    parse_upload_csv,
    row_to_facility,
)

CSV_TEXT = """id,name,region,specialties,procedures,equipment,phone,website,created_at
a1,Korle Bu,Greater Accra,"Cardiology, Surgery",Cardiac Bypass,"MRI, CT",030-000,https://kbth.gov.gh,2024-01-01T00:00:00
a2,Tamale Clinic,Northern Region,Pediatrics,,None,,,2024-03-01T00:00:00
a3,Bolga Post,,,,,,,2024-02-01T00:00:00
"""


def test_load_csv_orders_newest_first(tmp_path):
    path = tmp_path / "facilities.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    facilities = load_facilities(path)
    assert [f.id for f in facilities] == ["a2", "a3", "a1"]


def test_load_csv_keeps_values_verbatim(tmp_path):
    path = tmp_path / "facilities.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    by_id = {f.id: f for f in load_facilities(path)}
    assert by_id["a1"].specialties == "Cardiology, Surgery"
    assert by_id["a2"].equipment == "None"
    assert by_id["a3"].region == ""


def test_load_json_array(tmp_path):
    path = tmp_path / "facilities.json"
    path.write_text(json.dumps([
        {"id": 7, "name": "Ridge", "region": "Greater Accra", "equipment": None, "created_at": "2024-01-01"},
        {"name": "No Id", "procedure": "Surgery"},
    ]), encoding="utf-8")
    facilities = load_facilities(path)
    assert facilities[0].id == "7"
    assert facilities[0].equipment is None
    assert facilities[1].procedures == "Surgery"
    assert len(facilities[1].id) == 12


def test_missing_file_raises_store_error(tmp_path):
    with pytest.raises(FacilityStoreError) as exc:
        load_facilities(tmp_path / "nope.csv")
    assert "nope.csv" in str(exc.value)


def test_invalid_json_raises_store_error(tmp_path):
    path = tmp_path / "facilities.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(FacilityStoreError):
        load_facilities(path)


def test_json_object_without_list_raises_store_error(tmp_path):
    path = tmp_path / "facilities.json"
    path.write_text(json.dumps({"data": "oops"}), encoding="utf-8")
    with pytest.raises(FacilityStoreError):
        load_facilities(path)


def test_row_ids_are_stable():
    row = {"name": "Ridge", "region": "Greater Accra"}
    assert row_to_facility(row, 3).id == row_to_facility(dict(row), 3).id
    assert row_to_facility(row, 3).id != row_to_facility(row, 4).id


def test_row_aliases_and_missing_name():
    f = row_to_facility({"Name": "", "address_stateOrRegion": "Ashanti Region", "websites": "x.org"})
    assert f.name == "Unknown"
    assert f.region == "Ashanti Region"
    assert f.website == "x.org"


def test_parse_upload_skips_rows_without_name():
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    text = "name,region,specialties,procedures,equipment,phone,website\n" \
           "Hope Clinic,Volta Region,Surgery,,None,,\n" \
           ",Upper East,,,,,\n"
    facilities = parse_upload_csv(text, now=now)
    assert len(facilities) == 1
    f = facilities[0]
    assert f.name == "Hope Clinic"
    assert f.specialties == "Surgery"
    assert f.equipment == "None"
    assert f.created_at == now.isoformat()


def test_parse_upload_empty_text():
    assert parse_upload_csv("") == []
