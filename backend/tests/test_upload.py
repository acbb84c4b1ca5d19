"""
Coverage for /api/upload:
- CSV with rainfall,yield rows        -> 200, rows in input order
- CSV header only                     -> 200, empty data
- no header / wrong header            -> 400, success=false
- empty file / missing file part      -> 400, success=false
- non-numeric cells                   -> depends on CSV_NUMERIC_POLICY
"""
from __future__ import annotations

import pytest

from _helpers import csv_upload


def test_upload_returns_rows_in_input_order(client):
    r = client.post("/api/upload", files=csv_upload("rainfall,yield\n800,2.1\n1500,3.4\n"))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["data"] == [{"rainfall": 800, "yield": 2.1}, {"rainfall": 1500, "yield": 3.4}]


def test_upload_tolerates_bom_extra_columns_and_blank_lines(client):
    text = "\ufeffYear, Rainfall ,Yield\n2019,800,2.1\n\n2020, 1500 ,3.4\n"
    r = client.post("/api/upload", files=csv_upload(text))
    assert r.status_code == 200, r.text
    assert r.json()["data"] == [{"rainfall": 800, "yield": 2.1}, {"rainfall": 1500, "yield": 3.4}]


def test_upload_header_only_is_empty_success(client):
    r = client.post("/api/upload", files=csv_upload("rainfall,yield\n"))
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": []}


def test_upload_without_header_row_fails(client):
    r = client.post("/api/upload", files=csv_upload("800,2.1\n1500,3.4\n"))
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert "rainfall" in body["message"]


def test_upload_empty_file_fails(client):
    r = client.post("/api/upload", files={"file": ("empty.csv", b"", "text/csv")})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "CSV file is empty."}


def test_upload_missing_file_part(client):
    r = client.post("/api/upload", files={"not_file": ("x.csv", b"rainfall,yield\n1,2\n", "text/csv")})
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "No file uploaded"}


def test_upload_structurally_broken_csv_fails(client):
    r = client.post("/api/upload", files=csv_upload("rainfall,yield\n800,2.1\n900,2.2,oops,extra\n"))
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Error parsing CSV file"}


def test_upload_passthrough_policy_returns_null_for_bad_cells(client):
    r = client.post("/api/upload", files=csv_upload("rainfall,yield\n800,2.1\nabc,3.0\n1200,\n"))
    assert r.status_code == 200, r.text
    assert r.json()["data"] == [
        {"rainfall": 800, "yield": 2.1},
        {"rainfall": None, "yield": 3.0},
        {"rainfall": 1200, "yield": None},
    ]


def test_upload_skip_row_policy(client, settings_env):
    settings_env(CSV_NUMERIC_POLICY="skip_row")
    r = client.post("/api/upload", files=csv_upload("rainfall,yield\n800,2.1\nabc,3.0\n1500,3.4\n"))
    assert r.status_code == 200, r.text
    assert r.json()["data"] == [{"rainfall": 800, "yield": 2.1}, {"rainfall": 1500, "yield": 3.4}]


def test_upload_reject_file_policy(client, settings_env):
    settings_env(CSV_NUMERIC_POLICY="reject_file")
    r = client.post("/api/upload", files=csv_upload("rainfall,yield\n800,2.1\n900,n/a\n"))
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Non-numeric rainfall or yield value in data row 2"


@pytest.mark.parametrize("payload", [{"oops": "json"}, None])
def test_upload_non_multipart_body_is_rejected(client, payload):
    r = client.post("/api/upload", json=payload)
    assert r.status_code in (400, 422), r.text
    assert r.json().get("success") in (False, None)


def test_upload_duplicate_header_column_fails_cleanly(client):
    r = client.post("/api/upload", files=csv_upload("Rainfall,rainfall,yield\n800,900,2.1\n"))
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "CSV header has duplicate columns: rainfall"


def test_upload_reject_file_policy_flags_infinite_cells(client, settings_env):
    settings_env(CSV_NUMERIC_POLICY="reject_file")
    r = client.post("/api/upload", files=csv_upload("rainfall,yield\ninf,2.1\n"))
    assert r.status_code == 400
    assert r.json()["message"] == "Non-numeric rainfall or yield value in data row 1"
