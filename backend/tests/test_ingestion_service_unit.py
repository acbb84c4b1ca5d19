from __future__ import annotations

import numpy as np
import pytest

from yieldcast.errors import CsvFormatError
from yieldcast.services import ingestion
from yieldcast.utils.numeric import finite_or_none, within


def test_parse_preserves_order_and_types():
    rows = ingestion.parse_rainfall_csv(b"rainfall,yield\n1500,3.4\n800,2.1\n")
    assert rows == [{"rainfall": 1500.0, "yield": 3.4}, {"rainfall": 800.0, "yield": 2.1}]
    assert all(isinstance(v, float) for row in rows for v in row.values())


def test_header_names_are_case_and_space_insensitive():
    rows = ingestion.parse_rainfall_csv(b"RAINFALL , Yield \n725,1.2\n")
    assert rows == [{"rainfall": 725.0, "yield": 1.2}]


@pytest.mark.parametrize("payload", [b"", b"   \n\n", "\ufeff".encode("utf-8")])
def test_empty_input_rejected(payload):
    with pytest.raises(CsvFormatError, match="empty"):
        ingestion.parse_rainfall_csv(payload)


def test_missing_column_named_in_message():
    with pytest.raises(CsvFormatError) as exc:
        ingestion.parse_rainfall_csv(b"rainfall,harvest\n800,2.1\n")
    assert "missing: yield" in exc.value.message


def test_policies_on_malformed_numbers():
    data = b"rainfall,yield\n800,2.1\nlots,3.0\n1500,3.4\n"

    passthrough = ingestion.parse_rainfall_csv(data, policy="passthrough")
    assert passthrough[1] == {"rainfall": None, "yield": 3.0}
    assert len(passthrough) == 3

    skipped = ingestion.parse_rainfall_csv(data, policy="skip_row")
    assert [r["rainfall"] for r in skipped] == [800.0, 1500.0]

    with pytest.raises(CsvFormatError, match="data row 2"):
        ingestion.parse_rainfall_csv(data, policy="reject_file")


def test_numeric_helpers():
    assert finite_or_none(np.float64(2.5)) == 2.5
    assert finite_or_none(np.nan) is None
    assert finite_or_none(float("inf")) is None
    assert finite_or_none("x") is None
    assert within(0, 0, 10) and within(10, 0, 10)
    assert not within(10.01, 0, 10)


@pytest.mark.parametrize("header", ["Rainfall,rainfall,yield", "rainfall, Yield ,YIELD"])
def test_duplicate_required_columns_rejected(header):
    with pytest.raises(CsvFormatError, match="duplicate columns"):
        ingestion.parse_rainfall_csv(f"{header}\n800,900,2.1\n".encode())


def test_infinite_cells_follow_policy():
    data = b"rainfall,yield\n800,2.1\ninf,3.0\n1500,-inf\n"

    assert ingestion.parse_rainfall_csv(data, policy="passthrough") == [
        {"rainfall": 800.0, "yield": 2.1},
        {"rainfall": None, "yield": 3.0},
        {"rainfall": 1500.0, "yield": None},
    ]
    assert ingestion.parse_rainfall_csv(data, policy="skip_row") == [{"rainfall": 800.0, "yield": 2.1}]
    with pytest.raises(CsvFormatError, match="data row 2"):
        ingestion.parse_rainfall_csv(data, policy="reject_file")
