from __future__ import annotations

import io
from typing import Any, Dict, List

import numpy as np
import pandas as pd
import structlog

from yieldcast.config import CsvNumericPolicy
from yieldcast.errors import CsvFormatError
from yieldcast.utils.numeric import finite_or_none

logger = structlog.get_logger(__name__)

REQUIRED_COLUMNS = ("rainfall", "yield")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _read_frame(file_bytes: bytes) -> pd.DataFrame:
    """Read CSV bytes (UTF-8/BOM tolerant) as strings, header row required."""
    text = file_bytes.decode("utf-8-sig", errors="replace")
    if not text.strip():
        raise CsvFormatError("CSV file is empty.")
    try:
        frame = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise CsvFormatError("CSV file is empty.") from exc
    except pd.errors.ParserError as exc:
        logger.warning("ingestion.csv_parse_failed", error=str(exc))
        raise CsvFormatError("Error parsing CSV file") from exc

    frame.columns = [str(c).strip().lower() for c in frame.columns]
    repeated = [c for c in REQUIRED_COLUMNS if list(frame.columns).count(c) > 1]
    if repeated:
        raise CsvFormatError(f"CSV header has duplicate columns: {', '.join(repeated)}")
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise CsvFormatError(
            "CSV header must include 'rainfall' and 'yield' columns "
            f"(missing: {', '.join(missing)})"
        )
    return frame


def _coerce_column(series: pd.Series) -> pd.Series:
    cleaned = series.map(lambda v: v.strip() if isinstance(v, str) else v)
    return pd.to_numeric(cleaned, errors="coerce")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_rainfall_csv(file_bytes: bytes, policy: CsvNumericPolicy = "passthrough") -> List[Dict[str, Any]]:
    """
    Parse an uploaded CSV into ``[{"rainfall": float, "yield": float}, ...]``
    in input order.

    Cells that are not numbers are handled by ``policy``:
      - passthrough: kept as None (NaN and inf have no JSON spelling)
      - skip_row:    the row is dropped
      - reject_file: CsvFormatError naming the first bad data row
    """
    frame = _read_frame(file_bytes)
    values = pd.DataFrame({col: _coerce_column(frame[col]) for col in REQUIRED_COLUMNS})
    # NaN from coercion and literal inf/-inf cells are treated alike
    bad_mask = ~np.isfinite(values.astype(float)).all(axis=1)

    if bad_mask.any():
        bad_rows = [int(i) + 1 for i in values.index[bad_mask]]
        logger.info(
            "ingestion.non_numeric_rows",
            policy=policy,
            count=len(bad_rows),
            first_row=bad_rows[0],
        )
        if policy == "reject_file":
            raise CsvFormatError(f"Non-numeric rainfall or yield value in data row {bad_rows[0]}")
        if policy == "skip_row":
            values = values[~bad_mask]
            logger.info("ingestion.rows_skipped", count=len(bad_rows))

    rows = [
        {"rainfall": finite_or_none(r), "yield": finite_or_none(y)}
        for r, y in zip(values["rainfall"], values["yield"])
    ]
    logger.info("ingestion.parsed", rows=len(rows))
    return rows
