# backend/yieldcast/routers/upload.py
from __future__ import annotations

from typing import Optional

import structlog
from fastapi import APIRouter, File, UploadFile

from yieldcast.config import get_settings
from yieldcast.errors import CsvFormatError
from yieldcast.schemas.common import upload_fail, upload_ok
from yieldcast.services.ingestion import parse_rainfall_csv

router = APIRouter(prefix="/api/upload", tags=["upload"])
logger = structlog.get_logger(__name__)


@router.post("")
async def upload_csv(file: Optional[UploadFile] = File(None, description="CSV with rainfall,yield columns")):
    """
    Parse a historical rainfall/yield CSV and hand the rows back for charting.

    Nothing is stored. Errors use ``{"success": false, "message": ...}``:
      - no file part                       -> 400
      - empty file / no usable header      -> 400
      - structurally broken CSV            -> 400
      - non-numeric cells under reject_file policy -> 400
    """
    # File(None) instead of File(...) so a missing part gets our body, not a 422
    if file is None:
        return upload_fail("No file uploaded", status_code=400)

    raw_bytes = await file.read()
    policy = get_settings().CSV_NUMERIC_POLICY
    try:
        rows = parse_rainfall_csv(raw_bytes, policy=policy)
    except CsvFormatError as exc:
        logger.info("upload.rejected", filename=file.filename, error=exc.message)
        return upload_fail(exc.message, status_code=exc.status_code)

    logger.info("upload.parsed", filename=file.filename, rows=len(rows), policy=policy)
    return upload_ok(rows)
