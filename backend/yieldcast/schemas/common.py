from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import status as http
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from yieldcast.schemas.upload import HistoricalRow, UploadResponse


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a trailing 'Z'."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def predict_error(message: str, status_code: int = http.HTTP_400_BAD_REQUEST) -> JSONResponse:
    """Error body for /api/predict: ``{"error": message}``."""
    return JSONResponse(content={"error": message}, status_code=status_code)


def upload_ok(rows: List[Dict[str, Any]]) -> JSONResponse:
    """
    Success body for /api/upload. Values that failed numeric parsing arrive
    here as None and are serialized as JSON null.
    """
    payload = UploadResponse(
        success=True,
        data=[HistoricalRow(**row) for row in rows],
    ).model_dump(by_alias=True, exclude_none=False, exclude={"message"})
    return JSONResponse(content=jsonable_encoder(payload), status_code=http.HTTP_200_OK)


def upload_fail(message: str, status_code: int = http.HTTP_400_BAD_REQUEST) -> JSONResponse:
    payload = UploadResponse(success=False, message=message).model_dump(exclude={"data"})
    return JSONResponse(content=payload, status_code=status_code)
