from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HistoricalRow(BaseModel):
    """One parsed CSV row; None means the cell was not a number."""

    model_config = ConfigDict(populate_by_name=True)

    rainfall: Optional[float] = None
    yield_: Optional[float] = Field(None, alias="yield")


class UploadResponse(BaseModel):
    success: bool
    data: Optional[List[HistoricalRow]] = None
    message: Optional[str] = None
