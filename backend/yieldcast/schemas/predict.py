from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Provider(str, Enum):
    """Vendors the predict endpoint accepts."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    LLAMA = "llama"
    DEEPSEEK = "deepseek"

    @classmethod
    def names(cls) -> list[str]:
        return [p.value for p in cls]


# Tag for points that came from an uploaded CSV rather than a live call.
HISTORICAL = "historical"

Rainfall = Union[int, float]


class PredictRequest(BaseModel):
    # strict: booleans and numeric strings are not rainfall values
    model_config = ConfigDict(strict=True)

    rainfall: Rainfall
    provider: Provider = Field(strict=False)


class PredictResponse(BaseModel):
    prediction: str
    comment: Optional[str] = None
    provider: Provider
    rainfall: Rainfall
    timestamp: str

    def to_payload(self) -> dict:
        """JSON body with ``comment`` omitted when the vendor gave none."""
        return self.model_dump(mode="json", exclude_none=True)
