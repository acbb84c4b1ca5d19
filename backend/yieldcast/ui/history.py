"""
Tab-scoped prediction history.

The UI keeps one HistoryState per browser session and threads it through
every interaction explicitly; the server never sees it. States are treated
as values: every operation returns a new HistoryState.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from yieldcast.schemas.common import utc_timestamp
from yieldcast.schemas.predict import HISTORICAL


class PredictionPoint(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rainfall: Optional[float] = None
    yield_: Optional[float] = Field(None, alias="yield")
    provider: str
    timestamp: str
    comment: Optional[str] = None

    @property
    def key(self) -> Tuple[Optional[float], str]:
        return (self.rainfall, self.provider)

    @property
    def plottable(self) -> bool:
        return all(
            v is not None and math.isfinite(v) for v in (self.rainfall, self.yield_)
        )

    @classmethod
    def from_prediction(cls, payload: Mapping[str, Any]) -> "PredictionPoint":
        """Build a point from a /api/predict response body."""
        return cls(
            rainfall=payload["rainfall"],
            yield_=float(payload["prediction"]),
            provider=payload["provider"],
            timestamp=payload["timestamp"],
            comment=payload.get("comment"),
        )

    def as_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def historical_points(rows: Iterable[Mapping[str, Any]], timestamp: Optional[str] = None) -> List[PredictionPoint]:
    """Tag uploaded CSV rows as historical, all sharing one client timestamp."""
    stamp = timestamp or utc_timestamp()
    return [
        PredictionPoint(
            rainfall=row.get("rainfall"),
            yield_=row.get("yield"),
            provider=HISTORICAL,
            timestamp=stamp,
        )
        for row in rows
    ]


def _sort_key(point: PredictionPoint):
    # rows whose rainfall failed to parse sink to the end
    return (point.rainfall is None, point.rainfall or 0.0)


@dataclass(frozen=True)
class HistoryState:
    points: Tuple[PredictionPoint, ...] = ()
    latest: Optional[PredictionPoint] = None
    uploaded_files: frozenset = field(default_factory=frozenset)

    def merge(self, new_points: Iterable[PredictionPoint]) -> "HistoryState":
        """
        Add points, one per (rainfall, provider): a newer point replaces the
        older one. Result is sorted ascending by rainfall.
        """
        by_key: Dict[Tuple[Optional[float], str], PredictionPoint] = {p.key: p for p in self.points}
        for point in new_points:
            by_key.pop(point.key, None)
            by_key[point.key] = point
        ordered = sorted(by_key.values(), key=_sort_key)
        return replace(self, points=tuple(ordered))

    def record_prediction(self, point: PredictionPoint) -> "HistoryState":
        return replace(self.merge([point]), latest=point)

    def record_upload(self, file_id: str, rows: Iterable[Mapping[str, Any]]) -> "HistoryState":
        merged = self.merge(historical_points(rows))
        return replace(merged, uploaded_files=self.uploaded_files | {file_id})

    def has_uploaded(self, file_id: str) -> bool:
        return file_id in self.uploaded_files

    def clear(self) -> "HistoryState":
        # uploads already seen stay seen, or the still-selected file would come straight back
        return HistoryState(uploaded_files=self.uploaded_files)

    def records(self) -> List[Dict[str, Any]]:
        return [p.as_record() for p in self.points]

    def __len__(self) -> int:
        return len(self.points)
