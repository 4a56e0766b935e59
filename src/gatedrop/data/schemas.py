"""Pydantic schemas for candidate and race-result rows.

Rows arrive from CSV files or DataFrames built by the surrounding system.
Each row is validated here before it becomes a core type, so malformed
input is reported instead of silently coerced.

Models:
    CandidateSchema - One rider available for an event, with expected points
    RaceResultSchema - One rider's realized finish (finish_position may be pending)

Usage:
    from gatedrop.data.schemas import CandidateSchema

    row = CandidateSchema.model_validate({"rider_id": 7, "bike_class": "450", "expected_points": 31.5})
    candidate = row.to_candidate()
"""

from __future__ import annotations

import math
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gatedrop.config import DNF_SENTINEL
from gatedrop.models.roster import BikeClass, RosterCandidate
from gatedrop.models.scoring import ScoredResult, score

RiderId = Union[int, str]


def _to_native(value: Any) -> Any:
    """Unbox numpy scalars and map NaN to None."""
    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class _RowSchema(BaseModel):
    """Shared row handling for DataFrame / CSV records."""

    model_config = ConfigDict(populate_by_name=True)

    rider_id: RiderId = Field(alias="id")
    rider_name: Optional[str] = None
    is_all_star: bool = False

    @field_validator("*", mode="before")
    @classmethod
    def _unbox(cls, value: Any) -> Any:
        return _to_native(value)


class CandidateSchema(_RowSchema):
    """Rider available for an event."""

    bike_class: BikeClass
    expected_points: float
    is_excluded: bool = False

    @field_validator("bike_class", mode="before")
    @classmethod
    def _parse_bike_class(cls, value: Any) -> BikeClass:
        return BikeClass.parse(_to_native(value))

    @field_validator("expected_points")
    @classmethod
    def _finite_points(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("expected_points must be finite")
        return value

    def to_candidate(self) -> RosterCandidate:
        return RosterCandidate(
            id=self.rider_id,
            bike_class=self.bike_class,
            expected_points=self.expected_points,
            is_all_star=self.is_all_star,
            is_excluded=self.is_excluded,
        )


class RaceResultSchema(_RowSchema):
    """Rider's finish at an event. finish_position is None until the race is done."""

    bike_class: Optional[BikeClass] = None
    finish_position: Optional[Union[int, str]] = None
    handicap: int = 0

    @field_validator("bike_class", mode="before")
    @classmethod
    def _parse_bike_class(cls, value: Any) -> Optional[BikeClass]:
        value = _to_native(value)
        return None if value is None else BikeClass.parse(value)

    @field_validator("finish_position", mode="before")
    @classmethod
    def _parse_finish(cls, value: Any) -> Any:
        value = _to_native(value)
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            if text.isdigit():
                return int(text)
            if text.upper() == DNF_SENTINEL:
                return DNF_SENTINEL
        return value

    @property
    def is_pending(self) -> bool:
        return self.finish_position is None

    def to_scored(self) -> ScoredResult:
        """Score this row (raises InvalidStateError while pending)."""
        return score(self.finish_position, self.handicap, self.is_all_star)
