"""Fantasy scoring for a single race result.

Scoring Rule:
    adjusted_position = max(1, finish_position - handicap)
    base_points       = POSITION_POINTS_TABLE[adjusted_position] (0 past the table)
    doubled           = not All-Star AND adjusted_position <= 10
    total_points      = base_points * 2 if doubled else base_points

    All-Stars never double, whatever their position. The handicap is never
    capped; only the adjusted position is clamped to 1st.

Key Classes:
    ScoredResult - Immutable result with derived scoring properties

Usage:
    from gatedrop.models.scoring import score

    result = score(finish_position=8, handicap=3, is_all_star=False)
    print(result.total_points)   # 34
    print(result.breakdown())
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from gatedrop.config import (
    DNF_POSITION,
    DNF_SENTINEL,
    DOUBLING_CUTOFF,
    POSITION_POINTS_TABLE,
)
from gatedrop.exceptions import InvalidInputError, InvalidStateError

FinishPosition = Union[int, str]


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def is_flag(value) -> bool:
    """True for bool and numpy.bool_ only."""
    return isinstance(value, (bool, np.bool_))


def base_points(position: int) -> int:
    """Points for a position straight from the table, without doubling.

    Positions below 1st or past the end of the table score 0.
    """
    if position < 1 or position > len(POSITION_POINTS_TABLE):
        return 0
    return POSITION_POINTS_TABLE[position - 1]


def ordinal(number: int) -> str:
    """Format 1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if number <= 0:
        return f"{number}th"
    if number % 100 in (11, 12, 13):
        return f"{number}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


@dataclass(frozen=True)
class ScoredResult:
    """A rider's realized race result and the fantasy points it earns.

    Only the inputs are stored; everything else is derived on access.

    Attributes:
        finish_position: Finish position (>= 1). DNFs hold DNF_POSITION.
        handicap: Signed handicap for the event.
        is_all_star: Whether the rider is an All-Star (never doubles).
        is_dnf: True when the result was recorded as DNF.
    """

    finish_position: int
    handicap: int
    is_all_star: bool
    is_dnf: bool = False

    @property
    def adjusted_position(self) -> int:
        """Finish position after handicap, never better than 1st."""
        return max(1, self.finish_position - self.handicap)

    @property
    def base_points(self) -> int:
        return base_points(self.adjusted_position)

    @property
    def is_doubled(self) -> bool:
        return not self.is_all_star and self.adjusted_position <= DOUBLING_CUTOFF

    @property
    def total_points(self) -> int:
        return self.base_points * 2 if self.is_doubled else self.base_points

    def breakdown(self) -> str:
        """Human-readable explanation of the calculation.

        Example:
            "Finished 8th with +3 handicap = 5th adjusted. Base: 17 points × 2 (doubled) = 34 points"
        """
        if self.handicap > 0:
            handicap_text = f"+{self.handicap} handicap"
        elif self.handicap < 0:
            handicap_text = f"{self.handicap} handicap"
        else:
            handicap_text = "no handicap"

        if self.is_doubled:
            doubling_text = " × 2 (doubled)"
        elif self.is_all_star:
            doubling_text = " (All-Star, no doubling)"
        else:
            doubling_text = f" (no doubling past {ordinal(DOUBLING_CUTOFF)})"

        finished = "DNF" if self.is_dnf else f"Finished {ordinal(self.finish_position)}"
        return (
            f"{finished} with {handicap_text} = {ordinal(self.adjusted_position)} adjusted. "
            f"Base: {self.base_points} points{doubling_text} = {self.total_points} points"
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "finish_position": self.finish_position,
            "handicap": self.handicap,
            "is_all_star": self.is_all_star,
            "is_dnf": self.is_dnf,
            "adjusted_position": self.adjusted_position,
            "base_points": self.base_points,
            "is_doubled": self.is_doubled,
            "total_points": self.total_points,
        }


def score(
    finish_position: Optional[FinishPosition],
    handicap: int,
    is_all_star: bool,
) -> ScoredResult:
    """Score a realized race result.

    Args:
        finish_position: Finish position (>= 1), or DNF_SENTINEL ("DNF").
            None means the race result is not known yet.
        handicap: Signed handicap; positive handicaps improve the position.
        is_all_star: All-Star riders are never doubled.

    Returns:
        ScoredResult with adjusted position, base points and total points.

    Raises:
        InvalidStateError: If finish_position is None (result not yet available).
        InvalidInputError: If finish_position, handicap or is_all_star is malformed.
    """
    if finish_position is None:
        raise InvalidStateError("result not yet available: finish position is unknown")

    is_dnf = False
    if isinstance(finish_position, str):
        if finish_position.strip().upper() != DNF_SENTINEL:
            raise InvalidInputError(
                f"finish_position must be a positive integer or '{DNF_SENTINEL}', "
                f"got {finish_position!r}"
            )
        finish_position = DNF_POSITION
        is_dnf = True
    elif not _is_int(finish_position):
        raise InvalidInputError(
            f"finish_position must be a positive integer, got {finish_position!r}"
        )
    elif finish_position < 1:
        raise InvalidInputError(f"finish_position must be >= 1, got {finish_position}")

    if not _is_int(handicap):
        raise InvalidInputError(f"handicap must be an integer, got {handicap!r}")
    if not is_flag(is_all_star):
        raise InvalidInputError(f"is_all_star must be a boolean, got {is_all_star!r}")

    return ScoredResult(
        finish_position=int(finish_position),
        handicap=int(handicap),
        is_all_star=bool(is_all_star),
        is_dnf=is_dnf,
    )
