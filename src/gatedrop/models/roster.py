"""Roster optimizer for supercross fantasy.

Picks the 8-rider roster (4 per bike class) that maximizes the sum of
expected_points, subject to:
    - exactly SLOTS_PER_CLASS riders per class
    - exactly one All-Star per class, where required
    - no excluded rider (is_excluded flag OR constraints.excluded_ids)

Decision Rule (Exact): The objective is a plain sum and no constraint links
the two classes, so each class is solved on its own. Within a class the only
constraint beyond exclusion is category cardinality, so taking the best
All-Star plus the best non-All-Stars (or simply the best riders when no
All-Star is required) is optimal: swapping any pick for a lower-or-equal
rider of the same category cannot raise the total. No solver, no search,
no timeout. A cross-class rule (e.g. a shared budget cap) would break this.

Ordering: expected_points descending, ties broken by id ascending, so equal
inputs always give equal rosters.

Key Classes:
    BikeClass - The two bike classes (250 / 450)
    RosterCandidate - One rider available for an event
    RosterConstraints - Per-call selection rules
    OptimalRoster - Result (feasible roster or empty infeasible result)
    RosterOptimizer - Main optimizer class

Usage:
    from gatedrop.models import RosterOptimizer, RosterConstraints

    optimizer = RosterOptimizer(candidates, RosterConstraints(excluded_ids={"r12"}))
    roster = optimizer.optimize()
    if roster.is_feasible:
        roster.print_roster(candidates)
"""

from __future__ import annotations

import logging
import math
import numbers
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Hashable, List, Optional, Sequence, Tuple

from gatedrop.config import DEFAULT_REQUIRE_ALL_STAR, SLOTS_PER_CLASS
from gatedrop.exceptions import InvalidInputError
from gatedrop.models.scoring import is_flag

logger = logging.getLogger(__name__)


class BikeClass(str, Enum):
    """Bike class a rider competes in for a given event."""

    CLASS_250 = "250"
    CLASS_450 = "450"

    @classmethod
    def parse(cls, value) -> "BikeClass":
        """Accept a BikeClass, '250'/'450', 250/450, or 'Class250'/'Class450'."""
        if isinstance(value, cls):
            return value
        if isinstance(value, numbers.Integral) and not isinstance(value, bool):
            value = str(int(value))
        if isinstance(value, str):
            text = value.strip().lower()
            if text.startswith("class"):
                text = text[len("class"):].lstrip("_ ")
            for member in cls:
                if text == member.value:
                    return member
        raise InvalidInputError(f"Unknown bike class: {value!r}")


def _default_all_star_policy() -> Dict[BikeClass, bool]:
    return {bike_class: DEFAULT_REQUIRE_ALL_STAR for bike_class in BikeClass}


@dataclass(frozen=True)
class RosterCandidate:
    """One rider available for an event.

    Attributes:
        id: Unique, stable rider identifier. Ids must be mutually orderable
            (all ints or all strings) because they break ties.
        bike_class: Class the rider races in at this event.
        expected_points: External prediction; used as-is, never recomputed.
        is_all_star: Whether the rider is an All-Star at this event.
        is_excluded: Ineligible (e.g. picked at the previous event of the series).
    """

    id: Hashable
    bike_class: BikeClass
    expected_points: float
    is_all_star: bool = False
    is_excluded: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "bike_class", BikeClass.parse(self.bike_class))
        points = self.expected_points
        if isinstance(points, bool) or not isinstance(points, numbers.Real):
            raise InvalidInputError(
                f"Rider {self.id!r}: expected_points must be a number, got {points!r}"
            )
        if not math.isfinite(points):
            raise InvalidInputError(
                f"Rider {self.id!r}: expected_points must be finite, got {points!r}"
            )
        object.__setattr__(self, "expected_points", float(points))
        for name in ("is_all_star", "is_excluded"):
            flag = getattr(self, name)
            if not is_flag(flag):
                raise InvalidInputError(f"Rider {self.id!r}: {name} must be a boolean, got {flag!r}")
            object.__setattr__(self, name, bool(flag))


@dataclass(frozen=True)
class RosterConstraints:
    """Selection rules for one optimization call.

    Attributes:
        slots_per_class: Riders per class. The game rules use 4 (SLOTS_PER_CLASS);
            other positive values apply the same rules with a different size.
        require_all_star: Per-class flag; True means exactly one All-Star.
            Classes missing from the mapping do not require one.
        excluded_ids: Rider ids that cannot be picked. Combined with each
            candidate's is_excluded flag (either one excludes).
    """

    slots_per_class: int = SLOTS_PER_CLASS
    require_all_star: Dict[BikeClass, bool] = field(default_factory=_default_all_star_policy)
    excluded_ids: FrozenSet[Hashable] = frozenset()

    def requires_all_star(self, bike_class: BikeClass) -> bool:
        for key, required in self.require_all_star.items():
            if BikeClass.parse(key) is bike_class:
                return bool(required)
        return False

    def validate(self) -> None:
        """Raise InvalidInputError for malformed constraints."""
        slots = self.slots_per_class
        if isinstance(slots, bool) or not isinstance(slots, numbers.Integral) or slots < 1:
            raise InvalidInputError(f"slots_per_class must be a positive integer, got {slots!r}")
        seen = set()
        for key in self.require_all_star:
            bike_class = BikeClass.parse(key)
            if bike_class in seen:
                raise InvalidInputError(f"require_all_star lists class {bike_class.value} twice")
            seen.add(bike_class)
            if not is_flag(self.require_all_star[key]):
                raise InvalidInputError(
                    f"require_all_star[{bike_class.value}] must be a boolean, "
                    f"got {self.require_all_star[key]!r}"
                )
        if isinstance(self.excluded_ids, (str, bytes)):
            raise InvalidInputError(
                f"excluded_ids must be a collection of ids, not a single string: {self.excluded_ids!r}"
            )


@dataclass
class OptimalRoster:
    """Result of roster optimization.

    Attributes:
        selected: Rider ids per class, best first. Empty lists when infeasible.
        total_expected_points: Sum of the selected riders' expected_points.
        is_feasible: False when either class cannot be filled.
        reason: Why the roster is infeasible (None when feasible).
    """

    selected: Dict[BikeClass, List[Hashable]]
    total_expected_points: float
    is_feasible: bool
    reason: Optional[str] = None

    @classmethod
    def infeasible(cls, reason: str) -> "OptimalRoster":
        """Empty result; a partial roster is never returned."""
        return cls(
            selected={bike_class: [] for bike_class in BikeClass},
            total_expected_points=0.0,
            is_feasible=False,
            reason=reason,
        )

    @property
    def rider_ids(self) -> List[Hashable]:
        """All selected ids, 250 class first."""
        return [rid for bike_class in BikeClass for rid in self.selected.get(bike_class, [])]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "selected": {bc.value: list(self.selected.get(bc, [])) for bc in BikeClass},
            "total_expected_points": self.total_expected_points,
            "is_feasible": self.is_feasible,
            "reason": self.reason,
        }

    def print_roster(self, candidates: Optional[Sequence[RosterCandidate]] = None) -> None:
        """Print formatted roster."""
        RosterFormatter(self, candidates).print()


class RosterFormatter:
    """Handles display formatting for OptimalRoster."""

    HEADER_LABEL = "ROSTER OPTIMIZER"

    def __init__(
        self,
        roster: OptimalRoster,
        candidates: Optional[Sequence[RosterCandidate]] = None,
    ):
        self.roster = roster
        self.lookup = {c.id: c for c in candidates or []}

    def print(self) -> None:
        """Print full formatted roster output."""
        print("\n" + "=" * 60)
        print(f"🏁 {self.HEADER_LABEL}")
        print("=" * 60)
        if not self.roster.is_feasible:
            print(f"\n❌ No feasible roster: {self.roster.reason}")
            print("=" * 60)
            return
        print(f"\n📈 Expected Points: {self.roster.total_expected_points:.1f}")
        for bike_class in BikeClass:
            self._print_class(bike_class)
        print("=" * 60)

    def _print_class(self, bike_class: BikeClass) -> None:
        print("\n" + "-" * 60)
        print(f"{bike_class.value} CLASS")
        print("-" * 60)
        for rider_id in self.roster.selected.get(bike_class, []):
            candidate = self.lookup.get(rider_id)
            if candidate is None:
                print(f"  {str(rider_id):<24}")
                continue
            marker = " ⭐" if candidate.is_all_star else ""
            print(f"  {str(rider_id):<24} {candidate.expected_points:>7.2f}{marker}")


def _rank_key(candidate: RosterCandidate) -> Tuple[float, Hashable]:
    return (-candidate.expected_points, candidate.id)


def _top(candidates: Sequence[RosterCandidate], n: int) -> List[RosterCandidate]:
    """Best n candidates by expected_points, ties by id ascending."""
    try:
        ranked = sorted(candidates, key=_rank_key)
    except TypeError as e:
        raise InvalidInputError(
            f"Rider ids must be mutually comparable to break ties: {e}"
        ) from e
    return ranked[:n]


class RosterOptimizer:
    """Exact per-class roster optimizer.

    Example:
        >>> optimizer = RosterOptimizer(candidates, RosterConstraints())
        >>> roster = optimizer.optimize()
        >>> roster.print_roster(candidates)
    """

    def __init__(
        self,
        candidates: Sequence[RosterCandidate],
        constraints: Optional[RosterConstraints] = None,
    ) -> None:
        """Initialize optimizer.

        Args:
            candidates: Riders for one event, both classes mixed.
            constraints: Selection rules (defaults from config).

        Raises:
            InvalidInputError: Malformed constraints or duplicate rider ids.
        """
        self.candidates = list(candidates)
        self.constraints = constraints or RosterConstraints()
        self._validate()

        self.excluded_ids = frozenset(self.constraints.excluded_ids)
        self.by_class: Dict[BikeClass, List[RosterCandidate]] = {bc: [] for bc in BikeClass}
        for candidate in self.candidates:
            self.by_class[candidate.bike_class].append(candidate)

    def _validate(self) -> None:
        self.constraints.validate()
        for candidate in self.candidates:
            if not isinstance(candidate, RosterCandidate):
                raise InvalidInputError(f"Expected RosterCandidate, got {type(candidate).__name__}")
        counts = Counter(c.id for c in self.candidates)
        duplicates = sorted(str(rid) for rid, n in counts.items() if n > 1)
        if duplicates:
            raise InvalidInputError(f"Duplicate rider ids: {duplicates}")

    def is_excluded(self, candidate: RosterCandidate) -> bool:
        return candidate.is_excluded or candidate.id in self.excluded_ids

    def optimize(self) -> OptimalRoster:
        """Run the optimization.

        Returns:
            OptimalRoster with 4 ids per class, or an empty infeasible result.
        """
        logger.info(
            f"Optimizing roster from {len(self.candidates)} riders "
            f"({len(self.by_class[BikeClass.CLASS_250])} in 250, "
            f"{len(self.by_class[BikeClass.CLASS_450])} in 450)"
        )

        picks: Dict[BikeClass, List[RosterCandidate]] = {}
        for bike_class in BikeClass:
            selection, reason = self._select_class(bike_class)
            if selection is None:
                logger.warning(f"No feasible roster: {reason}")
                return OptimalRoster.infeasible(reason)
            picks[bike_class] = selection

        total = sum(c.expected_points for bc in BikeClass for c in picks[bc])
        logger.info(
            f"Optimal roster found: {total:.1f} expected points "
            f"({sum(c.is_all_star for bc in BikeClass for c in picks[bc])} All-Stars)"
        )
        return OptimalRoster(
            selected={bc: [c.id for c in picks[bc]] for bc in BikeClass},
            total_expected_points=total,
            is_feasible=True,
        )

    def _select_class(
        self, bike_class: BikeClass
    ) -> Tuple[Optional[List[RosterCandidate]], Optional[str]]:
        """Best selection for one class, or (None, reason) if infeasible."""
        slots = self.constraints.slots_per_class
        eligible = [c for c in self.by_class[bike_class] if not self.is_excluded(c)]
        logger.debug(
            f"{bike_class.value} class: {len(eligible)} eligible of "
            f"{len(self.by_class[bike_class])}"
        )

        if len(eligible) < slots:
            return None, (
                f"Insufficient {bike_class.value} riders: "
                f"{len(eligible)} eligible, need {slots}"
            )

        if not self.constraints.requires_all_star(bike_class):
            return _top(eligible, slots), None

        all_stars = [c for c in eligible if c.is_all_star]
        others = [c for c in eligible if not c.is_all_star]
        if not all_stars:
            return None, f"No eligible {bike_class.value} All-Stars, but one is required"
        if len(others) < slots - 1:
            return None, (
                f"Insufficient {bike_class.value} non-All-Stars: "
                f"{len(others)} eligible, need {slots - 1}"
            )

        return _top(_top(all_stars, 1) + _top(others, slots - 1), slots), None


def find_optimal_roster(
    candidates: Sequence[RosterCandidate],
    constraints: Optional[RosterConstraints] = None,
) -> OptimalRoster:
    """Convenience function to run the roster optimizer.

    Args:
        candidates: Riders for one event.
        constraints: Selection rules (defaults from config).

    Returns:
        OptimalRoster (check is_feasible before using selected).
    """
    return RosterOptimizer(candidates, constraints).optimize()
