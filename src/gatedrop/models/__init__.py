"""Models module - scoring and roster optimization.

This module contains:
- scoring: Points table lookup and race-result scoring
- roster: Roster data model and the exact per-class optimizer
"""

from gatedrop.models.scoring import ScoredResult, base_points, ordinal, score
from gatedrop.models.roster import (
    BikeClass,
    OptimalRoster,
    RosterCandidate,
    RosterConstraints,
    RosterFormatter,
    RosterOptimizer,
    find_optimal_roster,
)

__all__ = [
    # Scoring
    "ScoredResult",
    "base_points",
    "ordinal",
    "score",
    # Roster
    "BikeClass",
    "OptimalRoster",
    "RosterCandidate",
    "RosterConstraints",
    "RosterFormatter",
    "RosterOptimizer",
    "find_optimal_roster",
]
