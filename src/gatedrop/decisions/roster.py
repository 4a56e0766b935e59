"""Roster decision function.

Decision Rule (Exact): maximize Σ(expected_points)
Subject to 4 riders per class, one All-Star per class where required,
and no excluded riders.

CONTRACT ENFORCEMENT:
    - expected_points is used as supplied; this layer never re-weights it
    - A roster is all 8 riders or nothing (check roster.is_feasible)

GUARDRAIL: Must use RosterOptimizer from gatedrop.models.roster.
           No alternate selection code paths.
"""

import logging
from typing import Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from gatedrop.config import SLOTS_PER_CLASS
from gatedrop.data.reader import CANDIDATE_COLUMNS, candidates_from_frame, require_columns
from gatedrop.exceptions import InvalidInputError
from gatedrop.models.roster import (
    BikeClass,
    OptimalRoster,
    RosterCandidate,
    RosterConstraints,
    RosterOptimizer,
)

logger = logging.getLogger(__name__)


def _id_column(df: pd.DataFrame) -> str:
    return "rider_id" if "rider_id" in df.columns else "id"


def _resolve_excluded(
    candidates: Sequence[RosterCandidate], excluded_ids: Iterable[Hashable]
) -> FrozenSet[Hashable]:
    """Map requested exclusions onto the ids actually loaded.

    An id matches a candidate when it is equal to the candidate id or has
    the same text (CLI values arrive as strings, CSV ids may load as ints).
    """
    by_text: Dict[str, List[Hashable]] = {}
    for candidate in candidates:
        by_text.setdefault(str(candidate.id), []).append(candidate.id)

    resolved = set()
    for rider_id in excluded_ids:
        resolved.add(rider_id)
        resolved.update(by_text.get(str(rider_id), []))
    return frozenset(resolved)


def pick_roster(
    candidates_df: pd.DataFrame,
    excluded_ids: Optional[Iterable[Hashable]] = None,
    require_all_star: Optional[Mapping[BikeClass, bool]] = None,
    slots_per_class: int = SLOTS_PER_CLASS,
) -> Tuple[OptimalRoster, pd.DataFrame]:
    """Pick the optimal roster from a candidate DataFrame.

    Args:
        candidates_df: One row per rider with rider_id, bike_class,
            expected_points and optional is_all_star / is_excluded columns.
        excluded_ids: Extra rider ids to exclude (e.g. previous event picks).
            Matched against the loaded ids by value or by text, so "12"
            excludes rider 12 whether the id column holds ints or strings.
        require_all_star: Per-class All-Star requirement (default from config).
        slots_per_class: Riders per class.

    Returns:
        Tuple of (roster, selected_df) where:
        - roster: OptimalRoster (is_feasible False if constraints can't be met)
        - selected_df: The selected candidate rows, 250 class first, best first;
          empty when infeasible

    Raises:
        InvalidInputError: Missing columns, invalid rows, or malformed constraints.
    """
    if isinstance(excluded_ids, (str, bytes)):
        raise InvalidInputError(f"excluded_ids must be a collection of ids, not {excluded_ids!r}")
    require_columns(candidates_df, CANDIDATE_COLUMNS)
    candidates = candidates_from_frame(candidates_df)

    constraint_args = {
        "slots_per_class": slots_per_class,
        "excluded_ids": _resolve_excluded(candidates, excluded_ids or ()),
    }
    if require_all_star is not None:
        constraint_args["require_all_star"] = dict(require_all_star)
    constraints = RosterConstraints(**constraint_args)

    roster = RosterOptimizer(candidates, constraints).optimize()

    id_col = _id_column(candidates_df)
    order = {rider_id: i for i, rider_id in enumerate(roster.rider_ids)}
    selected_df = (
        candidates_df[candidates_df[id_col].isin(list(order))]
        .assign(_order=lambda d: d[id_col].map(order))
        .sort_values("_order")
        .drop(columns="_order")
        .reset_index(drop=True)
    )

    if not roster.is_feasible:
        logger.warning(f"Roster decision infeasible: {roster.reason}")

    return roster, selected_df
