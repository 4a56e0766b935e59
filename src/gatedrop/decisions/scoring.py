"""Race-result scoring over tables.

Applies the scoring rule from gatedrop.models.scoring to every row of a
race-result DataFrame, and totals a roster's realized points.

CONTRACT ENFORCEMENT:
    - A rider without a finish position is never scored as 0: the call
      fails with InvalidStateError unless pending rows are explicitly skipped
    - All points come from score(); no second copy of the rule lives here
"""

import logging

import pandas as pd

from gatedrop.data.reader import RESULT_COLUMNS, require_columns, results_from_frame
from gatedrop.exceptions import InvalidInputError, InvalidStateError
from gatedrop.models.roster import OptimalRoster

logger = logging.getLogger(__name__)

SCORE_COLUMNS = ["adjusted_position", "base_points", "is_doubled", "fantasy_points"]


def score_results(results_df: pd.DataFrame, skip_pending: bool = False) -> pd.DataFrame:
    """Score every rider in a race-result table.

    Args:
        results_df: Rows with rider_id, finish_position and optional
            handicap (default 0) and is_all_star (default False).
        skip_pending: Drop rows without a finish position instead of failing.

    Returns:
        Copy of the scored rows with adjusted_position, base_points,
        is_doubled, fantasy_points and points_breakdown columns added.

    Raises:
        InvalidStateError: A row has no finish position and skip_pending is False.
        InvalidInputError: Missing columns or malformed rows.
    """
    require_columns(results_df, RESULT_COLUMNS)
    rows = results_from_frame(results_df)

    pending = [row.rider_id for row in rows if row.is_pending]
    if pending:
        if not skip_pending:
            raise InvalidStateError(
                f"result not yet available for {len(pending)} riders: {pending[:5]}"
            )
        logger.warning(f"Skipping {len(pending)} riders without a finish position")

    mask = [not row.is_pending for row in rows]
    scored = [row.to_scored() for row in rows if not row.is_pending]

    out = results_df.loc[mask].copy().reset_index(drop=True)
    out["adjusted_position"] = [s.adjusted_position for s in scored]
    out["base_points"] = [s.base_points for s in scored]
    out["is_doubled"] = [s.is_doubled for s in scored]
    out["fantasy_points"] = [s.total_points for s in scored]
    out["points_breakdown"] = [s.breakdown() for s in scored]

    logger.info(f"Scored {len(out)} riders ({int(out['fantasy_points'].sum())} total points)")
    return out


def roster_points(scored_df: pd.DataFrame, roster: OptimalRoster) -> int:
    """Total realized fantasy points for a roster's riders.

    Args:
        scored_df: Output of score_results().
        roster: A feasible OptimalRoster.

    Raises:
        InvalidInputError: Roster is infeasible or scored_df lacks fantasy_points.
        InvalidStateError: A selected rider has no scored result.
    """
    if not roster.is_feasible:
        raise InvalidInputError(f"Cannot total an infeasible roster: {roster.reason}")
    require_columns(scored_df, ["rider_id", "fantasy_points"])

    id_col = "rider_id" if "rider_id" in scored_df.columns else "id"
    points = dict(zip(scored_df[id_col].tolist(), scored_df["fantasy_points"].tolist()))

    missing = [rid for rid in roster.rider_ids if rid not in points]
    if missing:
        raise InvalidStateError(f"result not yet available for selected riders: {missing}")

    return int(sum(points[rid] for rid in roster.rider_ids))
