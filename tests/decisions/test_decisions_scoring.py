"""Contract tests for score_results() and roster_points()."""

import numpy as np
import pandas as pd
import pytest

from gatedrop.decisions import pick_roster, roster_points, score_results
from gatedrop.exceptions import InvalidInputError, InvalidStateError
from gatedrop.models import OptimalRoster


@pytest.fixture
def results_df():
    return pd.DataFrame({
        "rider_id": [1, 2, 3, 4, 5],
        "rider_name": ["Alpha", "Bravo", "Charlie", "Delta", "Echo"],
        "finish_position": [1, 8, 12, 5, "DNF"],
        "handicap": [0, 3, 2, 0, 0],
        "is_all_star": [False, False, False, True, False],
    })


class TestScoreResults:
    """Per-row scoring over a DataFrame."""

    def test_scores_every_row(self, results_df):
        scored = score_results(results_df)

        assert scored["fantasy_points"].tolist() == [50, 34, 24, 17, 0]
        assert scored["adjusted_position"].tolist() == [1, 5, 10, 5, 23]
        assert scored["is_doubled"].tolist() == [True, True, True, False, False]

    def test_breakdown_column(self, results_df):
        scored = score_results(results_df)
        assert scored.loc[1, "points_breakdown"].startswith("Finished 8th with +3 handicap")

    def test_input_not_modified(self, results_df):
        before = results_df.copy()
        score_results(results_df)
        assert results_df.equals(before)
        assert "fantasy_points" not in results_df.columns

    def test_optional_columns_default(self):
        df = pd.DataFrame({"rider_id": [1, 2], "finish_position": [10, 11]})
        scored = score_results(df)
        assert scored["fantasy_points"].tolist() == [24, 11]

    def test_pending_row_raises(self):
        df = pd.DataFrame({"rider_id": [1, 2], "finish_position": [3, np.nan]})
        with pytest.raises(InvalidStateError, match="not yet available"):
            score_results(df)

    def test_pending_rows_skipped_when_asked(self):
        df = pd.DataFrame({"rider_id": [1, 2, 3], "finish_position": [3, np.nan, 4]})
        scored = score_results(df, skip_pending=True)

        assert scored["rider_id"].tolist() == [1, 3]
        assert scored["fantasy_points"].tolist() == [40, 36]

    def test_invalid_finish_raises(self):
        df = pd.DataFrame({"rider_id": [1], "finish_position": ["DNS"]})
        with pytest.raises(InvalidInputError):
            score_results(df)

    def test_missing_column(self):
        with pytest.raises(InvalidInputError):
            score_results(pd.DataFrame({"rider_id": [1]}))


class TestRosterPoints:
    """Realized points for a picked roster."""

    def _results_for(self, rider_ids):
        # Rider at index k finishes k + 1
        return pd.DataFrame({
            "rider_id": rider_ids,
            "finish_position": list(range(1, len(rider_ids) + 1)),
        })

    def test_totals_selected_riders(self, candidates_df):
        roster, _ = pick_roster(candidates_df)
        all_ids = candidates_df["rider_id"].tolist()
        scored = score_results(self._results_for(all_ids))

        points = dict(zip(scored["rider_id"], scored["fantasy_points"]))
        assert roster_points(scored, roster) == sum(points[rid] for rid in roster.rider_ids)

    def test_infeasible_roster_rejected(self, results_df):
        scored = score_results(results_df)
        with pytest.raises(InvalidInputError):
            roster_points(scored, OptimalRoster.infeasible("no riders"))

    def test_missing_rider_raises_invalid_state(self, candidates_df):
        roster, _ = pick_roster(candidates_df)
        scored = score_results(self._results_for([100, 101, 102]))

        with pytest.raises(InvalidStateError):
            roster_points(scored, roster)
