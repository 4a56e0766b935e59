"""Decision functions.

Both CLI scripts call these functions.

Decision Contract:
- Roster: maximize Σ(expected_points), 4 per class, 1 All-Star per class
- Scoring: handicap-adjusted table points, doubled for non-All-Stars in the top 10

GUARDRAIL: All functions must go through gatedrop.models.
           No second copy of the scoring or selection rules.
"""

from .roster import pick_roster
from .scoring import roster_points, score_results

__all__ = [
    "pick_roster",
    "score_results",
    "roster_points",
]
