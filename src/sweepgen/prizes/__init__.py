"""Prize computation over a validated, enriched sweepstake."""

from .outright import TOURNAMENT_RUNNER_UP, TOURNAMENT_WINNER, tournament_runner_up, tournament_winner
from .ranked import (
    MOST_GOALS_CONCEDED,
    MOST_YELLOW_CARDS,
    QUICKEST_OWN_GOAL,
    QUICKEST_RED_CARD,
    most_goals_conceded,
    most_yellow_cards,
    quickest_own_goal,
    quickest_red_card,
)

__all__ = [
    "MOST_GOALS_CONCEDED",
    "MOST_YELLOW_CARDS",
    "QUICKEST_OWN_GOAL",
    "QUICKEST_RED_CARD",
    "TOURNAMENT_RUNNER_UP",
    "TOURNAMENT_WINNER",
    "most_goals_conceded",
    "most_yellow_cards",
    "quickest_own_goal",
    "quickest_red_card",
    "tournament_runner_up",
    "tournament_winner",
]
