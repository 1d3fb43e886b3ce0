"""Single-winner prizes decided by the final."""

from __future__ import annotations

from typing import Callable, Optional

from sweepgen.models import FINAL_MATCH_ID, OutrightPrize, Sweepstake, Team, participant_summary


TOURNAMENT_WINNER = "Tournament Winner"
TOURNAMENT_RUNNER_UP = "Tournament Runner-Up"
TBC = "TBC"


def _outright(
    sweepstake: Optional[Sweepstake],
    prize_name: str,
    pick_team: Callable[[Sweepstake], Optional[Team]],
) -> OutrightPrize:
    if sweepstake is None or sweepstake.tournament is None:
        return OutrightPrize(name=prize_name, participant_display=TBC)

    team = pick_team(sweepstake)
    if team is None:
        return OutrightPrize(name=prize_name, participant_display=TBC)

    participant = sweepstake.participant_by_team_id(team.id)
    return OutrightPrize(
        name=prize_name,
        participant_display=participant_summary(team, participant),
        image_url=team.image_url,
    )


def tournament_winner(sweepstake: Optional[Sweepstake]) -> OutrightPrize:
    """Winner of the completed final, or a TBC placeholder."""

    return _outright(
        sweepstake,
        TOURNAMENT_WINNER,
        lambda s: s.tournament.winner_of(FINAL_MATCH_ID),
    )


def tournament_runner_up(sweepstake: Optional[Sweepstake]) -> OutrightPrize:
    """Loser of the completed final, or a TBC placeholder."""

    return _outright(
        sweepstake,
        TOURNAMENT_RUNNER_UP,
        lambda s: s.tournament.runner_up_of(FINAL_MATCH_ID),
    )
