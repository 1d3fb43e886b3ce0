"""Per-sweepstake report handed to the rendering layer."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from sweepgen.models import OutrightPrize, RankedPrize, Sweepstake, Team, participant_summary
from sweepgen.prizes import (
    most_goals_conceded,
    most_yellow_cards,
    quickest_own_goal,
    quickest_red_card,
    tournament_runner_up,
    tournament_winner,
)


logger = logging.getLogger(__name__)

REPORT_FILENAME = "index.json"


class PrizeResults(BaseModel):
    """Results for the prizes a sweepstake enables; disabled prizes stay None."""

    winner: Optional[OutrightPrize] = None
    runner_up: Optional[OutrightPrize] = None
    most_goals_conceded: Optional[RankedPrize] = None
    most_yellow_cards: Optional[RankedPrize] = None
    quickest_own_goal: Optional[RankedPrize] = None
    quickest_red_card: Optional[RankedPrize] = None


class Entrant(BaseModel):
    team: Team
    participant_display: str


class SweepstakeReport(BaseModel):
    title: str
    image_url: str
    last_updated: Optional[str] = None
    prizes: PrizeResults = Field(default_factory=PrizeResults)
    entrants: List[Entrant] = Field(default_factory=list)
    sweepstake: Sweepstake


def format_last_updated(moment: datetime) -> str:
    """Render e.g. ``"Sat 26 May 2018 at 14:00"``."""

    return f"{moment:%a} {moment.day} {moment:%b %Y at %H:%M}"


def compute_prizes(sweepstake: Sweepstake) -> PrizeResults:
    flags = sweepstake.prizes
    return PrizeResults(
        winner=tournament_winner(sweepstake) if flags.winner else None,
        runner_up=tournament_runner_up(sweepstake) if flags.runner_up else None,
        most_goals_conceded=most_goals_conceded(sweepstake) if flags.most_goals_conceded else None,
        most_yellow_cards=most_yellow_cards(sweepstake) if flags.most_yellow_cards else None,
        quickest_own_goal=quickest_own_goal(sweepstake) if flags.quickest_own_goal else None,
        quickest_red_card=quickest_red_card(sweepstake) if flags.quickest_red_card else None,
    )


def _entrants(sweepstake: Sweepstake) -> List[Entrant]:
    teams = sorted(sweepstake.tournament.teams, key=lambda team: team.name)
    return [
        Entrant(
            team=team,
            participant_display=participant_summary(team, sweepstake.participant_by_team_id(team.id)),
        )
        for team in teams
    ]


def build_report(sweepstake: Sweepstake, *, now: Optional[datetime] = None) -> SweepstakeReport:
    """Assemble the report for a validated sweepstake.

    Title and image fall back to the tournament's when the sweepstake leaves
    them blank. ``now`` is only used when the tournament asks for a
    last-updated stamp.
    """

    tournament = sweepstake.tournament
    if tournament is None:
        raise ValueError(f"sweepstake '{sweepstake.id}' has no tournament")

    last_updated = None
    if tournament.with_last_updated:
        last_updated = format_last_updated(now or datetime.now())

    return SweepstakeReport(
        title=sweepstake.name or tournament.name,
        image_url=sweepstake.image_url or tournament.image_url,
        last_updated=last_updated,
        prizes=compute_prizes(sweepstake),
        entrants=_entrants(sweepstake),
        sweepstake=sweepstake,
    )


def write_report(report: SweepstakeReport, output_dir: Path) -> Path:
    """Write ``<output_dir>/<sweepstake id>/index.json`` and return its path."""

    target_dir = output_dir / report.sweepstake.id
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / REPORT_FILENAME
    target.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    logger.debug("Wrote report for %s to %s", report.sweepstake.id, target)
    return target
