"""Sweepstake entities: who drew which team and which prizes are on offer."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .team import Team
from .tournament import Tournament


class Participant(BaseModel):
    team_id: str
    name: str = Field(default="", alias="participant_name")

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class PrizeSettings(BaseModel):
    winner: bool = False
    runner_up: bool = False
    most_goals_conceded: bool = False
    most_yellow_cards: bool = False
    quickest_own_goal: bool = False
    quickest_red_card: bool = False


class Sweepstake(BaseModel):
    id: str = ""
    name: str = ""
    image_url: str = ""
    tournament: Optional[Tournament] = None
    participants: List[Participant] = Field(default_factory=list)
    prizes: PrizeSettings = Field(default_factory=PrizeSettings)
    build: bool = False

    model_config = ConfigDict(str_strip_whitespace=True)

    def participant_by_team_id(self, team_id: str) -> Optional[Participant]:
        for participant in self.participants:
            if participant is not None and participant.team_id == team_id:
                return participant
        return None


def participant_summary(team: Team, participant: Optional[Participant]) -> str:
    """Display name for a team, prefixed by whoever drew it when known."""

    if participant is None or not participant.name:
        return team.name
    return f"{participant.name} ({team.name})"
