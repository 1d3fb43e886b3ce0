"""Tournament aggregate: teams plus the matches played between them."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .match import Match
from .team import Team


class Tournament(BaseModel):
    id: str = ""
    name: str = ""
    image_url: str = ""
    with_last_updated: bool = False
    teams: List[Team] = Field(default_factory=list)
    matches: List[Match] = Field(default_factory=list)

    model_config = ConfigDict(str_strip_whitespace=True)

    def team_by_id(self, team_id: str) -> Optional[Team]:
        for team in self.teams:
            if team is not None and team.id == team_id:
                return team
        return None

    def match_by_id(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match is not None and match.id == match_id:
                return match
        return None

    def winner_of(self, match_id: str) -> Optional[Team]:
        match = self.match_by_id(match_id)
        if match is None or not match.completed:
            return None
        return match.winner

    def runner_up_of(self, match_id: str) -> Optional[Team]:
        match = self.match_by_id(match_id)
        if match is None or not match.completed:
            return None
        return match.runner_up()
