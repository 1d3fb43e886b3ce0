"""Match entities produced by the matches CSV parser."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .team import Team


FINAL_MATCH_ID = "F"


class MatchStage(str, Enum):
    GROUP = "GROUP"
    KNOCKOUT = "KO"


class MatchEvent(BaseModel):
    """An own goal or red card; ``offset`` > 0 means added time (90+2)."""

    player_name: str
    minute: int = Field(..., ge=1)
    offset: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class MatchCompetitor(BaseModel):
    team: Optional[Team] = None
    goals: int = Field(default=0, ge=0)
    yellow_cards: int = Field(default=0, ge=0)
    own_goals: List[MatchEvent] = Field(default_factory=list)
    red_cards: List[MatchEvent] = Field(default_factory=list)


class Match(BaseModel):
    id: str
    timestamp: Optional[datetime] = None
    stage: Optional[MatchStage] = None
    home: MatchCompetitor = Field(default_factory=MatchCompetitor)
    away: MatchCompetitor = Field(default_factory=MatchCompetitor)
    winner: Optional[Team] = None
    completed: bool = False

    model_config = ConfigDict(str_strip_whitespace=True)

    @property
    def is_final(self) -> bool:
        return self.id == FINAL_MATCH_ID

    def runner_up(self) -> Optional[Team]:
        """Return whichever of home/away did not win, if a winner is recorded."""

        if self.winner is None:
            return None
        home, away = self.home.team, self.away.team
        if home is not None and home.id == self.winner.id:
            return away
        if away is not None and away.id == self.winner.id:
            return home
        return None
