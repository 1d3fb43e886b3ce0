"""Canonical entity models shared across ingestion, validation and prizes."""

from .match import FINAL_MATCH_ID, Match, MatchCompetitor, MatchEvent, MatchStage
from .prize import OutrightPrize, Rank, RankedPrize
from .sweepstake import Participant, PrizeSettings, Sweepstake, participant_summary
from .team import Team
from .tournament import Tournament

__all__ = [
    "FINAL_MATCH_ID",
    "Match",
    "MatchCompetitor",
    "MatchEvent",
    "MatchStage",
    "OutrightPrize",
    "Participant",
    "PrizeSettings",
    "Rank",
    "RankedPrize",
    "Sweepstake",
    "Team",
    "Tournament",
    "participant_summary",
]
