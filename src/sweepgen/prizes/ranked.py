"""Leaderboard prizes computed from completed match results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from sweepgen.models import (
    MatchCompetitor,
    MatchEvent,
    Rank,
    RankedPrize,
    Sweepstake,
    Team,
    participant_summary,
)


MOST_GOALS_CONCEDED = "Most Goals Conceded"
MOST_YELLOW_CARDS = "Most Yellow Cards"
QUICKEST_OWN_GOAL = "Quickest Own Goal"
QUICKEST_RED_CARD = "Quickest Red Card"

GOAL_EMOJI = "\u26bd\ufe0f"
YELLOW_CARD_EMOJI = "\U0001f7e8\ufe0f"
OWN_GOAL_EMOJI = "\U0001f648"
RED_CARD_EMOJI = "\U0001f7e5"

EVENT_DATE_FORMAT = "%d/%m"
UNKNOWN_OPPONENT = "TBC"

# (competitor, opponent) -> amount credited to the competitor's team
CreditFn = Callable[[MatchCompetitor, MatchCompetitor], int]
EventsFn = Callable[[MatchCompetitor], List[MatchEvent]]


@dataclass(frozen=True)
class RankedEvent:
    event: MatchEvent
    team: Team
    opponent: Optional[Team]
    timestamp: Optional[datetime]

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.event.minute, self.event.offset)


def _team_totals(sweepstake: Sweepstake, credit: CreditFn) -> Dict[str, int]:
    tournament = sweepstake.tournament
    totals: Dict[str, int] = {}
    for team in tournament.teams:
        if team is not None:
            totals.setdefault(team.id, 0)

    for match in tournament.matches:
        if match is None or not match.completed:
            continue
        for competitor, opponent in ((match.home, match.away), (match.away, match.home)):
            team = competitor.team
            if team is None or team.id not in totals:
                continue
            totals[team.id] += credit(competitor, opponent)
    return totals


def _rank_by_total(
    sweepstake: Optional[Sweepstake],
    prize_name: str,
    emoji: str,
    credit: CreditFn,
) -> RankedPrize:
    if sweepstake is None or sweepstake.tournament is None:
        return RankedPrize(name=prize_name)

    totals = _team_totals(sweepstake, credit)
    # sorted() is stable, so equal totals keep team order
    ordered = sorted(
        ((team_id, total) for team_id, total in totals.items() if total > 0),
        key=lambda item: item[1],
        reverse=True,
    )

    rankings: List[Rank] = []
    for position, (team_id, total) in enumerate(ordered, start=1):
        team = sweepstake.tournament.team_by_id(team_id)
        rankings.append(
            Rank(
                position=position,
                image_url=team.image_url,
                participant_display=participant_summary(
                    team, sweepstake.participant_by_team_id(team_id)
                ),
                value_text=f"{emoji} {total}",
            )
        )
    return RankedPrize(name=prize_name, rankings=rankings)


def _collect_events(sweepstake: Sweepstake, events_of: EventsFn) -> List[RankedEvent]:
    collected: List[RankedEvent] = []
    for match in sweepstake.tournament.matches:
        if match is None or not match.completed:
            continue
        for competitor, opponent in ((match.home, match.away), (match.away, match.home)):
            if competitor.team is None:
                continue
            for event in events_of(competitor):
                collected.append(
                    RankedEvent(
                        event=event,
                        team=competitor.team,
                        opponent=opponent.team,
                        timestamp=match.timestamp,
                    )
                )
    return collected


def format_event(emoji: str, ranked: RankedEvent) -> str:
    """Render e.g. ``"🟥 45'+4 DeeDee (vs Team C 28/05)"``."""

    event = ranked.event
    minute = f"{event.minute}'"
    if event.offset:
        minute += f"+{event.offset}"
    opponent = ranked.opponent.name if ranked.opponent is not None else UNKNOWN_OPPONENT
    context = opponent
    if ranked.timestamp is not None:
        context = f"{opponent} {ranked.timestamp.strftime(EVENT_DATE_FORMAT)}"
    return f"{emoji} {minute} {event.player_name} (vs {context})"


def _rank_by_event_time(
    sweepstake: Optional[Sweepstake],
    prize_name: str,
    emoji: str,
    events_of: EventsFn,
) -> RankedPrize:
    if sweepstake is None or sweepstake.tournament is None:
        return RankedPrize(name=prize_name)

    ordered = sorted(_collect_events(sweepstake, events_of), key=lambda ranked: ranked.sort_key)

    # list order is the ranking; no explicit position
    rankings = [
        Rank(
            image_url=ranked.team.image_url,
            participant_display=participant_summary(
                ranked.team, sweepstake.participant_by_team_id(ranked.team.id)
            ),
            value_text=format_event(emoji, ranked),
        )
        for ranked in ordered
    ]
    return RankedPrize(name=prize_name, rankings=rankings)


def most_goals_conceded(sweepstake: Optional[Sweepstake]) -> RankedPrize:
    return _rank_by_total(
        sweepstake,
        MOST_GOALS_CONCEDED,
        GOAL_EMOJI,
        lambda competitor, opponent: opponent.goals,
    )


def most_yellow_cards(sweepstake: Optional[Sweepstake]) -> RankedPrize:
    return _rank_by_total(
        sweepstake,
        MOST_YELLOW_CARDS,
        YELLOW_CARD_EMOJI,
        lambda competitor, opponent: competitor.yellow_cards,
    )


def quickest_own_goal(sweepstake: Optional[Sweepstake]) -> RankedPrize:
    return _rank_by_event_time(
        sweepstake,
        QUICKEST_OWN_GOAL,
        OWN_GOAL_EMOJI,
        lambda competitor: competitor.own_goals,
    )


def quickest_red_card(sweepstake: Optional[Sweepstake]) -> RankedPrize:
    return _rank_by_event_time(
        sweepstake,
        QUICKEST_RED_CARD,
        RED_CARD_EMOJI,
        lambda competitor: competitor.red_cards,
    )
