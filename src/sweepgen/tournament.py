"""Assemble tournaments from their config, team list and match results.

Matches parsed from CSV reference teams by id only. Loading a tournament
resolves every home/away/winner reference against the tournament's team list
and re-assigns each reference site to the full :class:`Team` record. The
winner is a separate reference from home/away and is resolved on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from pydantic import ValidationError

from sweepgen.audit import TeamsAudit
from sweepgen.errors import (
    DuplicateError,
    EmptyValueError,
    ErrorSink,
    MultiError,
    NotFoundError,
    PrefixedError,
    StructuralError,
    SweepstakeError,
)
from sweepgen.ingest.sources import BytesSource
from sweepgen.models import Match, Team, Tournament


logger = logging.getLogger(__name__)


class TeamsLoader(Protocol):
    def load_teams(self) -> List[Team]:
        ...


class MatchesLoader(Protocol):
    def load_matches(self) -> List[Match]:
        ...


@dataclass(frozen=True)
class TournamentConfig:
    """Everything needed to load one tournament."""

    source: Optional[BytesSource] = None
    teams_loader: Optional[TeamsLoader] = None
    matches_loader: Optional[MatchesLoader] = None

    def validate(self) -> None:
        errs = MultiError()
        if self.source is None:
            errs.add(EmptyValueError("config source"))
        if self.teams_loader is None:
            errs.add(EmptyValueError("teams loader"))
        if self.matches_loader is None:
            errs.add(EmptyValueError("matches loader"))
        errs.raise_for_errors()


class TournamentLoader:
    def __init__(self, config: TournamentConfig):
        self.config = config

    def load_tournament(self) -> Tournament:
        self.config.validate()

        raw = self.config.source()
        try:
            tournament = Tournament.model_validate_json(raw)
        except ValidationError as exc:
            raise StructuralError(f"cannot parse tournament: {exc}") from exc

        try:
            tournament.teams = self.config.teams_loader.load_teams()
        except SweepstakeError as exc:
            raise PrefixedError("cannot load teams", exc) from exc

        try:
            tournament.matches = self.config.matches_loader.load_matches()
        except SweepstakeError as exc:
            raise PrefixedError("cannot load matches", exc) from exc

        errs = MultiError()
        validate_tournament(tournament, errs)
        errs.raise_for_errors()

        logger.info(
            "Loaded tournament %s: %d teams, %d matches",
            tournament.id,
            len(tournament.teams),
            len(tournament.matches),
        )
        return tournament


def _team_lookup(teams: Iterable[Optional[Team]]) -> Dict[str, Team]:
    lookup: Dict[str, Team] = {}
    for team in teams:
        if team is not None:
            lookup.setdefault(team.id, team)
    return lookup


def resolve_team(team: Optional[Team], lookup: Mapping[str, Team]) -> Optional[Team]:
    """Return the full record for ``team``; raises :class:`NotFoundError`."""

    if team is None or not team.id:
        return team
    resolved = lookup.get(team.id)
    if resolved is None:
        raise NotFoundError(f"team id '{team.id}'")
    return resolved


def _resolve_slot(team: Optional[Team], lookup: Mapping[str, Team], errs: ErrorSink) -> Optional[Team]:
    try:
        return resolve_team(team, lookup)
    except NotFoundError as exc:
        errs.add(exc)
        return team


def enrich_match(match: Match, lookup: Mapping[str, Team], errs: ErrorSink) -> None:
    """Replace placeholder teams in ``match``; unresolved slots stay as they were."""

    match.home.team = _resolve_slot(match.home.team, lookup, errs.with_prefix("home"))
    match.away.team = _resolve_slot(match.away.team, lookup, errs.with_prefix("away"))
    match.winner = _resolve_slot(match.winner, lookup, errs.with_prefix("winner"))


def validate_tournament(tournament: Tournament, errs: ErrorSink) -> None:
    if not tournament.id:
        errs.add(EmptyValueError("id"))
    if not tournament.name:
        errs.add(EmptyValueError("name"))
    if not tournament.image_url:
        errs.add(EmptyValueError("image url"))

    lookup = _team_lookup(tournament.teams)
    audit = TeamsAudit(tournament.teams)
    seen: set[str] = set()

    for number, match in enumerate(tournament.matches, start=1):
        scope = errs.with_prefix(f"match {number}")
        if match.id in seen:
            scope.add(DuplicateError(f"id '{match.id}'"))
        seen.add(match.id)

        enrich_match(match, lookup, scope)

        # every tournament team must play at least once
        audit.ack(match.home.team)
        audit.ack(match.away.team)

    audit.validate_at_least_once(errs)


class TournamentSource(Protocol):
    def load_tournament(self) -> Tournament:
        ...


def load_tournaments(loaders: Sequence[TournamentSource]) -> List[Tournament]:
    """Load every tournament; the first failing loader aborts the run."""

    tournaments: List[Tournament] = []
    for idx, loader in enumerate(loaders):
        try:
            tournaments.append(loader.load_tournament())
        except SweepstakeError as exc:
            raise PrefixedError(f"loader index {idx}", exc) from exc
    return validate_tournaments(tournaments)


def validate_tournaments(tournaments: Sequence[Tournament]) -> List[Tournament]:
    errs = MultiError()
    seen: set[str] = set()
    for tournament in tournaments:
        if tournament.id in seen:
            errs.add(DuplicateError(f"id '{tournament.id}'"))
        seen.add(tournament.id)
    errs.raise_for_errors()
    return list(tournaments)


def tournament_by_id(tournaments: Iterable[Optional[Tournament]], tournament_id: str) -> Optional[Tournament]:
    for tournament in tournaments:
        if tournament is not None and tournament.id == tournament_id:
            return tournament
    return None
