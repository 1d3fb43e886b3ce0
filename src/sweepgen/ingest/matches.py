"""Parse match result CSVs into canonical :class:`Match` records.

Each data row must carry exactly the columns in :data:`MATCHES_CSV_HEADER`.
Own goals and red cards use a compact event grammar::

    <count>;<player>:<minute>[+<offset>];...

e.g. ``2;Jones:7;Smith:45+2`` is two events, the second in added time.

Row problems are collected for the whole file before anything is raised, so
one run reports every bad cell. Structural problems (header, field counts)
fail immediately.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from sweepgen.errors import (
    DuplicateError,
    EmptyValueError,
    ErrorSink,
    MultiError,
    StructuralError,
    ValidationIssue,
)
from sweepgen.models import Match, MatchCompetitor, MatchEvent, MatchStage, Team

from .sources import BytesSource, bytes_from_file


logger = logging.getLogger(__name__)

MATCHES_CSV_HEADER: tuple[str, ...] = (
    "MATCH_ID",
    "DATE",
    "TIME",
    "STAGE",
    "COMPLETED",
    "WINNER_TEAM_ID",
    "HOME_TEAM_ID",
    "AWAY_TEAM_ID",
    "HOME_GOALS",
    "AWAY_GOALS",
    "HOME_YELLOW_CARDS",
    "AWAY_YELLOW_CARDS",
    "HOME_OG",
    "AWAY_OG",
    "HOME_RED_CARDS",
    "AWAY_RED_CARDS",
)

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M"
COMPLETED_FLAG = "Y"

_STAGES = {
    "GROUP": MatchStage.GROUP,
    "KO": MatchStage.KNOCKOUT,
}
_INT_PATTERN = re.compile(r"[+-]?\d+")


def _parse_int(raw: str) -> int:
    if not _INT_PATTERN.fullmatch(raw):
        raise ValueError(f"parsing '{raw}': invalid syntax")
    return int(raw)


def parse_timestamp(raw_date: str, raw_time: str, errs: ErrorSink) -> Optional[datetime]:
    value = f"{raw_date} {raw_time}".strip()
    if not value:
        # reported as empty by match validation
        return None
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        errs.add(ValidationIssue(f"invalid timestamp format: {value}"))
        return None


def parse_stage(raw: str, errs: ErrorSink) -> Optional[MatchStage]:
    stage = _STAGES.get(raw)
    if stage is None:
        errs.add(ValidationIssue(f"invalid match stage: {raw}"))
    return stage


def parse_count(raw: str, errs: ErrorSink) -> int:
    """Parse a goals/cards cell; blank means zero."""

    if raw == "":
        return 0
    try:
        value = _parse_int(raw)
    except ValueError as exc:
        errs.add(ValidationIssue(f"invalid int: {exc}"))
        return 0
    if value < 0:
        errs.add(ValidationIssue(f"invalid int: parsing '{raw}': must not be negative"))
        return 0
    return value


def parse_match_event(raw: str, errs: ErrorSink) -> Optional[MatchEvent]:
    parts = raw.split(":")
    if len(parts) != 2:
        errs.add(ValidationIssue("invalid format"))
        return None

    name = parts[0].strip()
    raw_minute, _, raw_offset = parts[1].partition("+")

    try:
        minute = _parse_int(raw_minute.strip())
    except ValueError as exc:
        errs.with_prefix("minute").add(ValidationIssue(f"invalid int: {exc}"))
        return None
    if minute < 1:
        errs.with_prefix("minute").add(ValidationIssue("must be greater than 0"))
        return None

    offset = 0
    raw_offset = raw_offset.strip()
    if raw_offset:
        try:
            offset = _parse_int(raw_offset)
        except ValueError as exc:
            errs.with_prefix("offset").add(ValidationIssue(f"invalid int: {exc}"))
            return None
        if offset < 1:
            errs.with_prefix("offset").add(ValidationIssue("must be greater than 0"))
            return None

    return MatchEvent(player_name=name, minute=minute, offset=offset)


def parse_match_events(raw: str, errs: ErrorSink) -> List[MatchEvent]:
    """Parse an own-goal/red-card cell; any bad entry discards the whole cell."""

    value = raw.strip()
    if not value:
        return []

    raw_count, *entries = value.split(";")
    try:
        count = _parse_int(raw_count.strip())
    except ValueError:
        errs.add(ValidationIssue("first element must provide count of remaining elements"))
        return []

    if len(entries) != count:
        noun = "element" if count == 1 else "elements"
        errs.add(ValidationIssue(f"must have {count} {noun}"))
        return []

    events: List[MatchEvent] = []
    failed = False
    for idx, entry in enumerate(entries, start=1):
        event = parse_match_event(entry, errs.with_prefix(f"event {idx}"))
        if event is None:
            failed = True
        else:
            events.append(event)
    return [] if failed else events


def _placeholder(team_id: str) -> Optional[Team]:
    # resolved to the full team record when the tournament is validated
    team_id = team_id.strip()
    return Team(id=team_id) if team_id else None


def parse_match_row(row: Sequence[str], errs: ErrorSink) -> Match:
    (
        match_id,
        raw_date,
        raw_time,
        raw_stage,
        raw_completed,
        winner_id,
        home_id,
        away_id,
        raw_home_goals,
        raw_away_goals,
        raw_home_yellows,
        raw_away_yellows,
        raw_home_og,
        raw_away_og,
        raw_home_reds,
        raw_away_reds,
    ) = row

    timestamp = parse_timestamp(raw_date, raw_time, errs)
    stage = parse_stage(raw_stage, errs)
    home = MatchCompetitor(
        team=_placeholder(home_id),
        goals=parse_count(raw_home_goals, errs.with_prefix("home goals")),
        yellow_cards=parse_count(raw_home_yellows, errs.with_prefix("home yellow cards")),
        own_goals=parse_match_events(raw_home_og, errs.with_prefix("home own goals")),
        red_cards=parse_match_events(raw_home_reds, errs.with_prefix("home red cards")),
    )
    away = MatchCompetitor(
        team=_placeholder(away_id),
        goals=parse_count(raw_away_goals, errs.with_prefix("away goals")),
        yellow_cards=parse_count(raw_away_yellows, errs.with_prefix("away yellow cards")),
        own_goals=parse_match_events(raw_away_og, errs.with_prefix("away own goals")),
        red_cards=parse_match_events(raw_away_reds, errs.with_prefix("away red cards")),
    )
    return Match(
        id=match_id,
        timestamp=timestamp,
        stage=stage,
        home=home,
        away=away,
        winner=_placeholder(winner_id),
        completed=raw_completed == COMPLETED_FLAG,
    )


def parse_match_records(records: Sequence[Sequence[str]]) -> List[Match]:
    """Convert tokenized CSV rows (header first) into matches.

    Raises :class:`StructuralError` for shape problems and a
    :class:`MultiError` listing every bad cell otherwise.
    """

    if len(records) < 2:
        raise StructuralError(
            f"rows {len(records)}: file must have header row and at least one more row"
        )

    header = [column.strip() for column in records[0]]
    if tuple(header) != MATCHES_CSV_HEADER:
        raise StructuralError(f"invalid headers: {','.join(records[0])}")

    for number, row in enumerate(records[1:], start=1):
        if len(row) != len(MATCHES_CSV_HEADER):
            raise StructuralError(
                f"row {number}: wrong number of fields: expected {len(MATCHES_CSV_HEADER)}, got {len(row)}"
            )

    errs = MultiError()
    matches = [
        parse_match_row(row, errs.with_prefix(f"row {number}"))
        for number, row in enumerate(records[1:], start=1)
    ]
    errs.raise_for_errors()
    return matches


def _is_team_id_identical(a: Optional[Team], b: Optional[Team]) -> bool:
    if a is None or b is None:
        return False
    return a.id == b.id


def _is_team_not_one_of(needle: Optional[Team], *haystack: Optional[Team]) -> bool:
    if needle is None:
        return False
    return all(team is None or team.id != needle.id for team in haystack)


def validate_match(match: Match, errs: ErrorSink) -> None:
    if not match.id:
        errs.add(EmptyValueError("id"))
    if match.timestamp is None:
        errs.add(EmptyValueError("timestamp"))
    if _is_team_id_identical(match.home.team, match.away.team):
        errs.add(
            ValidationIssue(f"home team id and away team id are identical: {match.home.team.id}")
        )
    if _is_team_not_one_of(match.winner, match.home.team, match.away.team):
        errs.add(
            ValidationIssue(
                f"winning team id {match.winner.id} must match either home or away team id"
            )
        )


def validate_matches(matches: Sequence[Match]) -> List[Match]:
    """Check each match and id uniqueness; raises :class:`MultiError`."""

    errs = MultiError()
    seen: set[str] = set()
    for idx, match in enumerate(matches):
        scope = errs.with_prefix(f"index {idx}")
        validate_match(match, scope)
        if match.id in seen:
            scope.add(DuplicateError(f"id '{match.id}'"))
        seen.add(match.id)
    errs.raise_for_errors()
    return list(matches)


def read_csv_records(raw: bytes) -> List[List[str]]:
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise StructuralError(f"cannot decode csv: {exc}") from exc
    try:
        return [row for row in csv.reader(io.StringIO(text)) if row]
    except csv.Error as exc:
        raise StructuralError(f"cannot read csv: {exc}") from exc


class MatchesCSVLoader:
    """Loads and validates matches from a CSV byte source."""

    def __init__(self, source: BytesSource):
        self.source = source

    def load_matches(self) -> List[Match]:
        records = read_csv_records(self.source())
        matches = parse_match_records(records)
        logger.debug("Parsed %d match rows", len(matches))
        return validate_matches(matches)


def load_matches_csv(path: Path) -> List[Match]:
    return MatchesCSVLoader(bytes_from_file(path)).load_matches()
