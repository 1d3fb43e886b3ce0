"""Input adapters that turn raw files into validated entity records."""

from .matches import (
    MATCHES_CSV_HEADER,
    MatchesCSVLoader,
    load_matches_csv,
    parse_match_events,
    parse_match_records,
    parse_match_row,
    validate_matches,
)
from .sources import BytesSource, bytes_from_file, bytes_from_url
from .teams import TeamsJSONLoader, load_teams_json, validate_teams

__all__ = [
    "BytesSource",
    "MATCHES_CSV_HEADER",
    "MatchesCSVLoader",
    "TeamsJSONLoader",
    "bytes_from_file",
    "bytes_from_url",
    "load_matches_csv",
    "load_teams_json",
    "parse_match_events",
    "parse_match_records",
    "parse_match_row",
    "validate_matches",
    "validate_teams",
]
