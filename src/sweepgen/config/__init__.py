"""Configuration helpers for build paths and data sources."""

from .settings import (
    MATCHES_FILENAME,
    TEAMS_FILENAME,
    TOURNAMENT_FILENAME,
    BuildSettings,
)

__all__ = [
    "BuildSettings",
    "MATCHES_FILENAME",
    "TEAMS_FILENAME",
    "TOURNAMENT_FILENAME",
]
