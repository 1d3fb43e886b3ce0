"""Build settings resolved from the environment and CLI overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional


DATA_DIR_ENV = "SWEEPGEN_DATA_DIR"
OUTPUT_DIR_ENV = "SWEEPGEN_OUTPUT_DIR"
SWEEPSTAKES_URL_ENV = "SWEEPGEN_SWEEPSTAKES_URL"
BASIC_AUTH_ENV = "SWEEPGEN_BASIC_AUTH"
LOG_LEVEL_ENV = "SWEEPGEN_LOG_LEVEL"

DEFAULT_DATA_DIR = Path("data")
DEFAULT_OUTPUT_DIR = Path("public")
DEFAULT_LOG_LEVEL = "INFO"

TOURNAMENTS_DIRNAME = "tournaments"
SWEEPSTAKES_FILENAME = "sweepstakes.json"
TOURNAMENT_FILENAME = "tournament.json"
TEAMS_FILENAME = "teams.json"
MATCHES_FILENAME = "matches.csv"


def _env_str(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


@dataclass(frozen=True)
class BuildSettings:
    data_dir: Path = DEFAULT_DATA_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    sweepstakes_url: Optional[str] = None
    basic_auth: str = ""
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "BuildSettings":
        data_dir = _env_str(DATA_DIR_ENV)
        output_dir = _env_str(OUTPUT_DIR_ENV)
        return cls(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            output_dir=Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR,
            sweepstakes_url=_env_str(SWEEPSTAKES_URL_ENV),
            basic_auth=_env_str(BASIC_AUTH_ENV) or "",
            log_level=(_env_str(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper(),
        )

    def with_overrides(self, **values: object) -> "BuildSettings":
        """Return a copy with every non-None value applied."""

        updates = {key: value for key, value in values.items() if value is not None}
        if "log_level" in updates:
            updates["log_level"] = str(updates["log_level"]).upper()
        return replace(self, **updates)

    @property
    def tournaments_dir(self) -> Path:
        return self.data_dir / TOURNAMENTS_DIRNAME

    @property
    def sweepstakes_path(self) -> Path:
        return self.data_dir / SWEEPSTAKES_FILENAME
