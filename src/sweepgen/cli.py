"""Command-line interface for building sweepstake reports from data files."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from sweepgen.config import MATCHES_FILENAME, TEAMS_FILENAME, TOURNAMENT_FILENAME, BuildSettings
from sweepgen.errors import SweepstakeError
from sweepgen.ingest import MatchesCSVLoader, TeamsJSONLoader, bytes_from_file, bytes_from_url
from sweepgen.ingest.sources import BytesSource
from sweepgen.log_config import configure_logging
from sweepgen.models import Tournament
from sweepgen.report import build_report, write_report
from sweepgen.sweepstakes import SweepstakesJSONLoader
from sweepgen.tournament import TournamentConfig, TournamentLoader, load_tournaments


logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build sweepstake prize reports")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding tournaments/ and sweepstakes.json",
    )
    parser.add_argument("--output", type=Path, default=None, help="Output directory for reports")
    parser.add_argument(
        "--sweepstakes-url",
        default=None,
        help="Fetch the sweepstakes manifest from this URL instead of the data directory",
    )
    parser.add_argument(
        "--basic-auth",
        default=None,
        help="user:password for the sweepstakes URL",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (e.g., DEBUG, INFO)")
    return parser.parse_args(argv)


def tournament_loader_for(path: Path) -> TournamentLoader:
    return TournamentLoader(
        TournamentConfig(
            source=bytes_from_file(path / TOURNAMENT_FILENAME),
            teams_loader=TeamsJSONLoader(bytes_from_file(path / TEAMS_FILENAME)),
            matches_loader=MatchesCSVLoader(bytes_from_file(path / MATCHES_FILENAME)),
        )
    )


def discover_tournament_dirs(tournaments_dir: Path) -> List[Path]:
    if not tournaments_dir.is_dir():
        return []
    return sorted(path for path in tournaments_dir.iterdir() if path.is_dir())


def load_all_tournaments(settings: BuildSettings) -> List[Tournament]:
    dirs = discover_tournament_dirs(settings.tournaments_dir)
    if not dirs:
        logger.warning("No tournament directories found under %s", settings.tournaments_dir)
    return load_tournaments([tournament_loader_for(path) for path in dirs])


def sweepstakes_source(settings: BuildSettings) -> BytesSource:
    if settings.sweepstakes_url:
        return bytes_from_url(settings.sweepstakes_url, settings.basic_auth)
    return bytes_from_file(settings.sweepstakes_path)


def run(settings: BuildSettings) -> tuple[int, int]:
    """Build every enabled sweepstake; returns (generated, skipped)."""

    tournaments = load_all_tournaments(settings)
    sweepstakes = SweepstakesJSONLoader(sweepstakes_source(settings), tournaments).load_sweepstakes()

    generated = skipped = 0
    for sweepstake in sweepstakes:
        if not sweepstake.build:
            logger.debug("Skipping sweepstake %s", sweepstake.id)
            skipped += 1
            continue
        write_report(build_report(sweepstake), settings.output_dir)
        generated += 1
    return generated, skipped


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = BuildSettings.from_env().with_overrides(
        data_dir=args.data_dir,
        output_dir=args.output,
        sweepstakes_url=args.sweepstakes_url,
        basic_auth=args.basic_auth,
        log_level=args.log_level,
    )
    configure_logging(settings.log_level)

    try:
        generated, skipped = run(settings)
    except SweepstakeError as exc:
        print(f"build failed: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"success! {generated} generated ({skipped} skipped)")


if __name__ == "__main__":
    main()
