import json
from pathlib import Path

import pytest

from sweepgen import cli
from sweepgen.config import BuildSettings
from sweepgen.ingest import MATCHES_CSV_HEADER


def _write_tournament(root: Path, tournament_id: str = "CUP") -> None:
    folder = root / "tournaments" / tournament_id.lower()
    folder.mkdir(parents=True)
    (folder / "tournament.json").write_text(
        json.dumps(
            {
                "id": tournament_id,
                "name": "Cup 2018",
                "image_url": "https://img/cup.png",
                "with_last_updated": True,
            }
        ),
        encoding="utf-8",
    )
    (folder / "teams.json").write_text(
        json.dumps(
            {
                "teams": [
                    {"id": "A", "name": "Alpha", "image_url": "a.png"},
                    {"id": "B", "name": "Bravo", "image_url": "b.png"},
                ]
            }
        ),
        encoding="utf-8",
    )
    row = dict.fromkeys(MATCHES_CSV_HEADER, "")
    row.update(
        MATCH_ID="F",
        DATE="15/07/2018",
        TIME="16:00",
        STAGE="KO",
        COMPLETED="Y",
        WINNER_TEAM_ID="B",
        HOME_TEAM_ID="A",
        AWAY_TEAM_ID="B",
        HOME_GOALS="2",
        AWAY_GOALS="4",
        HOME_RED_CARDS="1;Vida:87+3",
    )
    (folder / "matches.csv").write_text(
        ",".join(MATCHES_CSV_HEADER) + "\n" + ",".join(row[column] for column in MATCHES_CSV_HEADER) + "\n",
        encoding="utf-8",
    )


def _write_sweepstakes(root: Path, *entries: dict) -> None:
    (root / "sweepstakes.json").write_text(json.dumps({"sweepstakes": list(entries)}), encoding="utf-8")


def _entry(sweepstake_id: str, build: bool = True, participants=None) -> dict:
    return {
        "id": sweepstake_id,
        "name": f"Sweepstake {sweepstake_id}",
        "image_url": "s.png",
        "tournament_id": "CUP",
        "build": build,
        "prizes": {"winner": True, "runner_up": True, "quickest_red_card": True},
        "participants": participants
        if participants is not None
        else [
            {"team_id": "A", "participant_name": "John"},
            {"team_id": "B", "participant_name": "Sarah"},
        ],
    }


def test_run_writes_enabled_sweepstakes(tmp_path: Path):
    data_dir = tmp_path / "data"
    _write_tournament(data_dir)
    _write_sweepstakes(data_dir, _entry("office"), _entry("family", build=False))
    settings = BuildSettings(data_dir=data_dir, output_dir=tmp_path / "public")

    generated, skipped = cli.run(settings)

    assert (generated, skipped) == (1, 1)
    report = json.loads((tmp_path / "public" / "office" / "index.json").read_text(encoding="utf-8"))
    assert report["prizes"]["winner"]["participant_display"] == "Sarah (Bravo)"
    assert report["prizes"]["runner_up"]["participant_display"] == "John (Alpha)"
    assert report["prizes"]["quickest_red_card"]["rankings"][0]["value_text"].endswith(
        "87'+3 Vida (vs Bravo 15/07)"
    )
    assert report["last_updated"]
    assert not (tmp_path / "public" / "family").exists()


def test_main_prints_summary(tmp_path: Path, monkeypatch, capsys):
    data_dir = tmp_path / "data"
    _write_tournament(data_dir)
    _write_sweepstakes(data_dir, _entry("office"))
    monkeypatch.delenv("SWEEPGEN_SWEEPSTAKES_URL", raising=False)

    cli.main(["--data-dir", str(data_dir), "--output", str(tmp_path / "out"), "--log-level", "warning"])

    assert capsys.readouterr().out.strip() == "success! 1 generated (0 skipped)"


def test_main_exits_non_zero_on_validation_failure(tmp_path: Path, monkeypatch, capsys):
    data_dir = tmp_path / "data"
    _write_tournament(data_dir)
    _write_sweepstakes(data_dir, _entry("office", participants=[{"team_id": "A", "participant_name": "John"}]))
    monkeypatch.delenv("SWEEPGEN_SWEEPSTAKES_URL", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--data-dir", str(data_dir), "--output", str(tmp_path / "out")])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "build failed" in err
    assert "team id 'B', count = 0" in err


def test_main_fails_without_tournaments(tmp_path: Path, monkeypatch, capsys):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    _write_sweepstakes(data_dir, _entry("office"))
    monkeypatch.delenv("SWEEPGEN_SWEEPSTAKES_URL", raising=False)

    with pytest.raises(SystemExit):
        cli.main(["--data-dir", str(data_dir)])

    assert "tournaments: is empty" in capsys.readouterr().err


def test_sweepstakes_source_prefers_url(tmp_path: Path):
    settings = BuildSettings(data_dir=tmp_path, sweepstakes_url="https://example.test/s.json")
    file_settings = BuildSettings(data_dir=tmp_path)
    (tmp_path / "sweepstakes.json").write_bytes(b"{}")

    assert cli.sweepstakes_source(file_settings)() == b"{}"
    assert cli.sweepstakes_source(settings) is not None
