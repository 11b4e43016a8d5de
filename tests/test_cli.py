from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from weld_quoter import cli


def _write_job(tmp_path: Path, payload) -> Path:
    path = tmp_path / "job.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_parse_args_defaults() -> None:
    args = cli.parse_args(["job.json"])

    assert args.job == "job.json"
    assert args.settings is None
    assert args.csv is None
    assert args.verbose is False


def test_main_prints_summary_and_writes_csv(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    job = _write_job(
        tmp_path,
        {
            "job": "V-101",
            "items": [
                {"type": "nozzle", "tag": "N1"},
                {"type": "circ_seam", "tag": "C1", "quantity": 2},
            ],
        },
    )
    out = tmp_path / "summary.csv"

    exit_code = cli.main([str(job), "--csv", str(out)])

    assert exit_code == cli.EXIT_OK
    stdout = capsys.readouterr().out
    assert stdout.splitlines()[0] == "V-101"
    assert "N1" in stdout and "C1" in stdout
    frame = pd.read_csv(out)
    assert list(frame["tag"]) == ["N1", "C1"]


def test_settings_override_changes_hours(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    job = _write_job(tmp_path, [{"type": "nozzle", "tag": "N1"}])
    slow = tmp_path / "slow.json"
    slow.write_text(
        json.dumps({"travel_speeds": {"medium": {"FCAW": 18, "SMAW": 10, "GTAW": 7}}}),
        encoding="utf-8",
    )
    base_csv = tmp_path / "base.csv"
    slow_csv = tmp_path / "slow.csv"

    assert cli.main([str(job), "--csv", str(base_csv)]) == cli.EXIT_OK
    assert cli.main([str(job), "--settings", str(slow), "--csv", str(slow_csv)]) == cli.EXIT_OK
    capsys.readouterr()

    base_hours = pd.read_csv(base_csv)["weld_hours"].iloc[0]
    slow_hours = pd.read_csv(slow_csv)["weld_hours"].iloc[0]
    assert slow_hours > base_hours


def test_unknown_weld_type_exits_with_input_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    job = _write_job(tmp_path, {"items": [{"type": "flange"}]})

    assert cli.main([str(job)]) == cli.EXIT_INPUT_ERROR
    assert "Unknown weld type" in capsys.readouterr().err


def test_missing_job_file_exits_with_input_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert cli.main([str(tmp_path / "nope.json")]) == cli.EXIT_INPUT_ERROR
    assert "not found" in capsys.readouterr().err


def test_job_without_items_is_rejected(tmp_path: Path) -> None:
    job = _write_job(tmp_path, {"job": "empty"})

    with pytest.raises(cli.ConfigError):
        cli.load_job(job)
