import json
from pathlib import Path

import pytest

from quadtable.cli import main_table
from quadtable.error_table import TABLE_HEADER


def test_cli_prints_table(capsys: pytest.CaptureFixture[str]) -> None:
    assert main_table(["--function", "sin", "--rule", "trapezoid", "--nvals", "10", "100"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == TABLE_HEADER
    assert [int(line.split()[0]) for line in lines[1:]] == [10, 100]


def test_cli_writes_artifacts(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("workers: 2\nratio_mode: privatized\n", encoding="utf-8")
    out = tmp_path / "table.json"
    csv_path = tmp_path / "table.csv"
    report = tmp_path / "report.md"
    plot = tmp_path / "conv.png"
    argv = [
        "--function", "cubic",
        "--rule", "simpson",
        "--nvals", "4", "8", "16",
        "--config", str(cfg),
        "--ratio_mode", "successive",
        "--reduction_workers", "2",
        "--out", str(out),
        "--csv", str(csv_path),
        "--report", str(report),
        "--plot", str(plot),
    ]
    assert main_table(argv) == 0
    capsys.readouterr()

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["schema_version"] == "quadtable_error_table.v1"
    assert data["config"]["workers"] == 2
    assert data["config"]["ratio_mode"] == "successive"
    assert [r["n"] for r in data["rows"]] == [4, 8, 16]
    assert all(abs(r["approximation"] - 6.0) < 1e-12 for r in data["rows"])
    assert csv_path.exists() and report.exists() and plot.exists()


def test_cli_validate_rejects_odd_simpson_n() -> None:
    from quadtable.errors import InvalidArgument

    with pytest.raises(InvalidArgument):
        main_table(["--rule", "simpson", "--nvals", "5", "--validate"])


def test_cli_rejects_non_positive_nvals() -> None:
    with pytest.raises(SystemExit):
        main_table(["--nvals", "0"])


def test_cli_rejects_unknown_log_level() -> None:
    with pytest.raises(SystemExit):
        main_table(["--log_level", "verbose"])
