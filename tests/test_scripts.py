"""
End-to-end runs of the command-line scripts.
"""

import logging
import sys
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

SCRIPTS = Path(__file__).resolve().parents[1] / "src" / "scripts"
if str(SCRIPTS) not in sys.path:
    sys.path.insert(0, str(SCRIPTS))

import plot_paths  # noqa: E402
import run_exits  # noqa: E402

from brownian_exits import io  # noqa: E402


@pytest.fixture(autouse=True)
def reset_package_logger():
    """setup_logging binds handlers to the captured streams; drop them after each run."""
    yield
    logger = logging.getLogger("brownian_exits")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_run_then_plot(tmp_path, monkeypatch, capsys):
    csv_path = tmp_path / "paths.csv"
    png_path = tmp_path / "paths.png"

    monkeypatch.setattr(
        sys,
        "argv",
        [
            "run_exits.py",
            "--domain-y-min", "-0.5",
            "--domain-y-max", "0.5",
            "--max-exits", "25",
            "--paths-per-thread", "5",
            "--step-size", "0.1",
            "--threads", "1",
            "--seed", "42",
            "--output-csv", str(csv_path),
            "--log-level", "WARNING",
        ],
    )
    assert run_exits.main() == 0
    out = capsys.readouterr().out
    assert "Total exits: 25" in out

    segments = io.read_segments_csv(csv_path)
    assert sum(s.has_exited for s in segments) == 25

    monkeypatch.setattr(
        sys,
        "argv",
        [
            "plot_paths.py",
            "--input-csv", str(csv_path),
            "--plot-output", str(png_path),
            "--n-paths", "3",
            "--domain-y-min", "-0.5",
            "--domain-y-max", "0.5",
            "--seed", "0",
        ],
    )
    assert plot_paths.main() == 0
    assert png_path.exists()


def test_run_reads_config_file(tmp_path, monkeypatch):
    config = tmp_path / "params.toml"
    config.write_text("max_global_exits = 7\npaths_per_thread = 3\nn_threads = 1\nseed = 1\n")
    csv_path = tmp_path / "paths.csv"
    monkeypatch.setattr(
        sys,
        "argv",
        ["run_exits.py", "--config", str(config), "--output-csv", str(csv_path), "--log-level", "ERROR"],
    )
    assert run_exits.main() == 0
    segments = io.read_segments_csv(csv_path)
    assert sum(s.has_exited for s in segments) == 7


def test_run_rejects_bad_configuration(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(
        sys,
        "argv",
        ["run_exits.py", "--step-size", "-1", "--output-csv", str(tmp_path / "x.csv")],
    )
    assert run_exits.main() == 2
    assert "step_size" in capsys.readouterr().err
    assert not (tmp_path / "x.csv").exists()


def test_run_reports_missing_config(tmp_path, monkeypatch, capsys):
    csv_path = tmp_path / "x.csv"
    monkeypatch.setattr(
        sys,
        "argv",
        ["run_exits.py", "--config", str(tmp_path / "absent.toml"), "--output-csv", str(csv_path)],
    )
    assert run_exits.main() == 1
    assert "absent.toml" in capsys.readouterr().err
    assert not csv_path.exists()


@pytest.mark.parametrize(
    "name, content",
    [
        ("params.yaml", "max_global_exits: 5\n"),
        ("params.json", '{"domain_x": [0, "wide"]}'),
    ],
)
def test_run_rejects_unusable_config(tmp_path, monkeypatch, capsys, name, content):
    config = tmp_path / name
    config.write_text(content)
    csv_path = tmp_path / "x.csv"
    monkeypatch.setattr(
        sys,
        "argv",
        ["run_exits.py", "--config", str(config), "--output-csv", str(csv_path), "--log-level", "ERROR"],
    )
    assert run_exits.main() == 2
    assert "Error:" in capsys.readouterr().err
    assert not csv_path.exists()
