"""
Tests for the GCD benchmark action.

**Purpose**: Run the action end to end on a handful of cases and verify it
writes both CSVs (or skips them with --no-save).
"""

import sys
from pathlib import Path

import pandas as pd

# Add project root to path so we can import actions module
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from actions.benchmark_gcd_algorithms import main


def test_benchmark_action_writes_results(tmp_path, capsys):
    exit_code = main([
        "--cases", "25",
        "--arity", "3",
        "--seed", "1",
        "--repeats", "1",
        "--output-dir", str(tmp_path),
    ])

    assert exit_code == 0
    cases = pd.read_csv(tmp_path / "gcd_benchmark_cases.csv")
    summary = pd.read_csv(tmp_path / "gcd_benchmark_summary.csv", index_col="method")
    assert len(cases) == 50
    assert set(summary.index) == {"euclidean", "stein"}
    assert "agree on every case" in capsys.readouterr().out


def test_benchmark_action_no_save(tmp_path):
    exit_code = main(["--cases", "5", "--seed", "2", "--output-dir", str(tmp_path), "--no-save"])

    assert exit_code == 0
    assert list(tmp_path.iterdir()) == []


def test_benchmark_action_uses_results_dir_from_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("GCD_BENCHMARK_RESULTS_DIR", str(tmp_path / "results"))

    assert main(["--cases", "3", "--seed", "4"]) == 0
    assert (tmp_path / "results" / "gcd_benchmark_cases.csv").exists()


def test_benchmark_action_rejects_invalid_range(tmp_path):
    assert main(["--low", "5", "--high", "1", "--output-dir", str(tmp_path)]) == 2


def test_benchmark_action_with_zero_cases(tmp_path, capsys):
    exit_code = main(["--cases", "0", "--output-dir", str(tmp_path), "--no-save"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Recorded 0 timings" in out
    assert "agree on every case" in out


def test_benchmark_action_reads_legacy_flag_from_settings(tmp_path, monkeypatch, capsys):
    """GCD_STEIN_LEGACY_UNIT_BRANCH is applied by the action, not by the engine."""
    monkeypatch.setenv("GCD_STEIN_LEGACY_UNIT_BRANCH", "true")

    assert main(["--cases", "200", "--low", "1", "--high", "4", "--seed", "3", "--no-save",
                 "--output-dir", str(tmp_path)]) == 0
    assert "cases disagree" in capsys.readouterr().out
