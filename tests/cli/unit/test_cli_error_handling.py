"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from scenario_test_mapper.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["analyze", "--tests", "tests.yaml"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--scenarios" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["match", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_input_file_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    exit_code = main(
        [
            "match",
            "--scenarios",
            str(tmp_path / "missing.yaml"),
            "--tests",
            str(tmp_path / "tests.yaml"),
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "not found" in captured.err
    assert "Traceback" not in captured.err
