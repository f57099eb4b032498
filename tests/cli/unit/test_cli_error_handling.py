"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from async_sequence_tester.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--scenarios" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["generate-config", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_scenario_file_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    exit_code = main(["run", "--scenarios", str(tmp_path / "missing.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Scenario file not found" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_configuration_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    scenario_path = tmp_path / "scenarios.yaml"
    scenario_path.write_text("scenarios: [{id: a, expect: []}]\n", encoding="utf-8")
    config_path = tmp_path / "config.yaml"
    config_path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")

    exit_code = main(["run", "--scenarios", str(scenario_path), "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "logging.level must be one of" in captured.err


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
