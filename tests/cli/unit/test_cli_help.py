"""CLI smoke tests."""

from async_sequence_tester.cli import cli
from click.testing import CliRunner


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "run" in result.output


def test_run_help_lists_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["run", "-h"])

    assert result.exit_code == 0
    assert "--scenarios" in result.output
    assert "--config" in result.output
    assert "--output-dir" in result.output
