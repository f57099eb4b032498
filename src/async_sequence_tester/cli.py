"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from async_sequence_tester.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from async_sequence_tester.configuration.runtime_settings import DEFAULT_LOG_LEVEL
from async_sequence_tester.run_execution import (
    RunExecutionError,
    RunOutcome,
    RunRequest,
    execute_scenario_run,
)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="async-sequence-tester")
def cli() -> None:
    """Async sequence expectation tester utility."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="run")
@click.option(
    "--scenarios",
    "scenario_paths",
    required=True,
    multiple=True,
    type=click.Path(path_type=str),
    help="Path to a YAML scenario file (repeatable)",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML configuration file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for storing result workbooks",
)
@click.option(
    "--log-level",
    "log_level",
    required=False,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override the configured log level",
)
def run_scenarios(
    scenario_paths: tuple[str, ...],
    config_path: str | None,
    output_dir: str | None,
    log_level: str | None,
) -> None:
    """Validate the scenarios and write a results workbook."""
    _configure_logging(config_path, log_level)
    try:
        outcome = execute_scenario_run(
            RunRequest(
                scenario_paths=tuple(scenario_paths),
                config_path=config_path,
                output_dir=output_dir,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_path))
    if not outcome.succeeded:
        raise CliError(_summarize(outcome))


def _configure_logging(config_path: str | None, log_level: str | None) -> None:
    level = log_level.upper() if log_level else None
    if level is None and config_path:
        try:
            level = load_configuration(config_path).logging.level
        except ConfigurationError as exc:
            raise CliError(str(exc)) from exc
    logging.basicConfig(format=_LOG_FORMAT)
    logging.getLogger("async_sequence_tester").setLevel(level or DEFAULT_LOG_LEVEL)


def _summarize(outcome: RunOutcome) -> str:
    return (
        f"{outcome.failed} failed, {outcome.errored} errored, "
        f"{outcome.passed} passed, {outcome.skipped} skipped"
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
