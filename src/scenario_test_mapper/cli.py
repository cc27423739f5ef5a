"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from scenario_test_mapper.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from scenario_test_mapper.run_execution import (
    RunExecutionError,
    RunRequest,
    analyze_mappings,
    execute_coverage_analysis_run,
    load_run_artifacts,
)


class CliError(Exception):
    """Custom CLI error."""


_scenarios_option = click.option(
    "--scenarios",
    "scenarios_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the baseline scenario file (YAML, JSON or XLSX)",
)
_tests_option = click.option(
    "--tests",
    "tests_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the candidate test inventory (YAML or JSON)",
)
_config_option = click.option(
    "--config",
    "config_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the matching configuration; defaults apply when the file is missing",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="scenario-test-mapper")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable INFO logging.")
def cli(verbose: bool) -> None:
    """Map test scenarios onto unit tests and report coverage gaps."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML matching configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML matching configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="analyze")
@_scenarios_option
@_tests_option
@_config_option
@click.option(
    "--apis",
    "apis_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional API inventory used to detect orphan APIs",
)
@click.option(
    "--ai-scenarios",
    "ai_scenarios_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional suggested scenario set cross-checked against the baseline",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for storing the coverage report",
)
@click.option(
    "--min-coverage",
    "min_coverage",
    required=False,
    type=click.FloatRange(0, 100),
    help="Fail with exit code 1 when coverage percent is below this value",
)
# pylint: disable-next=too-many-arguments
def analyze(
    scenarios_path: str,
    tests_path: str,
    config_path: str,
    apis_path: str | None,
    ai_scenarios_path: str | None,
    output_dir: str | None,
    min_coverage: float | None,
) -> None:
    """Run the full coverage analysis and write the XLSX and JSON reports."""
    try:
        outcome = execute_coverage_analysis_run(
            RunRequest(
                scenarios_path=scenarios_path,
                tests_path=tests_path,
                config_path=config_path,
                apis_path=apis_path,
                ai_scenarios_path=ai_scenarios_path,
                output_dir=output_dir,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.workbook_path))
    click.echo(str(outcome.json_path))
    summary = outcome.summary
    click.echo(
        f"coverage {summary.coverage_percent:.1f}%: "
        f"{summary.fully_covered} fully, {summary.partially_covered} partially, "
        f"{summary.not_covered} not, {summary.over_covered} over covered "
        f"of {summary.total_scenarios} scenario(s)"
    )
    if min_coverage is not None and summary.coverage_percent < min_coverage:
        raise CliError(
            f"Coverage {summary.coverage_percent:.1f}% is below the required {min_coverage:.1f}%."
        )


@cli.command(name="match")
@_scenarios_option
@_tests_option
@_config_option
def match(scenarios_path: str, tests_path: str, config_path: str) -> None:
    """Print the matched tests of every scenario without writing files."""
    try:
        artifacts = load_run_artifacts(
            RunRequest(
                scenarios_path=scenarios_path,
                tests_path=tests_path,
                config_path=config_path,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for mapping in analyze_mappings(artifacts):
        test_ids = ",".join(test.test_id for test in mapping.matched_tests)
        click.echo(
            f"{mapping.scenario.scenario_id}\t{mapping.coverage_status.value}\t"
            f"{mapping.match_score:.3f}\t{test_ids}"
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
