"""CLI smoke tests."""

from click.testing import CliRunner
from scenario_test_mapper.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "analyze" in result.output
    assert "match" in result.output


def test_analyze_help_lists_optional_inputs() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["analyze", "--help"])

    assert result.exit_code == 0
    for option in ("--scenarios", "--tests", "--config", "--apis", "--ai-scenarios"):
        assert option in result.output
