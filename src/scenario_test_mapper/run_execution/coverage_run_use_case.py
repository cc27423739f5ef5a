"""Coverage analysis run use-case service."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from scenario_test_mapper.configuration import (
    Configuration,
    ConfigurationError,
    default_configuration,
    load_configuration,
)
from scenario_test_mapper.coverage_classification import (
    AssistedMatcher,
    ScenarioMapping,
    map_scenarios,
)
from scenario_test_mapper.gap_analysis import analyze_gaps
from scenario_test_mapper.results_writing import (
    RunMetadata,
    write_coverage_workbook,
    write_summary_json,
)
from scenario_test_mapper.scenario_ingestion import (
    ScenarioLoadError,
    load_api_inventory,
    load_candidate_tests,
    load_scenarios,
    load_suggested_scenarios,
)

from .run_contracts import RunArtifacts, RunOutcome, RunRequest

LOGGER = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_coverage_analysis_run(
    request: RunRequest,
    *,
    assisted_matcher: AssistedMatcher | None = None,
) -> RunOutcome:
    """Execute one full coverage analysis run and return the run outcome."""
    run_start = datetime.now(UTC)
    artifacts = load_run_artifacts(request)
    mappings = tuple(analyze_mappings(artifacts, assisted_matcher=assisted_matcher))
    analysis = analyze_gaps(
        mappings,
        artifacts.tests,
        apis=artifacts.apis,
        suggested_scenarios=artifacts.suggested_scenarios,
    )

    workbook_path = _resolve_output_path(request.scenarios_path, request.output_dir, run_start)
    json_path = workbook_path.with_suffix(".json")
    configuration = artifacts.configuration
    run_metadata = RunMetadata(
        run_start=run_start,
        scenarios_path=Path(request.scenarios_path).resolve(),
        tests_path=Path(request.tests_path).resolve(),
        config_path=configuration.path.resolve() if configuration.path else None,
        output_path=workbook_path.resolve(),
        strategies=tuple(strategy.value for strategy in configuration.matching.strategies),
    )
    try:
        write_coverage_workbook(workbook_path, mappings, analysis, run_metadata)
        write_summary_json(json_path, mappings, analysis, run_metadata)
    except OSError as exc:
        raise RunExecutionError(f"Failed to write results: {exc}") from exc
    LOGGER.info("Wrote coverage report %s", workbook_path)
    return RunOutcome(
        workbook_path=workbook_path.resolve(),
        json_path=json_path.resolve(),
        summary=analysis.summary,
        mappings=mappings,
        gap_analysis=analysis,
    )


def load_run_artifacts(request: RunRequest) -> RunArtifacts:
    """Load configuration and every input file named by the request."""
    try:
        configuration = _load_configuration(request.config_path)
        scenarios = load_scenarios(request.scenarios_path)
        tests = load_candidate_tests(request.tests_path)
        apis = load_api_inventory(request.apis_path) if request.apis_path else []
        suggested = (
            load_suggested_scenarios(request.ai_scenarios_path)
            if request.ai_scenarios_path
            else []
        )
    except (ConfigurationError, ScenarioLoadError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunArtifacts(
        configuration=configuration,
        scenarios=tuple(scenarios),
        tests=tuple(tests),
        apis=tuple(apis),
        suggested_scenarios=tuple(suggested),
    )


def analyze_mappings(
    artifacts: RunArtifacts, *, assisted_matcher: AssistedMatcher | None = None
) -> list[ScenarioMapping]:
    """Map the loaded scenarios onto the loaded tests."""
    configuration = artifacts.configuration
    return map_scenarios(
        artifacts.scenarios,
        artifacts.tests,
        configuration.matching,
        parallelism=configuration.analysis.parallelism,
        assisted_matcher=assisted_matcher,
    )


def _load_configuration(config_path: str | None) -> Configuration:
    if config_path is None or not Path(config_path).exists():
        if config_path is not None:
            LOGGER.info("Configuration file %s not found; using defaults", config_path)
        return default_configuration()
    return load_configuration(config_path)


def _resolve_output_path(scenarios_path: str, output_dir: str | None, run_start: datetime) -> Path:
    scenarios_file = Path(scenarios_path)
    destination = Path(output_dir) if output_dir else scenarios_file.parent
    timestamp = run_start.strftime("%Y%m%d-%H%M%S")
    return destination / f"{scenarios_file.stem}-coverage-{timestamp}.xlsx"
