"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from scenario_test_mapper.configuration.runtime_settings import Configuration
from scenario_test_mapper.coverage_classification.mapping_outcomes import ScenarioMapping
from scenario_test_mapper.gap_analysis import ApiEndpoint, CoverageSummary, GapAnalysisResult
from scenario_test_mapper.matching_strategies.matching_models import CandidateTest, Scenario


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one analysis run."""

    scenarios_path: str
    tests_path: str
    config_path: str | None = None
    apis_path: str | None = None
    ai_scenarios_path: str | None = None
    output_dir: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    workbook_path: Path
    json_path: Path
    summary: CoverageSummary
    mappings: tuple[ScenarioMapping, ...]
    gap_analysis: GapAnalysisResult


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded inputs required during run execution."""

    configuration: Configuration
    scenarios: tuple[Scenario, ...]
    tests: tuple[CandidateTest, ...]
    apis: tuple[ApiEndpoint, ...]
    suggested_scenarios: tuple[Scenario, ...]
