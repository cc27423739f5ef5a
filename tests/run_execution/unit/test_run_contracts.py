"""Tests for run execution domain entities."""

from __future__ import annotations

from scenario_test_mapper.configuration import default_configuration
from scenario_test_mapper.matching_strategies import CandidateTest, Scenario
from scenario_test_mapper.run_execution.run_contracts import RunArtifacts, RunRequest


def test_run_request_makes_optional_inputs_optional() -> None:
    request = RunRequest(scenarios_path="scenarios.yaml", tests_path="tests.yaml")

    assert request.config_path is None
    assert request.apis_path is None
    assert request.ai_scenarios_path is None
    assert request.output_dir is None


def test_run_artifacts_groups_configuration_and_inputs() -> None:
    artifacts = RunArtifacts(
        configuration=default_configuration(),
        scenarios=(Scenario(scenario_id="S1", description="Create user"),),
        tests=(CandidateTest(test_id="T1", description="creates user"),),
        apis=(),
        suggested_scenarios=(),
    )

    assert len(artifacts.scenarios) == 1
    assert len(artifacts.tests) == 1
    assert artifacts.configuration.path is None
