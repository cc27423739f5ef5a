"""Coverage workbook and JSON summary writer tests."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from openpyxl import load_workbook
from scenario_test_mapper.configuration import MatchingConfig
from scenario_test_mapper.coverage_classification import map_scenarios
from scenario_test_mapper.gap_analysis import ApiEndpoint, analyze_gaps
from scenario_test_mapper.matching_strategies import CandidateTest, Priority, Scenario
from scenario_test_mapper.results_writing import (
    COVERAGE_COLUMNS,
    COVERAGE_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    RunMetadata,
    write_coverage_workbook,
    write_summary_json,
)

_SCENARIOS = (
    Scenario(
        scenario_id="S1",
        description="Create user with valid data returns 201",
        api_endpoint="/api/users",
        http_method="POST",
        priority=Priority.P0,
    ),
    Scenario(scenario_id="S2", description="Export invoices as PDF", priority=Priority.P2),
)
_TESTS = (
    CandidateTest(
        test_id="T1",
        description="should create user with valid data and return 201",
        file_path="UserControllerTest.java",
    ),
    CandidateTest(test_id="T2", description="deletes an order", file_path="OrderTest.java"),
)


def _analysis():
    mappings = map_scenarios(_SCENARIOS, _TESTS, MatchingConfig())
    analysis = analyze_gaps(
        mappings,
        _TESTS,
        apis=[ApiEndpoint(endpoint="/api/payments", method="POST")],
        suggested_scenarios=[Scenario(scenario_id="AI-1", description="refund payment twice")],
    )
    return mappings, analysis


def _metadata(tmp_path: Path) -> RunMetadata:
    return RunMetadata(
        run_start=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
        scenarios_path=tmp_path / "scenarios.yaml",
        tests_path=tmp_path / "tests.yaml",
        config_path=None,
        output_path=tmp_path / "report.xlsx",
        strategies=("fuzzy", "keyword"),
    )


def test_workbook_contains_one_coverage_row_per_scenario(tmp_path: Path) -> None:
    mappings, analysis = _analysis()
    output_path = tmp_path / "nested" / "report.xlsx"

    write_coverage_workbook(output_path, mappings, analysis, _metadata(tmp_path))

    workbook = load_workbook(output_path)
    assert workbook.sheetnames == [
        COVERAGE_SHEET_NAME,
        "ApiCoverage",
        "Gaps",
        "Orphans",
        "Completeness",
        RUN_INFO_SHEET_NAME,
    ]
    sheet = workbook[COVERAGE_SHEET_NAME]
    header = [sheet.cell(row=1, column=col).value for col in range(1, len(COVERAGE_COLUMNS) + 1)]
    assert header == list(COVERAGE_COLUMNS)
    assert sheet.max_row == 3
    assert sheet.cell(row=2, column=1).value == "S1"
    assert sheet.cell(row=2, column=3).value == "POST /api/users"
    assert sheet.cell(row=2, column=6).value == "Partially Covered"
    assert sheet.cell(row=2, column=8).value == "T1"
    assert sheet.cell(row=3, column=3).value == "UNSPECIFIED"
    assert sheet.cell(row=3, column=6).value == "Not Covered"


def test_workbook_lists_gaps_orphans_and_run_info(tmp_path: Path) -> None:
    mappings, analysis = _analysis()
    output_path = tmp_path / "report.xlsx"

    write_coverage_workbook(output_path, mappings, analysis, _metadata(tmp_path))

    workbook = load_workbook(output_path)
    gaps = workbook["Gaps"]
    assert [gaps.cell(row=row, column=1).value for row in (2, 3)] == ["S1", "S2"]
    orphans = workbook["Orphans"]
    orphan_rows = [
        (orphans.cell(row=row, column=1).value, orphans.cell(row=row, column=2).value)
        for row in range(2, orphans.max_row + 1)
    ]
    assert orphan_rows == [("test", "T2"), ("api", "POST /api/payments")]
    run_info_sheet = workbook[RUN_INFO_SHEET_NAME]
    run_info = {
        run_info_sheet.cell(row=row, column=1).value: run_info_sheet.cell(row=row, column=2).value
        for row in range(1, run_info_sheet.max_row + 1)
    }
    assert run_info["run_start"] == "2024-05-01T12:00:00+00:00"
    assert run_info["total_scenarios"] == 2
    assert run_info["not_covered"] == 1
    assert run_info["orphan_tests"] == 1
    assert run_info["orphan_apis"] == 1
    assert run_info["strategies"] == "fuzzy, keyword"


def test_summary_json_uses_camel_case_shapes(tmp_path: Path) -> None:
    mappings, analysis = _analysis()
    output_path = tmp_path / "report.json"

    write_summary_json(output_path, mappings, analysis, _metadata(tmp_path))

    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["summary"]["totalScenarios"] == 2
    assert payload["summary"]["gapsByPriority"] == {"P0": 1, "P1": 0, "P2": 1, "P3": 0}
    first_mapping = payload["mappings"][0]
    assert first_mapping["scenarioId"] == "S1"
    assert first_mapping["coverageStatus"] == "Partially Covered"
    assert first_mapping["matchedTests"][0]["testId"] == "T1"
    assert first_mapping["matchedTests"][0]["strategy"] == "fuzzy"
    assert first_mapping["matchedTests"][0]["assisted"] is False
    gap_analysis = payload["gapAnalysis"]
    assert [orphan["testId"] for orphan in gap_analysis["orphanTests"]] == ["T2"]
    assert gap_analysis["orphanTests"][0]["subtype"] == "Business Logic Test"
    assert gap_analysis["orphanApis"][0]["riskLevel"] == "Critical"
    assert gap_analysis["completenessGaps"][0]["scenarioId"] == "AI-1"
    assert "1 P0 scenario(s) without full test coverage" in gap_analysis["criticalIssues"]
    assert payload["runInfo"]["configPath"] is None
