"""Coverage workbook and JSON summary writer service."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from scenario_test_mapper.coverage_classification import ScenarioMapping
from scenario_test_mapper.gap_analysis import GapAnalysisResult

from .report_models import RunMetadata

COVERAGE_SHEET_NAME = "Coverage"
API_COVERAGE_SHEET_NAME = "ApiCoverage"
GAPS_SHEET_NAME = "Gaps"
ORPHANS_SHEET_NAME = "Orphans"
COMPLETENESS_SHEET_NAME = "Completeness"
RUN_INFO_SHEET_NAME = "RunInfo"

COVERAGE_COLUMNS: tuple[str, ...] = (
    "Scenario ID",
    "Description",
    "API",
    "Priority",
    "Risk Level",
    "Status",
    "Score",
    "Matched Tests",
    "Gap Explanation",
    "Recommendations",
)
_API_COVERAGE_COLUMNS = (
    "API",
    "Scenarios",
    "Fully Covered",
    "Partially Covered",
    "Not Covered",
    "Over Covered",
    "Coverage %",
)
_GAP_COLUMNS = ("Scenario ID", "API", "Status", "Priority", "Risk Level", "Reason", "Actions")
_ORPHAN_COLUMNS = ("Kind", "Item", "Type", "Subtype", "Priority", "Action", "Reason")
_COMPLETENESS_COLUMNS = ("Scenario ID", "Description", "API", "Priority", "Has Unit Test")


def write_coverage_workbook(
    output_path: Path | str,
    mappings: Sequence[ScenarioMapping],
    analysis: GapAnalysisResult,
    run_metadata: RunMetadata,
) -> None:
    """Write the coverage report workbook."""
    workbook = Workbook()
    coverage_sheet = workbook.active
    coverage_sheet.title = COVERAGE_SHEET_NAME
    _write_table(coverage_sheet, COVERAGE_COLUMNS, [_coverage_row(item) for item in mappings])
    _write_table(
        workbook.create_sheet(API_COVERAGE_SHEET_NAME),
        _API_COVERAGE_COLUMNS,
        [
            (
                api.api_key,
                api.summary.total_scenarios,
                api.summary.fully_covered,
                api.summary.partially_covered,
                api.summary.not_covered,
                api.summary.over_covered,
                round(api.summary.coverage_percent, 1),
            )
            for api in analysis.api_coverage
        ],
    )
    _write_table(
        workbook.create_sheet(GAPS_SHEET_NAME),
        _GAP_COLUMNS,
        [
            (
                gap.scenario_id,
                gap.api_key,
                gap.status.value,
                gap.priority.value,
                gap.risk_level.value,
                gap.reason,
                "\n".join(gap.recommendations),
            )
            for gap in analysis.gaps
        ],
    )
    _write_table(workbook.create_sheet(ORPHANS_SHEET_NAME), _ORPHAN_COLUMNS, _orphan_rows(analysis))
    _write_table(
        workbook.create_sheet(COMPLETENESS_SHEET_NAME),
        _COMPLETENESS_COLUMNS,
        [
            (
                gap.suggested.scenario_id,
                gap.suggested.description,
                gap.api_key,
                gap.priority.value,
                "yes" if gap.has_unit_test else "no",
            )
            for gap in analysis.completeness_gaps
        ],
    )
    _write_run_info_sheet(workbook.create_sheet(RUN_INFO_SHEET_NAME), analysis, run_metadata)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)


def write_summary_json(
    output_path: Path | str,
    mappings: Sequence[ScenarioMapping],
    analysis: GapAnalysisResult,
    run_metadata: RunMetadata,
) -> None:
    """Write mappings, the coverage summary and the gap analysis as JSON."""
    payload = {
        "runInfo": {
            "runStart": run_metadata.run_start.isoformat(),
            "scenariosPath": str(run_metadata.scenarios_path),
            "testsPath": str(run_metadata.tests_path),
            "configPath": str(run_metadata.config_path) if run_metadata.config_path else None,
            "strategies": list(run_metadata.strategies),
        },
        "summary": analysis.summary.to_dict(),
        "mappings": [_mapping_payload(mapping) for mapping in mappings],
        "gapAnalysis": _gap_analysis_payload(analysis),
    }
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _coverage_row(mapping: ScenarioMapping) -> tuple[Any, ...]:
    scenario = mapping.scenario
    return (
        scenario.scenario_id,
        scenario.description,
        scenario.api_key,
        scenario.priority.value,
        scenario.risk_level.value,
        mapping.coverage_status.value,
        round(mapping.match_score, 3),
        ", ".join(test.test_id for test in mapping.matched_tests),
        mapping.gap_explanation,
        "\n".join(mapping.recommendations),
    )


def _orphan_rows(analysis: GapAnalysisResult) -> list[tuple[Any, ...]]:
    rows: list[tuple[Any, ...]] = [
        (
            "test",
            test.test_id,
            category.type.value,
            category.subtype,
            category.priority.value,
            category.action.value,
            category.reason,
        )
        for test, category in analysis.orphan_tests
    ]
    rows.extend(
        (
            "api",
            orphan.api.api_key,
            "business",
            "Orphan API",
            orphan.risk_level.value,
            "add-scenario",
            orphan.reason,
        )
        for orphan in analysis.orphan_apis
    )
    return rows


def _write_table(sheet, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    for index, column_name in enumerate(columns, start=1):
        cell = sheet.cell(row=1, column=index, value=column_name)
        cell.style = "Headline 1"
    for row_number, row in enumerate(rows, start=2):
        for index, value in enumerate(row, start=1):
            sheet.cell(row=row_number, column=index, value=value)
    for index, column_name in enumerate(columns, start=1):
        longest = max(
            [len(column_name)] + [len(str(row[index - 1])) for row in rows if row[index - 1]]
        )
        sheet.column_dimensions[get_column_letter(index)].width = max(12, min(longest + 4, 60))
    sheet.freeze_panes = "A2"


def _write_run_info_sheet(sheet, analysis: GapAnalysisResult, run_metadata: RunMetadata) -> None:
    summary = analysis.summary
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("scenarios_path", str(run_metadata.scenarios_path)),
        ("tests_path", str(run_metadata.tests_path)),
        ("config_path", str(run_metadata.config_path) if run_metadata.config_path else ""),
        ("output_path", str(run_metadata.output_path)),
        ("strategies", ", ".join(run_metadata.strategies)),
        ("total_scenarios", summary.total_scenarios),
        ("fully_covered", summary.fully_covered),
        ("partially_covered", summary.partially_covered),
        ("not_covered", summary.not_covered),
        ("over_covered", summary.over_covered),
        ("coverage_percent", round(summary.coverage_percent, 1)),
        ("orphan_tests", analysis.orphan_analysis.total_orphans),
        ("orphan_apis", len(analysis.orphan_apis)),
        ("critical_issues", "\n".join(analysis.critical_issues)),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
    sheet.column_dimensions["A"].width = 20
    sheet.column_dimensions["B"].width = 60


def _mapping_payload(mapping: ScenarioMapping) -> dict[str, Any]:
    return {
        "scenarioId": mapping.scenario.scenario_id,
        "api": mapping.scenario.api_key,
        "coverageStatus": mapping.coverage_status.value,
        "matchScore": mapping.match_score,
        "gapExplanation": mapping.gap_explanation,
        "recommendations": list(mapping.recommendations),
        "matchedTests": [
            {
                "testId": detail.test.test_id,
                "file": detail.test.file_path,
                "strategy": detail.strategy.value,
                "score": detail.score,
                "confidence": detail.confidence,
                "explanation": detail.explanation,
                "assisted": detail.assisted,
            }
            for detail in mapping.match_details
        ],
    }


def _gap_analysis_payload(analysis: GapAnalysisResult) -> dict[str, Any]:
    orphan_analysis = analysis.orphan_analysis
    return {
        "apiCoverage": [
            {"api": api.api_key, "scenarioIds": list(api.scenario_ids), **api.summary.to_dict()}
            for api in analysis.api_coverage
        ],
        "gaps": [
            {
                "scenarioId": gap.scenario_id,
                "api": gap.api_key,
                "status": gap.status.value,
                "priority": gap.priority.value,
                "riskLevel": gap.risk_level.value,
                "reason": gap.reason,
                "recommendations": list(gap.recommendations),
            }
            for gap in analysis.gaps
        ],
        "orphanTests": [
            {
                "testId": test.test_id,
                "type": category.type.value,
                "subtype": category.subtype,
                "priority": category.priority.value,
                "action": category.action.value,
                "reason": category.reason,
                "suggestedScenarioId": category.suggested_scenario_id,
            }
            for test, category in analysis.orphan_tests
        ],
        "orphanAnalysis": {
            "totalOrphans": orphan_analysis.total_orphans,
            "technicalCount": orphan_analysis.technical_count,
            "businessCount": orphan_analysis.business_count,
            "actionRequiredCount": orphan_analysis.action_required_count,
            "recommendations": list(orphan_analysis.recommendations),
        },
        "orphanApis": [
            {
                "api": orphan.api.api_key,
                "riskLevel": orphan.risk_level.value,
                "reason": orphan.reason,
                "recommendations": list(orphan.recommendations),
            }
            for orphan in analysis.orphan_apis
        ],
        "completenessGaps": [
            {
                "scenarioId": gap.suggested.scenario_id,
                "description": gap.suggested.description,
                "api": gap.api_key,
                "priority": gap.priority.value,
                "hasUnitTest": gap.has_unit_test,
                "reason": gap.reason,
            }
            for gap in analysis.completeness_gaps
        ],
        "criticalIssues": list(analysis.critical_issues),
    }
