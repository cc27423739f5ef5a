"""Gap and orphan analysis exports."""

from .completeness import CompletenessGap, find_completeness_gaps, infer_priority
from .coverage_rollup import (
    ApiCoverage,
    CoverageGap,
    CoverageSummary,
    collect_gaps,
    summarize_by_api,
    summarize_coverage,
)
from .gap_report import GapAnalysisResult, analyze_gaps
from .orphan_apis import ApiEndpoint, OrphanApi, find_orphan_apis
from .orphan_tests import (
    OrphanAction,
    OrphanAnalysis,
    OrphanCategory,
    OrphanGroup,
    OrphanType,
    analyze_orphans,
    categorize_orphan_test,
    find_orphan_tests,
    suggest_scenario_id,
)

__all__ = [
    "CompletenessGap",
    "find_completeness_gaps",
    "infer_priority",
    "ApiCoverage",
    "CoverageGap",
    "CoverageSummary",
    "collect_gaps",
    "summarize_by_api",
    "summarize_coverage",
    "GapAnalysisResult",
    "analyze_gaps",
    "ApiEndpoint",
    "OrphanApi",
    "find_orphan_apis",
    "OrphanAction",
    "OrphanAnalysis",
    "OrphanCategory",
    "OrphanGroup",
    "OrphanType",
    "analyze_orphans",
    "categorize_orphan_test",
    "find_orphan_tests",
    "suggest_scenario_id",
]
