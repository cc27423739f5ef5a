"""Run execution domain exports."""

from .coverage_run_use_case import (
    RunExecutionError,
    analyze_mappings,
    execute_coverage_analysis_run,
    load_run_artifacts,
)
from .run_contracts import RunArtifacts, RunOutcome, RunRequest

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunArtifacts",
    "RunExecutionError",
    "analyze_mappings",
    "execute_coverage_analysis_run",
    "load_run_artifacts",
]
