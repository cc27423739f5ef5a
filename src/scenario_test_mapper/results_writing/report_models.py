"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet and the JSON summary."""

    run_start: datetime
    scenarios_path: Path
    tests_path: Path
    config_path: Path | None
    output_path: Path
    strategies: tuple[str, ...]
