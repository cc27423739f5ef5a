"""Matching domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scenario_test_mapper.configuration.runtime_settings import StrategyName


class Priority(str, Enum):
    """Scenario priority, P0 highest."""

    P0 = "P0"
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"


class RiskLevel(str, Enum):
    """Business risk attached to a scenario or finding."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class RuleKind(str, Enum):
    """Kinds of explicit matching rules a scenario may declare."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    KEYWORD = "keyword"
    REGEX = "regex"


@dataclass(frozen=True)
class MatchingRule:
    """Explicit matching hint authored alongside a scenario."""

    kind: RuleKind
    pattern: str
    threshold: float = 0.7


@dataclass(frozen=True)
class Scenario:  # pylint: disable=too-many-instance-attributes
    """Human-authored statement of expected API behavior."""

    scenario_id: str
    description: str
    api_endpoint: str | None = None
    http_method: str | None = None
    category: str = ""
    priority: Priority = Priority.P3
    risk_level: RiskLevel = RiskLevel.LOW
    matching_rules: tuple[MatchingRule, ...] = ()
    tags: tuple[str, ...] = ()
    acceptance_criteria: tuple[str, ...] = ()

    @property
    def api_key(self) -> str:
        """Grouping key combining HTTP method and endpoint."""
        return api_key_for(self.api_endpoint, self.http_method)


@dataclass(frozen=True)
class CandidateTest:
    """Automated test discovered in the codebase."""

    test_id: str
    description: str
    file_path: str = ""
    suite: str | None = None
    line_number: int | None = None


@dataclass(frozen=True)
class MatchDetail:
    """Scored pairing of one scenario with one candidate test."""

    scenario_id: str
    test: CandidateTest
    strategy: StrategyName
    score: float
    confidence: float
    explanation: str
    assisted: bool = False


UNSPECIFIED_API_KEY = "UNSPECIFIED"


def api_key_for(endpoint: str | None, method: str | None) -> str:
    """Build the ``"METHOD endpoint"`` key used to group scenarios per API."""
    if not endpoint or not endpoint.strip():
        return UNSPECIFIED_API_KEY
    if method and method.strip():
        return f"{method.strip().upper()} {endpoint.strip()}"
    return endpoint.strip()
