"""Pluggable pattern engines for regex-style matching rules."""

from __future__ import annotations

import logging
import re
from typing import Protocol

LOGGER = logging.getLogger(__name__)


class Pattern(Protocol):
    """Compiled pattern that can be tested against text."""

    def matches(self, text: str) -> bool: ...


class PatternEngine(Protocol):
    """Compiles pattern sources; returns ``None`` for sources it cannot compile."""

    def compile(self, source: str) -> Pattern | None: ...


class _RegexPattern:
    def __init__(self, compiled: re.Pattern[str]) -> None:
        self._compiled = compiled

    def matches(self, text: str) -> bool:
        return bool(text) and self._compiled.search(text) is not None


class RegexPatternEngine:
    """Case-insensitive engine backed by the ``re`` module."""

    def compile(self, source: str) -> Pattern | None:
        try:
            return _RegexPattern(re.compile(source, re.IGNORECASE))
        except re.error as exc:
            LOGGER.debug("Skipping invalid matching rule pattern %r: %s", source, exc)
            return None
