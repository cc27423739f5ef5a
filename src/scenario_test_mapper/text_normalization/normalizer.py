"""Free-text canonicalization into comparable strings and token sequences."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .token_cache import NullTokenCache, TokenCache

_NON_WORD_PATTERN = re.compile(r"[^\w\s]")
_WHITESPACE_PATTERN = re.compile(r"\s+")

# Checked in order; only the first matching suffix is removed.
_STEM_SUFFIXES: tuple[str, ...] = ("ing", "ed", "es", "s", "er", "ly")

DEFAULT_STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "is", "are", "was", "were",
        "be", "been", "being", "have", "has", "had", "do", "does", "did",
        "will", "would", "should", "could", "may", "might", "must",
        "can", "of", "to", "in", "for", "on", "at", "by", "with",
        "from", "as", "into", "through", "during", "before", "after",
        "above", "below", "between", "under", "over", "again", "then",
        "once", "here", "there", "when", "where", "why", "how", "all",
        "each", "every", "both", "few", "more", "most", "other", "some",
        "such", "no", "not", "only", "own", "same", "so", "than", "too",
        "very", "that", "this", "these", "those", "what", "which", "who",
        "whom", "whose", "if", "because", "while", "up", "down",
        "out", "off", "about",
    }
)  # fmt: skip


@dataclass(frozen=True)
class NormalizationOptions:
    """Switches controlling how free text is canonicalized."""

    lowercase: bool = True
    remove_punctuation: bool = True
    collapse_whitespace: bool = True
    remove_stop_words: bool = True
    stemming: bool = False
    stop_words: frozenset[str] = DEFAULT_STOP_WORDS


def normalize(text: str | None, options: NormalizationOptions) -> str:
    """Return the canonical string form of ``text``; empty input yields ``""``."""
    if not text:
        return ""
    normalized = text
    if options.lowercase:
        normalized = normalized.lower()
    if options.remove_punctuation:
        normalized = _NON_WORD_PATTERN.sub(" ", normalized)
    if options.collapse_whitespace:
        normalized = _WHITESPACE_PATTERN.sub(" ", normalized).strip()
    return normalized


def tokenize(text: str | None, options: NormalizationOptions) -> tuple[str, ...]:
    """Split normalized text on whitespace, then drop stop words and stem as configured."""
    normalized = normalize(text, options)
    tokens: Iterable[str] = (token for token in normalized.split() if token)
    if options.remove_stop_words:
        tokens = (token for token in tokens if token not in options.stop_words)
    if options.stemming:
        tokens = (stem(token) for token in tokens)
    return tuple(token for token in tokens if token)


def stem(word: str) -> str:
    """Strip one trailing suffix; deliberately crude, not linguistic stemming."""
    for suffix in _STEM_SUFFIXES:
        if word.endswith(suffix) and len(word) > len(suffix):
            return word[: -len(suffix)]
    return word


class TextNormalizer:
    """Options-bound normalizer that memoizes results through an injected cache."""

    def __init__(
        self,
        options: NormalizationOptions | None = None,
        cache: TokenCache | None = None,
    ) -> None:
        self.options = options or NormalizationOptions()
        self._cache = cache if cache is not None else NullTokenCache()

    def normalize(self, text: str | None) -> str:
        if not text:
            return ""
        key = ("normalize", self.options, text)
        cached = self._cache.get(key)
        if isinstance(cached, str):
            return cached
        normalized = normalize(text, self.options)
        self._cache.put(key, normalized)
        return normalized

    def tokenize(self, text: str | None) -> tuple[str, ...]:
        if not text:
            return ()
        key = ("tokenize", self.options, text)
        cached = self._cache.get(key)
        if isinstance(cached, tuple):
            return cached
        tokens = tokenize(text, self.options)
        self._cache.put(key, tokens)
        return tokens
