"""Text normalization and token cache tests."""

from __future__ import annotations

import pytest
from scenario_test_mapper.text_normalization import (
    InMemoryTokenCache,
    NormalizationOptions,
    NullTokenCache,
    TextNormalizer,
    normalize,
    stem,
    tokenize,
)

_OPTIONS = NormalizationOptions()


def test_normalize_lowercases_strips_punctuation_and_collapses_whitespace() -> None:
    options = NormalizationOptions()

    assert normalize("  Create a NEW   User!! ", options) == "create a new user"


def test_normalize_and_tokenize_treat_missing_text_as_empty() -> None:
    options = NormalizationOptions()

    assert normalize(None, options) == ""
    assert normalize("", options) == ""
    assert tokenize(None, options) == ()
    assert tokenize("the and of", options) == ()


def test_tokenize_drops_stop_words_but_keeps_order() -> None:
    tokens = tokenize("Create a new user with valid data", NormalizationOptions())

    assert tokens == ("create", "new", "user", "valid", "data")


def test_tokenize_respects_disabled_switches() -> None:
    options = NormalizationOptions(lowercase=False, remove_stop_words=False)

    assert tokenize("Get the User", options) == ("Get", "the", "User")


def test_custom_stop_words_replace_defaults() -> None:
    options = NormalizationOptions(stop_words=frozenset({"user"}))

    assert tokenize("the user", options) == ("the",)


def test_stem_removes_only_the_first_matching_suffix() -> None:
    assert stem("creating") == "creat"
    assert stem("boxes") == "box"
    assert stem("users") == "user"
    assert stem("ing") == "ing"
    assert stem("data") == "data"


def test_tokenize_applies_stemming_when_enabled() -> None:
    options = NormalizationOptions(stemming=True)

    assert tokenize("creating users", options) == ("creat", "user")


def test_text_normalizer_memoizes_through_injected_cache() -> None:
    cache = InMemoryTokenCache()
    normalizer = TextNormalizer(_OPTIONS, cache)

    first = normalizer.tokenize("Delete the order")
    second = normalizer.tokenize("Delete the order")

    assert first == second == ("delete", "order")
    assert cache.get(("tokenize", _OPTIONS, "Delete the order")) == ("delete", "order")
    assert len(cache) == 1


def test_text_normalizer_defaults_to_uncached_behaviour() -> None:
    normalizer = TextNormalizer()

    assert normalizer.normalize("Fetch, Orders") == "fetch orders"
    assert normalizer.tokenize("") == ()


def test_in_memory_cache_evicts_oldest_entry_when_full() -> None:
    cache = InMemoryTokenCache(max_entries=2)
    cache.put(("normalize", _OPTIONS, "a"), "a")
    cache.put(("normalize", _OPTIONS, "b"), "b")
    cache.put(("normalize", _OPTIONS, "c"), "c")

    assert len(cache) == 2
    assert cache.get(("normalize", _OPTIONS, "a")) is None
    assert cache.get(("normalize", _OPTIONS, "c")) == "c"


def test_in_memory_cache_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError):
        InMemoryTokenCache(max_entries=0)


def test_null_cache_never_stores_values() -> None:
    cache = NullTokenCache()
    cache.put(("normalize", _OPTIONS, "x"), "x")

    assert cache.get(("normalize", _OPTIONS, "x")) is None


def test_shared_cache_keeps_results_apart_per_normalization_options() -> None:
    cache = InMemoryTokenCache()
    stemming = TextNormalizer(NormalizationOptions(stemming=True), cache)
    plain = TextNormalizer(NormalizationOptions(), cache)

    assert stemming.tokenize("deleting accounts") == ("delet", "account")
    assert plain.tokenize("deleting accounts") == ("deleting", "accounts")
    assert len(cache) == 2
