import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
from prometheus_client import REGISTRY

from haiku_finder.core.syllable_estimator import (
    DIPHTHONG_PATTERNS,
    TRIPHTHONG_PATTERNS,
    SyllableEstimator,
    heuristic_syllable_count,
    reduce_clusters,
    remove_first_match,
)


@pytest.mark.parametrize(
    "word, expected",
    [
        ("rain", 1),
        ("table", 2),
        ("happy", 2),
        ("rhythm", 1),
        ("water", 1),
        ("studies", 2),
        ("beautiful", 4),
        # Spellings the heuristic undercounts; kept as-is.
        ("cake", 0),
        ("the", 0),
        ("night", 0),
        ("", 0),
    ],
)
def test_heuristic_syllable_count(word, expected):
    assert heuristic_syllable_count(word) == expected


def test_remove_first_match_only_removes_leftmost_match():
    word, found = remove_first_match("seesee", DIPHTHONG_PATTERNS[0])

    assert found is True
    assert word == "ssee"


def test_remove_first_match_reports_miss():
    assert remove_first_match("pond", DIPHTHONG_PATTERNS[0]) == ("pond", False)


def test_reduce_clusters_repeats_patterns_on_shrinking_word():
    # "ou" is tried twice: once in the third pass and again in the last one.
    assert reduce_clusters("youou", DIPHTHONG_PATTERNS) == ("y", 2)


def test_reduce_clusters_later_passes_see_earlier_removals():
    # "aye" consumes the "ay" the fourth triphthong pass would have matched.
    assert reduce_clusters("aye", TRIPHTHONG_PATTERNS) == ("", 1)


def test_dictionary_entry_takes_precedence_over_heuristic():
    estimator = SyllableEstimator({"running": 2, "cake": 1})

    assert estimator.count("running") == 2
    assert estimator.count("Cake!") == 1


def test_ed_inflection_returns_root_count():
    estimator = SyllableEstimator({"jump": 1})

    assert estimator.count("jumped") == 1
    assert "jumped" not in estimator


def test_es_inflection_adds_one_syllable():
    estimator = SyllableEstimator({"box": 1})

    assert estimator.count("boxes") == 2


def test_plural_returns_singular_count():
    estimator = SyllableEstimator({"jump": 1})

    assert estimator.count("jumps") == 1
    assert len(estimator) == 1


def test_inflection_uses_literal_prefix_only():
    estimator = SyllableEstimator({"study": 2})

    # "studies" minus "es" is "studi", not "study", so the heuristic runs.
    assert estimator.count("studies") == 2
    assert estimator.cached_count("studies") == 2
    assert estimator.cached_count("study") == 2


def test_two_letter_root_with_other_ending_falls_through():
    estimator = SyllableEstimator({"bo": 5})

    assert estimator.count("bobs") == 1


def test_heuristic_results_are_memoised_and_stable():
    estimator = SyllableEstimator()

    first = estimator.count("cake")
    assert estimator.cached_count("cake") == first == 0

    assert estimator.seed({"cake": 1}) == 0
    assert estimator.count("cake") == 0
    assert estimator.count("cake") == first


def test_count_is_idempotent_for_raw_tokens():
    estimator = SyllableEstimator({"silence": 2})

    for token in ["Silence.", "rhythm", "well-known", "3rd", "", "!!!"]:
        assert estimator.count(token) == estimator.count(token)


def test_malformed_tokens_degrade_without_raising():
    estimator = SyllableEstimator()

    assert estimator.count("") == 0
    assert estimator.count("?!") == 0
    assert isinstance(estimator.count("12345"), int)


def test_seed_normalizes_keys_and_skips_existing_entries():
    estimator = SyllableEstimator([("Pond", 1)])

    added = estimator.seed([("POND", 3), ("frog!", 1), ("'", 2)])

    assert added == 1
    assert estimator.cached_count("pond") == 1
    assert estimator.cached_count("frog") == 1
    assert "pond" in estimator
    assert 42 not in estimator


def test_cache_view_is_read_only():
    estimator = SyllableEstimator({"pond": 1})

    with pytest.raises(TypeError):
        estimator.cache["pond"] = 4  # type: ignore[index]


def test_shared_estimator_is_consistent_across_threads():
    estimator = SyllableEstimator()
    words = ["beautiful", "water", "rhythm", "table", "happy"] * 40

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(estimator.count, words))

    expected = {word: heuristic_syllable_count(word) for word in set(words)}
    assert results == [expected[word] for word in words]
    assert len(estimator) == len(expected)


def test_malformed_seed_entries_are_skipped_and_logged(caplog):
    caplog.set_level(logging.WARNING, logger="haiku_finder.core.syllable_estimator")

    estimator = SyllableEstimator({"pond": "one", "frog": 1, "leaf": None, "flag": True})
    added = estimator.seed([("splash",), "xy", None, ("rain", 1)])

    assert added == 1
    assert estimator.cached_count("pond") is None
    assert estimator.cached_count("frog") == 1
    assert estimator.cached_count("rain") == 1
    assert estimator.count("pond") == 1
    warnings = [r for r in caplog.records if "malformed dictionary entry" in r.message]
    assert len(warnings) == 6


@pytest.mark.parametrize("count", [0, -2])
def test_non_positive_seed_counts_are_rejected(count):
    estimator = SyllableEstimator({"rain": count})

    assert "rain" not in estimator
    assert estimator.count("rain") == 1


def _lookups(source):
    value = REGISTRY.get_sample_value(
        "haiku_finder_syllable_lookups_total", {"source": source}
    )
    return value or 0.0


def test_lookup_metric_separates_seeded_words_from_memoised_estimates():
    estimator = SyllableEstimator({"pond": 1})
    before = {source: _lookups(source) for source in ("dictionary", "cache", "heuristic")}

    estimator.count("pond")
    estimator.count("rhythm")
    estimator.count("rhythm")

    assert _lookups("dictionary") - before["dictionary"] == 1
    assert _lookups("heuristic") - before["heuristic"] == 1
    assert _lookups("cache") - before["cache"] == 1
