import random
import pytest
from patternscan.search.algorithms.rabinkarp import PatternSearcher, search_pattern
from patternscan.search.exceptions import InvalidInputError
from patternscan.search.rolling_hash import RollingHasher


def brute_force(text, pattern):
    m = len(pattern)
    return [i for i in range(len(text) - m + 1) if text[i:i + m] == pattern]


@pytest.mark.parametrize("text,pattern,expected", [
    ("abcabcabc", "abc", [0, 3, 6]),
    ("aaaa", "aa", [0, 1, 2]),
    ("hello", "xyz", []),
    ("hello", "o", [4]),
    (b"abcabcabc", b"bca", [1, 4]),
])
def test_known_scenarios(text, pattern, expected):
    assert search_pattern(text, pattern) == expected


def test_empty_pattern_raises():
    with pytest.raises(InvalidInputError):
        search_pattern("abc", "")


def test_empty_pattern_raises_on_empty_text():
    with pytest.raises(InvalidInputError):
        search_pattern("", "")


def test_pattern_longer_than_text():
    assert search_pattern("ab", "abc") == []
    assert search_pattern("", "a") == []


def test_pattern_as_long_as_text():
    assert search_pattern("abc", "abc") == [0]
    assert search_pattern("abc", "abd") == []


def test_mixed_text_and_bytes_raise():
    with pytest.raises(InvalidInputError):
        search_pattern("abc", b"a")
    with pytest.raises(InvalidInputError):
        search_pattern(b"abc", "a")


def test_forced_collision_is_not_reported():
    # 65*31 + 97 == 66*31 + 66 == 2112
    assert RollingHasher("Aa").full_hash() == RollingHasher("BB").full_hash()

    searcher = PatternSearcher("AaBB")
    assert list(searcher.scan("BB")) == [(0, False), (2, True)]
    assert searcher.search("BB") == [2]
    assert searcher.search("Aa") == [0]
    assert search_pattern("AaAaAa", "BB") == []


def test_matches_brute_force_on_random_inputs():
    rng = random.Random(1234)
    for _ in range(200):
        text = "".join(rng.choices("ab", k=rng.randint(0, 40)))
        pattern = "".join(rng.choices("ab", k=rng.randint(1, 5)))
        assert search_pattern(text, pattern) == brute_force(text, pattern)


def test_results_are_ascending_and_unique():
    rng = random.Random(99)
    text = "".join(rng.choices("abc", k=500))
    result = search_pattern(text, "ab")
    assert result == sorted(set(result))
    assert all(text[i:i + 2] == "ab" for i in result)


def test_search_is_deterministic():
    text = "mississippi" * 10
    first = search_pattern(text, "issi")
    assert all(search_pattern(text, "issi") == first for _ in range(5))


def test_searcher_reuses_text_hasher():
    searcher = PatternSearcher("banana")
    assert searcher.search("ana") == [1, 3]
    hasher = searcher.text_hasher
    assert searcher.search("na") == [2, 4]
    assert searcher.text_hasher is hasher
    assert searcher.count("a") == 3


def test_empty_text_builds_no_hasher():
    searcher = PatternSearcher("")
    assert searcher.search("a") == []
    assert searcher._text_hasher is None


def test_inputs_are_not_mutated():
    text = bytearray(b"abcabc")
    pattern = bytearray(b"bc")
    assert search_pattern(text, pattern) == [1, 4]
    assert text == bytearray(b"abcabc")
    assert pattern == bytearray(b"bc")
