import random

from longedrome.backend import palindrome
from longedrome.backend.models import PalindromeSpan
from longedrome.backend.palindrome import (
    brute_force_longest,
    find_longest_palindrome,
    is_palindrome,
    linear_scan_longest,
    manacher_longest,
)


def _oracle(sequence: list[str]) -> tuple[int, int]:
    for length in range(len(sequence), 0, -1):
        for start in range(len(sequence) - length + 1):
            window = sequence[start : start + length]
            if window == window[::-1]:
                return start, length
    return 0, 0


def _random_sequences(seed: int, count: int) -> list[list[str]]:
    rng = random.Random(seed)
    alphabet = ["red", "blue", "green"]
    return [[rng.choice(alphabet) for _ in range(rng.randint(1, 15))] for _ in range(count)]


def test_is_palindrome_handles_trivial_and_mixed_inputs() -> None:
    assert is_palindrome([]) is True
    assert is_palindrome(["red"]) is True
    assert is_palindrome(["red", "blue", "red"]) is True
    assert is_palindrome(["red", "red"]) is True
    assert is_palindrome(["red", "blue"]) is False


def test_find_longest_palindrome_matches_exhaustive_oracle() -> None:
    for sequence in _random_sequences(seed=11, count=300):
        span = find_longest_palindrome(sequence)

        assert (span.start, span.length) == _oracle(sequence)
        assert list(span.tokens) == sequence[span.start : span.end]
        assert is_palindrome(span.tokens)


def test_all_search_stages_agree_on_leftmost_longest() -> None:
    for sequence in _random_sequences(seed=23, count=200):
        expected = _oracle(sequence)

        assert manacher_longest(sequence) == expected
        assert brute_force_longest(sequence) == expected
        assert linear_scan_longest(sequence) == expected


def test_longest_length_is_invariant_under_reversal() -> None:
    for sequence in _random_sequences(seed=5, count=200):
        forward = find_longest_palindrome(sequence)
        backward = find_longest_palindrome(list(reversed(sequence)))

        assert forward.length == backward.length


def test_find_longest_palindrome_is_deterministic() -> None:
    sequence = ["red", "blue", "green", "blue", "red", "yellow", "red"]

    assert find_longest_palindrome(sequence) == find_longest_palindrome(list(sequence))


def test_find_longest_palindrome_locates_planted_span() -> None:
    sequence = ["red", "blue", "green", "yellow", "white", "yellow", "green"]

    span = find_longest_palindrome(sequence)

    assert span == PalindromeSpan(start=2, length=5, tokens=("green", "yellow", "white", "yellow", "green"))
    assert span.indices() == [2, 3, 4, 5, 6]


def test_find_longest_palindrome_supports_even_lengths() -> None:
    span = find_longest_palindrome(["blue", "red", "red", "blue", "green"])

    assert (span.start, span.length) == (0, 4)


def test_find_longest_palindrome_prefers_leftmost_single_token() -> None:
    span = find_longest_palindrome(["red", "blue", "green"])

    assert (span.start, span.length) == (0, 1)
    assert span.tokens == ("red",)


def test_find_longest_palindrome_returns_empty_span_for_empty_input() -> None:
    span = find_longest_palindrome([])

    assert span.length == 0
    assert span.tokens == ()


def test_invalid_primary_result_falls_back_to_next_stage(monkeypatch, caplog) -> None:
    monkeypatch.setattr(
        palindrome,
        "_SEARCH_STAGES",
        (("manacher", lambda sequence: (0, 2)), ("brute_force", brute_force_longest)),
    )

    span = find_longest_palindrome(["red", "blue", "red"])

    assert (span.start, span.length) == (0, 3)
    assert "Palindrome search stage manacher failed" in caplog.text


def test_raising_stage_falls_back_to_next_stage(monkeypatch) -> None:
    def broken(sequence: list[str]) -> tuple[int, int]:
        raise IndexError("radius table out of range")

    monkeypatch.setattr(
        palindrome,
        "_SEARCH_STAGES",
        (("manacher", broken), ("linear_scan", linear_scan_longest)),
    )

    span = find_longest_palindrome(["green", "red", "blue", "red"])

    assert (span.start, span.length) == (1, 3)


def test_all_stages_failing_returns_single_token(monkeypatch) -> None:
    monkeypatch.setattr(
        palindrome,
        "_SEARCH_STAGES",
        (("manacher", lambda sequence: (5, 9)), ("brute_force", lambda sequence: (0, 0))),
    )

    span = find_longest_palindrome(["red", "blue", "red"])

    assert span == PalindromeSpan(start=0, length=1, tokens=("red",))


def test_find_optimal_palindrome_is_the_same_search() -> None:
    assert palindrome.find_optimal_palindrome(["red", "blue", "red"]).length == 3


def test_is_palindrome_is_invariant_under_reversal() -> None:
    sequences = [[], ["red"], *_random_sequences(seed=31, count=300)]

    for sequence in sequences:
        assert is_palindrome(sequence) == is_palindrome(sequence[::-1])
