"""Palindrome detection over colour token sequences.

The primary search is Manacher's algorithm. Its result is validated and, when
validation fails or the search raises, the brute-force and linear-scan
searches run in turn. A non-empty input always yields a valid span.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from .errors import AlgorithmFailure
from .models import PalindromeSpan

logger = logging.getLogger(__name__)

# Interleaved between tokens; compares equal only to itself.
_GAP = object()


def is_palindrome(tokens: Sequence[object]) -> bool:
    size = len(tokens)
    if size <= 1:
        return True
    for index in range(size // 2):
        if tokens[index] != tokens[size - 1 - index]:
            return False
    return True


def manacher_longest(sequence: Sequence[str]) -> tuple[int, int]:
    """Return ``(start, length)`` of the leftmost longest palindrome in O(n)."""
    if not sequence:
        return 0, 0

    transformed: list[object] = [_GAP]
    for token in sequence:
        transformed.append(token)
        transformed.append(_GAP)
    size = len(transformed)

    radius = [0] * size
    center = 0
    right = 0
    for index in range(1, size - 1):
        if index < right:
            radius[index] = min(right - index, radius[2 * center - index])

        low = index - radius[index] - 1
        high = index + radius[index] + 1
        while low >= 0 and high < size and transformed[low] == transformed[high]:
            radius[index] += 1
            low -= 1
            high += 1

        if index + radius[index] > right:
            center = index
            right = index + radius[index]

    best_center = 0
    best_radius = 0
    for index in range(1, size - 1):
        if radius[index] > best_radius:
            best_center = index
            best_radius = radius[index]

    # A radius in the transformed list equals the palindrome length in the input sequence.
    return (best_center - best_radius) // 2, best_radius


def brute_force_longest(sequence: Sequence[str]) -> tuple[int, int]:
    """O(n^3) scan of every window; the first longest window wins."""
    size = len(sequence)
    if size == 0:
        return 0, 0

    best_start = 0
    best_length = 1
    for start in range(size):
        for stop in range(start, size):
            length = stop - start + 1
            if length > best_length and is_palindrome(sequence[start : stop + 1]):
                best_start = start
                best_length = length
    return best_start, best_length


def linear_scan_longest(sequence: Sequence[str]) -> tuple[int, int]:
    """Scan windows longest-first, left to right, and return the first palindrome."""
    size = len(sequence)
    for length in range(size, 0, -1):
        for start in range(size - length + 1):
            if is_palindrome(sequence[start : start + length]):
                return start, length
    return 0, 0


_SEARCH_STAGES: tuple[tuple[str, Callable[[Sequence[str]], tuple[int, int]]], ...] = (
    ("manacher", manacher_longest),
    ("brute_force", brute_force_longest),
    ("linear_scan", linear_scan_longest),
)


def _validated_span(sequence: Sequence[str], start: int, length: int, stage: str) -> PalindromeSpan:
    if length < 1 or start < 0 or start + length > len(sequence):
        raise AlgorithmFailure(f"{stage} returned out-of-range span start={start} length={length}")
    tokens = tuple(sequence[start : start + length])
    if not is_palindrome(tokens):
        raise AlgorithmFailure(f"{stage} returned a non-palindrome: {list(tokens)}")
    return PalindromeSpan(start=start, length=length, tokens=tokens)


def find_longest_palindrome(sequence: Sequence[str]) -> PalindromeSpan:
    tokens = list(sequence)
    if not tokens:
        return PalindromeSpan(start=0, length=0, tokens=())

    for stage, search in _SEARCH_STAGES:
        try:
            start, length = search(tokens)
            return _validated_span(tokens, start, length, stage=stage)
        except Exception:
            logger.exception("Palindrome search stage %s failed for %d tokens", stage, len(tokens))

    logger.error("All palindrome searches failed, falling back to a single token")
    return PalindromeSpan(start=0, length=1, tokens=(tokens[0],))


find_optimal_palindrome = find_longest_palindrome
