"""Random colour sequences that always contain a planted palindrome."""

from __future__ import annotations

import random
from collections.abc import Sequence

from .errors import EmptySequenceError

COLOR_VALUES: dict[str, str] = {
    "black": "#000000",
    "red": "#FF0000",
    "blue": "#0000FF",
    "green": "#00FF00",
    "yellow": "#FFFF00",
    "purple": "#800080",
    "orange": "#FFA500",
    "white": "#FFFFFF",
}

COLORS: tuple[str, ...] = tuple(COLOR_VALUES)

MIN_PLANTED_LENGTH = 5
MAX_PLANTED_LENGTH = 7
MAX_DIFFICULTY = 5


def difficulty_for_round(round_number: int) -> int:
    return min(MAX_DIFFICULTY, max(0, round_number) // 3)


def generate_sequence(
    min_length: int,
    max_length: int,
    round_number: int,
    rng: random.Random | None = None,
    alphabet: Sequence[str] = COLORS,
) -> list[str]:
    """Build a sequence for ``round_number``.

    Later rounds produce longer sequences and, past difficulty 2, scatter
    copies of existing tokens around to create near-palindromes. The planted
    palindrome of length 5-7 always survives the noise.
    """
    if min_length < 1 or max_length < min_length:
        raise EmptySequenceError(f"invalid sequence bounds min={min_length} max={max_length}")
    if not alphabet:
        raise EmptySequenceError("alphabet must contain at least one token")

    rng = rng if rng is not None else random.Random()
    difficulty = difficulty_for_round(round_number)
    low = max(MIN_PLANTED_LENGTH, min_length + difficulty)
    high = max(low, max_length + difficulty)
    length = rng.randint(low, high)

    tokens = [rng.choice(alphabet) for _ in range(length)]

    planted_length = min(MAX_PLANTED_LENGTH, max(MIN_PLANTED_LENGTH, length // 2))
    planted_start = rng.randint(0, length - planted_length)
    planted_end = planted_start + planted_length - 1
    for offset in range(planted_length // 2):
        token = rng.choice(alphabet)
        tokens[planted_start + offset] = token
        tokens[planted_end - offset] = token

    if difficulty > 2:
        for _ in range(difficulty):
            target = rng.randrange(length)
            if target in (planted_start, planted_end):
                continue
            token = tokens[rng.randrange(length)]
            tokens[target] = token
            if planted_start < target < planted_end:
                tokens[planted_start + planted_end - target] = token

    return tokens
