"""Guardian amiability scoring from free-text player responses."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

POSITIVE_WEIGHT = 8
NEGATIVE_WEIGHT = -12
MIXED_MESSAGE_PENALTY = -5
AMIABILITY_MIN = 0
AMIABILITY_MAX = 100


@dataclass(frozen=True)
class KeywordSet:
    positive: tuple[str, ...]
    negative: tuple[str, ...]


# One entry per round; rounds past the end reuse the last entry.
ROUND_KEYWORDS: tuple[KeywordSet, ...] = (
    KeywordSet(
        positive=("wisdom", "harmony", "balance", "respect"),
        negative=("power", "demand", "force", "control"),
    ),
    KeywordSet(
        positive=("patience", "learn", "symmetry", "listen"),
        negative=("strength", "take", "quick", "shortcut"),
    ),
    KeywordSet(
        positive=("balance", "patience", "harmony", "respect"),
        negative=("power", "mastery", "control", "dominate"),
    ),
    KeywordSet(
        positive=("learn", "understand", "harmony", "balance"),
        negative=("conquer", "defeat", "force", "demand"),
    ),
    KeywordSet(
        positive=("together", "understand", "learn", "respect"),
        negative=("power", "challenge", "defeat", "overcome"),
    ),
    KeywordSet(
        positive=("harmony", "balance", "respect", "wisdom"),
        negative=("power", "control", "dominate", "force"),
    ),
)


def keywords_for_round(round_number: int) -> KeywordSet:
    index = min(max(0, round_number), len(ROUND_KEYWORDS) - 1)
    return ROUND_KEYWORDS[index]


def score_response(text: str, round_number: int, rng: random.Random | None = None) -> int:
    """Return the amiability delta for a player's reply.

    Steps run in a fixed order: keyword sum, mixed-message penalty, jitter,
    the no-match override, then sign correction so that any negative keyword
    costs at least 5 and purely positive replies earn at least 5.
    """
    rng = rng if rng is not None else random.Random()
    keywords = keywords_for_round(round_number)
    lowered = text.lower()

    positive_matches = [keyword for keyword in keywords.positive if keyword.lower() in lowered]
    negative_matches = [keyword for keyword in keywords.negative if keyword.lower() in lowered]

    delta = POSITIVE_WEIGHT * len(positive_matches) + NEGATIVE_WEIGHT * len(negative_matches)
    if positive_matches and negative_matches:
        delta += MIXED_MESSAGE_PENALTY
    delta += rng.randint(-1, 1)

    if not positive_matches and not negative_matches:
        delta = rng.randint(-2, 2)

    if negative_matches and delta > -5:
        delta = rng.randint(-10, -5)
    if positive_matches and not negative_matches and delta < 5:
        delta = rng.randint(5, 10)

    logger.debug(
        "Amiability delta %d for round %d (positive=%s negative=%s)",
        delta,
        round_number,
        positive_matches,
        negative_matches,
    )
    return delta


def clamp_amiability(value: float) -> int:
    return int(max(AMIABILITY_MIN, min(AMIABILITY_MAX, value)))


def apply_amiability_delta(enemy: dict[str, Any], delta: float) -> dict[str, Any]:
    next_enemy = dict(enemy)
    next_enemy["amiability"] = clamp_amiability(int(enemy.get("amiability", 0)) + delta)
    return next_enemy
