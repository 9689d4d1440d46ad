"""Error types and user-facing rejection reasons for the game engine."""

from __future__ import annotations

from enum import Enum


class AlgorithmFailure(RuntimeError):
    """A palindrome search stage produced a span that fails validation."""


class EmptySequenceError(ValueError):
    """Sequence generation was asked for bounds that allow an empty sequence."""


class FeedbackReason(str, Enum):
    ALREADY_SUBMITTED = "already_submitted"
    NOT_USER_TURN = "not_user_turn"
    EMPTY_SELECTION = "empty_selection"
    NOT_CONTINUOUS = "not_continuous"
    NOT_PALINDROME = "not_palindrome"
    INSUFFICIENT_MP = "insufficient_mp"
    MAGIC_FLICKER = "magic_flicker"
    ALREADY_RESTED = "already_rested"
    ALREADY_TALKED = "already_talked"
    HOME_LOCKED = "home_locked"
