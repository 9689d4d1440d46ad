"""Backend package for the palindrome duel engine."""

from .config import DEFAULT_CONFIG, BackendSettings, GameConfig, load_settings
from .disposition import apply_amiability_delta, score_response
from .engine import (
    ActionResult,
    apply_player_action,
    calculate_damage,
    can_access_home,
    resolve_enemy_turn,
    submit_selection,
)
from .models import PalindromeSpan
from .palindrome import find_longest_palindrome, is_palindrome
from .sequence import COLORS, generate_sequence
from .state import build_initial_state
from .store import InMemorySessionStore, SessionStore, create_store

__all__ = [
    "ActionResult",
    "apply_amiability_delta",
    "apply_player_action",
    "BackendSettings",
    "build_initial_state",
    "calculate_damage",
    "can_access_home",
    "COLORS",
    "create_store",
    "DEFAULT_CONFIG",
    "find_longest_palindrome",
    "GameConfig",
    "InMemorySessionStore",
    "is_palindrome",
    "load_settings",
    "PalindromeSpan",
    "resolve_enemy_turn",
    "score_response",
    "SessionStore",
    "submit_selection",
    "generate_sequence",
]
