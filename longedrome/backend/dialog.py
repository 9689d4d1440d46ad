"""Pre-authored guardian text, bucketed by round and amiability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .config import DEFAULT_CONFIG, GameConfig


@dataclass(frozen=True)
class GuardianLines:
    hostile: tuple[str, ...]
    neutral: tuple[str, ...]
    friendly: tuple[str, ...]


@dataclass(frozen=True)
class ResponseOption:
    text: str
    kind: str

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "type": self.kind}


GUARDIAN_LINES: tuple[GuardianLines, ...] = (
    GuardianLines(
        hostile=(
            "Your attempts to communicate are interesting, mortal.",
            "Only those who truly understand palindromes may proceed.",
            "Show me your worth through your actions, not just words.",
            "Your presence disturbs the ancient energies of this place.",
        ),
        neutral=(
            "You show potential, seeker of knowledge.",
            "The patterns of colors hold great power. Do you see it?",
            "Each palindrome is a key to understanding the balance of the universe.",
            "Few mortals have ventured this far into the temple. What drives you?",
        ),
        friendly=(
            "Your understanding of palindromes intrigues me.",
            "The symmetry you've shown reflects the harmony of all things.",
            "Perhaps there is more to you than I first perceived.",
            "Your mind has a certain resonance with the ancient patterns.",
        ),
    ),
    GuardianLines(
        hostile=(
            "You continue to stand before me. Bold.",
            "Your approach to the patterns is unconventional.",
            "Few have survived this long. Interesting.",
            "The temple grows restless with your presence.",
        ),
        neutral=(
            "Interesting approach to the patterns.",
            "You begin to see the symmetry, but there is more to learn.",
            "The colors speak to those who truly listen.",
            "What do you hope to gain from these trials, traveler?",
        ),
        friendly=(
            "Your progress is noteworthy.",
            "The colors respond to your understanding.",
            "Continue this path, and knowledge shall be yours.",
            "I sense a growing connection between you and the ancient patterns.",
        ),
    ),
    GuardianLines(
        hostile=(
            "Your persistence is remarkable.",
            "Many have tried to master these patterns. Most have failed.",
            "The true test approaches, mortal.",
            "The temple has seen countless seekers come and go. Most leave in despair.",
        ),
        neutral=(
            "The ancient ones created these patterns as tests.",
            "Balance in all things is the key to palindromes.",
            "Your understanding grows, but is it enough?",
            "What do you see when you look at these patterns? Mere colors, or something more?",
        ),
        friendly=(
            "Few have shown such aptitude with the color patterns.",
            "The ancient knowledge begins to reveal itself to you.",
            "Our meeting was perhaps not coincidental.",
            "The temple itself seems to respond differently to your presence now.",
        ),
    ),
    GuardianLines(
        hostile=(
            "Your approach is different from others who came before.",
            "The patterns grow more complex. Your mind must adapt.",
            "Soon, we will see your true potential.",
            "The ancient energies stir. They sense your ambition.",
        ),
        neutral=(
            "These palindromes have existed since time immemorial.",
            "The symmetry of colors reflects the symmetry of the universe.",
            "You are beginning to see beyond the surface.",
            "What drives you to continue these trials? Knowledge? Power? Or something else?",
        ),
        friendly=(
            "Your intuition for palindromes is noteworthy.",
            "Perhaps you were meant to discover these ancient secrets.",
            "I find our exchanges educational.",
            "The temple's energies seem to flow more harmoniously in your presence now.",
        ),
    ),
    GuardianLines(
        hostile=(
            "The final patterns await your attempt.",
            "The deepest secrets test even the strongest minds.",
            "Prepare to demonstrate your true understanding.",
            "Many have reached this point. Few have proceeded further.",
        ),
        neutral=(
            "We approach the final trials.",
            "The deepest secrets of palindromes await those who persevere.",
            "Show me what you have truly learned.",
            "What will you do with the knowledge you seek, I wonder?",
        ),
        friendly=(
            "We have come far in our understanding.",
            "The final patterns will reveal the ultimate truth.",
            "I believe you may be ready for what comes next.",
            "The temple has accepted you. I can feel its ancient energies resonating with your presence.",
        ),
    ),
    GuardianLines(
        hostile=(
            "This is your final test. Do not disappoint me.",
            "The culmination of your journey is at hand.",
            "Few reach this point. Even fewer succeed.",
            "Your determination is admirable, if misguided.",
        ),
        neutral=(
            "The final challenge awaits you.",
            "All you have learned will be tested now.",
            "The true nature of palindromes is about to be revealed.",
            "Are you prepared for what comes next?",
        ),
        friendly=(
            "You stand at the threshold of understanding.",
            "I have watched your progress with great interest.",
            "The ancient knowledge is almost within your grasp.",
            "Perhaps you are the one the prophecies spoke of.",
        ),
    ),
)


def _options(*rows: tuple[str, str]) -> tuple[ResponseOption, ...]:
    return tuple(ResponseOption(text=text, kind=kind) for text, kind in rows)


RESPONSE_OPTIONS: tuple[tuple[ResponseOption, ...], ...] = (
    _options(
        ("I seek to understand the balance of these patterns.", "positive"),
        ("I need to learn more about this symmetry.", "positive"),
        ("I demand to know the power behind these colors!", "negative"),
        ("I'll take whatever knowledge I can get.", "negative"),
    ),
    _options(
        ("Your wisdom is appreciated. I'm here to learn.", "positive"),
        ("The patterns have a certain beauty to them.", "positive"),
        ("This is taking too long. I need results quickly.", "negative"),
        ("Just tell me how to master these patterns.", "negative"),
    ),
    _options(
        ("I'm beginning to see the harmony in these sequences.", "positive"),
        ("Patience reveals the true nature of palindromes.", "positive"),
        ("I'll control these patterns with enough practice.", "negative"),
        ("How can I use this power for my own benefit?", "negative"),
    ),
    _options(
        ("The balance of colors speaks to something deeper.", "positive"),
        ("I respect the ancient knowledge you protect.", "positive"),
        ("I will dominate these challenges eventually.", "negative"),
        ("These tests are merely obstacles to overcome.", "negative"),
    ),
    _options(
        ("We can learn from each other through these challenges.", "positive"),
        ("The journey itself brings understanding.", "positive"),
        ("I've come too far to fail now. I will succeed.", "negative"),
        ("The power of these patterns will be mine.", "negative"),
    ),
    _options(
        ("Thank you for sharing this ancient wisdom with me.", "positive"),
        ("The harmony of palindromes reflects the balance of all things.", "positive"),
        ("I've mastered your challenges. What's next?", "negative"),
        ("Now I'll show you the true meaning of power.", "negative"),
    ),
)

TUTORIAL_COMPLETED = "The Ancient Guardian awaits your challenge. Prepare your strategy!"
PREPARE_FOR_BATTLE = "Select a palindromic sequence of colors to defend yourself!"
ENEMY_PREPARING = "The Ancient Guardian is considering its next move..."
ALREADY_SUBMITTED = "You've already submitted your selection for this turn!"
NOT_USER_TURN = "You can only submit a selection during your turn."
EMPTY_SELECTION = "Select at least one block before submitting."
NOT_CONTINUOUS = "Your selection must be continuous! Try again."
NOT_PALINDROME = "Your selection is not a palindrome! Try again."
AUTOMATIC_WIN = "The Ancient Guardian seems impressed with your skills and friendly demeanor!"
MAGIC_FLICKER = (
    "You cast a spell of revelation, but the magic seems to flicker. Try selecting the palindrome yourself."
)
REST_DONE = "You rest and recover some HP and MP."
WENT_HOME = "You have returned home safely. You can rest, read, or reflect on your journey."

HOME_PROMPT = (
    "You have earned my respect, traveler.",
    "You may return to your home if you wish.",
    "You are welcome to continue our challenges, or rest and return later.",
)
FAILED_FINAL_CHALLENGE = (
    "You have failed the final challenge.",
    "The Ancient Guardian has bested you in the battle of palindromes.",
    "Perhaps with more practice, you can return and challenge it again.",
)
WON_FINAL_CHALLENGE = (
    "You have proven yourself worthy in the final challenge!",
    "The Ancient Guardian grants you passage and shares its ancient knowledge with you.",
    "Your name shall be recorded in the annals of palindrome masters!",
)
GAME_OVER = (
    "The Ancient Guardian has bested you in the battle of palindromes.",
    "Perhaps with more practice, you can return and challenge it again.",
    "Remember: The key is to find the longest palindromic sequence!",
)
AUTOMATIC_WIN_DIALOG = (
    "You have proven yourself worthy, both in skill and character.",
    "I shall grant you passage and share my knowledge with you.",
    "Few have earned my respect as you have. You may return home safely.",
)
FINAL_CHALLENGE_DIALOG = (
    "You have shown skill, but your attitude leaves much to be desired.",
    "I shall give you one final challenge. Find the optimal palindrome in this sequence.",
    "Succeed, and you may leave. Fail, and you shall remain here forever!",
)


def _round_index(turn_count: int, size: int) -> int:
    return min(max(0, turn_count), size - 1)


def get_guardian_dialog(turn_count: int, amiability: float, config: GameConfig = DEFAULT_CONFIG) -> list[str]:
    lines = GUARDIAN_LINES[_round_index(turn_count, len(GUARDIAN_LINES))]
    thresholds = config.amiability_thresholds
    if amiability < thresholds.hostile:
        return list(lines.hostile)
    if amiability < thresholds.friendly:
        return list(lines.neutral)
    return list(lines.friendly)


def guardian_title(amiability: float, config: GameConfig = DEFAULT_CONFIG) -> str:
    thresholds = config.amiability_thresholds
    if amiability < thresholds.hostile:
        return "Hostile Guardian"
    if amiability < thresholds.friendly:
        return "Ancient Guardian"
    return "Friendly Guardian"


def response_options(turn_count: int) -> list[ResponseOption]:
    return list(RESPONSE_OPTIONS[_round_index(turn_count, len(RESPONSE_OPTIONS))])


def talk_healing(amiability: float, config: GameConfig = DEFAULT_CONFIG) -> dict[str, int] | None:
    thresholds = config.amiability_thresholds
    if amiability < thresholds.hostile:
        return None
    if amiability < thresholds.friendly:
        return {"mp": 8}
    return {"hp": 10, "mp": 10}


def get_enemy_response(delta: float, npc_name: str) -> str:
    if delta > 15:
        return f"{npc_name}'s eyes glow with a warm light. Your words have clearly pleased it greatly!"
    if delta > 8:
        return f"{npc_name} nods with approval. A subtle warmth enters its otherwise stoic expression."
    if delta > 0:
        return f"{npc_name} seems mildly pleased by your words."
    if delta < -15:
        return f"{npc_name}'s eyes flash with anger! The air around you grows ice cold. It is clearly displeased."
    if delta < -8:
        return f"{npc_name}'s gaze hardens. You sense strong disapproval emanating from its ancient presence."
    if delta < 0:
        return f"{npc_name} seems irritated by your words."
    return f"{npc_name} acknowledges your words with an enigmatic tilt of its head."


def get_home_access_message(
    game_state: str,
    amiability: float,
    npc_name: str,
    config: GameConfig = DEFAULT_CONFIG,
) -> str:
    if game_state == "victory":
        return f"You have earned {npc_name}'s respect and can now return home."
    if amiability >= config.amiability_thresholds.friendly:
        return f"{npc_name} seems to trust you. You may return home if you wish."
    return (
        f"{npc_name} blocks your path. You cannot leave yet! "
        "Continue to improve your relationship with the Guardian."
    )


def home_reflection(npc_name: str) -> dict[str, Any]:
    return {
        "title": "Your Thoughts",
        "content": [
            f"You reflect on your encounter with {npc_name}.",
            "The patterns of colors and palindromes seem to hold deeper meaning.",
            "Perhaps with more practice, you can master this ancient art.",
        ],
        "isHomeDialog": True,
    }
