"""Reducer and battle resolution for player actions."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from . import dialog
from .config import DEFAULT_CONFIG, GameConfig
from .disposition import apply_amiability_delta, score_response
from .errors import FeedbackReason
from .models import EnemyTurnOutcome, PalindromeSpan, SubmissionResult
from .palindrome import find_longest_palindrome, is_palindrome
from .sequence import generate_sequence
from .state import TERMINAL_STATES, adjust_player_stats, build_initial_state

ENEMY_TURN_STEPS = (
    "reveal_optimal",
    "compare",
    "apply_damage",
    "check_game_over",
    "check_final_battle",
    "advance_round",
)
HOME_REACHABLE_FROM = frozenset({"idle", "userTurn", "enemyTurn"})


@dataclass(frozen=True)
class ActionResult:
    state: dict[str, Any]
    engine_events: list[dict[str, Any]]


def apply_player_action(
    state: dict[str, Any],
    action: dict[str, Any],
    config: GameConfig = DEFAULT_CONFIG,
    rng: random.Random | None = None,
) -> ActionResult:
    """Apply one player action and return the next state plus engine events.

    The input state is never mutated. Actions that are not legal in the
    current game state leave it untouched and produce no events.
    """
    rng = rng if rng is not None else random.Random()
    action_type = str(action.get("type", "")).upper()
    if action_type == "COMPLETE_TUTORIAL":
        return _apply_complete_tutorial(state=state, action=action, config=config, rng=rng)
    if action_type == "START_TURN":
        return _apply_start_turn(state=state, action=action, config=config, rng=rng)
    if action_type == "TOGGLE_BLOCK":
        return _apply_toggle_block(state=state, action=action)
    if action_type == "SET_SELECTION":
        return _apply_set_selection(state=state, action=action)
    if action_type == "SUBMIT_SELECTION":
        return _apply_submit_selection(state=state, action=action, config=config)
    if action_type == "ADVANCE_ENEMY_TURN":
        return _apply_advance_enemy_turn(state=state, action=action, config=config, rng=rng)
    if action_type == "RESOLVE_ENEMY_TURN":
        outcome = resolve_enemy_turn(state=state, config=config, rng=rng)
        return ActionResult(state=outcome.state, engine_events=outcome.events)
    if action_type == "CAST_MAGIC":
        return _apply_cast_magic(state=state, action=action, config=config)
    if action_type == "REST":
        return _apply_rest(state=state, action=action, config=config)
    if action_type == "TALK":
        return _apply_talk(state=state, action=action, config=config)
    if action_type == "RESPOND":
        return _apply_respond(state=state, action=action, config=config, rng=rng)
    if action_type == "GO_HOME":
        return _apply_go_home(state=state, action=action, config=config)
    if action_type == "RETURN_TO_TEMPLE":
        return _apply_return_to_temple(state=state, action=action, config=config, rng=rng)
    if action_type == "RESET":
        return _apply_reset(state=state, action=action, config=config)
    return ActionResult(state=dict(state), engine_events=[])


def calculate_damage(enemy_length: int, user_length: int, turn_count: int = 0) -> int:
    if user_length >= enemy_length:
        return 0
    base_damage = (enemy_length - user_length) * 5
    return math.floor(base_damage * (1 + turn_count * 0.05))


def user_found_optimal(selection: Sequence[int], optimal: PalindromeSpan) -> bool:
    # Length-only comparison: any selection at least as long as the optimum wins.
    return len(selection) >= optimal.length


def is_selection_continuous(indices: Sequence[int]) -> bool:
    ordered = sorted(indices)
    return all(current == previous + 1 for previous, current in zip(ordered, ordered[1:]))


def can_access_home(game_state: str, amiability: float, config: GameConfig = DEFAULT_CONFIG) -> bool:
    return game_state == "victory" or amiability >= config.amiability_thresholds.friendly


def player_condition(stats: dict[str, Any], config: GameConfig = DEFAULT_CONFIG) -> str:
    max_hp = int(stats.get("maxHp", 0))
    ratio = int(stats.get("hp", 0)) / max_hp if max_hp > 0 else 0.0
    if ratio <= config.health_thresholds.critical:
        return "critical"
    if ratio <= config.health_thresholds.weakened:
        return "weakened"
    return "healthy"


def submit_selection(state: dict[str, Any], config: GameConfig = DEFAULT_CONFIG) -> SubmissionResult:
    """Validate the current selection and, when valid, queue the enemy turn."""
    if state.get("hasSubmittedThisTurn"):
        return _rejected_submission(state, FeedbackReason.ALREADY_SUBMITTED, dialog.ALREADY_SUBMITTED)
    if state.get("gameState") != "userTurn":
        return _rejected_submission(state, FeedbackReason.NOT_USER_TURN, dialog.NOT_USER_TURN)

    sequence = list(state.get("sequence", []))
    selection = sorted(state.get("selection", []))
    if not selection:
        return _rejected_submission(state, FeedbackReason.EMPTY_SELECTION, dialog.EMPTY_SELECTION)
    out_of_range = any(index < 0 or index >= len(sequence) for index in selection)
    if out_of_range or not is_selection_continuous(selection):
        return _rejected_submission(state, FeedbackReason.NOT_CONTINUOUS, dialog.NOT_CONTINUOUS)
    if not is_palindrome([sequence[index] for index in selection]):
        return _rejected_submission(state, FeedbackReason.NOT_PALINDROME, dialog.NOT_PALINDROME)

    optimal = _optimal_span(state)
    found_optimal = user_found_optimal(selection, optimal)

    next_state = dict(state)
    next_state["hasSubmittedThisTurn"] = True
    next_state["lastSubmission"] = {
        "length": len(selection),
        "optimalLength": optimal.length,
        "foundOptimal": found_optimal,
    }
    if found_optimal:
        next_state["feedback"] = f"Excellent! You found the optimal palindrome of length {len(selection)}!"
    else:
        next_state["feedback"] = (
            f"You found a palindrome of length {len(selection)}, "
            f"but there was a better one of length {optimal.length}!"
        )
        next_state["showOptimal"] = True
    next_state["gameState"] = "enemyTurn"
    next_state["epoch"] = int(state.get("epoch", 0)) + 1
    next_state["pendingSteps"] = list(ENEMY_TURN_STEPS)
    return SubmissionResult(valid=True, reason=None, state=next_state)


def resolve_enemy_turn(
    state: dict[str, Any],
    config: GameConfig = DEFAULT_CONFIG,
    rng: random.Random | None = None,
) -> EnemyTurnOutcome:
    """Run every pending enemy-turn step synchronously."""
    rng = rng if rng is not None else random.Random()
    next_state = dict(state)
    events: list[dict[str, Any]] = []
    damage = 0
    while next_state.get("gameState") == "enemyTurn" and next_state.get("pendingSteps"):
        step = next_state["pendingSteps"][0]
        next_state["pendingSteps"] = list(next_state["pendingSteps"][1:])
        next_state, step_events, step_damage = _run_enemy_step(next_state, step=step, config=config, rng=rng)
        events.extend(step_events)
        damage += step_damage
    return EnemyTurnOutcome(damage=damage, state=next_state, outcome=_outcome_label(state, next_state), events=events)


def _outcome_label(before: dict[str, Any], after: dict[str, Any]) -> str:
    if before.get("gameState") != "enemyTurn":
        return "no_op"
    game_state = after.get("gameState")
    if game_state == "gameOver":
        return "game_over"
    if game_state == "victory":
        return "victory"
    if game_state == "userTurn" and after.get("finalBattle"):
        return "final_battle"
    if game_state == "idle":
        return "next_round"
    return "pending"


def _optimal_span(state: dict[str, Any]) -> PalindromeSpan:
    optimal = state.get("optimal")
    if isinstance(optimal, dict):
        return PalindromeSpan.from_dict(optimal)
    return find_longest_palindrome(state.get("sequence", []))


def _rejected_submission(state: dict[str, Any], reason: FeedbackReason, message: str) -> SubmissionResult:
    next_state = dict(state)
    next_state["feedback"] = message
    return SubmissionResult(valid=False, reason=reason.value, state=next_state)


def _reject(state: dict[str, Any], action: dict[str, Any], reason: FeedbackReason, message: str) -> ActionResult:
    next_state = dict(state)
    next_state["feedback"] = message
    return ActionResult(
        state=next_state,
        engine_events=[{"kind": "rejected", "reason": reason.value, "action": action}],
    )


def _regenerate_sequence(next_state: dict[str, Any], config: GameConfig, rng: random.Random) -> None:
    sequence = generate_sequence(
        config.sequence_min_length,
        config.sequence_max_length,
        int(next_state.get("turnCount", 0)),
        rng=rng,
    )
    next_state["sequence"] = sequence
    next_state["optimal"] = find_longest_palindrome(sequence).to_dict()
    next_state["selection"] = []
    next_state["showOptimal"] = False
    next_state["hasSubmittedThisTurn"] = False
    next_state["lastSubmission"] = None


def _clear_timeline(next_state: dict[str, Any]) -> None:
    next_state["pendingSteps"] = []
    next_state["epoch"] = int(next_state.get("epoch", 0)) + 1


def _apply_complete_tutorial(
    state: dict[str, Any], action: dict[str, Any], config: GameConfig, rng: random.Random
) -> ActionResult:
    if state.get("gameState") != "tutorial":
        return ActionResult(state=dict(state), engine_events=[])
    next_state = dict(state)
    next_state["gameState"] = "idle"
    _regenerate_sequence(next_state, config, rng)
    next_state["feedback"] = dialog.TUTORIAL_COMPLETED
    return ActionResult(state=next_state, engine_events=[{"kind": "tutorial_completed", "action": action}])


def _apply_start_turn(
    state: dict[str, Any], action: dict[str, Any], config: GameConfig, rng: random.Random
) -> ActionResult:
    if state.get("gameState") != "idle":
        return ActionResult(state=dict(state), engine_events=[])
    next_state = dict(state)
    if not next_state.get("sequence"):
        _regenerate_sequence(next_state, config, rng)
    turn_count = int(state.get("turnCount", 0)) + 1
    next_state["gameState"] = "userTurn"
    next_state["turnCount"] = turn_count
    next_state["selection"] = []
    next_state["showOptimal"] = False
    next_state["hasSubmittedThisTurn"] = False
    next_state["hasTalkedThisRound"] = False
    next_state["hasRestedThisTurn"] = False
    next_state["dialog"] = None
    next_state["feedback"] = f"Turn {turn_count}: {dialog.PREPARE_FOR_BATTLE}"
    return ActionResult(
        state=next_state,
        engine_events=[{"kind": "turn_started", "turnCount": turn_count, "action": action}],
    )


def _apply_toggle_block(state: dict[str, Any], action: dict[str, Any]) -> ActionResult:
    if state.get("gameState") != "userTurn":
        return ActionResult(state=dict(state), engine_events=[])
    index = action.get("index")
    sequence = state.get("sequence", [])
    if not isinstance(index, int) or index < 0 or index >= len(sequence):
        return ActionResult(state=dict(state), engine_events=[])

    # Gaps are allowed while selecting; continuity is checked on submit.
    selection = list(state.get("selection", []))
    if index in selection:
        selection.remove(index)
    else:
        selection = sorted([*selection, index])

    next_state = dict(state)
    next_state["selection"] = selection
    return ActionResult(
        state=next_state,
        engine_events=[{"kind": "selection_changed", "selection": list(selection), "action": action}],
    )


def _apply_set_selection(state: dict[str, Any], action: dict[str, Any]) -> ActionResult:
    if state.get("gameState") != "userTurn":
        return ActionResult(state=dict(state), engine_events=[])
    raw_indices = action.get("indices")
    if not isinstance(raw_indices, list):
        return ActionResult(state=dict(state), engine_events=[])
    size = len(state.get("sequence", []))
    selection = sorted({index for index in raw_indices if isinstance(index, int) and 0 <= index < size})
    next_state = dict(state)
    next_state["selection"] = selection
    return ActionResult(
        state=next_state,
        engine_events=[{"kind": "selection_changed", "selection": list(selection), "action": action}],
    )


def _apply_submit_selection(state: dict[str, Any], action: dict[str, Any], config: GameConfig) -> ActionResult:
    result = submit_selection(state=state, config=config)
    if not result.valid:
        return ActionResult(
            state=result.state,
            engine_events=[{"kind": "rejected", "reason": result.reason, "action": action}],
        )
    return ActionResult(
        state=result.state,
        engine_events=[
            {
                "kind": "selection_submitted",
                "submission": dict(result.state["lastSubmission"]),
                "epoch": result.state["epoch"],
                "action": action,
            }
        ],
    )


def _apply_advance_enemy_turn(
    state: dict[str, Any], action: dict[str, Any], config: GameConfig, rng: random.Random
) -> ActionResult:
    expected_epoch = action.get("epoch", state.get("epoch"))
    pending = list(state.get("pendingSteps", []))
    if state.get("gameState") != "enemyTurn" or not pending or expected_epoch != state.get("epoch"):
        return ActionResult(
            state=dict(state),
            engine_events=[{"kind": "stale_step_ignored", "epoch": expected_epoch, "action": action}],
        )
    next_state = dict(state)
    next_state["pendingSteps"] = pending[1:]
    next_state, events, _ = _run_enemy_step(next_state, step=pending[0], config=config, rng=rng)
    return ActionResult(state=next_state, engine_events=events)


def _run_enemy_step(
    next_state: dict[str, Any], step: str, config: GameConfig, rng: random.Random
) -> tuple[dict[str, Any], list[dict[str, Any]], int]:
    npc_name = str(next_state.get("npcName", config.npc_name))
    optimal = _optimal_span(next_state)
    submission = next_state.get("lastSubmission") or {"length": 0, "foundOptimal": False}
    found_optimal = bool(submission.get("foundOptimal"))

    if step == "reveal_optimal":
        next_state["showOptimal"] = True
        next_state["feedback"] = dialog.ENEMY_PREPARING
        return next_state, [{"kind": "optimal_revealed", "optimal": optimal.to_dict()}], 0

    if step == "compare":
        next_state["feedback"] = f"{npc_name} identifies a palindrome of length {optimal.length}!"
        event = {
            "kind": "compared",
            "userLength": int(submission.get("length", 0)),
            "optimalLength": optimal.length,
            "foundOptimal": found_optimal,
        }
        return next_state, [event], 0

    if step == "apply_damage":
        if next_state.get("finalBattle"):
            return next_state, [{"kind": "damage_skipped", "reason": "final_battle"}], 0
        if found_optimal:
            next_state["feedback"] = (
                f"You found the optimal palindrome! {npc_name}'s attack has no effect on you this turn."
            )
            return next_state, [{"kind": "damage_skipped", "reason": "optimal"}], 0
        damage = calculate_damage(optimal.length, int(submission.get("length", 0)), int(next_state.get("turnCount", 0)))
        next_state["stats"] = adjust_player_stats(next_state["stats"], hp=-damage)
        next_state["feedback"] = (
            f"{npc_name} attacks with a palindrome of length {optimal.length}! You take {damage} damage."
        )
        return next_state, [{"kind": "damage", "amount": damage, "hp": next_state["stats"]["hp"]}], damage

    if step == "check_game_over":
        if int(next_state["stats"]["hp"]) <= 0:
            next_state["gameState"] = "gameOver"
            next_state["finalBattle"] = False
            next_state["feedback"] = f"You have been defeated by {npc_name}!"
            next_state["dialog"] = {"title": "Defeat", "content": list(dialog.GAME_OVER)}
            _clear_timeline(next_state)
            return next_state, [{"kind": "game_over", "cause": "hp_depleted"}], 0
        return next_state, [], 0

    if step == "check_final_battle":
        return _check_final_battle(next_state, config=config, rng=rng, found_optimal=found_optimal)

    if step == "advance_round":
        _regenerate_sequence(next_state, config, rng)
        next_state["gameState"] = "idle"
        next_state["feedback"] = (
            f"Round {next_state.get('turnCount', 0)} complete. Talk to {npc_name} before starting the next round! "
            "Click the Talk button to interact."
        )
        _clear_timeline(next_state)
        return next_state, [{"kind": "round_complete", "turnCount": next_state.get("turnCount", 0)}], 0

    return next_state, [], 0


def _check_final_battle(
    next_state: dict[str, Any], config: GameConfig, rng: random.Random, found_optimal: bool
) -> tuple[dict[str, Any], list[dict[str, Any]], int]:
    npc_name = str(next_state.get("npcName", config.npc_name))
    submission = next_state.get("lastSubmission") or {}

    if next_state.get("finalBattle"):
        next_state["finalBattle"] = False
        _clear_timeline(next_state)
        if found_optimal:
            next_state["gameState"] = "victory"
            next_state["feedback"] = (
                f"Excellent! You found the optimal palindrome of length {submission.get('length', 0)}! "
                f"{npc_name} is impressed!"
            )
            next_state["dialog"] = {"title": "Victory", "content": list(dialog.WON_FINAL_CHALLENGE)}
            return next_state, [{"kind": "victory", "cause": "final_battle_won"}], 0
        next_state["gameState"] = "gameOver"
        next_state["feedback"] = (
            f"You found a palindrome of length {submission.get('length', 0)}, but the optimal one was length "
            f"{submission.get('optimalLength', 0)}. {npc_name} defeats you!"
        )
        next_state["dialog"] = {"title": "Defeat", "content": list(dialog.FAILED_FINAL_CHALLENGE)}
        return next_state, [{"kind": "game_over", "cause": "final_battle_lost"}], 0

    if int(next_state.get("turnCount", 0)) < config.max_turns:
        return next_state, [], 0

    _clear_timeline(next_state)
    if int(next_state["enemy"]["amiability"]) >= config.amiability_thresholds.friendly:
        next_state["gameState"] = "victory"
        next_state["feedback"] = dialog.AUTOMATIC_WIN
        next_state["dialog"] = {"title": "Victory", "content": list(dialog.AUTOMATIC_WIN_DIALOG)}
        return next_state, [{"kind": "victory", "cause": "amiability"}], 0

    next_state["finalBattle"] = True
    _regenerate_sequence(next_state, config, rng)
    next_state["gameState"] = "userTurn"
    next_state["feedback"] = f"{npc_name} seems unimpressed. 'One final test to prove your worth!'"
    next_state["dialog"] = {"title": "Final Challenge", "content": list(dialog.FINAL_CHALLENGE_DIALOG)}
    return next_state, [{"kind": "final_battle_started", "optimal": next_state["optimal"]}], 0


def _apply_cast_magic(state: dict[str, Any], action: dict[str, Any], config: GameConfig) -> ActionResult:
    if state.get("gameState") != "userTurn":
        return ActionResult(state=dict(state), engine_events=[])
    if int(state["stats"]["mp"]) < config.magic_cost:
        return _reject(
            state,
            action,
            FeedbackReason.INSUFFICIENT_MP,
            f"You don't have enough MP to cast this spell! (Requires {config.magic_cost} MP)",
        )

    optimal = _optimal_span(state)
    sequence = state.get("sequence", [])
    indices = optimal.indices()
    if optimal.length < 1 or optimal.end > len(sequence) or not is_palindrome([sequence[i] for i in indices]):
        return _reject(state, action, FeedbackReason.MAGIC_FLICKER, dialog.MAGIC_FLICKER)

    next_state = dict(state)
    next_state["stats"] = adjust_player_stats(state["stats"], mp=-config.magic_cost)
    next_state["showOptimal"] = True
    next_state["selection"] = indices
    next_state["feedback"] = (
        f"You cast a spell of revelation! The optimal palindrome of length {optimal.length} is now visible."
    )
    return ActionResult(
        state=next_state,
        engine_events=[{"kind": "magic_cast", "mpSpent": config.magic_cost, "selection": list(indices), "action": action}],
    )


def _apply_rest(state: dict[str, Any], action: dict[str, Any], config: GameConfig) -> ActionResult:
    game_state = state.get("gameState")
    if game_state == "tutorial" or game_state in TERMINAL_STATES:
        return ActionResult(state=dict(state), engine_events=[])
    if state.get("hasRestedThisTurn"):
        npc_name = state.get("npcName", config.npc_name)
        return _reject(
            state,
            action,
            FeedbackReason.ALREADY_RESTED,
            f"You have already rested during this turn. You must face {npc_name} again before resting.",
        )
    next_state = dict(state)
    next_state["stats"] = adjust_player_stats(state["stats"], hp=config.rest_healing.hp, mp=config.rest_healing.mp)
    next_state["hasRestedThisTurn"] = True
    next_state["feedback"] = dialog.REST_DONE
    return ActionResult(
        state=next_state,
        engine_events=[{"kind": "rested", "stats": dict(next_state["stats"]), "action": action}],
    )


def _apply_talk(state: dict[str, Any], action: dict[str, Any], config: GameConfig) -> ActionResult:
    game_state = state.get("gameState")
    npc_name = str(state.get("npcName", config.npc_name))
    if game_state == "home":
        next_state = dict(state)
        next_state["dialog"] = dialog.home_reflection(npc_name)
        return ActionResult(state=next_state, engine_events=[{"kind": "reflected", "action": action}])
    if game_state != "idle":
        return ActionResult(state=dict(state), engine_events=[])
    if state.get("hasTalkedThisRound"):
        return _reject(
            state,
            action,
            FeedbackReason.ALREADY_TALKED,
            f"You have already spoken with {npc_name} this round.",
        )

    amiability = int(state["enemy"]["amiability"])
    turn_count = int(state.get("turnCount", 0))
    title = dialog.guardian_title(amiability, config)
    healing = dialog.talk_healing(amiability, config)

    next_state = dict(state)
    next_state["npcName"] = title
    next_state["dialog"] = {
        "title": title,
        "content": dialog.get_guardian_dialog(turn_count, amiability, config),
        "responseOptions": [option.to_dict() for option in dialog.response_options(turn_count)],
        "awaitingResponse": True,
    }
    if healing:
        next_state["stats"] = adjust_player_stats(state["stats"], hp=healing.get("hp", 0), mp=healing.get("mp", 0))
    next_state["hasTalkedThisRound"] = True
    return ActionResult(
        state=next_state,
        engine_events=[{"kind": "talk_opened", "title": title, "healing": healing, "action": action}],
    )


def _apply_respond(
    state: dict[str, Any], action: dict[str, Any], config: GameConfig, rng: random.Random
) -> ActionResult:
    open_dialog = state.get("dialog")
    if not isinstance(open_dialog, dict) or not open_dialog.get("awaitingResponse"):
        return ActionResult(state=dict(state), engine_events=[])

    text = str(action.get("text", ""))
    delta = score_response(text, int(state.get("turnCount", 0)), rng=rng)
    npc_name = str(state.get("npcName", config.npc_name))

    next_state = dict(state)
    next_state["enemy"] = apply_amiability_delta(state["enemy"], delta)
    next_state["dialog"] = None
    feedback = dialog.get_enemy_response(delta, npc_name)
    if delta != 0:
        feedback = f"{feedback} [Amiability {delta:+.1f}]"
    next_state["feedback"] = feedback

    amiability = int(next_state["enemy"]["amiability"])
    events: list[dict[str, Any]] = [
        {"kind": "amiability_changed", "delta": delta, "amiability": amiability, "action": action}
    ]
    game_state = str(next_state.get("gameState"))
    if (
        can_access_home(game_state, amiability, config)
        and not next_state.get("homePromptShown")
        and game_state != "home"
    ):
        next_state["homePromptShown"] = True
        next_state["dialog"] = {"title": npc_name, "content": list(dialog.HOME_PROMPT)}
        events.append({"kind": "home_unlocked", "amiability": amiability})
    return ActionResult(state=next_state, engine_events=events)


def _apply_go_home(state: dict[str, Any], action: dict[str, Any], config: GameConfig) -> ActionResult:
    game_state = str(state.get("gameState"))
    if game_state not in HOME_REACHABLE_FROM:
        return ActionResult(state=dict(state), engine_events=[])
    amiability = int(state["enemy"]["amiability"])
    if not can_access_home(game_state, amiability, config):
        npc_name = str(state.get("npcName", config.npc_name))
        return _reject(
            state,
            action,
            FeedbackReason.HOME_LOCKED,
            dialog.get_home_access_message(game_state, amiability, npc_name, config),
        )
    next_state = dict(state)
    next_state["gameState"] = "home"
    next_state["sequence"] = []
    next_state["optimal"] = None
    next_state["selection"] = []
    next_state["showOptimal"] = False
    next_state["dialog"] = None
    _clear_timeline(next_state)
    next_state["feedback"] = dialog.WENT_HOME
    return ActionResult(state=next_state, engine_events=[{"kind": "went_home", "action": action}])


def _apply_return_to_temple(
    state: dict[str, Any], action: dict[str, Any], config: GameConfig, rng: random.Random
) -> ActionResult:
    if state.get("gameState") != "home":
        return ActionResult(state=dict(state), engine_events=[])
    next_state = dict(state)
    next_state["gameState"] = "idle"
    next_state["dialog"] = None
    _regenerate_sequence(next_state, config, rng)
    npc_name = str(state.get("npcName", config.npc_name))
    next_state["feedback"] = f"You have returned to the Ancient Temple. {npc_name} acknowledges your presence."
    return ActionResult(state=next_state, engine_events=[{"kind": "returned_to_temple", "action": action}])


def _apply_reset(state: dict[str, Any], action: dict[str, Any], config: GameConfig) -> ActionResult:
    next_state = build_initial_state(
        session_id=str(state.get("id", "")),
        config=config,
        epoch=int(state.get("epoch", 0)) + 1,
    )
    next_state["version"] = int(state.get("version", 1))
    next_state["log"] = list(state.get("log", []))
    if isinstance(state.get("meta"), dict):
        next_state["meta"] = dict(state["meta"])
    return ActionResult(state=next_state, engine_events=[{"kind": "reset", "action": action}])
