"""Roster actions: add, rename, delete and check players; edit pending scores."""

from __future__ import annotations

import copy
import json
import logging

from rummystar.game.eligibility import can_activate
from rummystar.game.models import Player, Session
from rummystar.game.results import ActionResult
from rummystar.game.validator import infer_winner, is_valid_score, max_score
from rummystar.utils.constants import (
    ENTRY_PROHIBITED,
    HISTORY_VIEW_MODES,
    INACTIVE_PLAYER,
    INVALID_NAME,
    INVALID_PREFERENCE,
    INVALID_SCORE,
    PROTECTED_PLAYER,
    THEMES,
    UNKNOWN_PLAYER,
    WINNER_SCORE,
)

logger = logging.getLogger("rummystar.roster")


def add_player(session: Session, name: str) -> ActionResult:
    """Add a new player, checking them in when entry is allowed.

    A blocked entry still adds the player, unchecked; the result carries an
    ``entry_blocked`` event so the caller can tell the user why.
    """
    name = (name or "").strip()
    if not name:
        return ActionResult.fail(session, INVALID_NAME, "Player name cannot be empty!")

    updated = copy.deepcopy(session)
    gate = can_activate(None, updated)
    player = Player(
        id=Player.new_player_id(),
        name=name,
        is_checked=gate.allowed,
        override_total=gate.seed_score if gate.allowed else None,
        joined_at=len(updated.rounds),
    )
    updated.players.append(player)

    events = []
    added_event = {
        "event": "player_added",
        "player_id": player.id,
        "name": name,
        "checked": gate.allowed,
        "seed_score": player.override_total,
    }
    events.append(added_event)
    logger.info(json.dumps(added_event))

    if not gate.allowed:
        if gate.raise_prohibition:
            updated.entry_prohibited = True
        blocked_event = {
            "event": "entry_blocked",
            "player_id": player.id,
            "reason": ENTRY_PROHIBITED,
            "message": gate.error,
        }
        events.append(blocked_event)
        logger.warning(json.dumps(blocked_event))

    return ActionResult(success=True, session=updated, events=events)


def rename_player(session: Session, player_id: str, name: str) -> ActionResult:
    name = (name or "").strip()
    if not name:
        return ActionResult.fail(session, INVALID_NAME, "Player name cannot be empty!")
    if session.get_player(player_id) is None:
        return ActionResult.fail(session, UNKNOWN_PLAYER, f"Unknown player: {player_id}")

    updated = copy.deepcopy(session)
    updated.get_player(player_id).name = name
    event = {"event": "player_renamed", "player_id": player_id, "name": name}
    logger.info(json.dumps(event))
    return ActionResult(success=True, session=updated, events=[event])


def delete_player(session: Session, player_id: str) -> ActionResult:
    """Remove a player. Default players are protected."""
    player = session.get_player(player_id)
    if player is None:
        return ActionResult.fail(session, UNKNOWN_PLAYER, f"Unknown player: {player_id}")
    if player.is_default:
        return ActionResult.fail(
            session, PROTECTED_PLAYER, f"Default player {player.name} cannot be deleted."
        )

    updated = copy.deepcopy(session)
    updated.players = [p for p in updated.players if p.id != player_id]
    event = {"event": "player_deleted", "player_id": player_id}
    logger.info(json.dumps(event))
    return ActionResult(success=True, session=updated, events=[event])


def toggle_player(session: Session, player_id: str) -> ActionResult:
    """Check a player in or out of the next round.

    Checking out drops the pending score and the override. Checking in goes
    through the entry rules and seeds the player's total at the current
    highest active total.
    """
    player = session.get_player(player_id)
    if player is None:
        return ActionResult.fail(session, UNKNOWN_PLAYER, f"Unknown player: {player_id}")

    if player.is_checked:
        updated = copy.deepcopy(session)
        p = updated.get_player(player_id)
        p.is_checked = False
        p.score = None
        p.override_total = None
        event = {"event": "player_unchecked", "player_id": player_id}
        logger.info(json.dumps(event))
        return ActionResult(success=True, session=updated, events=[event])

    gate = can_activate(player_id, session)
    if not gate.allowed:
        logger.warning(
            json.dumps({"event": "entry_blocked", "player_id": player_id,
                        "seed_score": gate.seed_score})
        )
        if gate.raise_prohibition and not session.entry_prohibited:
            # The latch is part of the outcome even though the entry failed
            latched = copy.deepcopy(session)
            latched.entry_prohibited = True
            return ActionResult.fail(latched, gate.error_code, gate.error)
        return ActionResult.fail(session, gate.error_code, gate.error)

    updated = copy.deepcopy(session)
    p = updated.get_player(player_id)
    p.is_checked = True
    p.score = None
    p.is_out = False
    p.override_total = gate.seed_score
    p.joined_at = len(updated.rounds)
    event = {
        "event": "player_checked",
        "player_id": player_id,
        "seed_score": gate.seed_score,
        "joined_at": p.joined_at,
    }
    logger.info(json.dumps(event))
    return ActionResult(success=True, session=updated, events=[event])


def set_score(session: Session, player_id: str, score: int | None) -> ActionResult:
    """Set or clear an active player's pending score.

    Afterwards, if the winner is already determined (everyone else scored
    and nobody has 0), the remaining player is given 0.
    """
    player = session.get_player(player_id)
    if player is None:
        return ActionResult.fail(session, UNKNOWN_PLAYER, f"Unknown player: {player_id}")
    if not player.is_active:
        return ActionResult.fail(
            session, INACTIVE_PLAYER, f"{player.name} is not playing this round."
        )
    if score is not None and not is_valid_score(score, max_score(True)):
        return ActionResult.fail(
            session, INVALID_SCORE, f"Score must be a whole number >= 0, got {score!r}"
        )

    updated = copy.deepcopy(session)
    updated.get_player(player_id).score = score
    events = [{"event": "score_entered", "player_id": player_id, "score": score}]

    winner_id = infer_winner(updated.get_active_players())
    if winner_id is not None:
        updated.get_player(winner_id).score = WINNER_SCORE
        winner_event = {"event": "winner_inferred", "player_id": winner_id}
        events.append(winner_event)
        logger.info(json.dumps(winner_event))

    return ActionResult(success=True, session=updated, events=events)


def set_double_round(session: Session, enabled: bool) -> ActionResult:
    updated = copy.deepcopy(session)
    updated.double_round = bool(enabled)
    return ActionResult(
        success=True,
        session=updated,
        events=[{"event": "double_round", "enabled": updated.double_round}],
    )


def set_preferences(
    session: Session,
    theme: str | None = None,
    hide_default_players: bool | None = None,
    history_view_mode: str | None = None,
) -> ActionResult:
    if theme is not None and theme not in THEMES:
        return ActionResult.fail(session, INVALID_PREFERENCE, f"Unknown theme: {theme}")
    if history_view_mode is not None and history_view_mode not in HISTORY_VIEW_MODES:
        return ActionResult.fail(
            session, INVALID_PREFERENCE, f"Unknown history view: {history_view_mode}"
        )

    updated = copy.deepcopy(session)
    if theme is not None:
        updated.theme = theme
    if hide_default_players is not None:
        updated.hide_default_players = hide_default_players
    if history_view_mode is not None:
        updated.history_view_mode = history_view_mode
    return ActionResult(
        success=True,
        session=updated,
        events=[{
            "event": "preferences_changed",
            "theme": updated.theme,
            "hide_default_players": updated.hide_default_players,
            "history_view_mode": updated.history_view_mode,
        }],
    )
