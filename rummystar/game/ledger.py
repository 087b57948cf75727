"""Round ledger: commit a validated round, or undo the last one."""

from __future__ import annotations

import copy
import json
import logging

from rummystar.game.models import RoundRecord, Session
from rummystar.game.results import ActionResult
from rummystar.game.scoring import reconcile, total_score
from rummystar.game.validator import validate_round
from rummystar.utils.constants import EMPTY_LEDGER, ROUND_NAME_PREFIX

logger = logging.getLogger("rummystar.ledger")


def append_round(session: Session) -> ActionResult:
    """Validate the pending scores and commit them as a new round.

    Either everything changes (ledger, counter, pending scores, double
    round flag, eliminations) or nothing does.
    """
    validation = validate_round(session.get_active_players(), session.double_round)
    if not validation.valid:
        return ActionResult.fail(session, validation.error_code, validation.error)

    updated = copy.deepcopy(session)
    record = RoundRecord(
        name=f"{ROUND_NAME_PREFIX} {updated.round_counter}",
        scores=validation.scores,
    )
    updated.rounds.append(record)
    updated.round_counter += 1
    for player in updated.players:
        if player.is_checked:
            player.score = None
    updated.double_round = False

    events = []
    saved_event = {
        "event": "round_saved",
        "round": record.name,
        "index": len(updated.rounds) - 1,
        "scores": dict(record.scores),
        "double_round": session.double_round,
    }
    events.append(saved_event)
    logger.info(json.dumps(saved_event))

    for player_id in reconcile(updated):
        player = updated.get_player(player_id)
        elim_event = {
            "event": "elimination",
            "player_id": player_id,
            "total_score": total_score(player, updated.rounds),
            "out_limit": updated.thresholds.out_limit,
        }
        events.append(elim_event)
        logger.info(json.dumps(elim_event))

    return ActionResult(success=True, session=updated, events=events)


def undo_last_round(session: Session) -> ActionResult:
    """Remove the most recent round.

    Players who joined at or after the removed round are reset: they are
    unchecked, lose their override and must re-enter explicitly. The entry
    prohibition is then recomputed from the checked players only.
    """
    if not session.rounds:
        return ActionResult.fail(session, EMPTY_LEDGER, "No game history to delete.")

    updated = copy.deepcopy(session)
    removed = updated.rounds.pop()
    updated.round_counter -= 1
    remaining = len(updated.rounds)

    reset_ids = []
    for player in updated.players:
        if player.joined_at is not None and player.joined_at >= remaining:
            player.is_checked = False
            player.score = None
            player.override_total = None
            player.is_out = False
            reset_ids.append(player.id)

    compel_point = updated.thresholds.compel_point
    updated.entry_prohibited = any(
        total_score(p, updated.rounds) >= compel_point
        for p in updated.get_active_players()
    )

    reconcile(updated)

    event = {
        "event": "round_undone",
        "round": removed.name,
        "rounds_remaining": remaining,
        "reset_players": reset_ids,
        "entry_prohibited": updated.entry_prohibited,
    }
    logger.info(json.dumps(event))
    return ActionResult(success=True, session=updated, events=[event])
