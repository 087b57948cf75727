"""Session snapshots: defaults, normalization, import and export."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from rummystar.game.models import Player, RoundRecord, Session, Thresholds
from rummystar.game.results import ActionResult
from rummystar.game.scoring import reconcile
from rummystar.utils.constants import (
    APP_VERSION,
    DEFAULT_COMPEL_POINT,
    DEFAULT_OUT_LIMIT,
    DEFAULT_PLAYERS,
    DEFAULT_SCOOT_POINT,
    IMPORT_FORMAT,
    THEME_CLASSIC,
    VIEW_STANDARD,
)

logger = logging.getLogger("rummystar.snapshot")


def default_players() -> list[Player]:
    return [
        Player(id=pid, name=name, is_default=True) for pid, name in DEFAULT_PLAYERS
    ]


def default_session() -> Session:
    """A fresh tournament: default roster, no rounds, default rules."""
    return Session(players=default_players())


def merge_default_players(players: list[Player]) -> list[Player]:
    """Put the default roster back in front of a loaded player list.

    Saved players win over defaults with the same id, so a default player's
    state survives a reload.
    """
    by_id = {p.id: p for p in default_players()}
    for player in players:
        by_id[player.id] = player
    return list(by_id.values())


def _scoot_point(value) -> int:
    # classify needs a positive step
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    return DEFAULT_SCOOT_POINT


def normalize_session(payload: dict) -> Session:
    """Build a Session from an external payload, defaulting missing fields.

    Only ``users`` and ``gameHistory`` are required. Values are taken as
    they come: no range checks on round scores. A scoot point below 1
    falls back to the default.
    """
    return Session(
        players=[Player.from_dict(p) for p in payload["users"]],
        rounds=[RoundRecord.from_dict(r) for r in payload["gameHistory"]],
        round_counter=payload.get("gameCounter") or len(payload["gameHistory"]) + 1,
        double_round=bool(payload.get("isRummyRound", False)),
        entry_prohibited=bool(payload.get("isEntryProhibitedGlobally", False)),
        thresholds=Thresholds(
            out_limit=payload.get("outLimit") or DEFAULT_OUT_LIMIT,
            compel_point=payload.get("compelPoint") or DEFAULT_COMPEL_POINT,
            scoot_point=_scoot_point(payload.get("scootPoint")),
        ),
        theme=payload.get("theme") or THEME_CLASSIC,
        hide_default_players=payload.get("hideDefaultUsers", True),
        history_view_mode=payload.get("historyViewMode") or VIEW_STANDARD,
        version=payload.get("version") or APP_VERSION,
        timestamp=payload.get("timestamp") or "",
    )


def check_import_format(payload: object) -> str | None:
    """Shallow structural check. Returns an error message or None."""
    if not isinstance(payload, dict):
        return "Invalid backup file format: expected a JSON object."
    for key in ("users", "gameHistory"):
        if key not in payload:
            return f"Invalid backup file format: missing '{key}'."
        if not isinstance(payload[key], list):
            return f"Invalid backup file format: '{key}' must be a list."
    return None


def import_session(current: Session, payload: str | dict) -> ActionResult:
    """Replace the whole session with an imported snapshot."""
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            return ActionResult.fail(
                current,
                IMPORT_FORMAT,
                f"Error reading the backup file, not valid JSON: {e.msg}",
            )

    error = check_import_format(payload)
    if error:
        logger.warning(json.dumps({"event": "import_rejected", "error": error}))
        return ActionResult.fail(current, IMPORT_FORMAT, error)

    try:
        session = normalize_session(payload)
        reconcile(session)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        return ActionResult.fail(
            current, IMPORT_FORMAT, f"Invalid backup file format: {e}"
        )

    event = {
        "event": "session_imported",
        "version": session.version,
        "players": len(session.players),
        "rounds": len(session.rounds),
    }
    logger.info(json.dumps(event))
    return ActionResult(success=True, session=session, events=[event])


def export_session(session: Session) -> dict:
    data = session.to_dict()
    data["version"] = APP_VERSION
    data["timestamp"] = datetime.now(timezone.utc).isoformat()
    return data


def export_json(session: Session) -> str:
    return json.dumps(export_session(session), indent=2)


def load_session(data: str | None) -> Session:
    """Decode a stored snapshot, or start a new session if there is none."""
    if data is None:
        return default_session()
    session = normalize_session(json.loads(data))
    session.players = merge_default_players(session.players)
    return session
