"""Score keeper for Rummy Star: applies actions and persists the session."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from rummystar.db.repository import SnapshotStore
from rummystar.game import ledger, roster, snapshot, thresholds
from rummystar.game.models import Session
from rummystar.game.results import ActionResult
from rummystar.game.scoring import Standing, standings, total_score
from rummystar.game.status import SurvivalStatus, classify
from rummystar.utils.constants import SESSION_KEY

logger = logging.getLogger("rummystar.engine")


class ScoreKeeper:
    """Stateless score keeper. All state lives in the Session / store.

    Every action loads the snapshot, applies one transition and, when the
    transition produced a new session, saves the whole snapshot back.
    """

    def __init__(self, store: SnapshotStore, key: str = SESSION_KEY) -> None:
        self._store = store
        self._key = key

    def get_session(self) -> Session:
        return snapshot.load_session(self._store.load(self._key))

    # --- Read-only views ---

    def total_for(self, player_id: str) -> int | None:
        session = self.get_session()
        player = session.get_player(player_id)
        if player is None:
            return None
        return total_score(player, session.rounds)

    def status_for(self, player_id: str) -> SurvivalStatus | None:
        session = self.get_session()
        player = session.get_player(player_id)
        if player is None:
            return None
        return classify(total_score(player, session.rounds), session.thresholds)

    def standings(self) -> list[Standing]:
        return standings(self.get_session())

    def export_json(self) -> str:
        return snapshot.export_json(self.get_session())

    # --- Roster ---

    def add_player(self, name: str) -> ActionResult:
        return self._apply("add_player", roster.add_player, name)

    def rename_player(self, player_id: str, name: str) -> ActionResult:
        return self._apply("rename_player", roster.rename_player, player_id, name)

    def delete_player(self, player_id: str) -> ActionResult:
        return self._apply("delete_player", roster.delete_player, player_id)

    def toggle_player(self, player_id: str) -> ActionResult:
        return self._apply("toggle_player", roster.toggle_player, player_id)

    def set_score(self, player_id: str, score: int | None) -> ActionResult:
        return self._apply("set_score", roster.set_score, player_id, score)

    def set_double_round(self, enabled: bool) -> ActionResult:
        return self._apply("set_double_round", roster.set_double_round, enabled)

    # --- Rounds ---

    def submit_round(self) -> ActionResult:
        return self._apply("submit_round", ledger.append_round)

    def undo_last_round(self) -> ActionResult:
        return self._apply("undo_last_round", ledger.undo_last_round)

    # --- Rules & preferences ---

    def update_threshold(self, field: str, value: int) -> ActionResult:
        return self._apply(
            "update_threshold", thresholds.update_threshold, field, value
        )

    def set_preferences(self, **preferences) -> ActionResult:
        return self._apply(
            "set_preferences", roster.set_preferences, **preferences
        )

    # --- Whole session ---

    def import_session(self, payload: str | dict) -> ActionResult:
        return self._apply("import_session", snapshot.import_session, payload)

    def reset(self) -> ActionResult:
        """Wipe the tournament and start over with the default roster."""
        self._store.delete(self._key)
        session = snapshot.default_session()
        self._save(session)
        event = {"event": "session_reset"}
        logger.info(json.dumps(event))
        return ActionResult(success=True, session=session, events=[event])

    # --- Private helpers ---

    def _apply(
        self, action: str, transition: Callable[..., ActionResult], *args, **kwargs
    ) -> ActionResult:
        session = self.get_session()
        result = transition(session, *args, **kwargs)
        if not result.success:
            logger.warning(
                json.dumps({
                    "event": "action_rejected",
                    "action": action,
                    "error_code": result.error_code,
                    "error": result.error,
                })
            )
        if result.session is not session:
            self._save(result.session)
        return result

    def _save(self, session: Session) -> None:
        session.timestamp = self._now()
        self._store.save(self._key, json.dumps(session.to_dict()))

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()
