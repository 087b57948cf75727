"""Data models for Rummy Star session state."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from rummystar.utils.constants import (
    APP_VERSION,
    DEFAULT_COMPEL_POINT,
    DEFAULT_OUT_LIMIT,
    DEFAULT_SCOOT_POINT,
    THEME_CLASSIC,
    VIEW_STANDARD,
)


@dataclass
class Player:
    """A tournament player.

    ``override_total`` seeds the running total of a player who joined late,
    and ``joined_at`` is the ledger length when they became active. Rounds
    before ``joined_at`` never count towards their total.
    """

    id: str
    name: str
    is_default: bool = False
    is_checked: bool = False
    score: int | None = None
    is_out: bool = False
    override_total: int | None = None
    joined_at: int | None = 0

    @property
    def is_active(self) -> bool:
        return self.is_checked and not self.is_out

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "isDefault": self.is_default,
            "isChecked": self.is_checked,
            "score": self.score,
            "isOut": self.is_out,
            "overrideTotalScoreForIsOut": self.override_total,
            "joinedAtGameIndex": self.joined_at,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Player:
        joined_at = d.get("joinedAtGameIndex")
        return cls(
            id=str(d["id"]),
            name=d.get("name", ""),
            is_default=d.get("isDefault", False),
            is_checked=d.get("isChecked", False),
            score=d.get("score"),
            is_out=d.get("isOut") or False,
            override_total=d.get("overrideTotalScoreForIsOut"),
            joined_at=joined_at if joined_at is not None else 0,
        )

    @staticmethod
    def new_player_id() -> str:
        return str(uuid.uuid4())


@dataclass(frozen=True)
class RoundRecord:
    """A committed round: player id -> score. Absent ids sat the round out."""

    name: str
    scores: dict[str, int]

    def to_dict(self) -> dict:
        return {"name": self.name, "scores": dict(self.scores)}

    @classmethod
    def from_dict(cls, d: dict) -> RoundRecord:
        return cls(name=d.get("name", ""), scores=dict(d.get("scores") or {}))


@dataclass(frozen=True)
class Thresholds:
    """Out limit, compel point and scoot point.

    Kept consistent by ``derive_thresholds``:
    compel_point = out_limit - scoot_point + 1.
    """

    out_limit: int = DEFAULT_OUT_LIMIT
    compel_point: int = DEFAULT_COMPEL_POINT
    scoot_point: int = DEFAULT_SCOOT_POINT


@dataclass
class Session:
    """Complete state of a scorekeeping session (one snapshot)."""

    players: list[Player] = field(default_factory=list)
    rounds: list[RoundRecord] = field(default_factory=list)
    round_counter: int = 1
    double_round: bool = False
    entry_prohibited: bool = False
    thresholds: Thresholds = field(default_factory=Thresholds)
    theme: str = THEME_CLASSIC
    hide_default_players: bool = True
    history_view_mode: str = VIEW_STANDARD
    version: str = APP_VERSION
    timestamp: str = ""

    def get_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def get_active_players(self) -> list[Player]:
        return [p for p in self.players if p.is_active]

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "users": [p.to_dict() for p in self.players],
            "gameHistory": [r.to_dict() for r in self.rounds],
            "gameCounter": self.round_counter,
            "isRummyRound": self.double_round,
            "isEntryProhibitedGlobally": self.entry_prohibited,
            "theme": self.theme,
            "hideDefaultUsers": self.hide_default_players,
            "outLimit": self.thresholds.out_limit,
            "compelPoint": self.thresholds.compel_point,
            "scootPoint": self.thresholds.scoot_point,
            "timestamp": self.timestamp,
            "historyViewMode": self.history_view_mode,
        }
