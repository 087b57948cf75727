"""Shared test fixtures for Rummy Star."""

from __future__ import annotations

import pytest

from rummystar.db.memory import InMemorySnapshotStore
from rummystar.game.engine import ScoreKeeper
from rummystar.game.models import Player, RoundRecord, Session


def make_session(
    players: list[Player] | None = None,
    rounds: list[dict[str, int]] | None = None,
    **kwargs,
) -> Session:
    """Session with the given players and rounds given as plain score dicts."""
    records = [
        RoundRecord(name=f"Game {i + 1}", scores=scores)
        for i, scores in enumerate(rounds or [])
    ]
    return Session(
        players=players or [],
        rounds=records,
        round_counter=len(records) + 1,
        **kwargs,
    )


def checked(player_id: str, score: int | None = None, **kwargs) -> Player:
    """An active player named after its id."""
    return Player(id=player_id, name=player_id.upper(), is_checked=True, score=score, **kwargs)


@pytest.fixture
def store():
    return InMemorySnapshotStore()


@pytest.fixture
def keeper(store):
    return ScoreKeeper(store)
