"""Score accumulation, elimination and standings for Rummy Star."""

from __future__ import annotations

from dataclasses import dataclass

from rummystar.game.models import Player, RoundRecord, Session
from rummystar.game.status import SurvivalStatus, classify


@dataclass(frozen=True)
class Standing:
    player_id: str
    name: str
    total: int
    status: SurvivalStatus


def total_score(player: Player, rounds: list[RoundRecord]) -> int:
    """Running total for a player.

    Starts from the player's override (0 when unset) and adds their score
    from every round at or after ``joined_at``. Rounds they sat out add
    nothing.
    """
    total = player.override_total or 0
    start = player.joined_at or 0
    for record in rounds[start:]:
        round_score = record.scores.get(player.id)
        if round_score is not None:
            total += round_score
    return total


def reconcile(session: Session) -> list[str]:
    """Recompute ``is_out`` for every player after a ledger or threshold change.

    A player going out is unchecked and loses any pending score. A player
    coming back under the limit only has the flag cleared; they are not
    re-checked. Returns the ids of newly eliminated players.
    """
    out_limit = session.thresholds.out_limit
    newly_out = []
    for player in session.players:
        is_out = total_score(player, session.rounds) > out_limit
        if is_out and player.is_checked:
            player.is_checked = False
            player.score = None
            newly_out.append(player.id)
        player.is_out = is_out
    return newly_out


def highest_active_total(session: Session, exclude_id: str | None = None) -> int:
    """Highest total among checked, non-out players (0 if there are none)."""
    best = 0
    for player in session.get_active_players():
        if player.id == exclude_id:
            continue
        best = max(best, total_score(player, session.rounds))
    return best


def standings(session: Session) -> list[Standing]:
    """Totals for players in the history or currently checked, highest first."""
    in_history = {pid for record in session.rounds for pid in record.scores}
    rows = []
    for player in session.players:
        if player.id not in in_history and not player.is_checked:
            continue
        total = total_score(player, session.rounds)
        rows.append(
            Standing(
                player_id=player.id,
                name=player.name,
                total=total,
                status=classify(total, session.thresholds),
            )
        )
    rows.sort(key=lambda s: s.total, reverse=True)
    return rows
