"""Validation of round submissions.

A round is valid when every active player has a score between 0 and the
round maximum (80, or 160 in a double round) and exactly one player, the
winner, scored 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rummystar.game.models import Player
from rummystar.utils.constants import (
    EMPTY_ROSTER,
    INVALID_SCORE,
    MAX_SCORE_DEFAULT,
    MAX_SCORE_DOUBLE_ROUND,
    WINNER_COUNT,
    WINNER_SCORE,
)


@dataclass
class RoundValidation:
    valid: bool
    scores: dict[str, int] = field(default_factory=dict)
    error: str | None = None
    error_code: str | None = None


def max_score(double_round: bool) -> int:
    return MAX_SCORE_DOUBLE_ROUND if double_round else MAX_SCORE_DEFAULT


def is_valid_score(score: object, limit: int) -> bool:
    if isinstance(score, bool) or not isinstance(score, int):
        return False
    return 0 <= score <= limit


def validate_round(
    active_players: list[Player], double_round: bool
) -> RoundValidation:
    """Check the pending scores of the active players.

    Rules, in order:
    1. At least one active player
    2. Every active player has a score in [0, max]
    3. Exactly one winner (score 0)
    """
    if not active_players:
        return RoundValidation(
            False, error_code=EMPTY_ROSTER, error="No active players to save scores for."
        )

    limit = max_score(double_round)
    for player in active_players:
        if player.is_out or not is_valid_score(player.score, limit):
            return RoundValidation(
                False,
                error_code=INVALID_SCORE,
                error=(
                    f"Please ensure all active players have valid scores "
                    f"between 0 and {limit} before saving ({player.name})."
                ),
            )

    winners = [p for p in active_players if p.score == WINNER_SCORE]
    if len(winners) != 1:
        return RoundValidation(
            False,
            error_code=WINNER_COUNT,
            error=(
                f"Exactly one player must have a score of 0 (winner), "
                f"found {len(winners)}."
            ),
        )

    return RoundValidation(True, scores={p.id: p.score for p in active_players})


def infer_winner(active_players: list[Player]) -> str | None:
    """Return the id of the player who must be the winner, if determined.

    With more than one active player, when everyone but one has a score
    and nobody has scored 0 yet, the remaining player won the round.
    """
    if len(active_players) < 2:
        return None
    if any(p.score == WINNER_SCORE for p in active_players):
        return None
    unscored = [p for p in active_players if p.score is None]
    if len(unscored) != 1:
        return None
    return unscored[0].id
