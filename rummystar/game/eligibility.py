"""Entry and re-entry rules.

A player joining mid-tournament starts at the highest total among the
players still in the game, so they cannot simply outlast the field from
zero. Once any active player reaches the compel point no one may join, and
that prohibition stays latched until an undo or reset clears it.
"""

from __future__ import annotations

from dataclasses import dataclass

from rummystar.game.models import Session
from rummystar.game.scoring import highest_active_total
from rummystar.utils.constants import ENTRY_PROHIBITED


@dataclass
class EligibilityResult:
    allowed: bool
    seed_score: int
    raise_prohibition: bool = False
    error: str | None = None
    error_code: str | None = None


def can_activate(candidate_id: str | None, session: Session) -> EligibilityResult:
    """Decide whether a player may be checked into the game.

    ``candidate_id`` is excluded from the seed calculation; pass None for a
    player who is not on the roster yet. When ``raise_prohibition`` is set
    the caller must latch ``session.entry_prohibited``.
    """
    seed_score = highest_active_total(session, exclude_id=candidate_id)
    compel_point = session.thresholds.compel_point

    if session.entry_prohibited:
        return EligibilityResult(
            allowed=False,
            seed_score=seed_score,
            error_code=ENTRY_PROHIBITED,
            error="Entry to the game is currently prohibited due to previous high scores.",
        )

    if seed_score >= compel_point:
        return EligibilityResult(
            allowed=False,
            seed_score=seed_score,
            raise_prohibition=True,
            error_code=ENTRY_PROHIBITED,
            error=(
                f"Entry not allowed. The highest active player score ({seed_score}) "
                f"is equal to or above the Compel Point ({compel_point})."
            ),
        )

    return EligibilityResult(allowed=True, seed_score=seed_score)
