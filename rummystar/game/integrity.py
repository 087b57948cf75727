"""State integrity checker for Rummy Star sessions."""

from __future__ import annotations

from collections import Counter

from rummystar.game.models import Session
from rummystar.game.scoring import total_score


def validate_session_integrity(session: Session) -> list[str]:
    """Validate all session invariants. Returns list of errors (empty = OK).

    Checks:
    1. Player ids are unique
    2. Thresholds satisfy compel = out - scoot + 1, with scoot >= 1
    3. Round counter is one past the number of rounds
    4. Round scores are non-negative
    5. is_out matches the running total
    6. No eliminated player is checked or holds a pending score
    7. Checked players joined within the ledger
    """
    errors: list[str] = []

    # 1. Unique ids
    id_counts = Counter(p.id for p in session.players)
    for pid, count in id_counts.items():
        if count > 1:
            errors.append(f"Duplicate player id {pid} (x{count})")

    # 2. Thresholds
    t = session.thresholds
    if t.scoot_point < 1:
        errors.append(f"Scoot point must be >= 1, got {t.scoot_point}")
    if t.compel_point != t.out_limit - t.scoot_point + 1:
        errors.append(
            f"Compel point {t.compel_point} != out limit {t.out_limit} "
            f"- scoot point {t.scoot_point} + 1"
        )

    # 3. Round counter
    if session.round_counter != len(session.rounds) + 1:
        errors.append(
            f"Round counter = {session.round_counter}, "
            f"expected {len(session.rounds) + 1}"
        )

    # 4. Round scores
    for index, record in enumerate(session.rounds):
        for pid, score in record.scores.items():
            if score < 0:
                errors.append(f"Negative score in round {index} for {pid}: {score}")

    for player in session.players:
        total = total_score(player, session.rounds)

        # 5. Elimination flag
        if player.is_out != (total > t.out_limit):
            errors.append(
                f"Player {player.id} is_out={player.is_out} but total={total} "
                f"(out limit {t.out_limit})"
            )

        # 6. Eliminated players cannot be in the round
        if player.is_out and (player.is_checked or player.score is not None):
            errors.append(f"Eliminated player {player.id} is still in the round")

        # 7. Join index (unchecked players may point past an undone round)
        joined_at = player.joined_at or 0
        if player.is_checked and not 0 <= joined_at <= len(session.rounds):
            errors.append(
                f"Player {player.id} joined at {joined_at}, "
                f"ledger has {len(session.rounds)} rounds"
            )

    return errors
