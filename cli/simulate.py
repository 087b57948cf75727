"""Simulate Rummy Star tournaments with random score entry.

Every action goes through the ScoreKeeper and the session is checked for
integrity after each one. Usage:

  python -m cli.simulate --tournaments 100 --players 5 [--seed 42] [--verbose]
"""

from __future__ import annotations

import argparse
import random
import secrets
import time

from rummystar.db.memory import InMemorySnapshotStore
from rummystar.game.engine import ScoreKeeper
from rummystar.game.integrity import validate_session_integrity
from rummystar.game.models import Session
from rummystar.game.validator import max_score

# Chance per round of undoing it right after it is saved
UNDO_RATE = 0.1
# Chance per round of a player trying to join mid-tournament
LATE_ENTRY_RATE = 0.15
DOUBLE_ROUND_RATE = 0.1
MAX_ROUNDS = 500


def create_rng(seed: int | None = None) -> random.Random:
    """Seeded Random for replayable runs, SystemRandom otherwise."""
    if seed is not None:
        return random.Random(seed)
    return secrets.SystemRandom()


def play_round(keeper: ScoreKeeper, session: Session, rng: random.Random) -> Session:
    """Enter random scores for every active player and save the round."""
    if rng.random() < DOUBLE_ROUND_RATE:
        session = keeper.set_double_round(True).session

    active = session.get_active_players()
    winner = rng.choice(active)
    limit = max_score(session.double_round)
    for player in active:
        if player.id == winner.id:
            continue
        result = keeper.set_score(player.id, rng.randint(2, limit))
        if not result.success:
            raise RuntimeError(f"Score entry failed: {result.error}")
        session = result.session

    # The winner is usually inferred; enter 0 explicitly otherwise
    if session.get_player(winner.id).score is None:
        session = keeper.set_score(winner.id, 0).session

    result = keeper.submit_round()
    if not result.success:
        raise RuntimeError(f"Round rejected: {result.error}")
    return result.session


def simulate_tournament(
    num_players: int, rng: random.Random, verbose: bool = False
) -> dict:
    """Simulate one tournament until a single player survives."""
    keeper = ScoreKeeper(InMemorySnapshotStore())
    session = keeper.get_session()
    for player in session.players[:num_players]:
        session = keeper.toggle_player(player.id).session

    rounds = 0
    undos = 0
    late_entries = 0
    blocked_entries = 0

    while len(session.get_active_players()) > 1 and rounds < MAX_ROUNDS:
        if rng.random() < LATE_ENTRY_RATE:
            result = keeper.add_player(f"late{late_entries + blocked_entries + 1}")
            session = result.session
            if any(e["event"] == "entry_blocked" for e in result.events):
                blocked_entries += 1
            else:
                late_entries += 1

        try:
            session = play_round(keeper, session, rng)
        except RuntimeError as e:
            return {"error": str(e), "rounds": rounds}
        rounds += 1

        if rng.random() < UNDO_RATE:
            session = keeper.undo_last_round().session
            undos += 1
            rounds -= 1

        errors = validate_session_integrity(session)
        if errors:
            return {"error": f"Integrity: {errors}", "rounds": rounds}

        if verbose and rounds % 10 == 0:
            print(f"  Round {rounds}, {len(session.get_active_players())} active")

    active = session.get_active_players()
    return {
        "winner": active[0].name if len(active) == 1 else None,
        "rounds": rounds,
        "undos": undos,
        "late_entries": late_entries,
        "blocked_entries": blocked_entries,
        "prohibited": session.entry_prohibited,
        "error": None,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Rummy Star Simulator")
    parser.add_argument("--tournaments", type=int, default=100)
    parser.add_argument("--players", type=int, default=5, choices=range(2, 8))
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    base_seed = args.seed if args.seed is not None else int(time.time())
    n, p = args.tournaments, args.players
    print(f"Simulating {n} tournaments with {p} players (base seed: {base_seed})")

    errors = 0
    wins: dict[str, int] = {}
    total_rounds = 0
    total_blocked = 0

    for i in range(args.tournaments):
        rng = create_rng(base_seed + i)
        result = simulate_tournament(args.players, rng, verbose=args.verbose)

        if result.get("error"):
            errors += 1
            if args.verbose:
                print(f"  Tournament {i + 1}: ERROR - {result['error']}")
            continue

        winner = result.get("winner") or "none"
        wins[winner] = wins.get(winner, 0) + 1
        total_rounds += result["rounds"]
        total_blocked += result["blocked_entries"]
        if args.verbose:
            print(
                f"  Tournament {i + 1}: winner={winner}, rounds={result['rounds']}, "
                f"undos={result['undos']}, late={result['late_entries']}"
            )

    completed = args.tournaments - errors
    print("\nResults:")
    print(f"  Completed: {completed}/{args.tournaments}")
    print(f"  Errors: {errors}")
    if completed > 0:
        print(f"  Average rounds: {total_rounds / completed:.1f}")
        print(f"  Blocked entries: {total_blocked}")
        print(f"  Wins: {wins}")


if __name__ == "__main__":
    main()
