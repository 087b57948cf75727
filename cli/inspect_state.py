"""Inspect and validate a saved or exported session snapshot.

Usage:
  python -m cli.inspect_state --file rummy_star_backup.json
  python -m cli.inspect_state --file rummy_star_backup.json --player 8f2c...
  python -m cli.inspect_state --file rummy_star_backup.json --show history
  python -m cli.inspect_state --file rummy_star_backup.json --validate
"""

from __future__ import annotations

import argparse
import json
import sys

from rummystar.game.integrity import validate_session_integrity
from rummystar.game.models import Session
from rummystar.game.scoring import standings, total_score
from rummystar.game.snapshot import check_import_format, normalize_session
from rummystar.game.status import classify


def load_snapshot(file_path: str) -> Session:
    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)
    error = check_import_format(data)
    if error:
        print(error)
        sys.exit(1)
    return normalize_session(data)


def inspect_state(
    file_path: str,
    player: str | None,
    show: str | None,
    validate: bool,
) -> None:
    session = load_snapshot(file_path)

    if validate:
        errors = validate_session_integrity(session)
        if errors:
            print("Integrity errors:")
            for e in errors:
                print(f"  - {e}")
            sys.exit(1)
        else:
            print("Session valid ✓")
        return

    if player:
        p = session.get_player(player)
        if p is None:
            print(f"Player {player} not found")
            sys.exit(1)
        total = total_score(p, session.rounds)
        status = classify(total, session.thresholds)
        print(f"{p.name} [{p.id}]")
        print(f"  Total: {total} (override {p.override_total}, joined at {p.joined_at})")
        print(f"  Status: {status.label}, {status.description}")
        print(f"  Points remaining: {status.points_remaining} ({status.plays})")
        return

    if show == "history":
        if not session.rounds:
            print("No rounds recorded")
        else:
            names = {p.id: p.name for p in session.players}
            for record in session.rounds:
                scores = ", ".join(
                    f"{names.get(pid, 'Unknown Player')}: {score}"
                    for pid, score in record.scores.items()
                )
                print(f"  {record.name}: {scores}")
        return

    # Default: full dump
    t = session.thresholds
    print(f"Version: {session.version}")
    print(f"Saved at: {session.timestamp or '-'}")
    print(f"Rounds: {len(session.rounds)} (next: Game {session.round_counter})")
    print(f"Thresholds: out {t.out_limit}, compel {t.compel_point}, scoot {t.scoot_point}")
    print(f"Double round: {session.double_round}")
    print(f"Entry prohibited: {session.entry_prohibited}")
    print("Standings:")
    for rank, row in enumerate(standings(session), 1):
        print(
            f"  {rank:02d} {row.name:<12} {row.total:>4} "
            f"{row.status.label:<7} {row.status.plays}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect a Rummy Star session")
    parser.add_argument("--file", required=True, help="Path to session JSON")
    parser.add_argument("--player", help="Player ID to inspect")
    parser.add_argument("--show", choices=["history"], help="What to show")
    parser.add_argument("--validate", action="store_true", help="Validate integrity")
    args = parser.parse_args()
    inspect_state(args.file, args.player, args.show, args.validate)


if __name__ == "__main__":
    main()
