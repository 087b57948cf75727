"""Interactive score keeper for Rummy Star.

Usage: python -m cli.play [--store file] [--data-dir DIR] [--key KEY] [--verbose]
"""

from __future__ import annotations

import argparse
import logging

from rummystar.db.stores import STORE_FILE, STORE_KINDS, create_store
from rummystar.game.engine import ScoreKeeper
from rummystar.game.integrity import validate_session_integrity
from rummystar.game.models import Session
from rummystar.game.scoring import standings, total_score
from rummystar.game.validator import max_score
from rummystar.utils.constants import SESSION_KEY, THRESHOLD_FIELDS


def display_roster(session: Session) -> str:
    """Format the roster for terminal display."""
    lines = ["", "  Players:"]
    for i, player in enumerate(session.players, 1):
        if session.hide_default_players and player.is_default and not player.is_checked:
            continue
        total = total_score(player, session.rounds)
        if player.is_out:
            state = "OUT"
        elif player.is_checked:
            state = "in"
        else:
            state = "-"
        pending = "" if player.score is None else f"  pending: {player.score}"
        lines.append(f"  {i:2d}. [{state:>3}] {player.name} ({total}){pending}")
    lines.append("")
    return "\n".join(lines)


def display_round(session: Session) -> str:
    """Format the in-progress round."""
    limit = max_score(session.double_round)
    double = " (double round)" if session.double_round else ""
    lines = [
        "",
        f"{'=' * 50}",
        f"  RUMMY STAR  Game {session.round_counter}{double}  max {limit}",
        f"{'=' * 50}",
    ]
    active = session.get_active_players()
    if not active:
        lines.append("  No active players. Check players in with 'toggle <n>'.")
    for player in active:
        score = "-" if player.score is None else str(player.score)
        lines.append(f"    {player.name:<12} {score:>4}")
    lines.append("")
    return "\n".join(lines)


def display_standings(session: Session) -> str:
    """Format totals with survival status, highest first."""
    t = session.thresholds
    lines = [
        "",
        f"  Standings after {len(session.rounds)} rounds "
        f"(out {t.out_limit}, compel {t.compel_point}, scoot {t.scoot_point})",
    ]
    for rank, row in enumerate(standings(session), 1):
        lines.append(
            f"  {rank:02d} {row.name:<12} {row.total:>4}  "
            f"{row.status.label:<7} {row.status.description}"
        )
    if session.entry_prohibited:
        lines.append("  Entry is closed.")
    lines.append("")
    return "\n".join(lines)


def display_help() -> str:
    return "\n".join([
        "  Commands:",
        "    add <name>          - Add a player",
        "    rename <n> <name>   - Rename player n",
        "    delete <n>          - Delete player n",
        "    toggle <n>          - Check player n in or out",
        "    score <n> <points>  - Enter a score (or 'score <n> -' to clear)",
        "    double on|off       - Double round (max 160)",
        "    save                - Save the round",
        "    undo                - Delete the last round",
        "    set <field> <value> - out_limit | compel_point | scoot_point",
        "    standings           - Show standings",
        "    players             - Show all players",
        "    reset               - Start a new tournament",
        "    quit                - Exit",
        "",
    ])


def resolve_player(session: Session, ref: str) -> str | None:
    """Player id from a roster number or a name."""
    if ref.isdigit():
        index = int(ref) - 1
        if 0 <= index < len(session.players):
            return session.players[index].id
        return None
    for player in session.players:
        if player.name.lower() == ref.lower():
            return player.id
    return None


def run(keeper: ScoreKeeper) -> None:
    session = keeper.get_session()
    print("\n  Welcome to Rummy Star!")
    print(display_roster(session))
    print(display_help())

    while True:
        print(display_round(session))
        try:
            action_str = input("  > ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n  Bye.")
            return

        if not action_str:
            continue

        parts = action_str.split()
        cmd = parts[0].lower()

        if cmd == "quit":
            return
        elif cmd == "help":
            print(display_help())
            continue
        elif cmd == "players":
            print(display_roster(session))
            continue
        elif cmd == "standings":
            print(display_standings(session))
            continue
        elif cmd == "add":
            result = keeper.add_player(" ".join(parts[1:]))
        elif cmd in ("rename", "delete", "toggle", "score"):
            if len(parts) < 2:
                print(f"  Usage: {cmd} <n> ...")
                continue
            player_id = resolve_player(session, parts[1])
            if player_id is None:
                print(f"  Player '{parts[1]}' not found")
                continue
            if cmd == "rename":
                result = keeper.rename_player(player_id, " ".join(parts[2:]))
            elif cmd == "delete":
                result = keeper.delete_player(player_id)
            elif cmd == "toggle":
                result = keeper.toggle_player(player_id)
            else:
                if len(parts) < 3:
                    print("  Usage: score <n> <points>")
                    continue
                if parts[2] == "-":
                    score = None
                else:
                    try:
                        score = int(parts[2])
                    except ValueError:
                        print(f"  Not a number: {parts[2]}")
                        continue
                result = keeper.set_score(player_id, score)
        elif cmd == "double":
            result = keeper.set_double_round(len(parts) > 1 and parts[1] == "on")
        elif cmd == "save":
            result = keeper.submit_round()
        elif cmd == "undo":
            result = keeper.undo_last_round()
        elif cmd == "set":
            if len(parts) < 3 or parts[1] not in THRESHOLD_FIELDS:
                print(f"  Usage: set <{'|'.join(THRESHOLD_FIELDS)}> <value>")
                continue
            try:
                value = int(parts[2])
            except ValueError:
                print(f"  Not a number: {parts[2]}")
                continue
            result = keeper.update_threshold(parts[1], value)
        elif cmd == "reset":
            result = keeper.reset()
        else:
            print(f"  Unknown command: {cmd}")
            continue

        session = result.session
        if not result.success:
            print(f"  ✗ {result.error}")
            continue

        for event in result.events:
            ev_type = event.get("event", "")
            if ev_type == "round_saved":
                print(f"\n  *** {event['round']} saved ***")
            elif ev_type == "elimination":
                player = session.get_player(event["player_id"])
                print(f"  *** {player.name} is out! ({event['total_score']})")
            elif ev_type == "entry_blocked":
                print(f"  ! {event['message']}")
            elif ev_type == "winner_inferred":
                player = session.get_player(event["player_id"])
                print(f"  {player.name} wins the round (0)")
            elif ev_type == "round_undone":
                print(f"  {event['round']} deleted")

        errors = validate_session_integrity(session)
        if errors:
            print(f"\n  ⚠ INTEGRITY ERROR: {errors}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Rummy Star score keeper")
    parser.add_argument("--store", choices=STORE_KINDS, default=STORE_FILE)
    parser.add_argument("--data-dir", default=None, help="Directory for --store file")
    parser.add_argument("--key", default=SESSION_KEY, help="Session key in the store")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s %(message)s")

    keeper = ScoreKeeper(create_store(args.store, args.data_dir), key=args.key)
    run(keeper)


if __name__ == "__main__":
    main()
