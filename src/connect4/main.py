from __future__ import annotations

import argparse
import logging
import sys

from connect4.ai.engine import decide
from connect4.core.board import Board


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="connect4",
        description="Ask the engine for a move, or run the engine league.",
    )
    sub = ap.add_subparsers(dest="cmd")

    mv = sub.add_parser("move", help="Read a board picture and print the engine's column")
    mv.add_argument("--file", type=str, default=None, help="Board picture file ('-' or omitted = stdin)")
    mv.add_argument("--me", type=str, default="O", help="Engine's piece character")
    mv.add_argument("--opp", type=str, default="X", help="Opponent's piece character")
    mv.add_argument("--verbose", action="store_true", help="Log which rule chose the move")

    sub.add_parser("league", help="Round-robin league (see connect4.scripts.match --help)", add_help=False)
    return ap


def cmd_move(args: argparse.Namespace) -> int:
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.file in (None, "-"):
        lines = sys.stdin.read().splitlines()
    else:
        with open(args.file) as f:
            lines = f.read().splitlines()

    # InvalidStateError is a ValueError too
    try:
        board = Board.from_strings(lines)
        decision = decide(board, args.me, args.opp)
    except ValueError as e:
        print(f"connect4: {e}", file=sys.stderr)
        return 2

    print(board.render())
    print(f"\nEngine ({args.me}) plays column {decision.column} [{decision.rule.value}]")
    return 0


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    if argv and argv[0] == "league":
        from connect4.scripts.match import main as league_main

        return league_main(argv[1:])

    args = build_argparser().parse_args(argv)
    if args.cmd == "move":
        return cmd_move(args)

    build_argparser().print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
