from __future__ import annotations

import argparse
import csv
import logging
import random
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from connect4.ai.base import Agent
from connect4.ai.engine import Rule
from connect4.ai.engine_agent import EngineAgent
from connect4.ai.random_agent import RandomAgent
from connect4.ai.tactical_agent import TacticalAgent
from connect4.core.board import Board
from connect4.core.rules import check_winner, is_draw
from connect4.game.state import GameState

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "name",
    "games", "wins", "draws", "losses",
    "points", "ppg",
    "avg_ms_per_move",
    "moves", "time_ms", "nodes", "avg_depth",
] + [f"rule_{r.value}" for r in Rule]


@dataclass(frozen=True)
class Team:
    name: str
    make: Callable[[], Agent]  # must be picklable (use functools.partial, not lambda)


@dataclass
class Agg:
    games: int = 0
    points: float = 0.0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    moves: int = 0
    time_ms: int = 0
    nodes: int = 0
    depth_sum: int = 0
    rules: Dict[str, int] = field(default_factory=dict)

    @property
    def ppg(self) -> float:
        return self.points / self.games if self.games else 0.0

    @property
    def avg_ms_per_move(self) -> float:
        return self.time_ms / self.moves if self.moves else 0.0


SideStats = Dict[str, object]


def _new_side_stats() -> SideStats:
    return {"moves": 0, "time_ms": 0, "nodes": 0, "depth": 0, "rules": {}}


def play_headless(agent_x: Agent, agent_o: Agent, seed_base: int = 0, opening_moves: int = 2) -> Tuple[str, Dict[str, SideStats]]:
    """
    Play one game without rendering. A couple of random opening moves keep
    deterministic agents from replaying the same game. Returns the outcome
    ("X", "O" or "D") and per-side move statistics.
    """
    state = GameState(board=Board.empty(), current="X", last_status="")
    stats = {"X": _new_side_stats(), "O": _new_side_stats()}

    for agent, offset in ((agent_x, 101), (agent_o, 202)):
        if hasattr(agent, "rng"):
            agent.rng.seed(seed_base + offset)

    rng = random.Random(seed_base)
    for _ in range(opening_moves):
        moves = state.board.valid_moves()
        if not moves:
            break
        state = state.play(rng.choice(moves))

    while True:
        w = check_winner(state.board)
        if w is not None:
            return str(w), stats
        if is_draw(state.board):
            return "D", stats

        agent = agent_x if state.current == "X" else agent_o
        move = agent.choose_move(state)

        info = getattr(agent, "last_info", None) or {}
        side = stats[state.current]
        side["moves"] += 1
        side["time_ms"] += max(1, int(info.get("time_ms", 0)))
        side["nodes"] += int(info.get("nodes", 0))
        side["depth"] += int(info.get("depth", 0))
        rule = info.get("rule")
        if rule is not None:
            side["rules"][rule] = side["rules"].get(rule, 0) + 1

        state = state.play(move)


def add_result(agg_a: Agg, agg_b: Agg, outcome: str, a_is_x: bool) -> None:
    agg_a.games += 1
    agg_b.games += 1

    if outcome == "D":
        agg_a.draws += 1
        agg_b.draws += 1
        agg_a.points += 0.5
        agg_b.points += 0.5
        return

    a_won = (outcome == "X") == a_is_x
    winner, loser = (agg_a, agg_b) if a_won else (agg_b, agg_a)
    winner.wins += 1
    winner.points += 1.0
    loser.losses += 1


def add_side_stats(agg: Agg, side: SideStats) -> None:
    agg.moves += side["moves"]
    agg.time_ms += side["time_ms"]
    agg.nodes += side["nodes"]
    agg.depth_sum += side["depth"]
    for rule, n in side["rules"].items():
        agg.rules[rule] = agg.rules.get(rule, 0) + n


def _play_pairing(item) -> List[Tuple[str, str, bool, str, Dict[str, SideStats]]]:
    (a, b, games_per_pair, base_seed) = item
    out = []
    for g in range(games_per_pair):
        # alternate who moves first
        if g % 2 == 0:
            outcome, stats = play_headless(a.make(), b.make(), seed_base=base_seed + g)
            out.append((a.name, b.name, True, outcome, stats))
        else:
            outcome, stats = play_headless(b.make(), a.make(), seed_base=base_seed + g)
            out.append((a.name, b.name, False, outcome, stats))
    return out


def run_league(
    roster: Sequence[Team],
    games_per_pair: int = 2,
    seed: int = 1234,
    max_workers: Optional[int] = 1,
) -> Dict[str, Agg]:
    """Round robin: every team meets every other `games_per_pair` times."""
    agg = {t.name: Agg() for t in roster}

    items = []
    for i in range(len(roster)):
        for j in range(i + 1, len(roster)):
            items.append((roster[i], roster[j], games_per_pair, seed + i * 10_000 + j * 100))

    def apply(results) -> None:
        for (a_name, b_name, a_is_x, outcome, stats) in results:
            add_result(agg[a_name], agg[b_name], outcome, a_is_x)
            add_side_stats(agg[a_name], stats["X" if a_is_x else "O"])
            add_side_stats(agg[b_name], stats["O" if a_is_x else "X"])
            logger.debug("%s vs %s (%s first): %s", a_name, b_name, a_name if a_is_x else b_name, outcome)

    if max_workers == 1:
        for results in map(_play_pairing, items):
            apply(results)
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as ex:
            for results in ex.map(_play_pairing, items):
                apply(results)

    return agg


def write_results_csv(agg: Dict[str, Agg], out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = time.strftime("%Y%m%d_%H%M%S")
    out_path = out_dir / f"league_results_{ts}.csv"

    with open(out_path, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(CSV_COLUMNS)
        for name, a in agg.items():
            avg_depth = (a.depth_sum / a.moves) if a.moves else 0.0
            w.writerow([
                name,
                a.games, a.wins, a.draws, a.losses,
                a.points, round(a.ppg, 6),
                round(a.avg_ms_per_move, 3),
                a.moves, a.time_ms, a.nodes, round(avg_depth, 3),
            ] + [a.rules.get(r.value, 0) for r in Rule])

    return out_path


def build_roster() -> List[Team]:
    return [
        Team("Engine", partial(EngineAgent, name="Engine")),
        Team("Engine (search d3)", partial(EngineAgent, name="Engine (search d3)", strategic=False)),
        Team("Engine (search d4)", partial(EngineAgent, name="Engine (search d4)", depth=4, strategic=False)),
        Team("Tactical", partial(TacticalAgent, name="Tactical")),
        Team("Random", partial(RandomAgent, name="Random")),
    ]


def print_table(agg: Dict[str, Agg]) -> None:
    ranking = sorted(agg.items(), key=lambda kv: kv[1].ppg, reverse=True)
    print(f"{'rk':>3}  {'name':<22} {'games':>5} {'W-D-L':>10} {'ppg':>6} {'ms/move':>8} {'nodes':>9}")
    for i, (name, a) in enumerate(ranking, start=1):
        wdl = f"{a.wins}-{a.draws}-{a.losses}"
        print(f"{i:>3}  {name:<22} {a.games:>5} {wdl:>10} {a.ppg:>6.3f} {a.avg_ms_per_move:>8.1f} {a.nodes:>9}")


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Round-robin league between the engine and baseline agents.")
    ap.add_argument("--games", type=int, default=2, help="Games per pairing (colors alternate)")
    ap.add_argument("--seed", type=int, default=1234, help="Base seed for openings and random agents")
    ap.add_argument("--workers", type=int, default=1, help="Worker processes (1 = run in-process)")
    ap.add_argument("--out", type=str, default="data/results", help="Directory for league_results_*.csv")
    ap.add_argument("--no-csv", action="store_true", help="Skip CSV export")
    ap.add_argument("--verbose", action="store_true", help="Log every game and engine decision")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    start = time.perf_counter()
    agg = run_league(build_roster(), games_per_pair=args.games, seed=args.seed, max_workers=args.workers)
    print_table(agg)
    print(f"\nTotal runtime: {time.perf_counter() - start:.2f}s")

    if not args.no_csv:
        path = write_results_csv(agg, Path(args.out))
        print(f"Wrote CSV: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
