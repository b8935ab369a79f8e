from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pandas as pd

from ..io.load_results import RULE_PREFIX, rule_columns


MetricKey = Literal[
    "ppg",
    "avg_ms_per_move",
    "wins",
    "points",
    "games",
    "nodes",
]


@dataclass(frozen=True)
class SummaryConfig:
    metric: MetricKey = "ppg"
    top_n: int = 20
    min_games: int = 0
    # If set, filter out agents that are too slow (ms per move above threshold)
    max_avg_ms_per_move: float | None = None


def _require_cols(df: pd.DataFrame, cols: list[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Present: {list(df.columns)}")


def filter_rows(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    out = df.copy()

    if cfg.min_games > 0:
        _require_cols(out, ["games"])
        out = out[out["games"].fillna(0) >= cfg.min_games].copy()

    if cfg.max_avg_ms_per_move is not None:
        _require_cols(out, ["avg_ms_per_move"])
        out = out[out["avg_ms_per_move"].fillna(float("inf")) <= cfg.max_avg_ms_per_move].copy()

    return out


def top_table(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    _require_cols(df, ["name", cfg.metric])

    out = filter_rows(df, cfg)

    # Lower is better only for avg_ms_per_move
    ascending = (cfg.metric == "avg_ms_per_move")
    out = out.sort_values(cfg.metric, ascending=ascending, kind="mergesort")

    cols = [
        "name",
        "games", "wins", "draws", "losses",
        "ppg",
        "avg_ms_per_move",
        "points",
        "moves", "time_ms", "nodes", "avg_depth",
    ]
    keep = [c for c in cols if c in out.columns]

    out = out[keep].head(cfg.top_n).reset_index(drop=True)
    out.insert(0, "rk", range(1, len(out) + 1))
    return out


def rule_shares(df: pd.DataFrame) -> pd.DataFrame:
    """
    Fraction of each agent's moves decided by each cascade rule.
    Agents that never report a rule (baselines) are dropped.
    """
    cols = rule_columns(df)
    if not cols:
        return pd.DataFrame()

    counts = df.set_index("name")[cols].fillna(0)
    totals = counts.sum(axis=1)
    counts = counts[totals > 0]
    shares = counts.div(totals[totals > 0], axis=0)
    shares.columns = [c[len(RULE_PREFIX):] for c in cols]
    return shares


def numeric_summary(df: pd.DataFrame) -> pd.DataFrame:
    num = df.select_dtypes(include="number")
    if num.empty:
        return pd.DataFrame()
    return num.describe(percentiles=[0.05, 0.25, 0.5, 0.75, 0.95]).T
