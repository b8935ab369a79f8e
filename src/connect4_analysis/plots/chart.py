from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd
import matplotlib.pyplot as plt


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _finish(fig, outdir: Path, filename: str, *, show: bool) -> Path | None:
    if show:
        plt.show()
        return None
    _ensure_dir(outdir)
    path = outdir / filename
    fig.savefig(path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_histograms(df: pd.DataFrame, outdir: Path, cols: Iterable[str], *, show: bool) -> list[Path]:
    num_cols = [c for c in cols if c in df.columns and pd.api.types.is_numeric_dtype(df[c])]
    written = []

    for c in num_cols:
        fig = plt.figure()
        plt.hist(df[c].dropna(), bins=30)
        plt.title(f"Histogram: {c}")
        plt.xlabel(c)
        plt.ylabel("count")

        path = _finish(fig, outdir, f"hist_{c}.png", show=show)
        if path is not None:
            written.append(path)

    return written


def plot_scatter(df: pd.DataFrame, outdir: Path, x: str, y: str, *, show: bool) -> Path | None:
    if x not in df.columns or y not in df.columns:
        return None
    if not (pd.api.types.is_numeric_dtype(df[x]) and pd.api.types.is_numeric_dtype(df[y])):
        return None

    fig = plt.figure()
    plt.scatter(df[x], df[y], alpha=0.6)
    for _, row in df.iterrows():
        plt.annotate(str(row["name"]), (row[x], row[y]), fontsize=7)
    plt.title(f"{y} vs {x}")
    plt.xlabel(x)
    plt.ylabel(y)

    return _finish(fig, outdir, f"scatter_{y}_vs_{x}.png", show=show)


def plot_top_bar(df: pd.DataFrame, outdir: Path, metric: str, top_n: int, *, show: bool) -> Path | None:
    if "name" not in df.columns or metric not in df.columns:
        return None
    if not pd.api.types.is_numeric_dtype(df[metric]):
        return None

    top = df[["name", metric]].dropna().sort_values(metric, ascending=False).head(top_n)
    fig = plt.figure(figsize=(10, 5))
    plt.bar(top["name"].astype(str), top[metric].astype(float))
    plt.title(f"Top {min(top_n, len(top))}: {metric}")
    plt.xlabel("agent")
    plt.ylabel(metric)
    plt.xticks(rotation=45, ha="right")

    return _finish(fig, outdir, f"top_{top_n}_{metric}.png", show=show)


def plot_rule_usage(shares: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    """Stacked bar per agent: which cascade rule decided its moves."""
    if shares.empty:
        return None

    fig, ax = plt.subplots(figsize=(10, 5))
    bottom = pd.Series(0.0, index=shares.index)
    for rule in shares.columns:
        ax.bar(shares.index.astype(str), shares[rule], bottom=bottom, label=rule)
        bottom = bottom + shares[rule]
    ax.set_title("Decision rule usage")
    ax.set_ylabel("share of moves")
    ax.legend(fontsize=8)
    plt.xticks(rotation=45, ha="right")

    return _finish(fig, outdir, "rule_usage.png", show=show)
