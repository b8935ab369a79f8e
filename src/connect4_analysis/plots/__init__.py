from .chart import (
    plot_histograms,
    plot_rule_usage,
    plot_scatter,
    plot_top_bar,
)

__all__ = [
    "plot_histograms",
    "plot_rule_usage",
    "plot_scatter",
    "plot_top_bar",
]
