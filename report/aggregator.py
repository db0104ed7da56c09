"""
Aggregate the bad-year records captured during sampling.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from core.schema import BadYearStats
from core.utils import format_currency, safe_div
from distributions.sampler import BadYearRecord


def aggregate_bad_years(records: Sequence[BadYearRecord], *, frequency: int) -> BadYearStats:
    """
    count                  = number of bad-year iterations
    avg_spike_pct          = mean recorded spike, percent (0 if none)
    total_extra_cost       = sum of extra cost across bad years
    avg_extra_per_bad_year = total_extra_cost / count (0 if none)
    """
    count = len(records)
    spikes = np.array([r.spike_pct for r in records], dtype=float)
    total_extra = float(sum(r.extra_cost for r in records))
    return BadYearStats(
        count=count,
        frequency=int(frequency),
        avg_spike_pct=float(spikes.mean()) if count > 0 else 0.0,
        total_extra_cost=total_extra,
        avg_extra_per_bad_year=safe_div(total_extra, count),
        iteration_indices=tuple(r.iteration for r in records),
    )


def bad_year_table(stats: BadYearStats, *, iterations: int) -> pd.DataFrame:
    """Display table for the bad-year panel."""
    rows = [
        {"Metric": "Bad Years in Simulation", "Value": f"{stats.count} of {iterations}"},
        {"Metric": "Share of Iterations", "Value": f"{safe_div(stats.count, iterations):.1%}"},
        {"Metric": "Average Spike", "Value": f"{stats.avg_spike_pct:.2f}%"},
        {"Metric": "Total Extra Cost", "Value": format_currency(stats.total_extra_cost)},
        {"Metric": "Avg Cost Per Bad Year", "Value": format_currency(stats.avg_extra_per_bad_year)},
        {"Metric": "Frequency", "Value": f"1 in {stats.frequency}"},
        {"Metric": "P(>=1 Bad Year in 3 Years)", "Value": f"{stats.three_year_probability:.0%}"},
    ]
    return pd.DataFrame(rows)
