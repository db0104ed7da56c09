"""
Per-scenario summary statistics over a sampled cost column.

Percentiles are nearest-rank on the ascending sort (element at floor(n * q)),
not interpolated, so P5/P95 match the figures shown on earlier proposals.
"""

from __future__ import annotations

import math
from typing import Dict, Sequence

import numpy as np

from core.schema import ScenarioStats


def nearest_rank(sorted_values: np.ndarray, q: float) -> float:
    n = len(sorted_values)
    if n == 0:
        return 0.0
    idx = min(max(int(math.floor(n * q)), 0), n - 1)
    return float(sorted_values[idx])


def scenario_stats(values: Sequence[float]) -> ScenarioStats:
    """Mean, P5 and P95 of one sample column; zeros for an empty column."""
    arr = np.sort(np.asarray(values, dtype=float))
    if arr.size == 0:
        return ScenarioStats()
    return ScenarioStats(
        mean=float(arr.mean()),
        p5=nearest_rank(arr, 0.05),
        p95=nearest_rank(arr, 0.95),
    )


def compute_scenario_stats(columns: Dict[str, np.ndarray]) -> Dict[str, ScenarioStats]:
    return {name: scenario_stats(values) for name, values in columns.items()}
