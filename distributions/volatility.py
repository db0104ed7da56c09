"""
Volatility for the per-iteration cost multiplier.

This is a sizing policy, not a statistical estimator: three renewal data
points rarely support a meaningful standard deviation, but sales narratives
are compared against specific configurations, so the formula stays exactly
as below (population standard deviation, fixed fallback).
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

DEFAULT_VOLATILITY = 0.15


def mean_renewal_rate(renewals: Sequence[float]) -> float:
    """Arithmetic mean of renewal fractions, 0 when none are present."""
    if len(renewals) == 0:
        return 0.0
    return float(np.mean(renewals))


def estimate_volatility(
    renewals: Sequence[float],
    *,
    override: Optional[float] = None,
    default: float = DEFAULT_VOLATILITY,
) -> float:
    """
    Parameters
    ----------
    renewals : sequence of float
        Renewal rates as fractions (0.05 = 5%), already filtered.
    override : float, optional
        Explicit volatility fraction; used unchanged when given.
    default : float
        Fallback when there are no renewals and no override.
    """
    if override is not None:
        return float(override)
    if len(renewals) == 0:
        return float(default)
    # ddof=0: population std around the mean
    return float(np.std(np.asarray(renewals, dtype=float)))
