"""
Reverse-engineer past-year costs from the current cost and renewal history.

Pre-fill helper for the workbench form. Not part of the engine: the engine
works on whatever historical costs are finally supplied.

Walking backward from the current cost, each renewal rate r gives the cost
before that renewal as cost / (1 + r).
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from core.utils import normalize_rate, parse_or_zero

N_HISTORY_YEARS = 3


def derive_historical_costs(
    current_cost: float,
    renewals: Sequence[Optional[float]],
    *,
    locked: bool = True,
    supplied: Optional[Sequence[Optional[float]]] = None,
) -> Tuple[float, ...]:
    """
    Parameters
    ----------
    current_cost : float
        Current annualized cost.
    renewals : sequence
        Renewal rates, most recent first; percent (7) or fraction (0.07).
        Non-positive or missing entries are skipped.
    locked : bool
        True: derived values are returned. False (history editable): any
        non-zero value in ``supplied`` replaces the derived one.
    supplied : sequence, optional
        Caller-entered historical costs, most recent first.

    Returns
    -------
    Tuple of three costs, most recent first, zero-filled.
    """
    cost = parse_or_zero(current_cost)
    rates = [parse_or_zero(r) for r in renewals]
    first = rates[0] if rates else 0.0

    derived = [0.0] * N_HISTORY_YEARS
    if cost and first:
        prev = cost
        positive = [normalize_rate(r) for r in rates if r > 0]
        for k, r in enumerate(positive[:N_HISTORY_YEARS]):
            prev = prev / (1.0 + r)
            derived[k] = prev

    if locked or not supplied:
        return tuple(derived)

    out = list(derived)
    for k, value in enumerate(list(supplied)[:N_HISTORY_YEARS]):
        v = parse_or_zero(value)
        if v:
            out[k] = v
    return tuple(out)
