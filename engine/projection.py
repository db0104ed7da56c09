"""
Deterministic (unsampled) passes of the program stack.

  back_project_history: known past-year costs, as if the programs had been in place
  project_forward     : next year at mean renewal growth, per tier

Neither is expected to match the simulated means: the projection uses mean
growth, the simulation uses sampled volatility around today's cost.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from core.schema import HistoricalYear, Projection
from programs.base import DiscountStep, apply_discounts
from programs.stack import PROGRAM_ORDER


def _three_tiers(cost: float, steps: Sequence[DiscountStep]) -> Tuple[float, float, float]:
    names = tuple(s.name for s in steps)
    if names != PROGRAM_ORDER:
        raise ValueError(f"Expected program stack {PROGRAM_ORDER}, got {names}.")
    layered = apply_discounts(cost, steps)
    return layered[0], layered[1], layered[2]


def back_project_history(
    historical_costs: Sequence[float],
    steps: Sequence[DiscountStep],
) -> Tuple[List[HistoricalYear], float]:
    """
    Returns
    -------
    (years, total_savings)
    years: one HistoricalYear per present cost, input order (most recent first)
    total_savings: sum of year_cost - map_if_in_place
    """
    years: List[HistoricalYear] = []
    for cost in historical_costs:
        self_c, ref_c, map_c = _three_tiers(cost, steps)
        years.append(HistoricalYear(
            year_cost=float(cost),
            self_if_in_place=self_c,
            ref_if_in_place=ref_c,
            map_if_in_place=map_c,
        ))
    total = float(sum(y.savings for y in years))
    return years, total


def project_forward(
    current_cost: float,
    mean_renewal: float,
    steps: Sequence[DiscountStep],
) -> Projection:
    next_year = current_cost * (1.0 + mean_renewal)
    self_c, ref_c, map_c = _three_tiers(next_year, steps)
    return Projection(baseline=next_year, self_insured=self_c, reference=ref_c, map_drug=map_c)
