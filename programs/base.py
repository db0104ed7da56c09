"""
Discount step descriptor and the sequential fold over a stack of steps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class DiscountStep:
    """
    One program layer.

    rate is the discount on the affected spend and applies_to is the share
    of total cost that spend represents, so the layer multiplies the running
    cost by (1 - rate * applies_to). A disabled step passes the cost through.
    """

    name: str
    label: str
    enabled: bool
    rate: float
    applies_to: float = 1.0

    @property
    def multiplier(self) -> float:
        if not self.enabled:
            return 1.0
        return 1.0 - self.rate * self.applies_to

    def apply(self, cost: float) -> float:
        return cost * self.multiplier


def apply_discounts(cost: float, steps: Sequence[DiscountStep]) -> List[float]:
    """
    Fold the steps over cost in order and return the running cost after each step.

    The output always has one entry per step, whether or not the step is
    enabled, so downstream sample columns stay the same length.
    """
    running = float(cost)
    out: List[float] = []
    for step in steps:
        if not isinstance(step, DiscountStep):
            raise TypeError(f"Expected DiscountStep, got {type(step).__name__}")
        running = step.apply(running)
        out.append(running)
    return out
