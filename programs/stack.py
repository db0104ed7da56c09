"""
Builds the fixed-order program stack from the operator toggles.

Order is self-insured -> reference-based pricing -> MAP drug management.
Each layer applies on top of whatever the previous layers did.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from core.config import DiscountConstants
from core.schema import SimulationInputs

from .base import DiscountStep

PROGRAM_ORDER: Tuple[str, ...] = ("self_insured", "reference_based", "map_drug")


def _pct(value: float) -> str:
    return f"{value * 100:g}%"


def build_program_stack(
    inputs: SimulationInputs,
    constants: Optional[DiscountConstants] = None,
) -> List[DiscountStep]:
    c = constants or DiscountConstants()
    return [
        DiscountStep(
            name="self_insured",
            label=f"Self-Insured (-{_pct(c.self_insured_discount)})",
            enabled=inputs.use_self_insured,
            rate=c.self_insured_discount,
        ),
        DiscountStep(
            name="reference_based",
            label=f"Reference-Based Pricing (-{_pct(c.reference_based_discount)})",
            enabled=inputs.use_reference_based,
            rate=c.reference_based_discount,
        ),
        DiscountStep(
            name="map_drug",
            label=(
                f"MAP Drug Savings (-{_pct(c.map_discount)} of "
                f"{_pct(c.drug_spend_share)} drug spend)"
            ),
            enabled=inputs.use_map,
            rate=c.map_discount,
            applies_to=c.drug_spend_share,
        ),
    ]


def program_labels(steps: Sequence[DiscountStep]) -> List[str]:
    """Labels of the enabled steps, in stack order."""
    return [s.label for s in steps if s.enabled]
