"""
Discount programs: ordered, toggleable cost reductions applied as a fold.
"""

from .base import DiscountStep, apply_discounts
from .stack import PROGRAM_ORDER, build_program_stack, program_labels

__all__ = [
    "DiscountStep",
    "apply_discounts",
    "PROGRAM_ORDER",
    "build_program_stack",
    "program_labels",
]
