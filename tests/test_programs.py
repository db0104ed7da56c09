import pytest

from core.config import DiscountConstants
from core.schema import SimulationInputs
from programs.base import DiscountStep, apply_discounts
from programs.stack import PROGRAM_ORDER, build_program_stack, program_labels


def _all_on() -> SimulationInputs:
    return SimulationInputs(useSelfInsured=True, useReferenceBased=True, useMap=True)


def test_stack_order_and_multipliers():
    steps = build_program_stack(_all_on())
    assert tuple(s.name for s in steps) == PROGRAM_ORDER
    assert [s.multiplier for s in steps] == pytest.approx([0.75, 0.85, 0.64])


def test_fold_is_sequential():
    layered = apply_discounts(1000.0, build_program_stack(_all_on()))
    assert layered == pytest.approx([750.0, 637.5, 408.0])


def test_disabled_step_passes_through():
    inputs = SimulationInputs(useSelfInsured=False, useReferenceBased=True, useMap=False)
    layered = apply_discounts(1000.0, build_program_stack(inputs))
    assert layered == pytest.approx([1000.0, 850.0, 850.0])


def test_always_one_value_per_step():
    layered = apply_discounts(1000.0, build_program_stack(SimulationInputs()))
    assert layered == [1000.0, 1000.0, 1000.0]


def test_empty_stack_yields_no_tiers():
    assert apply_discounts(123.0, []) == []


def test_rejects_non_step():
    with pytest.raises(TypeError):
        apply_discounts(1.0, [DiscountStep("a", "A", True, 0.1), "b"])


def test_labels_follow_toggles_and_constants():
    inputs = SimulationInputs(useSelfInsured=True, useReferenceBased=False, useMap=True)
    labels = program_labels(build_program_stack(inputs))
    assert labels == ["Self-Insured (-25%)", "MAP Drug Savings (-60% of 60% drug spend)"]

    constants = DiscountConstants(reference_based_discount=0.20)
    steps = build_program_stack(_all_on(), constants)
    assert steps[1].label == "Reference-Based Pricing (-20%)"
