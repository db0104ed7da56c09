import pytest

from core.schema import SimulationInputs
from engine.projection import back_project_history, project_forward
from programs.stack import build_program_stack

ALL_ON = SimulationInputs(useSelfInsured=True, useReferenceBased=True, useMap=True)


def test_back_projection_applies_stack_per_year():
    years, total = back_project_history([100000.0, 90000.0], build_program_stack(ALL_ON))
    assert len(years) == 2
    assert years[0].self_if_in_place == pytest.approx(75000.0)
    assert years[0].ref_if_in_place == pytest.approx(63750.0)
    assert years[0].map_if_in_place == pytest.approx(40800.0)
    assert years[1].map_if_in_place == pytest.approx(36720.0)
    assert total == pytest.approx(59200.0 + 53280.0)


def test_back_projection_without_history():
    years, total = back_project_history([], build_program_stack(ALL_ON))
    assert years == []
    assert total == 0.0


def test_back_projection_without_programs_saves_nothing():
    years, total = back_project_history([50000.0], build_program_stack(SimulationInputs()))
    assert years[0].map_if_in_place == 50000.0
    assert total == 0.0


def test_forward_projection_uses_mean_growth():
    proj = project_forward(100000.0, 0.06, build_program_stack(ALL_ON))
    assert proj.baseline == pytest.approx(106000.0)
    assert proj.self_insured == pytest.approx(79500.0)
    assert proj.reference == pytest.approx(67575.0)
    assert proj.map_drug == pytest.approx(43248.0)


def test_forward_projection_partial_toggles():
    inputs = SimulationInputs(useReferenceBased=True)
    proj = project_forward(100000.0, 0.0, build_program_stack(inputs))
    assert proj.self_insured == pytest.approx(100000.0)
    assert proj.reference == pytest.approx(85000.0)
    assert proj.map_drug == pytest.approx(85000.0)


def test_projection_requires_three_steps():
    with pytest.raises(ValueError):
        project_forward(1.0, 0.0, build_program_stack(ALL_ON)[:2])


def test_projection_requires_stack_order():
    steps = build_program_stack(ALL_ON)
    with pytest.raises(ValueError):
        project_forward(1.0, 0.0, [steps[1], steps[0], steps[2]])
