import pytest

from core.schema import BadYearStats, Projection
from core.utils import format_currency
from engine.runner import run_simulation
from report.narrative import build_narrative


def test_narrative_lists_only_toggled_programs(fixed_source):
    result = run_simulation(
        {"currentCost": 100000, "useSelfInsured": True, "useMap": False}, source=fixed_source
    )
    assert "Self-Insured (-25%)" in result.narrative
    assert "Reference-Based Pricing" not in result.narrative
    assert "MAP Drug Savings" not in result.narrative


def test_narrative_with_no_programs(fixed_source):
    result = run_simulation({"currentCost": 100000}, source=fixed_source)
    assert result.narrative.startswith("Applied programs: None.")


def test_narrative_figures(workbench_inputs, fixed_source):
    result = run_simulation(workbench_inputs, source=fixed_source)
    text = result.narrative
    assert (
        "Applied programs: Self-Insured (-25%), Reference-Based Pricing (-15%), "
        "MAP Drug Savings (-60% of 60% drug spend)."
    ) in text
    assert "current projection ≈ $106,000.00" in text
    assert "self-insured ≈ $79,500.00" in text
    assert "reference ≈ $67,575.00" in text
    assert "MAP Drug ≈ $43,248.00" in text
    assert "In 200 of 1000 simulations (20.0%)" in text
    assert "average of 35.0% (30-40% range)" in text
    assert "approximately $7,000,000.00 in unexpected costs" in text
    assert "averaging $35,000.00 per bad year event" in text
    assert "next 3 years: 49%" in text


def test_build_narrative_without_bad_years():
    text = build_narrative(
        programs=[],
        total_historical_savings=0.0,
        projection=Projection(1.0, 1.0, 1.0, 1.0),
        bad_years=BadYearStats(count=0, frequency=5),
        iterations=0,
        spike_min=0.3,
        spike_max=0.4,
    )
    assert "In 0 of 0 simulations (0.0%)" in text
    assert "next 3 years" not in text


@pytest.mark.parametrize(
    "value,expected",
    [
        (1234.56, "$1,234.56"),
        (0, "$0.00"),
        (1234567.891, "$1,234,567.89"),
        (-50.5, "-$50.50"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected
