import json

import pytest

from core.config import EngineConfig
from core.schema import SimulationInputs
from data_prep.history import derive_historical_costs
from data_prep.loader import inputs_from_form, load_inputs_json
from data_prep.validators import validate_inputs


def test_form_coercion():
    inputs = inputs_from_form({
        "currentCost": "$100,000",
        "renewal1": "5",
        "renewal2": "",
        "renewal3": "abc",
        "iterations": "2500",
        "historicalCost1": "95,000",
        "useSelfInsured": "true",
        "useReferenceBased": "off",
        "useMap": 1,
        "badYearFrequency": "4",
        "unknownField": "ignored",
    })
    assert inputs.current_cost == 100000.0
    assert inputs.renewal_rates == [0.05]
    assert inputs.iterations == 2500
    assert inputs.historical_costs == [95000.0]
    assert inputs.use_self_insured is True
    assert inputs.use_reference_based is False
    assert inputs.use_map is True
    assert inputs.bad_year_frequency == 4


def test_snake_case_names_accepted():
    inputs = SimulationInputs(current_cost=10, use_map=True, historical_cost2=7)
    assert inputs.current_cost == 10.0
    assert inputs.use_map is True
    assert inputs.historical_costs == [7.0]


def test_zero_renewal_is_kept_missing_is_dropped():
    inputs = SimulationInputs(renewal1=0, renewal2=None, renewal3=8)
    assert inputs.renewal_rates == pytest.approx([0.0, 0.08])


def test_resolve_defaults():
    settings = SimulationInputs().resolve()
    assert settings.iterations == 1000
    assert settings.bad_year_frequency == 5
    assert settings.bad_year_increase_min == pytest.approx(0.30)
    assert settings.bad_year_increase_max == pytest.approx(0.40)
    assert settings.iterations_capped is False


def test_resolve_caps_iterations():
    settings = SimulationInputs(iterations=10**7).resolve(EngineConfig())
    assert settings.iterations == 100_000
    assert settings.iterations_capped is True


def test_load_inputs_json(tmp_path):
    path = tmp_path / "form.json"
    path.write_text(json.dumps({"currentCost": 5000, "useMap": True}), encoding="utf-8")
    inputs = load_inputs_json(path)
    assert inputs.current_cost == 5000.0
    assert inputs.use_map is True

    bad = tmp_path / "list.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_inputs_json(bad)


def test_validation_flags_negative_cost():
    vr = validate_inputs(SimulationInputs(currentCost=-1))
    assert not vr.is_valid
    assert "ERRORS (1)" in vr.summary()


def test_validation_warnings():
    vr = validate_inputs(SimulationInputs(
        currentCost=1000, badYearIncreaseMin=50, badYearIncreaseMax=40
    ))
    assert vr.is_valid
    text = " ".join(vr.warnings)
    assert "default volatility" in text
    assert "spike minimum is above the maximum" in text
    assert "No historical costs" in text


def test_validation_passes_clean_inputs(workbench_inputs):
    inputs = workbench_inputs.model_copy(update={"historical_cost1": 95000.0})
    vr = validate_inputs(inputs)
    assert vr.is_valid
    assert vr.warnings == []
    assert vr.summary() == "✓ All checks passed."


def test_derive_historical_costs_locked():
    costs = derive_historical_costs(100000, [5, 7, 6])
    assert costs[0] == pytest.approx(100000 / 1.05)
    assert costs[1] == pytest.approx(100000 / 1.05 / 1.07)
    assert costs[2] == pytest.approx(100000 / 1.05 / 1.07 / 1.06)


def test_derive_historical_costs_accepts_fractions_and_skips_gaps():
    costs = derive_historical_costs(110000, [0.10, 0, None])
    assert costs == pytest.approx((100000.0, 0.0, 0.0))


def test_derive_historical_costs_editable_override():
    derived = derive_historical_costs(100000, [5, 7, 6])
    edited = derive_historical_costs(100000, [5, 7, 6], locked=False, supplied=[0, 88000, None])
    assert edited[0] == pytest.approx(derived[0])
    assert edited[1] == 88000.0
    assert edited[2] == pytest.approx(derived[2])

    # locked ignores supplied values
    locked = derive_historical_costs(100000, [5, 7, 6], locked=True, supplied=[1, 2, 3])
    assert locked == derived


def test_derive_historical_costs_requires_cost_and_first_renewal():
    assert derive_historical_costs(0, [5, 7, 6]) == (0.0, 0.0, 0.0)
    assert derive_historical_costs(100000, [0, 7, 6]) == (0.0, 0.0, 0.0)
    assert derive_historical_costs(100000, []) == (0.0, 0.0, 0.0)
