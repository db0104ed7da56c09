import math

import pytest

from distributions.volatility import DEFAULT_VOLATILITY, estimate_volatility, mean_renewal_rate


def test_population_std_of_renewals():
    vol = estimate_volatility([0.05, 0.07, 0.06])
    assert vol == pytest.approx(math.sqrt(0.0002 / 3))
    assert vol == pytest.approx(0.008165, abs=1e-6)


def test_single_renewal_has_zero_volatility():
    assert estimate_volatility([0.08]) == 0.0


def test_override_bypasses_estimation():
    assert estimate_volatility([0.05, 0.07, 0.06], override=0.2) == 0.2
    assert estimate_volatility([], override=0.0) == 0.0


def test_fallback_without_renewals():
    assert estimate_volatility([]) == DEFAULT_VOLATILITY == 0.15
    assert estimate_volatility([], default=0.3) == 0.3


def test_mean_renewal_rate():
    assert mean_renewal_rate([0.05, 0.07, 0.06]) == pytest.approx(0.06)
    assert mean_renewal_rate([]) == 0.0
