"""
Distributions package: volatility sizing and Monte Carlo cost sampling.

  1. volatility.py: derive the multiplier width from renewal history
  2. sampler.py   : draw N cost outcomes, inject bad years, layer programs
"""

from .volatility import DEFAULT_VOLATILITY, estimate_volatility, mean_renewal_rate
from .sampler import BadYearRecord, CostSampler, SampledCosts, UniformSource, make_source

__all__ = [
    "DEFAULT_VOLATILITY",
    "estimate_volatility",
    "mean_renewal_rate",
    "BadYearRecord",
    "CostSampler",
    "SampledCosts",
    "UniformSource",
    "make_source",
]
