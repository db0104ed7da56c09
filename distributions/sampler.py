"""
Monte Carlo cost sampler: draws N cost outcomes and layers the program stack on each.

Per iteration i:
  1. multiplier r uniform in [1 - volatility, 1 + volatility]
  2. cost = current_cost * r
  3. every Nth iteration (i % frequency == 0) is a bad year: cost is spiked by
     a uniform fraction in [spike_min, spike_max] and the spike is recorded
  4. the (possibly spiked) cost goes into the baseline column
  5. the discount steps are folded over the cost; each step's running value
     goes into its own column, every iteration, enabled or not

The random source only needs a random() method returning a float in [0, 1),
so numpy Generators, random.Random and fixed test doubles all work.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence

import numpy as np
import pandas as pd

from programs.base import DiscountStep, apply_discounts


class UniformSource(Protocol):
    def random(self) -> float:
        ...


@dataclass
class BadYearRecord:
    """A single injected catastrophic-claims year."""
    iteration: int
    spike_pct: float     # spike in percent (35.2 = +35.2%)
    extra_cost: float    # spiked cost minus cost before the spike


@dataclass
class SampledCosts:
    """
    Output of the sampler: one column per scenario, all of length n_iterations.

    columns maps step name -> array; "baseline" is always present.
    """
    baseline: np.ndarray
    columns: Dict[str, np.ndarray] = field(default_factory=dict)
    bad_years: List[BadYearRecord] = field(default_factory=list)

    @property
    def n_iterations(self) -> int:
        return len(self.baseline)

    def column(self, name: str) -> np.ndarray:
        if name == "baseline":
            return self.baseline
        if name not in self.columns:
            raise KeyError(f"Unknown scenario column '{name}'. Available: {list(self.columns)}")
        return self.columns[name]

    def to_dataframe(self) -> pd.DataFrame:
        df = pd.DataFrame({"iteration": np.arange(self.n_iterations), "baseline": self.baseline})
        for name, values in self.columns.items():
            df[name] = values
        bad = {r.iteration for r in self.bad_years}
        df["bad_year"] = df["iteration"].isin(bad)
        return df


def make_source(seed: Optional[int] = None) -> UniformSource:
    """Default random source; unseeded means a fresh, non-reproducible stream."""
    return np.random.default_rng(seed)


class CostSampler:
    """
    Usage:
        sampler = CostSampler(current_cost=100_000, volatility=0.01, steps=steps,
                              bad_year_frequency=5, spike_min=0.30, spike_max=0.40,
                              source=np.random.default_rng(7))
        samples = sampler.sample(1000)
        samples.column("map_drug")  # 1000 values
    """

    def __init__(
        self,
        *,
        current_cost: float,
        volatility: float,
        steps: Sequence[DiscountStep],
        bad_year_frequency: int,
        spike_min: float,
        spike_max: float,
        source: Optional[UniformSource] = None,
    ):
        if bad_year_frequency <= 0:
            raise ValueError("bad_year_frequency must be positive.")
        self.current_cost = float(current_cost)
        self.volatility = float(volatility)
        self.steps = list(steps)
        self.bad_year_frequency = int(bad_year_frequency)
        self.spike_min = float(spike_min)
        self.spike_max = float(spike_max)
        self.source = source if source is not None else make_source()

    def sample(self, n_iterations: int) -> SampledCosts:
        n = max(int(n_iterations), 0)
        baseline = np.zeros(n, dtype=float)
        layered = np.zeros((len(self.steps), n), dtype=float)
        bad_years: List[BadYearRecord] = []

        for i in range(n):
            r = 1.0 + (self.source.random() - 0.5) * 2.0 * self.volatility
            cost = self.current_cost * r

            if i % self.bad_year_frequency == 0:
                spike = self.spike_min + self.source.random() * (self.spike_max - self.spike_min)
                normal_cost = cost
                cost = cost * (1.0 + spike)
                bad_years.append(BadYearRecord(
                    iteration=i,
                    spike_pct=spike * 100.0,
                    extra_cost=cost - normal_cost,
                ))

            baseline[i] = cost
            for k, value in enumerate(apply_discounts(cost, self.steps)):
                layered[k, i] = value

        return SampledCosts(
            baseline=baseline,
            columns={step.name: layered[k] for k, step in enumerate(self.steps)},
            bad_years=bad_years,
        )
