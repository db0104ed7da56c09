"""
Input and result records for the cost projection engine.

SimulationInputs is what a form submit hands over (numbers may arrive as
strings). SimulationResult is what the engine returns and what the
persistence collaborator stores, via to_dict()/from_dict().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import EngineConfig
from .utils import parse_flag, parse_or_none, parse_or_zero

if TYPE_CHECKING:
    from distributions.sampler import SampledCosts


class SimulationInputs(BaseModel):
    """Operator inputs. Accepts snake_case names or the camelCase form names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    # renewal rates in percent (5 = 5%)
    renewal1: Optional[float] = None
    renewal2: Optional[float] = None
    renewal3: Optional[float] = None

    current_cost: float = Field(default=0.0, alias="currentCost")
    iterations: int = 0
    volatility_override: Optional[float] = Field(default=None, alias="volatilityOverride")

    # actual past-year costs, most recent first
    historical_cost1: float = Field(default=0.0, alias="historicalCost1")
    historical_cost2: float = Field(default=0.0, alias="historicalCost2")
    historical_cost3: float = Field(default=0.0, alias="historicalCost3")

    use_self_insured: bool = Field(default=False, alias="useSelfInsured")
    use_reference_based: bool = Field(default=False, alias="useReferenceBased")
    use_map: bool = Field(default=False, alias="useMap")

    bad_year_frequency: int = Field(default=0, alias="badYearFrequency")
    bad_year_increase_min: float = Field(default=0.0, alias="badYearIncreaseMin")
    bad_year_increase_max: float = Field(default=0.0, alias="badYearIncreaseMax")

    @field_validator("renewal1", "renewal2", "renewal3", "volatility_override", mode="before")
    @classmethod
    def _parse_optional(cls, v: Any) -> Optional[float]:
        return parse_or_none(v)

    @field_validator(
        "current_cost",
        "historical_cost1",
        "historical_cost2",
        "historical_cost3",
        "bad_year_increase_min",
        "bad_year_increase_max",
        mode="before",
    )
    @classmethod
    def _parse_number(cls, v: Any) -> float:
        return parse_or_zero(v)

    @field_validator("iterations", "bad_year_frequency", mode="before")
    @classmethod
    def _parse_count(cls, v: Any) -> int:
        return int(parse_or_zero(v))

    @field_validator("use_self_insured", "use_reference_based", "use_map", mode="before")
    @classmethod
    def _parse_toggle(cls, v: Any) -> bool:
        return parse_flag(v)

    @property
    def renewal_rates(self) -> List[float]:
        """Renewal rates as fractions; missing entries dropped, not zero-filled."""
        return [r / 100.0 for r in (self.renewal1, self.renewal2, self.renewal3) if r is not None]

    @property
    def historical_costs(self) -> List[float]:
        """Present historical costs in input order; zero/negative excluded."""
        costs = (self.historical_cost1, self.historical_cost2, self.historical_cost3)
        return [c for c in costs if c > 0]

    def resolve(self, config: Optional[EngineConfig] = None) -> "RunSettings":
        """Apply engine defaults and the iteration cap."""
        cfg = config or EngineConfig()
        iterations = self.iterations if self.iterations > 0 else cfg.default_iterations
        capped = iterations > cfg.max_iterations
        if capped:
            iterations = cfg.max_iterations
        frequency = (
            self.bad_year_frequency
            if self.bad_year_frequency > 0
            else cfg.default_bad_year_frequency
        )
        spike_min = self.bad_year_increase_min or cfg.default_bad_year_increase_min
        spike_max = self.bad_year_increase_max or cfg.default_bad_year_increase_max
        return RunSettings(
            iterations=iterations,
            bad_year_frequency=frequency,
            bad_year_increase_min=spike_min / 100.0,
            bad_year_increase_max=spike_max / 100.0,
            iterations_capped=capped,
        )


@dataclass(frozen=True)
class RunSettings:
    """Effective run parameters after defaults; spike bounds as fractions."""
    iterations: int
    bad_year_frequency: int
    bad_year_increase_min: float
    bad_year_increase_max: float
    iterations_capped: bool = False


@dataclass(frozen=True)
class ScenarioStats:
    mean: float = 0.0
    p5: float = 0.0
    p95: float = 0.0


@dataclass(frozen=True)
class HistoricalYear:
    """One known past year with the program stack applied as if in place."""
    year_cost: float
    self_if_in_place: float
    ref_if_in_place: float
    map_if_in_place: float

    @property
    def savings(self) -> float:
        return self.year_cost - self.map_if_in_place


@dataclass(frozen=True)
class Projection:
    """Single-point next-year estimate per scenario tier (mean growth, not sampled)."""
    baseline: float
    self_insured: float
    reference: float
    map_drug: float


@dataclass(frozen=True)
class BadYearStats:
    count: int = 0
    frequency: int = 5
    avg_spike_pct: float = 0.0
    total_extra_cost: float = 0.0
    avg_extra_per_bad_year: float = 0.0
    iteration_indices: Tuple[int, ...] = ()

    @property
    def three_year_probability(self) -> float:
        """P(at least one bad year in the next 3 years) = 1 - (1 - 1/N)^3."""
        if self.frequency <= 0:
            return 0.0
        return 1.0 - (1.0 - 1.0 / self.frequency) ** 3


@dataclass(frozen=True)
class SimulationResult:
    baseline: ScenarioStats
    self_insured: ScenarioStats
    reference_based: ScenarioStats
    map_drug: ScenarioStats
    historical: Tuple[HistoricalYear, ...]
    total_historical_savings_if_in_place: float
    projection: Projection
    bad_year_stats: BadYearStats
    narrative: str = ""
    iterations: int = 0
    volatility: float = 0.0
    programs: Tuple[str, ...] = ()
    samples: Optional["SampledCosts"] = field(default=None, repr=False, compare=False)

    SCENARIOS = ("baseline", "self_insured", "reference_based", "map_drug")

    def scenario(self, name: str) -> ScenarioStats:
        if name not in self.SCENARIOS:
            raise KeyError(f"Unknown scenario '{name}'. Available: {list(self.SCENARIOS)}")
        return getattr(self, name)

    def summary_table(self) -> pd.DataFrame:
        """One row per scenario with mean, P5, P95 and savings against baseline."""
        labels = {
            "baseline": "Baseline",
            "self_insured": "Self-Insured",
            "reference_based": "Reference-Based",
            "map_drug": "MAP Drugs",
        }
        rows = []
        for name in self.SCENARIOS:
            stats = self.scenario(name)
            rows.append({
                "Scenario": labels[name],
                "Mean": stats.mean,
                "P5": stats.p5,
                "P95": stats.p95,
                "Savings vs Baseline": self.baseline.mean - stats.mean,
            })
        return pd.DataFrame(rows)

    def historical_table(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "Year": f"Year -{i + 1}",
                    "Actual Cost": y.year_cost,
                    "Self-Insured": y.self_if_in_place,
                    "Reference-Based": y.ref_if_in_place,
                    "MAP Drugs": y.map_if_in_place,
                    "Savings": y.savings,
                }
                for i, y in enumerate(self.historical)
            ],
            columns=["Year", "Actual Cost", "Self-Insured", "Reference-Based", "MAP Drugs", "Savings"],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Persistence payload (sampled arrays are not stored)."""
        def stats(s: ScenarioStats) -> Dict[str, float]:
            return {"mean": s.mean, "p5": s.p5, "p95": s.p95}

        b = self.bad_year_stats
        return {
            "baseline": stats(self.baseline),
            "self_insured": stats(self.self_insured),
            "reference_based": stats(self.reference_based),
            "map_drug": stats(self.map_drug),
            "historical": [
                {
                    "yearCost": y.year_cost,
                    "self_if_in_place": y.self_if_in_place,
                    "ref_if_in_place": y.ref_if_in_place,
                    "map_if_in_place": y.map_if_in_place,
                }
                for y in self.historical
            ],
            "total_historical_savings_if_in_place": self.total_historical_savings_if_in_place,
            "projection": {
                "baseline": self.projection.baseline,
                "self_insured": self.projection.self_insured,
                "reference": self.projection.reference,
                "map_drug": self.projection.map_drug,
            },
            "narrative": self.narrative,
            "bad_year_stats": {
                "count": b.count,
                "frequency": b.frequency,
                "avg_spike_pct": b.avg_spike_pct,
                "total_extra_cost": b.total_extra_cost,
                "avg_extra_per_bad_year": b.avg_extra_per_bad_year,
                "iterations": list(b.iteration_indices),
            },
            "iterations": self.iterations,
            "volatility": self.volatility,
            "programs": list(self.programs),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationResult":
        def stats(d: Dict[str, Any]) -> ScenarioStats:
            return ScenarioStats(mean=float(d["mean"]), p5=float(d["p5"]), p95=float(d["p95"]))

        b = data.get("bad_year_stats", {})
        p = data["projection"]
        return cls(
            baseline=stats(data["baseline"]),
            self_insured=stats(data["self_insured"]),
            reference_based=stats(data["reference_based"]),
            map_drug=stats(data["map_drug"]),
            historical=tuple(
                HistoricalYear(
                    year_cost=float(h["yearCost"]),
                    self_if_in_place=float(h["self_if_in_place"]),
                    ref_if_in_place=float(h["ref_if_in_place"]),
                    map_if_in_place=float(h["map_if_in_place"]),
                )
                for h in data.get("historical", [])
            ),
            total_historical_savings_if_in_place=float(
                data.get("total_historical_savings_if_in_place", 0.0)
            ),
            projection=Projection(
                baseline=float(p["baseline"]),
                self_insured=float(p["self_insured"]),
                reference=float(p["reference"]),
                map_drug=float(p["map_drug"]),
            ),
            bad_year_stats=BadYearStats(
                count=int(b.get("count", 0)),
                frequency=int(b.get("frequency", 5)),
                avg_spike_pct=float(b.get("avg_spike_pct", 0.0)),
                total_extra_cost=float(b.get("total_extra_cost", 0.0)),
                avg_extra_per_bad_year=float(b.get("avg_extra_per_bad_year", 0.0)),
                iteration_indices=tuple(int(i) for i in b.get("iterations", [])),
            ),
            narrative=str(data.get("narrative", "")),
            iterations=int(data.get("iterations", 0)),
            volatility=float(data.get("volatility", 0.0)),
            programs=tuple(data.get("programs", [])),
        )
