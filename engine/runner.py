"""
Simulation runner: one call per "Run Simulation" action.

Pipeline:
  inputs -> effective settings (defaults, iteration cap)
         -> volatility (override / population std of renewals / fallback)
         -> program stack (toggles + discount constants)
         -> Monte Carlo samples with bad-year injection
         -> scenario statistics, historical back-projection, forward projection
         -> bad-year aggregation -> narrative

No state is kept between calls and nothing is persisted here; the caller
decides whether to store the result.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from core.config import DiscountConstants, EngineConfig
from core.schema import SimulationInputs, SimulationResult
from distributions.sampler import CostSampler, UniformSource, make_source
from distributions.volatility import estimate_volatility, mean_renewal_rate
from programs.stack import build_program_stack, program_labels
from report.aggregator import aggregate_bad_years
from report.metrics import compute_scenario_stats
from report.narrative import build_narrative

from .projection import back_project_history, project_forward

logger = logging.getLogger(__name__)


def run_simulation(
    inputs: Union[SimulationInputs, Mapping[str, Any]],
    *,
    config: Optional[EngineConfig] = None,
    constants: Optional[DiscountConstants] = None,
    source: Optional[UniformSource] = None,
) -> SimulationResult:
    """
    Run the cost projection engine.

    Parameters
    ----------
    inputs : SimulationInputs or mapping
        Operator inputs; a raw form mapping is coerced via SimulationInputs.
    config : EngineConfig, optional
        Defaults, iteration cap and optional seed.
    constants : DiscountConstants, optional
        Program discount rates; doctrine defaults when omitted.
    source : UniformSource, optional
        Random source with a random() method. Takes precedence over config.seed.
        When neither is given the run is not reproducible.
    """
    if not isinstance(inputs, SimulationInputs):
        inputs = SimulationInputs.model_validate(dict(inputs))
    cfg = config or EngineConfig()
    settings = inputs.resolve(cfg)
    if settings.iterations_capped:
        logger.warning(
            "Requested %d iterations; capped at %d", inputs.iterations, cfg.max_iterations
        )

    renewals = inputs.renewal_rates
    volatility = estimate_volatility(
        renewals,
        override=inputs.volatility_override,
        default=cfg.default_volatility,
    )
    steps = build_program_stack(inputs, constants)

    sampler = CostSampler(
        current_cost=inputs.current_cost,
        volatility=volatility,
        steps=steps,
        bad_year_frequency=settings.bad_year_frequency,
        spike_min=settings.bad_year_increase_min,
        spike_max=settings.bad_year_increase_max,
        source=source if source is not None else make_source(cfg.seed),
    )
    samples = sampler.sample(settings.iterations)
    logger.debug(
        "Sampled %d iterations (volatility=%.6f, steps=%s)",
        samples.n_iterations, volatility, [s.name for s in steps if s.enabled],
    )

    stats = compute_scenario_stats(
        {"baseline": samples.baseline, **samples.columns}
    )
    historical, total_savings = back_project_history(inputs.historical_costs, steps)
    projection = project_forward(inputs.current_cost, mean_renewal_rate(renewals), steps)
    bad_years = aggregate_bad_years(samples.bad_years, frequency=settings.bad_year_frequency)

    programs = program_labels(steps)
    narrative = build_narrative(
        programs=programs,
        total_historical_savings=total_savings,
        projection=projection,
        bad_years=bad_years,
        iterations=settings.iterations,
        spike_min=settings.bad_year_increase_min,
        spike_max=settings.bad_year_increase_max,
    )

    logger.info(
        "Simulation complete: %d iterations, volatility=%.4f, %d bad years, baseline mean=%.2f",
        settings.iterations, volatility, bad_years.count, stats["baseline"].mean,
    )

    return SimulationResult(
        baseline=stats["baseline"],
        self_insured=stats["self_insured"],
        reference_based=stats["reference_based"],
        map_drug=stats["map_drug"],
        historical=tuple(historical),
        total_historical_savings_if_in_place=total_savings,
        projection=projection,
        bad_year_stats=bad_years,
        narrative=narrative,
        iterations=settings.iterations,
        volatility=volatility,
        programs=tuple(programs),
        samples=samples,
    )
