"""
Sanity checks on simulation inputs before a run.

The engine itself never rejects numeric input (everything coerces), so these
checks are advisory: errors are things a rep should fix before presenting,
warnings are informational.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from core.config import EngineConfig
from core.schema import SimulationInputs


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for one set of inputs."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_inputs(
    inputs: SimulationInputs,
    *,
    config: Optional[EngineConfig] = None,
) -> ValidationResult:
    cfg = config or EngineConfig()
    result = ValidationResult()

    # --- Cost ---
    if inputs.current_cost < 0:
        result.errors.append("Current cost is negative.")
    elif inputs.current_cost == 0:
        result.warnings.append("Current cost is zero; every scenario will be zero.")

    # --- Renewals / volatility ---
    if not inputs.renewal_rates and inputs.volatility_override is None:
        result.warnings.append(
            f"No renewal rates supplied; using default volatility {cfg.default_volatility:.0%}."
        )
    if inputs.volatility_override is not None and inputs.volatility_override < 0:
        result.warnings.append("Volatility override is negative; the multiplier range is inverted.")
    if inputs.volatility_override is not None and inputs.volatility_override > 1:
        result.warnings.append(
            "Volatility override > 1.0; check if it was entered in percent vs fraction form."
        )

    # --- Iterations ---
    if inputs.iterations <= 0:
        result.warnings.append(
            f"Iterations not set; defaulting to {cfg.default_iterations}."
        )
    elif inputs.iterations > cfg.max_iterations:
        result.warnings.append(
            f"Iterations {inputs.iterations} exceed the cap; using {cfg.max_iterations}."
        )

    # --- Bad years ---
    settings = inputs.resolve(cfg)
    if settings.bad_year_increase_min > settings.bad_year_increase_max:
        result.warnings.append("Bad-year spike minimum is above the maximum.")

    # --- History ---
    if not inputs.historical_costs:
        result.warnings.append("No historical costs supplied; historical savings will be zero.")
    if any(c < 0 for c in (inputs.historical_cost1, inputs.historical_cost2, inputs.historical_cost3)):
        result.warnings.append("Negative historical costs are ignored.")

    return result
