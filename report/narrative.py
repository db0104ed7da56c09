"""
Narrative synthesis: turns a run's figures into the paragraph a rep reads out.

Sections:
  1. which programs are applied (name and discount)
  2. historical what-if savings
  3. next-year projection across all four tiers
  4. bad-year impact
"""

from __future__ import annotations

from typing import Sequence

from core.schema import BadYearStats, Projection
from core.utils import format_currency, safe_div


def build_narrative(
    *,
    programs: Sequence[str],
    total_historical_savings: float,
    projection: Projection,
    bad_years: BadYearStats,
    iterations: int,
    spike_min: float,
    spike_max: float,
) -> str:
    """
    Parameters
    ----------
    programs : sequence of str
        Labels of the enabled programs, in stack order.
    spike_min, spike_max : float
        Configured spike bounds as fractions.
    """
    applied = ", ".join(programs) or "None"
    bad_pct = safe_div(bad_years.count, iterations) * 100.0

    lines = [
        f"Applied programs: {applied}.",
        "",
        "Had these programs been active over the past 3 years, total savings "
        f"≈ {format_currency(total_historical_savings)}.",
        f"Looking ahead, current projection ≈ {format_currency(projection.baseline)}; "
        f"with sequential savings: self-insured ≈ {format_currency(projection.self_insured)}; "
        f"reference ≈ {format_currency(projection.reference)}; "
        f"MAP Drug ≈ {format_currency(projection.map_drug)}.",
        "",
        f"Bad Year Impact: In {bad_years.count} of {iterations} simulations "
        f"({bad_pct:.1f}%), costs spiked by an average of {bad_years.avg_spike_pct:.1f}% "
        f"({spike_min * 100:.0f}-{spike_max * 100:.0f}% range). "
        f"This added approximately {format_currency(bad_years.total_extra_cost)} in "
        "unexpected costs across all simulations, averaging "
        f"{format_currency(bad_years.avg_extra_per_bad_year)} per bad year event.",
    ]
    if bad_years.count > 0:
        lines.append(
            "Probability of experiencing at least 1 bad year in the next 3 years: "
            f"{bad_years.three_year_probability:.0%}."
        )
    return "\n".join(lines)
