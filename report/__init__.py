"""
Report outputs: scenario statistics, bad-year aggregation, and the narrative.
"""

from .metrics import compute_scenario_stats, nearest_rank, scenario_stats
from .aggregator import aggregate_bad_years, bad_year_table
from .narrative import build_narrative

__all__ = [
    "compute_scenario_stats",
    "nearest_rank",
    "scenario_stats",
    "aggregate_bad_years",
    "bad_year_table",
    "build_narrative",
]
