"""
Core package: input/result records, configuration, and shared utilities.
No business logic lives here.
"""

from .config import DiscountConstants, EngineConfig
from .schema import (
    BadYearStats,
    HistoricalYear,
    Projection,
    RunSettings,
    ScenarioStats,
    SimulationInputs,
    SimulationResult,
)
from .utils import format_currency, format_percent, parse_or_zero

__all__ = [
    "DiscountConstants",
    "EngineConfig",
    "BadYearStats",
    "HistoricalYear",
    "Projection",
    "RunSettings",
    "ScenarioStats",
    "SimulationInputs",
    "SimulationResult",
    "format_currency",
    "format_percent",
    "parse_or_zero",
]
