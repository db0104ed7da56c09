"""
Engine configuration and discount constants.

EngineConfig holds the run-level defaults (iteration count, fallback volatility,
bad-year settings). DiscountConstants holds the program discount rates; the
literals below are the doctrine defaults and may be replaced by rows from the
constants table via DiscountConstants.from_rows().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Optional

from .utils import normalize_rate, parse_or_none

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    default_iterations: int = 1000
    max_iterations: int = 100_000
    default_volatility: float = 0.15

    # 1 in N simulated years is a bad year; spike bounds in percent
    default_bad_year_frequency: int = 5
    default_bad_year_increase_min: float = 30.0
    default_bad_year_increase_max: float = 40.0

    # None = fresh entropy on every run (non-reproducible)
    seed: Optional[int] = None


# Accepted spellings for each constant row name
_CONSTANT_ALIASES = {
    "self_insured_discount": "self_insured_discount",
    "self_disc": "self_insured_discount",
    "reference_based_discount": "reference_based_discount",
    "rbp_discount": "reference_based_discount",
    "rbp_disc": "reference_based_discount",
    "map_discount": "map_discount",
    "map_disc": "map_discount",
    "drug_spend_share": "drug_spend_share",
    "drug_pct": "drug_spend_share",
}


@dataclass(frozen=True)
class DiscountConstants:
    """
    Discount rates for the three programs, all as fractions.

    MAP only touches the drug share of total cost, so its effective
    reduction is map_discount * drug_spend_share (0.36 with the defaults).
    """
    self_insured_discount: float = 0.25
    reference_based_discount: float = 0.15
    map_discount: float = 0.60
    drug_spend_share: float = 0.60

    @property
    def map_effective_discount(self) -> float:
        return self.map_discount * self.drug_spend_share

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Mapping[str, Any]],
        *,
        base: Optional["DiscountConstants"] = None,
        percent: bool = False,
    ) -> "DiscountConstants":
        """
        Build constants from configuration rows.

        Each row looks like the constants table:
            {"constant_name": "rbp_discount", "constant_value": 15, "active": True, ...}

        Parameters
        ----------
        rows : iterable of mappings
            Constant rows; inactive rows keep the default.
        base : DiscountConstants, optional
            Starting values; the built-in defaults when omitted.
        percent : bool
            True: every value is in percent (1 -> 0.01). False: values above
            1 are read as percentages, others as fractions.

        Rows whose value is unparseable or falls outside [0, 1] once
        converted are logged and keep the default.
        """
        constants = base or cls()
        overrides = {}
        for row in rows:
            name = str(row.get("constant_name", "")).strip().lower()
            field_name = _CONSTANT_ALIASES.get(name)
            if field_name is None:
                logger.warning("Ignoring unknown discount constant %r", name)
                continue
            if not row.get("active", True):
                continue
            raw = row.get("constant_value")
            value = parse_or_none(raw)
            if value is None:
                logger.warning("Ignoring constant %r with unparseable value %r", name, raw)
                continue
            rate = value / 100.0 if percent else normalize_rate(value)
            if not 0.0 <= rate <= 1.0:
                logger.warning("Ignoring constant %r: %r is outside 0-100%%", name, raw)
                continue
            overrides[field_name] = rate
        return replace(constants, **overrides)
