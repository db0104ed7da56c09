import sys
from itertools import cycle
from pathlib import Path
from typing import Iterable

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.schema import SimulationInputs  # noqa: E402


class FixedSource:
    """Uniform source that always returns the same draw."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value


class SequenceSource:
    """Uniform source that cycles through a fixed list of draws."""

    def __init__(self, values: Iterable[float]):
        self._values = cycle(list(values))

    def random(self) -> float:
        return next(self._values)


@pytest.fixture
def fixed_source() -> FixedSource:
    return FixedSource(0.5)


@pytest.fixture
def workbench_inputs() -> SimulationInputs:
    """The default workbench configuration: 100k cost, renewals 5/7/6, all programs on."""
    return SimulationInputs(
        currentCost=100000,
        renewal1=5,
        renewal2=7,
        renewal3=6,
        iterations=1000,
        useSelfInsured=True,
        useReferenceBased=True,
        useMap=True,
        badYearFrequency=5,
        badYearIncreaseMin=30,
        badYearIncreaseMax=40,
    )
