import numpy as np
import pytest

from core.schema import ScenarioStats
from distributions.sampler import BadYearRecord
from report.aggregator import aggregate_bad_years, bad_year_table
from report.metrics import nearest_rank, scenario_stats


def test_nearest_rank_percentiles():
    values = np.arange(100, dtype=float)[::-1]  # unsorted input
    stats = scenario_stats(values)
    assert stats.mean == pytest.approx(49.5)
    assert stats.p5 == 5.0
    assert stats.p95 == 95.0


def test_small_samples_clamp_index():
    stats = scenario_stats([3.0, 1.0, 2.0])
    assert stats == ScenarioStats(mean=2.0, p5=1.0, p95=3.0)
    one = scenario_stats([42.0])
    assert one == ScenarioStats(mean=42.0, p5=42.0, p95=42.0)


def test_empty_sample_is_zero():
    assert scenario_stats([]) == ScenarioStats(0.0, 0.0, 0.0)
    assert nearest_rank(np.array([]), 0.5) == 0.0


def test_aggregate_bad_years():
    records = [
        BadYearRecord(iteration=0, spike_pct=30.0, extra_cost=300.0),
        BadYearRecord(iteration=5, spike_pct=40.0, extra_cost=500.0),
    ]
    stats = aggregate_bad_years(records, frequency=5)
    assert stats.count == 2
    assert stats.avg_spike_pct == pytest.approx(35.0)
    assert stats.total_extra_cost == pytest.approx(800.0)
    assert stats.avg_extra_per_bad_year == pytest.approx(400.0)
    assert stats.iteration_indices == (0, 5)
    assert stats.three_year_probability == pytest.approx(1 - 0.8 ** 3)


def test_aggregate_without_bad_years_is_zero():
    stats = aggregate_bad_years([], frequency=10)
    assert stats.count == 0
    assert stats.avg_spike_pct == 0.0
    assert stats.avg_extra_per_bad_year == 0.0
    assert stats.frequency == 10


def test_bad_year_table_rows():
    stats = aggregate_bad_years(
        [BadYearRecord(iteration=0, spike_pct=35.0, extra_cost=35000.0)], frequency=5
    )
    table = bad_year_table(stats, iterations=5)
    values = dict(zip(table["Metric"], table["Value"]))
    assert values["Bad Years in Simulation"] == "1 of 5"
    assert values["Share of Iterations"] == "20.0%"
    assert values["P(>=1 Bad Year in 3 Years)"] == "49%"


def test_bad_year_table_formats_money():
    stats = aggregate_bad_years(
        [BadYearRecord(iteration=0, spike_pct=35.0, extra_cost=35000.0),
         BadYearRecord(iteration=5, spike_pct=30.0, extra_cost=30000.0)],
        frequency=5,
    )
    table = bad_year_table(stats, iterations=10)
    values = dict(zip(table["Metric"], table["Value"]))
    assert values["Total Extra Cost"] == "$65,000.00"
    assert values["Avg Cost Per Bad Year"] == "$32,500.00"
