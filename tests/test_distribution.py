"""
Tests for per-window distribution summaries.
"""

import pytest

from observer.distribution import (
    classify_distribution,
    compute_distribution,
    compute_spike_ratio,
    compute_top_share,
)
from tests.fixtures import make_entries


class TestComputeDistribution:
    def test_no_entries(self):
        assert compute_distribution([], 7) is None

    def test_only_unparseable_entries(self):
        assert compute_distribution(make_entries(["yesterday"]), 7) is None

    def test_flat_week(self, entries):
        summary = compute_distribution(entries, 7)
        assert summary.classification == "lognormal"
        assert summary.total_entries == 3
        assert summary.spike_ratio == 1.0
        assert summary.top10_percent_days_share == pytest.approx(1 / 3)
        assert [d.date for d in summary.daily_counts] == ["2024-01-01", "2024-01-02", "2024-01-03"]
        assert summary.fitted_buckets == {"normal": 0.0, "lognormal": 1.0, "powerlaw": 0.0}
        assert summary.frequency_per_day == pytest.approx(3 / 7)
        assert summary.magnitude_proxy == 3

    def test_concentrated_window_is_powerlaw(self):
        timestamps = [f"2024-01-01T{h:02d}:00:00Z" for h in range(10)]
        timestamps += [f"2024-01-{d:02d}T12:00:00Z" for d in range(2, 11)]
        summary = compute_distribution(make_entries(timestamps), 10)
        assert summary.classification == "powerlaw"
        assert summary.skew == pytest.approx(8 / 3)
        assert summary.spike_ratio == 10.0
        assert summary.top_spike_dates[0] == "2024-01-01"

    def test_grouped_by_utc_day(self):
        summary = compute_distribution(make_entries(["2024-01-01T23:30:00-05:00"]), 7)
        assert [d.date for d in summary.daily_counts] == ["2024-01-02"]

    def test_top_spike_dates_tie_prefers_recent(self, entries):
        summary = compute_distribution(entries, 7)
        assert summary.top_spike_dates == ["2024-01-03", "2024-01-02", "2024-01-01"]

    def test_to_dict(self, entries):
        data = compute_distribution(entries, 7).to_dict()
        assert data["classification"] == "lognormal"
        assert data["daily_counts"][0] == {"date": "2024-01-01", "count": 1}


class TestStatistics:
    def test_top_share_uses_at_least_one_day(self):
        assert compute_top_share([4, 1]) == pytest.approx(0.8)

    def test_top_share_empty(self):
        assert compute_top_share([]) == 0.0

    def test_spike_ratio_over_median(self):
        assert compute_spike_ratio([1, 2, 8]) == 4.0

    def test_classify_flat_low_share_is_normal(self):
        assert classify_distribution(0.0, 0.1, 0.0) == "normal"

    def test_classify_gap_variance(self):
        assert classify_distribution(0.0, 0.1, 150.0) == "powerlaw"
        assert classify_distribution(0.0, 0.1, 20.0) == "lognormal"
