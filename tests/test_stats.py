"""Tests for dashboard statistics."""

import pytest
from datetime import date, datetime, timedelta

from running_log.models.records import TrainingRun
from running_log.analysis.stats import (
    best_effort_predictions,
    calculate_dashboard_stats,
    find_best_effort,
    recent_pace_series,
    recent_runs,
    week_start,
    weekly_aggregation,
)


NOW = date(2024, 5, 20)


def _run(day: date, distance_km: float, time_seconds: int, hr=None) -> TrainingRun:
    return TrainingRun(date=day, distance_km=distance_km, time_seconds=time_seconds, heart_rate_bpm=hr)


@pytest.fixture
def runs():
    """Store order, most recent first."""
    return [
        _run(date(2024, 5, 19), 10, 3000, hr=150),
        _run(date(2024, 5, 15), 5, 1500),
        _run(date(2024, 5, 13), 8, 2400, hr=145),
        _run(date(2024, 5, 1), 5, 1200, hr=160),
    ]


class TestDashboardStats:
    """Tests for the headline numbers."""

    def test_totals(self, runs):
        stats = calculate_dashboard_stats(runs, NOW)
        assert stats.total_runs == 4
        # 2024-05-13 is exactly seven days back and counts
        assert stats.weekly_volume_km == pytest.approx(23.0)

    def test_average_pace(self, runs):
        stats = calculate_dashboard_stats(runs, NOW)
        assert stats.average_pace_sec_per_km == pytest.approx(285.0)

    def test_average_heart_rate_ignores_missing(self, runs):
        stats = calculate_dashboard_stats(runs, NOW)
        # (150 + 145 + 160) / 3 = 151.67
        assert stats.average_heart_rate == 152

    def test_heart_rate_rounds_half_up(self):
        runs = [_run(NOW, 5, 1500, hr=150), _run(NOW, 5, 1500, hr=151)]
        assert calculate_dashboard_stats(runs, NOW).average_heart_rate == 151

    def test_best_effort(self, runs):
        stats = calculate_dashboard_stats(runs, NOW)
        assert stats.best_effort.index == 3
        assert stats.best_effort.vdot == pytest.approx(49.8062334281, rel=1e-9)

    def test_accepts_datetime(self, runs):
        stats = calculate_dashboard_stats(runs, datetime(2024, 5, 20, 18, 30))
        assert stats.weekly_volume_km == pytest.approx(23.0)

    def test_window_excludes_older_runs(self, runs):
        stats = calculate_dashboard_stats(runs, date(2024, 5, 21))
        assert stats.weekly_volume_km == pytest.approx(15.0)

    def test_empty(self):
        stats = calculate_dashboard_stats([], NOW)
        assert stats.total_runs == 0
        assert stats.weekly_volume_km == 0
        assert stats.average_pace_sec_per_km is None
        assert stats.average_heart_rate is None
        assert stats.best_effort is None

    def test_zero_distance_left_out_of_pace(self, runs):
        stats = calculate_dashboard_stats(runs + [_run(NOW, 0, 600)], NOW)
        assert stats.total_runs == 5
        assert stats.average_pace_sec_per_km == pytest.approx(285.0)

    def test_to_dict(self, runs):
        data = calculate_dashboard_stats(runs, NOW).to_dict()
        assert data["total_runs"] == 4
        assert data["average_pace_sec_per_km"] == 285.0
        assert data["best_effort"]["index"] == 3
        assert data["best_effort"]["vdot"] == 49.8


class TestBestEffort:
    """Tests for finding the highest VDOT."""

    def test_first_maximum_wins(self):
        runs = [_run(NOW, 5, 1200), _run(NOW, 5, 1200)]
        assert find_best_effort(runs).index == 0

    def test_skips_unusable(self):
        runs = [_run(NOW, 5, 0), _run(NOW, 0, 1200), _run(NOW, 10, 2400)]
        best = find_best_effort(runs)
        assert best.index == 2

    def test_none_without_usable_runs(self):
        assert find_best_effort([_run(NOW, 0, 0)]) is None
        assert find_best_effort([]) is None

    def test_predictions_from_best(self, runs):
        result = best_effort_predictions(runs)
        assert result.best_effort.index == 3
        assert result.predictions[0].time_sec == pytest.approx(2430.1699362614, rel=1e-9)

    def test_predictions_custom_targets(self, runs):
        result = best_effort_predictions(runs, [5])
        assert [p.distance_km for p in result.predictions] == [5.0]

    def test_no_predictions_without_runs(self):
        assert best_effort_predictions([]) is None


class TestWeeklyAggregation:
    """Tests for Sunday-started weekly volume."""

    def test_week_start_is_sunday(self):
        assert week_start(date(2024, 5, 19)) == date(2024, 5, 19)  # Sunday
        assert week_start(date(2024, 5, 18)) == date(2024, 5, 12)  # Saturday
        assert week_start(date(2024, 5, 13)) == date(2024, 5, 12)  # Monday

    def test_buckets(self, runs):
        summary = weekly_aggregation(runs)
        assert [w.week_start for w in summary.weeks] == [
            date(2024, 4, 28), date(2024, 5, 12), date(2024, 5, 19),
        ]
        assert [w.distance_km for w in summary.weeks] == pytest.approx([5.0, 13.0, 10.0])
        assert summary.average_km == pytest.approx(28 / 3)

    def test_keeps_most_recent_weeks(self, runs):
        summary = weekly_aggregation(runs, weeks=2)
        assert [w.week_start for w in summary.weeks] == [date(2024, 5, 12), date(2024, 5, 19)]
        assert summary.average_km == pytest.approx(11.5)

    def test_default_keeps_eight_of_ten_weeks(self):
        runs = [
            _run(date(2024, 5, 19) - timedelta(weeks=i) + timedelta(days=3), 10 - i, 3000)
            for i in range(10)
        ]
        summary = weekly_aggregation(runs)
        assert len(summary.weeks) == 8
        assert summary.weeks[0].week_start == date(2024, 3, 31)
        assert summary.weeks[-1].week_start == date(2024, 5, 19)
        assert [w.distance_km for w in summary.weeks] == pytest.approx([3, 4, 5, 6, 7, 8, 9, 10])
        assert summary.average_km == pytest.approx(6.5)

    def test_empty(self):
        summary = weekly_aggregation([])
        assert summary.weeks == []
        assert summary.average_km == 0.0

    def test_to_dict(self, runs):
        data = weekly_aggregation(runs).to_dict()
        assert data["weeks"][0] == {"week_start": "2024-04-28", "distance_km": 5.0}


class TestRecentRuns:
    """Tests for the recent-run list and pace series."""

    def test_first_n_in_store_order(self, runs):
        assert recent_runs(runs, 2) == runs[:2]

    def test_fewer_than_n(self, runs):
        assert recent_runs(runs, 10) == runs

    def test_pace_series_is_chronological(self, runs):
        series = recent_pace_series(runs, 3)
        assert series.dates == [date(2024, 5, 13), date(2024, 5, 15), date(2024, 5, 19)]
        assert series.paces_min_per_km == pytest.approx([5.0, 5.0, 5.0])
        assert series.average_min_per_km == pytest.approx(5.0)

    def test_pace_series_all_runs(self, runs):
        series = recent_pace_series(runs)
        assert series.paces_min_per_km[0] == pytest.approx(4.0)
        assert series.average_min_per_km == pytest.approx(4.75)

    def test_empty_pace_series(self):
        series = recent_pace_series([])
        assert series.paces_min_per_km == []
        assert series.average_min_per_km is None
