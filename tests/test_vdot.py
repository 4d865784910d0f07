"""Tests for VDOT, Riegel and pace-zone calculations."""

import pytest

from running_log.exceptions import ValidationError
from running_log.metrics.vdot import (
    INTERVAL_DISTANCES_M,
    RaceDistance,
    calculate_race_predictions,
    calculate_riegel,
    calculate_vdot,
    derive_pace_zones,
    predict_from_score,
    predict_time_from_vdot,
)


class TestCalculateVdot:
    """Tests for the Daniels VDOT formula."""

    def test_5k_in_20_minutes(self):
        vdot = calculate_vdot(5, 1200)
        assert vdot == pytest.approx(49.8062334281, rel=1e-9)

    def test_10k_in_40_minutes(self):
        assert calculate_vdot(10, 2400) == pytest.approx(51.9440826680, rel=1e-9)

    def test_marathon_in_3_hours(self):
        assert calculate_vdot(42.195, 10800) == pytest.approx(53.5282687626, rel=1e-9)

    def test_faster_time_scores_higher(self):
        assert calculate_vdot(10, 2300) > calculate_vdot(10, 2350) > calculate_vdot(10, 2400)

    def test_not_rounded(self):
        vdot = calculate_vdot(10, 2350)
        assert vdot == pytest.approx(53.2387449373, rel=1e-9)
        assert vdot != round(vdot, 1)


class TestPredictTimeFromVdot:
    """Tests for the piecewise velocity model."""

    def test_5k_uses_short_bracket(self):
        assert predict_time_from_vdot(50, 5) == pytest.approx(1150.7120126471, rel=1e-9)

    def test_bracket_changes_just_above_5k(self):
        """The velocity curves do not join, so times jump at the boundary."""
        assert predict_time_from_vdot(50, 5.0001) == pytest.approx(1211.2400831702, rel=1e-9)

    def test_15k_boundary_belongs_to_middle_bracket(self):
        assert predict_time_from_vdot(50, 15) == pytest.approx(3633.6475765589, rel=1e-9)
        assert predict_time_from_vdot(50, 15.0001) == pytest.approx(3788.1431908580, rel=1e-9)

    def test_marathon(self):
        assert predict_time_from_vdot(50, 42.195) == pytest.approx(10655.9757560452, rel=1e-9)

    def test_higher_score_is_faster(self):
        assert predict_time_from_vdot(60, 10) < predict_time_from_vdot(50, 10)

    @pytest.mark.parametrize("distance_km,time_seconds", [
        (5, 1200),
        (5, 1500),
        (10, 2400),
        (10, 3000),
        (21.1, 5400),
        (21.1, 6600),
        (42.195, 10800),
        (42.195, 14400),
    ])
    def test_round_trip_within_band(self, distance_km, time_seconds):
        """Scoring a result and predicting the same distance lands 0-8% faster."""
        predicted = predict_time_from_vdot(calculate_vdot(distance_km, time_seconds), distance_km)
        ratio = predicted / time_seconds
        assert 0.92 < ratio < 1.0, f"Expected 0.92-1.0, got {ratio:.4f}"

    def test_round_trip_5k(self):
        predicted = predict_time_from_vdot(calculate_vdot(5, 1200), 5)
        assert predicted == pytest.approx(1154.36, abs=0.01)


class TestRiegel:
    """Tests for Riegel's power law."""

    def test_5k_to_10k(self):
        assert calculate_riegel(5, 1200, 10) == pytest.approx(2501.9178260187, rel=1e-9)

    def test_5k_to_marathon(self):
        assert calculate_riegel(5, 1200, 42.2) == pytest.approx(11510.7663749464, rel=1e-9)

    def test_same_distance_is_identity(self):
        assert calculate_riegel(10, 2400, 10) == pytest.approx(2400)

    def test_shorter_target_is_faster(self):
        assert calculate_riegel(10, 2400, 5) < 1200

    def test_increases_with_target_distance(self):
        targets = [1, 3, 5, 10, 15, 21.1, 30, 42.195, 50, 100]
        times = [calculate_riegel(5, 1200, d) for d in targets]
        assert all(a < b for a, b in zip(times, times[1:])), times


class TestPaceZones:
    """Tests for training pace zones."""

    @pytest.fixture
    def zones(self):
        return derive_pace_zones(50)

    def test_fixed_order(self, zones):
        assert [z.name for z in zones] == ["Easy", "Marathon", "Threshold", "Interval", "Repetition"]

    def test_multipliers_match_table(self, zones):
        assert [z.multiplier for z in zones] == [0.70, 0.84, 0.88, 0.98, 1.0]

    def test_paces(self, zones):
        expected = [293.3078800755, 250.4509724565, 240.4143088634, 218.5215301634, 214.6128839626]
        for zone, pace in zip(zones, expected):
            assert zone.pace_sec_per_km == pytest.approx(pace, rel=1e-9), zone.name

    def test_paces_get_faster(self, zones):
        paces = [z.pace_sec_per_km for z in zones]
        assert paces == sorted(paces, reverse=True)

    def test_continuous_zones_have_no_splits(self, zones):
        assert not zones[0].has_intervals
        assert not zones[1].has_intervals

    def test_fast_zones_have_splits(self, zones):
        for zone in zones[2:]:
            assert zone.has_intervals, zone.name
            assert [s.distance_m for s in zone.intervals] == list(INTERVAL_DISTANCES_M)

    def test_threshold_splits(self, zones):
        threshold = zones[2]
        assert [s.distance_m for s in threshold.intervals] == list(INTERVAL_DISTANCES_M)
        splits = {s.distance_m: s.time_sec for s in threshold.intervals}
        assert splits[1200] == pytest.approx(288.4971706361, rel=1e-9)
        assert splits[400] == pytest.approx(96.1657235454, rel=1e-9)
        assert splits[200] == pytest.approx(48.0828617727, rel=1e-9)

    def test_formatting(self, zones):
        assert zones[0].pace_formatted == "4:53/km"
        assert zones[2].intervals[3].time_formatted == "1:36"

    def test_to_dict(self, zones):
        data = zones[2].to_dict()
        assert data["name"] == "Threshold"
        assert data["pace_sec_per_km"] == 240.4
        assert len(data["intervals"]) == 6


class TestPredictFromScore:
    """Tests for standard-distance predictions from a score."""

    def test_default_targets(self):
        predictions = predict_from_score(50)
        assert [p.distance_km for p in predictions] == [10.0, 21.1, 42.2]
        assert [p.label for p in predictions] == ["10K", "Half Marathon", "Marathon"]
        assert predictions[0].time_sec == pytest.approx(2422.4317177060, rel=1e-9)
        assert predictions[1].time_sec == pytest.approx(5328.6192310121, rel=1e-9)
        assert predictions[2].time_sec == pytest.approx(10657.2384620241, rel=1e-9)

    def test_custom_target(self):
        predictions = predict_from_score(50, [5])
        assert predictions[0].label == "5K"
        assert predictions[0].time_sec == pytest.approx(1150.7120126471, rel=1e-9)

    def test_enum_targets(self):
        predictions = predict_from_score(50, [RaceDistance.MARATHON])
        assert predictions[0].distance_km == 42.2

    def test_to_dict(self):
        data = predict_from_score(50)[0].to_dict()
        assert data["distance"] == "10K"
        assert data["time_sec"] == 2422
        assert data["time_formatted"] == "0:40:22"


class TestRaceCalculator:
    """Tests for the combined calculator result."""

    def test_5k_in_20_minutes(self):
        report = calculate_race_predictions(5, 1200)

        assert report.vdot == pytest.approx(49.8062334281, rel=1e-9)

        riegel = [p.time_sec for p in report.riegel_predictions]
        assert riegel == pytest.approx([2501.9178260187, 5520.9325847109, 11510.7663749464], rel=1e-9)

        vdot = [p.time_sec for p in report.vdot_predictions]
        assert vdot == pytest.approx([2430.1699362614, 5345.7845832435, 10691.5691664869], rel=1e-9)

        assert len(report.pace_zones) == 5

    def test_two_models_disagree(self):
        report = calculate_race_predictions(5, 1200)
        for riegel, vdot in zip(report.riegel_predictions, report.vdot_predictions):
            assert riegel.time_sec != pytest.approx(vdot.time_sec, rel=1e-3)

    def test_to_dict(self):
        data = calculate_race_predictions(5, 1200).to_dict()
        assert data["vdot"] == 49.8
        assert data["time_formatted"] == "0:20:00"
        assert data["riegel_predictions"][0]["time_sec"] == 2502

    def test_rejects_zero_distance(self):
        with pytest.raises(ValidationError) as exc_info:
            calculate_race_predictions(0, 1200)
        assert exc_info.value.details["field"] == "distance_km"

    def test_rejects_negative_time(self):
        with pytest.raises(ValidationError) as exc_info:
            calculate_race_predictions(5, -10)
        assert exc_info.value.message == "Please enter a valid time"

    def test_rejects_zero_target(self):
        with pytest.raises(ValidationError) as exc_info:
            calculate_race_predictions(5, 1200, [0])
        assert exc_info.value.details["field"] == "targets_km"

    def test_rejects_negative_target(self):
        with pytest.raises(ValidationError) as exc_info:
            calculate_race_predictions(5, 1200, [10, -5])
        assert exc_info.value.details["invalid"] == ["-5.0"]

    def test_rejects_nan_distance(self):
        with pytest.raises(ValidationError) as exc_info:
            calculate_race_predictions(float("nan"), 1200)
        assert exc_info.value.details["field"] == "distance_km"

    def test_rejects_infinite_time(self):
        with pytest.raises(ValidationError) as exc_info:
            calculate_race_predictions(5, float("inf"))
        assert exc_info.value.details["field"] == "time_seconds"
