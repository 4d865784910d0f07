"""Tests for time and pace formatting."""

import pytest

from running_log.utils.formatting import (
    format_pace,
    format_split,
    format_time,
    parse_time,
    time_from_parts,
)


class TestFormatTime:
    """Tests for H:MM:SS formatting."""

    def test_hours_always_shown(self):
        assert format_time(1200) == "0:20:00"

    def test_full_clock(self):
        assert format_time(3661) == "1:01:01"

    def test_rounds_fractional_seconds(self):
        """A predicted 2299.94s prints as the whole second it rounds to."""
        assert format_time(2299.94) == "0:38:20"

    def test_marathon_time(self):
        assert format_time(10657.24) == "2:57:37"


class TestFormatPace:
    """Tests for M:SS pace formatting."""

    def test_pace_from_total_time(self):
        assert format_pace(1200, 5) == "4:00"

    def test_pace_value(self):
        assert format_pace(293.3) == "4:53"

    def test_no_sixty_seconds(self):
        """Rounding up to a full minute carries into the minutes."""
        assert format_pace(239.6) == "4:00"
        assert format_pace(299.7) == "5:00"


class TestFormatSplit:
    """Tests for interval split formatting."""

    def test_short_split(self):
        assert format_split(48.08) == "0:48"

    def test_split_over_a_minute(self):
        assert format_split(96.17) == "1:36"

    def test_carry(self):
        assert format_split(59.6) == "1:00"


class TestTimeParts:
    """Tests for composing form fields into seconds."""

    def test_compose(self):
        assert time_from_parts(1, 2, 3) == 3723

    def test_missing_parts_are_zero(self):
        assert time_from_parts(None, 20, None) == 1200
        assert time_from_parts() == 0


class TestParseTime:
    """Tests for parsing time strings."""

    def test_minutes_seconds(self):
        assert parse_time("20:00") == 1200

    def test_hours_minutes_seconds(self):
        assert parse_time("1:45:00") == 6300

    def test_plain_seconds(self):
        assert parse_time("3600") == 3600

    def test_surrounding_whitespace(self):
        assert parse_time(" 25:30 ") == 1530

    def test_invalid_text(self):
        with pytest.raises(ValueError):
            parse_time("fast")

    def test_too_many_parts(self):
        with pytest.raises(ValueError):
            parse_time("1:2:3:4")

    @pytest.mark.parametrize("text", ["inf", "-inf", "nan", "1:inf", "1:00:inf"])
    def test_non_finite_rejected(self, text):
        with pytest.raises(ValueError, match="Invalid time format"):
            parse_time(text)
