"""
Tests for time parsing and formatting.

Formatting rounds up to the hundredth and picks the layout by magnitude.
"""

import pytest

from polyfield_track.errors import MalformedTime
from polyfield_track.timefmt import clean_time_string, parse_time_string, round_and_format_time


# =============================================================================
# parse_time_string
# =============================================================================

class TestParseTimeString:
    """Tests for parse_time_string."""

    def test_seconds_only(self):
        assert parse_time_string("10.5") == pytest.approx(10.5)

    def test_minutes_seconds(self):
        assert parse_time_string("2:05.25") == pytest.approx(125.25)

    def test_hours_minutes_seconds(self):
        assert parse_time_string("1:02:03.5") == pytest.approx(3723.5)

    def test_surrounding_whitespace_is_trimmed(self):
        assert parse_time_string("  10.5 ") == pytest.approx(10.5)

    def test_variable_precision(self):
        assert parse_time_string("10.1234") == pytest.approx(10.1234)
        assert parse_time_string("10") == pytest.approx(10.0)

    @pytest.mark.parametrize("raw", ["", "abc", "DQ", "1:2:3:4", "1::2", "1: 30", "nan", "inf", "-5", "1:-30"])
    def test_malformed(self, raw):
        with pytest.raises(MalformedTime):
            parse_time_string(raw)

    @pytest.mark.parametrize("raw", ["1_0.5", "\uff11\uff10.5", "1:3\u0660.5", "1e2", "10.5.1"])
    def test_only_plain_ascii_decimals(self, raw):
        with pytest.raises(MalformedTime):
            parse_time_string(raw)

    @pytest.mark.parametrize("raw,expected", [("+10.5", 10.5), ("10.", 10.0), (".5", 0.5)])
    def test_signed_and_bare_fractions(self, raw, expected):
        assert parse_time_string(raw) == pytest.approx(expected)

    def test_malformed_is_value_error(self):
        """Callers that only know ValueError still catch it."""
        with pytest.raises(ValueError):
            parse_time_string("x")


# =============================================================================
# round_and_format_time
# =============================================================================

class TestRoundAndFormatTime:
    """Tests for round_and_format_time."""

    @pytest.mark.parametrize("raw,expected", [
        ("11.23", "11.23"),
        ("11.2", "11.20"),
        ("9.5", "9.50"),
        ("0.001", "0.01"),
        ("65", "1:05.00"),
        ("1:02:03.4", "1:02:03.40"),
        ("10:00.00", "10:00.00"),
        ("2:05.3", "2:05.30"),
    ])
    def test_layout_by_magnitude(self, raw, expected):
        assert round_and_format_time(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("11.231", "11.24"),
        ("10.854", "10.86"),
        ("10.8501", "10.86"),
        ("47.0001", "47.01"),
    ])
    def test_rounds_up_never_down(self, raw, expected):
        assert round_and_format_time(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("119.999", "2:00.00"),
        ("1:59.999", "2:00.00"),
        ("59.999", "1:00.00"),
        ("59:59.999", "1:00:00.00"),
        ("3599.995", "1:00:00.00"),
    ])
    def test_carry_propagation(self, raw, expected):
        """Hundredths rounding up to 100 carry into seconds, minutes, hours."""
        assert round_and_format_time(raw) == expected

    @pytest.mark.parametrize("raw", ["10.001", "10.005", "10.009", "59.991", "125.4449", "3725.1"])
    def test_formatted_value_is_ceiling(self, raw):
        """Re-parsed display value is >= the raw time and less than one hundredth above it."""
        t = parse_time_string(raw)
        shown = parse_time_string(round_and_format_time(raw))
        assert shown >= t - 1e-9
        assert shown < t + 0.01 + 1e-9

    def test_formatted_value_round_trips(self):
        first = round_and_format_time("1:01:01.011")
        assert round_and_format_time(first) == first

    def test_malformed_propagates(self):
        with pytest.raises(MalformedTime):
            round_and_format_time("12.3.4")


class TestCleanTimeString:
    """Tests for clean_time_string."""

    def test_strips_control_chars_and_bom(self):
        assert clean_time_string("\ufeff10.5\r\x00") == "10.5"

    def test_leaves_normal_text(self):
        assert clean_time_string("1:02.33") == "1:02.33"
