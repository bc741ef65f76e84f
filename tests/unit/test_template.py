"""Unit tests for placeholder parsing and rendering."""

from datetime import datetime

import pytz

from wutup.query_builder.template import (
    Placeholder,
    find_placeholder,
    format_value,
    parse_segments,
    render_segments,
    substitute,
)


class TestParsing:
    """Test placeholder discovery."""

    def test_segments_alternate_literals_and_placeholders(self):
        segments = parse_segments("a = :x and b = :y")

        assert segments == ["a = ", Placeholder("x"), " and b = ", Placeholder("y")]

    def test_text_without_placeholders_is_one_segment(self):
        assert parse_segments("select * from t") == ["select * from t"]

    def test_placeholder_at_start(self):
        assert parse_segments(":a is null") == [Placeholder("a"), " is null"]

    def test_find_placeholder_skips_invalid_tokens(self):
        assert find_placeholder("x = :Y and y = :z_1") == "z_1"

    def test_find_placeholder_none(self):
        assert find_placeholder("no tokens here") is None

    def test_digits_after_colon_are_not_placeholders(self):
        """Clock times inside literals stay untouched."""
        assert find_placeholder("t > '12:30:00'") is None

    def test_token_property(self):
        assert Placeholder("venueId").token == ":venueId"


class TestRendering:
    """Test substitution of bound values."""

    def test_unbound_placeholders_stay_literal(self):
        assert substitute("a = :a and b = :b", {"a": 1}) == "a = 1 and b = :b"

    def test_only_first_occurrence_is_replaced(self):
        assert substitute(":x, :x, :x", {"x": 7}) == "7, :x, :x"

    def test_custom_formatter(self):
        segments = parse_segments("a = :a")
        assert render_segments(segments, {"a": "v"}, lambda value: f"'{value}'") == "a = 'v'"


class TestFormatValue:
    """Test the text form of bound values."""

    def test_booleans(self):
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_numbers_and_strings(self):
        assert format_value(21) == "21"
        assert format_value(2.5) == "2.5"
        assert format_value("'abc'") == "'abc'"

    def test_naive_datetime(self):
        assert format_value(datetime(2012, 11, 13, 8, 30)) == "2012-11-13 08:30:00"

    def test_aware_datetime_defaults_to_utc(self):
        eastern = pytz.timezone("US/Eastern").localize(datetime(2012, 7, 1, 8, 0))
        assert format_value(eastern) == "2012-07-01 12:00:00"

    def test_aware_datetime_in_time_zone(self):
        value = datetime(2012, 7, 1, 12, 0, tzinfo=pytz.utc)
        assert format_value(value, time_zone="US/Pacific") == "2012-07-01 05:00:00"
