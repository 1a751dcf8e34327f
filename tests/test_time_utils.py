"""
Unit tests for time-of-day and date helpers.
"""

import pytest

from app.core.exceptions import InvalidInputError
from app.utils.time_utils import (
    TimeOrder,
    add_minutes,
    compare,
    day_of_week,
    format_time,
    parse_date,
    parse_time,
)


class TestParseAndFormat:
    """HH:MM parsing and formatting."""

    def test_parse_time(self):
        assert parse_time("00:00") == 0
        assert parse_time("09:15") == 555
        assert parse_time("23:59") == 1439

    def test_format_time_zero_pads(self):
        assert format_time(0) == "00:00"
        assert format_time(545) == "09:05"
        assert format_time(1439) == "23:59"

    @pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "12:5", "ab:cd", "", " 09:00", None])
    def test_parse_time_rejects_malformed(self, value):
        with pytest.raises(InvalidInputError):
            parse_time(value)

    @pytest.mark.parametrize("minutes", [-1, 1440])
    def test_format_time_rejects_out_of_range(self, minutes):
        with pytest.raises(InvalidInputError):
            format_time(minutes)


class TestArithmetic:
    """Minute arithmetic and comparison."""

    def test_add_minutes(self):
        assert add_minutes(parse_time("10:00"), 45) == parse_time("10:45")

    def test_add_minutes_wraps_past_midnight(self):
        assert add_minutes(parse_time("23:30"), 45) == parse_time("00:15")

    def test_compare(self):
        assert compare(540, 600) == TimeOrder.BEFORE
        assert compare(600, 600) == TimeOrder.EQUAL
        assert compare(660, 600) == TimeOrder.AFTER


class TestDates:
    """ISO date validation and weekday derivation."""

    def test_day_of_week_sunday_is_zero(self):
        assert day_of_week("2026-10-18") == 0
        assert day_of_week("2026-10-19") == 1
        assert day_of_week("2026-10-24") == 6

    @pytest.mark.parametrize("value", ["2026-02-30", "20261019", "2026-1-9", "19/10/2026", ""])
    def test_parse_date_rejects_invalid(self, value):
        with pytest.raises(InvalidInputError):
            parse_date(value)

    def test_parse_date(self):
        assert parse_date("2026-10-19").isoformat() == "2026-10-19"

    def test_impossible_calendar_date_keeps_cause(self):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_date("2026-02-30")

        assert isinstance(exc_info.value.__cause__, ValueError)
