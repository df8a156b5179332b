"""Unit tests for calendar date helpers."""

from datetime import date, datetime

import pytest

from playreign.domain.value_objects.dates import (
    OPEN_END_LABEL,
    days_between,
    format_display_date,
    parse_display_date,
    to_calendar_date,
)


class TestToCalendarDate:
    """Tests for to_calendar_date()."""

    def test_datetime_drops_time(self) -> None:
        assert to_calendar_date(datetime(2009, 3, 1, 23, 59)) == date(2009, 3, 1)

    def test_date_passes_through(self) -> None:
        assert to_calendar_date(date(2009, 3, 1)) == date(2009, 3, 1)

    def test_storage_string_with_time(self) -> None:
        assert to_calendar_date("2009-03-01 21:14:03") == date(2009, 3, 1)

    def test_storage_string_with_whitespace(self) -> None:
        assert to_calendar_date("  2009-03-01") == date(2009, 3, 1)

    @pytest.mark.parametrize("value", [None, "", "yesterday", "2009-02-30", 20090301])
    def test_unusable_values_return_none(self, value) -> None:
        assert to_calendar_date(value) is None


class TestDisplayFormat:
    """Tests for display formatting and parsing."""

    def test_format(self) -> None:
        assert format_display_date(date(2005, 2, 14)) == "14/02/2005"

    def test_open_end_renders_present(self) -> None:
        assert format_display_date(None) == OPEN_END_LABEL == "Present"

    def test_parse(self) -> None:
        assert parse_display_date("14/02/2005", date(2024, 1, 1)) == date(2005, 2, 14)

    def test_parse_present_means_today(self) -> None:
        today = date(2024, 1, 1)

        assert parse_display_date("Present", today) == today

    def test_parse_rejects_storage_format(self) -> None:
        with pytest.raises(ValueError):
            parse_display_date("2005-02-14", date(2024, 1, 1))


class TestDaysBetween:
    def test_same_day_is_zero(self) -> None:
        assert days_between(date(2010, 1, 1), date(2010, 1, 1)) == 0

    def test_across_leap_day(self) -> None:
        assert days_between(date(2012, 2, 28), date(2012, 3, 1)) == 2
