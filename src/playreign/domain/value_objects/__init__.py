"""Domain value objects."""

from playreign.domain.value_objects.dates import (
    DISPLAY_DATE_FORMAT,
    OPEN_END_LABEL,
    STORAGE_DATE_FORMAT,
    days_between,
    format_display_date,
    parse_display_date,
    to_calendar_date,
)

__all__ = [
    "DISPLAY_DATE_FORMAT",
    "OPEN_END_LABEL",
    "STORAGE_DATE_FORMAT",
    "days_between",
    "format_display_date",
    "parse_display_date",
    "to_calendar_date",
]
