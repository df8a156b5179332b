"""Calendar date helpers for play history.

Hey future me - the engine works on plain ``datetime.date`` values ONLY!
Play timestamps arrive as datetimes or "YYYY-MM-DD HH:MM:SS" strings, so we cut
them down to the calendar day at the boundary (``to_calendar_date``) and
format them for humans at the other boundary (``format_display_date``).

Two formats exist:
- storage: ``YYYY-MM-DD`` (what the play table holds)
- display: ``DD/MM/YYYY`` (what the timeline shows)

An open reign has no end date; it renders as ``OPEN_END_LABEL`` ("Present")
and counts as "today" wherever a date is needed.
"""

from datetime import date, datetime

STORAGE_DATE_FORMAT = "%Y-%m-%d"
DISPLAY_DATE_FORMAT = "%d/%m/%Y"
OPEN_END_LABEL = "Present"


def to_calendar_date(value: date | datetime | str | None) -> date | None:
    """Reduce a play timestamp to its calendar date.

    Args:
        value: ``date``, ``datetime`` or a string starting with ``YYYY-MM-DD``

    Returns:
        The calendar date, or None if the value is missing or not a date

    Example:
        >>> to_calendar_date("2009-03-01 21:14:03")
        datetime.date(2009, 3, 1)
    """
    if value is None:
        return None
    # datetime is a subclass of date - check it first to drop the time part
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        trimmed = value.strip()[:10]
        try:
            return datetime.strptime(trimmed, STORAGE_DATE_FORMAT).date()
        except ValueError:
            return None
    return None


def format_display_date(value: date | None) -> str:
    """Render a date as DD/MM/YYYY, or "Present" for an open end.

    Anything that is not a date is returned as its plain string, which
    ``parse_display_date`` will then reject.
    """
    if value is None:
        return OPEN_END_LABEL
    if not isinstance(value, date):
        return str(value)
    return value.strftime(DISPLAY_DATE_FORMAT)


def parse_display_date(label: str, today: date) -> date:
    """Parse a DD/MM/YYYY label back into a date.

    Args:
        label: Display label produced by ``format_display_date``
        today: Date that "Present" stands for

    Returns:
        Parsed date

    Raises:
        ValueError: If the label is neither "Present" nor DD/MM/YYYY
    """
    if label == OPEN_END_LABEL:
        return today
    return datetime.strptime(label, DISPLAY_DATE_FORMAT).date()


def days_between(start: date, end: date) -> int:
    """Calendar days from ``start`` to ``end`` (0 for the same day)."""
    return (end - start).days
