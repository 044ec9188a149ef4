"""Payment date arithmetic.

Pure functions. No I/O. Holiday data is injected as a predicate.
"""

import calendar
from datetime import date, datetime, timedelta

from loan_schedule.models.schedule import HolidayPredicate, no_holidays

ONE_DAY = timedelta(days=1)


def as_date(value: date) -> date:
    """Drop the time part of a datetime; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def payment_date(issue_date: date, month_offset: int, payment_on_day: int) -> date:
    """Date of the ``month_offset``-th payment after ``issue_date``.

    Starts from the first day of the issue month, moves ``month_offset``
    calendar months, then picks ``payment_on_day`` clamped to the month
    length (day 31 in April becomes April 30, in a leap February the 29th).
    """
    issue_date = as_date(issue_date)
    months = issue_date.month - 1 + month_offset
    year = issue_date.year + months // 12
    month = months % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(payment_on_day, last_day))


def payment_date_on_working_day(day: date, is_holiday: HolidayPredicate = no_holidays) -> date:
    """Move ``day`` off holidays without leaving its calendar month.

    Rolls forward first; once rolling forward would cross into the next
    month the direction flips and the search continues backward.
    """
    day = as_date(day)
    adjusted = day
    step = ONE_DAY

    while is_holiday(adjusted):
        adjusted += step

        if adjusted.month != day.month:
            step = -ONE_DAY
            adjusted += step

    return adjusted


def months_between(start: date, end: date) -> int:
    """Whole calendar months from the first of ``start``'s month to the first of ``end``'s."""
    return (end.year - start.year) * 12 + (end.month - start.month)
