"""Simple daily interest accrual.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from datetime import date
from decimal import Decimal

from loan_schedule.engine.dates import as_date
from loan_schedule.engine.decimals import calculation_context, to_decimal, to_fixed


def days_in_year(year: int) -> int:
    # Every fourth year is a leap year; century rules are not applied.
    return 366 if year % 4 == 0 else 365


def interest_by_period(amount, rate, from_date: date, to_date: date) -> Decimal:
    """Unrounded interest on ``amount`` at annual ``rate`` percent.

    The day-count divisor is the length of ``to_date``'s year.
    """
    days = (as_date(to_date) - as_date(from_date)).days
    return to_decimal(rate) / 100 / days_in_year(to_date.year) * days * to_decimal(amount)


def calculate_interest_by_period(
    amount,
    rate,
    from_date: date,
    to_date: date,
    decimal_digit: int = 2,
) -> Decimal:
    """Interest accrued between two dates, rounded to ``decimal_digit``.

    A range crossing New Year is split at December 31 of the starting year so
    each part is divided by its own year length.
    """
    from_date = as_date(from_date)
    to_date = as_date(to_date)

    with calculation_context():
        if from_date.year == to_date.year:
            return to_fixed(interest_by_period(amount, rate, from_date, to_date), decimal_digit)

        end_of_year = date(from_date.year, 12, 31)
        interest = (
            interest_by_period(amount, rate, from_date, end_of_year)
            + interest_by_period(amount, rate, end_of_year, to_date)
        )
        return to_fixed(interest, decimal_digit)
