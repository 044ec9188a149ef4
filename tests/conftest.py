"""Canonical test fixtures used across all engine tests.

Fixture: 500K loan, 11.5% rate, 12 months, paid on the 25th.
Holiday predicate: weekends plus a handful of Russian non-working days,
standing in for a production calendar.
"""

import pytest
from datetime import date
from decimal import Decimal

from loan_schedule.models.schedule import ScheduleConfig

NON_WORKING_DAYS = {
    date(2015, 5, 1),
    date(2015, 5, 4),
    date(2015, 5, 11),
    date(2018, 11, 5),
    date(2018, 12, 31),
    *(date(2019, 1, d) for d in range(1, 9)),
    date(2019, 3, 8),
    date(2019, 5, 1),
    date(2019, 5, 2),
    date(2019, 5, 3),
    date(2019, 5, 9),
    date(2019, 5, 10),
    date(2019, 6, 12),
    date(2019, 11, 4),
}


def production_calendar_holiday(day: date) -> bool:
    return day.weekday() >= 5 or day in NON_WORKING_DAYS


@pytest.fixture
def is_holiday():
    return production_calendar_holiday


@pytest.fixture
def canonical_config() -> ScheduleConfig:
    """500K annuity issued 2018-10-25, payments on the 25th."""
    return ScheduleConfig(
        amount=Decimal("500000"),
        issue_date=date(2018, 10, 25),
        term_length=12,
        rate=Decimal("11.5"),
        payment_on_day=25,
    )


@pytest.fixture
def small_loan_config() -> ScheduleConfig:
    """50K loan issued 2016-10-25, payments on the 25th."""
    return ScheduleConfig(
        amount=Decimal("50000"),
        issue_date=date(2016, 10, 25),
        term_length=12,
        rate=Decimal("11.5"),
        payment_on_day=25,
    )


@pytest.fixture
def early_repayment_base() -> ScheduleConfig:
    """500K annuity issued 2016-10-25, base for early repayment scenarios."""
    return ScheduleConfig(
        amount=Decimal("500000"),
        issue_date=date(2016, 10, 25),
        term_length=12,
        rate=Decimal("11.5"),
        payment_on_day=25,
    )
