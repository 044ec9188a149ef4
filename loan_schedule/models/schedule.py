from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Callable

from loan_schedule.config import settings

HolidayPredicate = Callable[[date], bool]


def no_holidays(day: date) -> bool:
    """Default calendar: every day is a working day."""
    return False


class PaymentType(Enum):
    REGULAR = "regular"
    MATURITY = "maturity"  # Early repayment, historically "reduce term"
    ANNUITY = "annuity"    # Early repayment, historically "reduce installment"

    @property
    def is_early_repayment(self) -> bool:
        return self is not PaymentType.REGULAR


@dataclass(frozen=True)
class SchedulePoint:
    payment_date: date
    payment_type: PaymentType
    payment_amount: Decimal


@dataclass(frozen=True)
class ScheduleConfig:
    amount: Decimal
    issue_date: date
    term_length: int  # Months
    rate: Decimal  # Annual, in percent (11.5 means 11.5%)
    payment_on_day: int
    payment_amount: Decimal | None = None  # Fixed installment override
    early_repayments: tuple[SchedulePoint, ...] = ()


@dataclass(frozen=True)
class ScheduleOptions:
    decimal_digit: int = field(default_factory=lambda: settings.decimal_digit)
    is_holiday: HolidayPredicate = no_holidays


@dataclass(frozen=True)
class Payment:
    payment_date: date
    initial_balance: Decimal
    interest_rate: Decimal
    interest_amount: Decimal
    principal_amount: Decimal
    payment_amount: Decimal
    final_balance: Decimal


@dataclass(frozen=True)
class AnnuityPayment(Payment):
    # Installment re-derived from the balance and remaining term at this point
    annuity_payment_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class Schedule:
    amount: Decimal
    term_length: int
    min_payment_amount: Decimal
    max_payment_amount: Decimal
    over_all_interest: Decimal
    efficient_rate: Decimal
    full_amount: Decimal
    payments: tuple[Payment, ...]
