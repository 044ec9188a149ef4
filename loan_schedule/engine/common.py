"""Pieces shared by all payment generators."""

from loan_schedule.engine.dates import as_date
from loan_schedule.engine.decimals import ZERO, to_fixed
from loan_schedule.models.errors import ScheduleConfigError
from loan_schedule.models.schedule import Payment, ScheduleConfig


def validate_config(config: ScheduleConfig) -> None:
    """Reject parameters no generator can produce a schedule from."""
    if config.term_length < 1:
        raise ScheduleConfigError(f"term_length must be at least 1 month, got {config.term_length}")
    if not 1 <= config.payment_on_day <= 31:
        raise ScheduleConfigError(f"payment_on_day must be within 1..31, got {config.payment_on_day}")
    if config.amount <= 0:
        raise ScheduleConfigError(f"amount must be positive, got {config.amount}")

    issue_date = as_date(config.issue_date)
    for repayment in config.early_repayments:
        if not repayment.payment_type.is_early_repayment:
            raise ScheduleConfigError(
                f"early repayment on {repayment.payment_date} must not use type {repayment.payment_type.value!r}"
            )
        if as_date(repayment.payment_date) < issue_date:
            raise ScheduleConfigError(
                f"early repayment on {repayment.payment_date} precedes issue date {issue_date}"
            )


def initial_payment(config: ScheduleConfig, decimal_digit: int, payment_cls=Payment, **extra) -> Payment:
    """Zero-th entry of every sequence: the disbursement of ``config.amount``."""
    zero = to_fixed(ZERO, decimal_digit)
    return payment_cls(
        payment_date=as_date(config.issue_date),
        initial_balance=zero,
        interest_rate=to_fixed(config.rate, decimal_digit),
        interest_amount=zero,
        principal_amount=zero,
        payment_amount=zero,
        final_balance=to_fixed(config.amount, decimal_digit),
        **extra,
    )
