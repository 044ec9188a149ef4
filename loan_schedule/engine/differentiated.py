"""Differentiated (equal principal) schedule.

Every payment returns the same principal portion plus interest on the
outstanding balance, so installments shrink linearly. The last payment takes
whatever balance is left after rounding.
"""

import logging

from loan_schedule.engine.aggregate import calculate_schedule
from loan_schedule.engine.common import initial_payment, validate_config
from loan_schedule.engine.dates import payment_date
from loan_schedule.engine.decimals import calculation_context, to_decimal, to_fixed
from loan_schedule.engine.interest import calculate_interest_by_period
from loan_schedule.models.schedule import Payment, Schedule, ScheduleConfig, ScheduleOptions

logger = logging.getLogger(__name__)


def generate_differentiated_payments(
    config: ScheduleConfig, options: ScheduleOptions | None = None
) -> list[Payment]:
    validate_config(config)
    digits = (options or ScheduleOptions()).decimal_digit

    with calculation_context():
        rate = to_fixed(config.rate, digits)
        fixed_principal = to_fixed(to_decimal(config.amount) / config.term_length, digits)
        logger.debug("Differentiated principal portion %s over %d months", fixed_principal, config.term_length)

        payments = [initial_payment(config, digits)]

        for period in range(1, config.term_length + 1):
            previous = payments[-1]
            pay_date = payment_date(previous.payment_date, 1, config.payment_on_day)
            initial_balance = previous.final_balance
            principal = initial_balance if period == config.term_length else fixed_principal
            interest = calculate_interest_by_period(
                initial_balance, rate, previous.payment_date, pay_date, digits
            )

            payments.append(Payment(
                payment_date=pay_date,
                initial_balance=initial_balance,
                interest_rate=rate,
                interest_amount=interest,
                principal_amount=principal,
                payment_amount=to_fixed(principal + interest, digits),
                final_balance=to_fixed(initial_balance - principal, digits),
            ))

    return payments


def calculate_differentiated_loan_schedule(
    config: ScheduleConfig, options: ScheduleOptions | None = None
) -> Schedule:
    return calculate_schedule(config, generate_differentiated_payments(config, options), options)
