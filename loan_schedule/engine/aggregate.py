"""Summary metrics for a generated payment sequence.

Pure function: config + payments in, frozen Schedule out.
"""

import logging
from typing import Sequence

from loan_schedule.engine.dates import months_between
from loan_schedule.engine.decimals import ZERO, calculation_context, to_fixed
from loan_schedule.models.errors import ScheduleValidationError
from loan_schedule.models.schedule import Payment, Schedule, ScheduleConfig, ScheduleOptions

logger = logging.getLogger(__name__)


def calculate_schedule(
    config: ScheduleConfig,
    payments: Sequence[Payment],
    options: ScheduleOptions | None = None,
) -> Schedule:
    """Validate ``payments`` and derive the schedule summary.

    ``payments[0]`` is the disbursement entry, ``payments[1]`` the first real
    payment. Min/max payment only compare the first real and the last
    payment, i.e. the typical installment against the final one.
    """
    if len(payments) < 2:
        raise ScheduleValidationError(
            f"At least two payments are required to build a schedule, got {len(payments)}"
        )
    if config.amount <= 0:
        raise ScheduleValidationError(f"Schedule amount must be positive, got {config.amount}")

    digits = (options or ScheduleOptions()).decimal_digit
    initial, first, last = payments[0], payments[1], payments[-1]

    with calculation_context():
        amount = to_fixed(config.amount, digits)
        min_payment = to_fixed(min(first.payment_amount, last.payment_amount), digits)
        max_payment = to_fixed(max(first.payment_amount, last.payment_amount), digits)

        over_all_interest = to_fixed(ZERO, digits)
        for payment in payments:
            over_all_interest = to_fixed(over_all_interest + payment.interest_amount, digits)

        efficient_rate = to_fixed(over_all_interest / amount * 100, digits)
        full_amount = to_fixed(over_all_interest + amount, digits)

    term_length = months_between(initial.payment_date, last.payment_date)
    logger.debug(
        "Schedule of %d payments over %d months, interest %s",
        len(payments) - 1, term_length, over_all_interest,
    )

    return Schedule(
        amount=amount,
        term_length=term_length,
        min_payment_amount=min_payment,
        max_payment_amount=max_payment,
        over_all_interest=over_all_interest,
        efficient_rate=efficient_rate,
        full_amount=full_amount,
        payments=tuple(payments),
    )
