"""Annuity schedule with early repayments.

Regular monthly points are merged with caller-supplied early repayments into
one date-ordered list. Walking that list, interest accrues between any two
neighbouring points but is only collected at regular points; an early
repayment goes entirely to principal. After an early repayment the next
regular point re-derives the installment from the remaining balance.

Pure functions: Decimal in, frozen dataclasses out. No I/O.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from loan_schedule.engine.aggregate import calculate_schedule
from loan_schedule.engine.common import initial_payment, validate_config
from loan_schedule.engine.dates import as_date, payment_date, payment_date_on_working_day
from loan_schedule.engine.decimals import INFINITY, ZERO, calculation_context, to_decimal, to_fixed
from loan_schedule.engine.interest import calculate_interest_by_period
from loan_schedule.models.schedule import (
    AnnuityPayment,
    HolidayPredicate,
    PaymentType,
    Schedule,
    ScheduleConfig,
    SchedulePoint,
    ScheduleOptions,
)

logger = logging.getLogger(__name__)


def _monthly_rate(rate) -> Decimal:
    return to_decimal(rate) / 100 / 12


def calculate_annuity_payment_amount(amount, rate, term_length: int, decimal_digit: int = 2) -> Decimal:
    """Level installment repaying ``amount`` in ``term_length`` months.

        A = P * (i / (1 - (1 + i)^-n)),  i = rate / 100 / 12

    A zero rate degenerates to ``P / n``. With no periods left (``n <= 0``)
    the installment is ``Decimal("Infinity")``: nothing short of the whole
    balance settles the loan.
    """
    with calculation_context():
        if term_length <= 0:
            logger.debug("No periods left for %s, installment is infinite", amount)
            return INFINITY

        amount = to_decimal(amount)
        i = _monthly_rate(rate)
        if i == 0:
            logger.debug("Zero rate: installment is %s split evenly over %d months", amount, term_length)
            return to_fixed(amount / term_length, decimal_digit)

        return to_fixed(amount * (i / (1 - (i + 1) ** -term_length)), decimal_digit)


def calculate_max_loan_amount(payment_amount, rate, term_length: int, decimal_digit: int = 2) -> Decimal:
    """Largest principal that ``payment_amount`` per month repays in ``term_length`` months."""
    with calculation_context():
        if term_length <= 0:
            return to_fixed(ZERO, decimal_digit)

        payment_amount = to_decimal(payment_amount)
        i = _monthly_rate(rate)
        if i == 0:
            return to_fixed(payment_amount * term_length, decimal_digit)

        return to_fixed(payment_amount / (i / (1 - (i + 1) ** -term_length)), decimal_digit)


def build_schedule_points(
    config: ScheduleConfig,
    installment: Decimal,
    is_holiday: HolidayPredicate,
) -> list[SchedulePoint]:
    """Regular points for months 0..term_length merged with early repayments.

    Month 0 is the issue date. Every date is moved to a working day. The sort
    is stable, so a regular point stays ahead of a same-day early repayment.
    """
    issue_date = as_date(config.issue_date)
    points = [
        SchedulePoint(
            payment_date=payment_date_on_working_day(
                issue_date if month == 0 else payment_date(issue_date, month, config.payment_on_day),
                is_holiday,
            ),
            payment_type=PaymentType.REGULAR,
            payment_amount=installment,
        )
        for month in range(config.term_length + 1)
    ]
    points.extend(
        SchedulePoint(
            payment_date=payment_date_on_working_day(er.payment_date, is_holiday),
            payment_type=er.payment_type,
            payment_amount=to_decimal(er.payment_amount),
        )
        for er in config.early_repayments
    )
    return sorted(points, key=lambda point: point.payment_date)


@dataclass
class _Accrual:
    """Interest accrued but not yet collected, plus the installment in force."""
    interest: Decimal
    scheduled_amount: Decimal


def generate_annuity_payments(
    config: ScheduleConfig, options: ScheduleOptions | None = None
) -> list[AnnuityPayment]:
    validate_config(config)
    options = options or ScheduleOptions()
    digits = options.decimal_digit

    with calculation_context():
        fixed_amount = to_decimal(config.payment_amount) if config.payment_amount else None
        installment = fixed_amount or calculate_annuity_payment_amount(
            config.amount, config.rate, config.term_length, digits
        )
        rate = to_fixed(config.rate, digits)
        points = build_schedule_points(config, installment, options.is_holiday)
        last_index = len(points) - 1

        payments = [initial_payment(config, digits, AnnuityPayment, annuity_payment_amount=ZERO)]
        accrual = _Accrual(interest=ZERO, scheduled_amount=points[1].payment_amount)

        index = 1
        while index < len(points) and payments[-1].final_balance > 0:
            point, previous_point, previous = points[index], points[index - 1], payments[-1]
            initial_balance = previous.final_balance

            annuity_amount = calculate_annuity_payment_amount(
                initial_balance, rate, config.term_length - index + 1, digits
            )

            if point.payment_type.is_early_repayment:
                accrual.scheduled_amount = point.payment_amount
            elif previous_point.payment_type.is_early_repayment:
                accrual.scheduled_amount = fixed_amount or annuity_amount

            accrual.interest += calculate_interest_by_period(
                initial_balance, rate, previous.payment_date, point.payment_date, digits
            )

            scheduled = accrual.scheduled_amount
            pays_off = index == last_index or scheduled >= initial_balance

            if pays_off:
                interest = to_fixed(accrual.interest, digits)
                principal = initial_balance
                payment_amount = to_fixed(principal + interest, digits)
                accrual.interest = ZERO
            elif point.payment_type.is_early_repayment:
                interest = to_fixed(ZERO, digits)
                principal = to_fixed(scheduled, digits)
                payment_amount = to_fixed(scheduled, digits)
            else:
                if accrual.interest > scheduled:
                    interest = to_fixed(scheduled, digits)
                    accrual.interest -= scheduled
                else:
                    interest = to_fixed(accrual.interest, digits)
                    accrual.interest = ZERO
                principal = to_fixed(scheduled - interest, digits)
                payment_amount = to_fixed(scheduled, digits)

            payments.append(AnnuityPayment(
                payment_date=point.payment_date,
                initial_balance=initial_balance,
                interest_rate=rate,
                interest_amount=interest,
                principal_amount=principal,
                payment_amount=payment_amount,
                final_balance=to_fixed(initial_balance - principal, digits),
                annuity_payment_amount=annuity_amount,
            ))
            index += 1

    logger.debug(
        "Annuity schedule: %d payments from %d schedule points (%d early repayments)",
        len(payments) - 1, len(points) - 1, len(config.early_repayments),
    )
    return payments


def calculate_annuity_loan_schedule(
    config: ScheduleConfig, options: ScheduleOptions | None = None
) -> Schedule:
    return calculate_schedule(config, generate_annuity_payments(config, options), options)
