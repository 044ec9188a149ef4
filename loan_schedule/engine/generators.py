"""Amortization method selection.

The three methods form a closed set; callers pick one by ``ScheduleType``
and get back the payment sequence or the aggregated schedule.
"""

from enum import Enum
from typing import Protocol, Sequence

from loan_schedule.engine.aggregate import calculate_schedule
from loan_schedule.engine.annuity import generate_annuity_payments
from loan_schedule.engine.bubble import generate_bubble_payments
from loan_schedule.engine.differentiated import generate_differentiated_payments
from loan_schedule.models.schedule import Payment, Schedule, ScheduleConfig, ScheduleOptions


class ScheduleType(Enum):
    BUBBLE = "bubble"
    DIFFERENTIATED = "differentiated"
    ANNUITY = "annuity"


class PaymentGenerator(Protocol):
    def __call__(
        self, config: ScheduleConfig, options: ScheduleOptions | None = None
    ) -> Sequence[Payment]: ...


GENERATORS: dict[ScheduleType, PaymentGenerator] = {
    ScheduleType.BUBBLE: generate_bubble_payments,
    ScheduleType.DIFFERENTIATED: generate_differentiated_payments,
    ScheduleType.ANNUITY: generate_annuity_payments,
}


def generate_payments(
    schedule_type: ScheduleType,
    config: ScheduleConfig,
    options: ScheduleOptions | None = None,
) -> Sequence[Payment]:
    return GENERATORS[ScheduleType(schedule_type)](config, options)


def calculate_loan_schedule(
    schedule_type: ScheduleType,
    config: ScheduleConfig,
    options: ScheduleOptions | None = None,
) -> Schedule:
    """Generate payments with the chosen method and aggregate them."""
    return calculate_schedule(config, generate_payments(schedule_type, config, options), options)
