"""Plain-text rendering of a computed schedule.

Lines go to a caller-supplied sink (``print`` by default) so the same report
can feed a terminal, a logger or a test spy.
"""

from typing import Callable

from loan_schedule.models.schedule import AnnuityPayment, Payment, Schedule

Sink = Callable[[str], object]

COLUMNS = ("Date", "Balance", "Payment", "Principal", "Interest", "Final balance")


def _money(v) -> str:
    return f"{v:,.2f}"


def _row(payment: Payment) -> str:
    cells = [
        payment.payment_date.isoformat(),
        _money(payment.initial_balance),
        _money(payment.payment_amount),
        _money(payment.principal_amount),
        _money(payment.interest_amount),
        _money(payment.final_balance),
    ]
    if isinstance(payment, AnnuityPayment):
        annuity = payment.annuity_payment_amount
        cells.append(_money(annuity) if annuity.is_finite() else "inf")
    return "\t|\t".join(cells)


def print_schedule(schedule: Schedule, sink: Sink = print) -> None:
    sink(
        f"Payment = {{{schedule.min_payment_amount}, {schedule.max_payment_amount}}}, "
        f"Term = {schedule.term_length}"
    )
    sink(f"OverallInterest = {schedule.over_all_interest}, EfficientRate = {schedule.efficient_rate}")

    columns = COLUMNS
    if any(isinstance(p, AnnuityPayment) for p in schedule.payments):
        columns = COLUMNS + ("Annuity",)
    sink("\t|\t".join(columns))

    for payment in schedule.payments:
        sink(_row(payment))
