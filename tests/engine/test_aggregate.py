from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from loan_schedule.engine.aggregate import calculate_schedule
from loan_schedule.engine.annuity import generate_annuity_payments
from loan_schedule.models.errors import ScheduleValidationError
from loan_schedule.models.schedule import Payment, ScheduleConfig, ScheduleOptions


def _payment(day: date, initial, interest, principal, final) -> Payment:
    interest, principal = Decimal(interest), Decimal(principal)
    return Payment(
        payment_date=day,
        initial_balance=Decimal(initial),
        interest_rate=Decimal("12.00"),
        interest_amount=interest,
        principal_amount=principal,
        payment_amount=interest + principal,
        final_balance=Decimal(final),
    )


@pytest.fixture
def config() -> ScheduleConfig:
    return ScheduleConfig(
        amount=Decimal("1000"),
        issue_date=date(2020, 1, 15),
        term_length=3,
        rate=Decimal("12"),
        payment_on_day=15,
    )


@pytest.fixture
def payments() -> list[Payment]:
    return [
        _payment(date(2020, 1, 15), "0", "0", "0", "1000"),
        _payment(date(2020, 2, 15), "1000", "10.16", "330.00", "670.00"),
        _payment(date(2020, 3, 15), "670.00", "6.37", "330.00", "340.00"),
        _payment(date(2020, 4, 15), "340.00", "3.47", "340.00", "0.00"),
    ]


class TestValidation:
    def test_empty_sequence(self, config):
        with pytest.raises(ScheduleValidationError, match="At least two payments"):
            calculate_schedule(config, [])

    def test_initial_payment_only(self, config, payments):
        with pytest.raises(ScheduleValidationError):
            calculate_schedule(config, payments[:1])

    def test_is_value_error(self, config):
        with pytest.raises(ValueError):
            calculate_schedule(config, [])

    def test_zero_amount(self, config, payments):
        with pytest.raises(ScheduleValidationError, match="amount must be positive"):
            calculate_schedule(replace(config, amount=Decimal("0")), payments)


class TestSummary:
    def test_totals(self, config, payments):
        schedule = calculate_schedule(config, payments)
        assert schedule.amount == Decimal("1000.00")
        assert schedule.over_all_interest == Decimal("20.00")
        assert schedule.full_amount == Decimal("1020.00")
        assert schedule.efficient_rate == Decimal("2.00")

    def test_min_max_compare_first_and_last_only(self, config, payments):
        schedule = calculate_schedule(config, payments)
        # payments[2] (336.37) is ignored
        assert schedule.min_payment_amount == Decimal("340.16")
        assert schedule.max_payment_amount == Decimal("343.47")

    def test_term_length_in_calendar_months(self, config, payments):
        assert calculate_schedule(config, payments).term_length == 3

    def test_term_length_truncates(self, config, payments):
        """Issued late in January, paid off early in April: still 3 months."""
        payments[0] = _payment(date(2020, 1, 31), "0", "0", "0", "1000")
        payments[-1] = _payment(date(2020, 4, 1), "340.00", "3.47", "340.00", "0.00")
        assert calculate_schedule(config, payments).term_length == 3

    def test_payments_are_kept(self, config, payments):
        schedule = calculate_schedule(config, payments)
        assert schedule.payments == tuple(payments)

    def test_interest_is_rounded_stepwise(self, config, payments):
        payments[1] = _payment(date(2020, 2, 15), "1000", "0.005", "330.00", "670.00")
        payments[2] = _payment(date(2020, 3, 15), "670.00", "0.005", "330.00", "340.00")
        payments[3] = _payment(date(2020, 4, 15), "340.00", "0", "340.00", "0.00")
        # 0.005 -> 0.01, then 0.01 + 0.005 -> 0.02 (rounding only at the end gives 0.01)
        assert calculate_schedule(config, payments).over_all_interest == Decimal("0.02")

    def test_precision_option(self, config, payments):
        schedule = calculate_schedule(config, payments, ScheduleOptions(decimal_digit=3))
        assert schedule.over_all_interest == Decimal("20.000")


class TestTermLength:
    @pytest.mark.parametrize("issue_date, payment_on_day, payment_amount", [
        (date(2018, 10, 25), 25, None),
        (date(2024, 1, 22), 22, Decimal("660.23")),
    ])
    def test_matches_requested_term(self, issue_date, payment_on_day, payment_amount):
        config = ScheduleConfig(
            amount=Decimal("26000"),
            issue_date=issue_date,
            term_length=60,
            rate=Decimal("18"),
            payment_on_day=payment_on_day,
            payment_amount=payment_amount,
        )
        schedule = calculate_schedule(config, generate_annuity_payments(config))
        assert schedule.term_length == 60
