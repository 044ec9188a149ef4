"""Pydantic schemas for loosely-typed schedule requests and serialized results."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from loan_schedule.engine.generators import ScheduleType, calculate_loan_schedule
from loan_schedule.models.schedule import (
    AnnuityPayment,
    HolidayPredicate,
    Payment,
    PaymentType,
    Schedule,
    ScheduleConfig,
    ScheduleOptions,
    SchedulePoint,
    no_holidays,
)


# ---- Request schemas ----

class EarlyRepaymentRequest(BaseModel):
    payment_date: date
    payment_amount: Decimal = Field(..., gt=0)
    payment_type: PaymentType = PaymentType.MATURITY

    @model_validator(mode="after")
    def _not_regular(self):
        if self.payment_type is PaymentType.REGULAR:
            raise ValueError("early repayment cannot use the regular payment type")
        return self


class ScheduleRequest(BaseModel):
    schedule_type: ScheduleType = ScheduleType.ANNUITY
    amount: Decimal = Field(..., gt=0, description="Loan principal")
    issue_date: date
    term_length: int = Field(..., ge=1, description="Term in months")
    rate: Decimal = Field(..., ge=0, description="Annual rate in percent")
    payment_on_day: int = Field(..., ge=1, le=31)
    payment_amount: Decimal | None = Field(None, gt=0, description="Fixed installment override")
    early_repayments: list[EarlyRepaymentRequest] = []

    # Rounding override (settings default when omitted)
    decimal_digit: int | None = Field(None, ge=0, le=10)

    @model_validator(mode="after")
    def _repayments_after_issue(self):
        for er in self.early_repayments:
            if er.payment_date < self.issue_date:
                raise ValueError(
                    f"early repayment on {er.payment_date} precedes issue date {self.issue_date}"
                )
        return self

    def to_config(self) -> ScheduleConfig:
        return ScheduleConfig(
            amount=self.amount,
            issue_date=self.issue_date,
            term_length=self.term_length,
            rate=self.rate,
            payment_on_day=self.payment_on_day,
            payment_amount=self.payment_amount,
            early_repayments=tuple(
                SchedulePoint(
                    payment_date=er.payment_date,
                    payment_type=er.payment_type,
                    payment_amount=er.payment_amount,
                )
                for er in self.early_repayments
            ),
        )

    def to_options(self, is_holiday: HolidayPredicate | None = None) -> ScheduleOptions:
        if self.decimal_digit is None:
            return ScheduleOptions(is_holiday=is_holiday or no_holidays)
        return ScheduleOptions(decimal_digit=self.decimal_digit, is_holiday=is_holiday or no_holidays)


# ---- Response schemas ----

class PaymentResponse(BaseModel):
    payment_date: date
    initial_balance: Decimal
    interest_rate: Decimal
    interest_amount: Decimal
    principal_amount: Decimal
    payment_amount: Decimal
    final_balance: Decimal
    annuity_payment_amount: Decimal | None = None  # Annuity only; None when infinite

    @classmethod
    def from_payment(cls, payment: Payment) -> "PaymentResponse":
        annuity_amount = None
        if isinstance(payment, AnnuityPayment) and payment.annuity_payment_amount.is_finite():
            annuity_amount = payment.annuity_payment_amount
        return cls(
            payment_date=payment.payment_date,
            initial_balance=payment.initial_balance,
            interest_rate=payment.interest_rate,
            interest_amount=payment.interest_amount,
            principal_amount=payment.principal_amount,
            payment_amount=payment.payment_amount,
            final_balance=payment.final_balance,
            annuity_payment_amount=annuity_amount,
        )


class ScheduleResponse(BaseModel):
    amount: Decimal
    term_length: int
    min_payment_amount: Decimal
    max_payment_amount: Decimal
    over_all_interest: Decimal
    efficient_rate: Decimal
    full_amount: Decimal
    payments: list[PaymentResponse]

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> "ScheduleResponse":
        return cls(
            amount=schedule.amount,
            term_length=schedule.term_length,
            min_payment_amount=schedule.min_payment_amount,
            max_payment_amount=schedule.max_payment_amount,
            over_all_interest=schedule.over_all_interest,
            efficient_rate=schedule.efficient_rate,
            full_amount=schedule.full_amount,
            payments=[PaymentResponse.from_payment(p) for p in schedule.payments],
        )


def build_schedule(request: ScheduleRequest, is_holiday: HolidayPredicate | None = None) -> ScheduleResponse:
    """Run the requested method and serialize the result."""
    schedule = calculate_loan_schedule(
        request.schedule_type, request.to_config(), request.to_options(is_holiday)
    )
    return ScheduleResponse.from_schedule(schedule)
