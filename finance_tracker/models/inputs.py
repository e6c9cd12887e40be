"""
Request Payloads

Typed create/update bodies, one per entity family. They carry only the
fields a caller may set: ids and timestamps are generated by the server.

DESIGN DECISION: Money is validated here (non-negative integer cents) so a
bad payload fails in the caller's process with a pydantic ValidationError
instead of as an opaque 500 from the server.
"""

from datetime import date
from typing import Optional, Union

from pydantic import Field, model_validator

from finance_tracker.models.common import (
    ApiInput,
    Cents,
    PaymentMethod,
    RecurrenceFrequency,
    SplitMode,
)


class MemberCreate(ApiInput):
    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(..., min_length=1, max_length=50)


class SplitInput(ApiInput):
    """A member's share. Cents in amount mode, percent or shares otherwise."""
    member_id: str = Field(..., min_length=1)
    value: Union[int, float] = Field(..., ge=0)


class AllocationInput(ApiInput):
    member_id: str = Field(..., min_length=1)
    amount_cents: Cents


class _SplittableInput(ApiInput):
    split_mode: SplitMode = SplitMode.AMOUNT
    splits: list[SplitInput] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_members(self) -> "_SplittableInput":
        """A member may appear at most once in a split list."""
        member_ids = [s.member_id for s in self.splits]
        if len(member_ids) != len(set(member_ids)):
            raise ValueError("Each member can only appear once in splits")
        return self


class BillInput(_SplittableInput):
    name: str = Field(..., min_length=1, max_length=200)
    amount_cents: Cents
    due_date: date
    recurring_bill_id: Optional[str] = None
    period: Optional[str] = Field(
        default=None,
        pattern=r"^\d{4}-\d{2}$",
        description="Generation period, e.g. '2024-07'"
    )


class _PaymentFields(ApiInput):
    paid_date: date
    amount_cents: Cents
    method: PaymentMethod = PaymentMethod.OTHER
    payer_member_id: Optional[str] = None
    note: Optional[str] = Field(default=None, max_length=1000)
    allocations: Optional[list[AllocationInput]] = Field(
        default=None,
        description="Explicit per-member allocation. None means proportional."
    )

    @model_validator(mode="after")
    def validate_allocations_total(self) -> "_PaymentFields":
        """Explicit allocations must add up to the payment amount."""
        if self.allocations:
            allocated = sum(a.amount_cents for a in self.allocations)
            if allocated != self.amount_cents:
                raise ValueError(
                    f"Allocations total {allocated} does not match payment amount {self.amount_cents}"
                )
        return self


class PaymentInput(_PaymentFields):
    bill_id: str = Field(..., min_length=1)
    receipt_filename: Optional[str] = None
    receipt_data: Optional[str] = Field(
        default=None,
        description="Base64 data URL of the receipt"
    )


class PaymentUpdate(_PaymentFields):
    """Fields the server lets you change on an existing bill payment."""


class RecurringBillInput(_SplittableInput):
    name: str = Field(..., min_length=1, max_length=200)
    amount_cents: Cents
    day_of_month: int = Field(..., ge=1, le=31)
    frequency: RecurrenceFrequency = RecurrenceFrequency.MONTHLY
    last_generated_period: Optional[str] = Field(
        default=None,
        pattern=r"^\d{4}-\d{2}$"
    )


class MortgageInput(_SplittableInput):
    name: str = Field(..., min_length=1, max_length=200)
    lender: Optional[str] = Field(default=None, max_length=200)
    is_primary: bool = False

    original_principal_cents: Cents
    current_principal_cents: Cents
    interest_rate_apy: float = Field(..., ge=0, le=100)
    term_months: int = Field(..., ge=1)
    start_date: date

    scheduled_payment_cents: Cents
    payment_day: int = Field(..., ge=1, le=31)

    escrow_enabled: bool = False
    escrow_taxes_cents: Optional[Cents] = None
    escrow_insurance_cents: Optional[Cents] = None
    escrow_mip_cents: Optional[Cents] = None
    escrow_hoa_cents: Optional[Cents] = None

    notes: Optional[str] = Field(default=None, max_length=1000)
    active: bool = True

    @model_validator(mode="after")
    def validate_principal(self) -> "MortgageInput":
        if self.current_principal_cents > self.original_principal_cents:
            raise ValueError("Current principal cannot exceed original principal")
        return self


class MortgagePaymentInput(_PaymentFields):
    mortgage_id: str = Field(..., min_length=1)
    receipt_filename: Optional[str] = None
    receipt_data: Optional[str] = None


class FinancedExpenseInput(_SplittableInput):
    """
    Create/update body for a financed expense.

    The monthly payment and the installment schedule are computed by the
    server from the total, rate and term.
    """
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=1000)
    total_amount_cents: Cents
    interest_rate_percent: float = Field(default=0.0, ge=0, le=100)
    financing_term_months: int = Field(..., ge=1)
    purchase_date: Optional[date] = None
    first_payment_date: Optional[date] = None
    is_active: bool = True

    @model_validator(mode="after")
    def validate_dates(self) -> "FinancedExpenseInput":
        if self.purchase_date and self.first_payment_date:
            if self.first_payment_date < self.purchase_date:
                raise ValueError("First payment date cannot be before purchase date")
        return self


class MarkPaidInput(ApiInput):
    paid_date: date
