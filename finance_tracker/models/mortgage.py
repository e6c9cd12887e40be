"""Mortgage records as returned by the server."""

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from finance_tracker.models.common import ApiRecord
from finance_tracker.models.household import Member


class MortgageSplit(ApiRecord):
    id: Optional[str] = None
    mortgage_id: Optional[str] = None
    member_id: str
    value: Union[int, float] = 0
    created_at: Optional[datetime] = None


class MortgagePaymentAllocation(ApiRecord):
    id: Optional[str] = None
    payment_id: Optional[str] = None
    member_id: str
    amount_cents: int = 0
    created_at: Optional[datetime] = None


class MortgagePaymentBreakdown(ApiRecord):
    """How one mortgage payment divided into principal, interest and escrow."""
    id: Optional[str] = None
    payment_id: Optional[str] = None
    mortgage_id: Optional[str] = None
    principal_cents: int = 0
    interest_cents: int = 0
    escrow_cents: int = 0
    created_at: Optional[datetime] = None


class MortgagePayment(ApiRecord):
    id: str
    mortgage_id: Optional[str] = None
    paid_date: Optional[str] = None
    amount_cents: int = 0
    method: Optional[str] = None
    payer_member_id: Optional[str] = None
    note: Optional[str] = None
    receipt_filename: Optional[str] = None
    receipt_data: Optional[str] = None
    created_at: Optional[datetime] = None
    allocations: list[MortgagePaymentAllocation] = Field(default_factory=list)
    payer_member: Optional[Member] = None
    breakdown: Optional[MortgagePaymentBreakdown] = None


class Mortgage(ApiRecord):
    """
    A mortgage and its monthly obligation.

    scheduled_payment_cents is the full monthly payment (principal,
    interest and escrow). interest_rate_apy is a percentage, e.g. 6.25.
    """
    id: str
    name: str
    lender: Optional[str] = None
    is_primary: bool = False

    original_principal_cents: int = 0
    current_principal_cents: int = 0
    interest_rate_apy: float = 0.0
    term_months: int = 0
    start_date: Optional[str] = None

    scheduled_payment_cents: int = 0
    payment_day: int = 1

    escrow_enabled: bool = False
    escrow_taxes_cents: Optional[int] = None
    escrow_insurance_cents: Optional[int] = None
    escrow_mip_cents: Optional[int] = None
    escrow_hoa_cents: Optional[int] = None

    notes: Optional[str] = None
    active: bool = True
    split_mode: str = "amount"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    splits: list[MortgageSplit] = Field(default_factory=list)
    payments: Optional[list[MortgagePayment]] = None

    @property
    def escrow_monthly_cents(self) -> int:
        """Monthly escrow, zero when escrow is disabled."""
        if not self.escrow_enabled:
            return 0
        return sum(
            v or 0
            for v in (
                self.escrow_taxes_cents,
                self.escrow_insurance_cents,
                self.escrow_mip_cents,
                self.escrow_hoa_cents,
            )
        )
