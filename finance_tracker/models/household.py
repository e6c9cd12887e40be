"""
Household Records: members, bills, payments and recurring bills

These mirror what the server returns. Dates the user picks (due dates,
paid dates) stay as the ISO strings the server sent so they can be fed
straight into `format_date`; bookkeeping timestamps are parsed.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from finance_tracker.models.common import ApiRecord


class Member(ApiRecord):
    """A person in the household who can owe and pay."""
    id: str
    name: str
    color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BillSplit(ApiRecord):
    """One member's share of a bill. `value` is read according to splitMode."""
    id: Optional[str] = None
    bill_id: Optional[str] = None
    member_id: str
    value: Union[int, float] = 0
    created_at: Optional[datetime] = None


class PaymentAllocation(ApiRecord):
    """How much of one payment was attributed to one member."""
    id: Optional[str] = None
    payment_id: Optional[str] = None
    member_id: str
    amount_cents: int = 0
    created_at: Optional[datetime] = None


class Payment(ApiRecord):
    """A payment made against a bill."""
    id: str
    bill_id: Optional[str] = None
    paid_date: Optional[str] = None
    amount_cents: int = 0
    method: Optional[str] = None
    payer_member_id: Optional[str] = None
    note: Optional[str] = None
    receipt_filename: Optional[str] = None
    receipt_data: Optional[str] = None
    created_at: Optional[datetime] = None
    allocations: list[PaymentAllocation] = Field(default_factory=list)
    payer_member: Optional[Member] = None


class Bill(ApiRecord):
    """
    A single dated bill.

    Bills generated from a recurring bill carry its id and the period
    (e.g. '2024-07') they were generated for.
    """
    id: str
    name: str
    amount_cents: int = 0
    due_date: Optional[str] = None
    recurring_bill_id: Optional[str] = None
    period: Optional[str] = None
    split_mode: str = "amount"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    splits: list[BillSplit] = Field(default_factory=list)
    payments: Optional[list[Payment]] = None


class RecurringBillSplit(ApiRecord):
    """One member's share of a recurring bill template."""
    id: Optional[str] = None
    recurring_bill_id: Optional[str] = None
    member_id: str
    value: Union[int, float] = 0
    created_at: Optional[datetime] = None


class RecurringBill(ApiRecord):
    """A template that generates a Bill on a schedule."""
    id: str
    name: str
    amount_cents: int = 0
    day_of_month: int = 1
    frequency: str = "monthly"
    last_generated_period: Optional[str] = None
    split_mode: str = "amount"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    splits: list[RecurringBillSplit] = Field(default_factory=list)
