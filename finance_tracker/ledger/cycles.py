"""
Payment Cycle Resolution

Works out where a bill or a mortgage stands TODAY: how much has been paid
in the current cycle, by whom, what is left, and a single status.

A bill has exactly one cycle, ending on its due date. A mortgage has one
cycle per month, ending on that month's payment day; the first cycle runs
from the mortgage's start date.

Payments with explicit allocations are credited as allocated. Payments
without allocations are credited in proportion to what each member owes.
"""

from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional, Sequence, Union

from pydantic import BaseModel, Field

from finance_tracker.ledger.due_dates import (
    add_months,
    compute_first_due_date,
    normalize_due_date,
    parse_calendar_date,
)
from finance_tracker.ledger.splits import (
    CalculatedSplit,
    allocate_payment_proportionally,
    calculate_split_amounts,
)
from finance_tracker.models import Bill, Mortgage, MortgagePayment, Payment


class CycleStatus(str, Enum):
    PAID = "Paid"
    OVERDUE = "Overdue"
    UNPAID = "Unpaid"
    PARTIALLY_PAID = "Partially Paid"
    UPCOMING = "Upcoming"


class MemberCycleStatus(BaseModel):
    member_id: str
    owed_cents: int = 0
    paid_cents: int = 0
    remaining_cents: int = 0


class ItemCycle(BaseModel):
    """Status of one bill or mortgage for the cycle containing `today`."""
    status: CycleStatus
    total_paid_cents: int = Field(ge=0)
    total_remaining_cents: int = Field(ge=0)
    per_member: list[MemberCycleStatus] = Field(default_factory=list)
    cycle_start: date
    cycle_end: date
    due_date: date
    first_due_date: Optional[date] = None
    is_upcoming: bool = False


AnyPayment = Union[Payment, MortgagePayment]


def _per_member(
    owed: list[CalculatedSplit],
    payments: Iterable[AnyPayment],
    amount_cents: int,
    split_mode: str,
    splits: Sequence,
    member_ids: Optional[list[str]],
) -> list[MemberCycleStatus]:
    paid_by_member = {s.member_id: 0 for s in owed}

    for payment in payments:
        allocations = payment.allocations or allocate_payment_proportionally(
            payment.amount_cents, amount_cents, split_mode, splits, member_ids
        )
        for allocation in allocations:
            if allocation.member_id in paid_by_member:
                paid_by_member[allocation.member_id] += allocation.amount_cents

    return [
        MemberCycleStatus(
            member_id=s.member_id,
            owed_cents=s.amount_cents,
            paid_cents=paid_by_member[s.member_id],
            remaining_cents=max(0, s.amount_cents - paid_by_member[s.member_id]),
        )
        for s in owed
    ]


def _status(total_remaining: int, total_paid: int, today: date, due: date) -> CycleStatus:
    if total_remaining <= 0:
        return CycleStatus.PAID
    if today > due:
        return CycleStatus.OVERDUE
    if total_paid > 0:
        return CycleStatus.PARTIALLY_PAID
    return CycleStatus.UNPAID


def resolve_bill_cycle(
    bill: Bill,
    payments: Optional[Iterable[Payment]],
    today: date,
    member_ids: Optional[Iterable[str]] = None,
) -> Optional[ItemCycle]:
    """
    Resolve a bill's status.

    Args:
        bill: The bill
        payments: Payments to consider. None means bill.payments. Only
                  payments for this bill are counted.
        today: Reference date
        member_ids: Current household members (None accepts all)

    Returns:
        The bill's cycle, or None when it has no readable due date.
    """
    due = parse_calendar_date(bill.due_date)
    if due is None:
        return None

    members = list(member_ids) if member_ids is not None else None
    source = (bill.payments or []) if payments is None else payments
    bill_payments = [p for p in source if p.bill_id in (None, bill.id)]

    total_paid = max(0, sum(p.amount_cents for p in bill_payments))
    total_remaining = max(0, bill.amount_cents - total_paid)

    owed = calculate_split_amounts(bill.amount_cents, bill.split_mode, bill.splits, members)
    per_member = _per_member(
        owed, bill_payments, bill.amount_cents, bill.split_mode, bill.splits, members
    )

    return ItemCycle(
        status=_status(total_remaining, total_paid, today, due),
        total_paid_cents=total_paid,
        total_remaining_cents=total_remaining,
        per_member=per_member,
        cycle_start=due.replace(day=1),
        cycle_end=due,
        due_date=due,
    )


def resolve_mortgage_cycle(
    mortgage: Mortgage,
    payments: Optional[Iterable[MortgagePayment]],
    today: date,
    member_ids: Optional[Iterable[str]] = None,
) -> Optional[ItemCycle]:
    """
    Resolve a mortgage's status for the month containing `today`.

    Payments default to mortgage.payments when None; only payments dated
    inside the current cycle are counted. Before the first due date the
    mortgage is UPCOMING with nothing paid.
    Returns None when the start date is unreadable.
    """
    start = parse_calendar_date(mortgage.start_date)
    if start is None:
        return None

    members = list(member_ids) if member_ids is not None else None
    amount = mortgage.scheduled_payment_cents
    first_due = compute_first_due_date(start, mortgage.payment_day)
    owed = calculate_split_amounts(amount, mortgage.split_mode, mortgage.splits, members)

    if today < first_due:
        return ItemCycle(
            status=CycleStatus.UPCOMING,
            total_paid_cents=0,
            total_remaining_cents=amount,
            per_member=[
                MemberCycleStatus(
                    member_id=s.member_id,
                    owed_cents=s.amount_cents,
                    remaining_cents=s.amount_cents,
                )
                for s in owed
            ],
            cycle_start=start,
            cycle_end=first_due,
            due_date=first_due,
            first_due_date=first_due,
            is_upcoming=True,
        )

    current_due = normalize_due_date(today.year, today.month, mortgage.payment_day)
    if current_due < first_due:
        return None

    if current_due == first_due:
        cycle_start = start
    else:
        prev_year, prev_month = add_months(current_due.year, current_due.month, -1)
        previous_due = normalize_due_date(prev_year, prev_month, mortgage.payment_day)
        cycle_start = previous_due + timedelta(days=1)

    source = (mortgage.payments or []) if payments is None else payments
    cycle_payments = []
    for p in source:
        if p.mortgage_id not in (None, mortgage.id):
            continue
        paid = parse_calendar_date(p.paid_date)
        if paid is not None and cycle_start <= paid <= current_due:
            cycle_payments.append(p)

    total_paid = max(0, sum(p.amount_cents for p in cycle_payments))
    total_remaining = max(0, amount - total_paid)
    per_member = _per_member(
        owed, cycle_payments, amount, mortgage.split_mode, mortgage.splits, members
    )

    return ItemCycle(
        status=_status(total_remaining, total_paid, today, current_due),
        total_paid_cents=total_paid,
        total_remaining_cents=total_remaining,
        per_member=per_member,
        cycle_start=cycle_start,
        cycle_end=current_due,
        due_date=current_due,
        first_due_date=first_due,
    )
