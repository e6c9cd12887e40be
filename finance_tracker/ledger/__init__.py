"""Split, allocation and due-date calculations in integer cents."""

from finance_tracker.ledger.cycles import (
    CycleStatus,
    ItemCycle,
    MemberCycleStatus,
    resolve_bill_cycle,
    resolve_mortgage_cycle,
)
from finance_tracker.ledger.due_dates import (
    compute_first_due_date,
    month_end,
    normalize_due_date,
    parse_calendar_date,
)
from finance_tracker.ledger.splits import (
    CalculatedSplit,
    allocate_payment_proportionally,
    calculate_split_amounts,
    distribute_cents,
)

__all__ = [
    "CalculatedSplit",
    "CycleStatus",
    "ItemCycle",
    "MemberCycleStatus",
    "allocate_payment_proportionally",
    "calculate_split_amounts",
    "compute_first_due_date",
    "distribute_cents",
    "month_end",
    "normalize_due_date",
    "parse_calendar_date",
    "resolve_bill_cycle",
    "resolve_mortgage_cycle",
]
