"""
Financed Expense Records

A financed expense is a purchase paid off in fixed monthly installments.
The server computes the monthly payment and generates the installment
schedule when the expense is created; this client only reads it and
toggles installments paid/unpaid.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from finance_tracker.models.common import ApiRecord


class FinancedExpenseSplit(ApiRecord):
    id: Optional[str] = None
    financed_expense_id: Optional[str] = None
    member_id: str
    value: Union[int, float] = 0
    created_at: Optional[datetime] = None


class FinancedExpensePayment(ApiRecord):
    """One scheduled installment."""
    id: str
    financed_expense_id: Optional[str] = None
    payment_number: int = 0
    due_date: Optional[str] = None
    amount_cents: int = 0
    principal_cents: int = 0
    interest_cents: int = 0
    is_paid: bool = False
    paid_date: Optional[str] = None
    bill_id: Optional[str] = None
    # Only present on mark-paid responses that also created a bill
    created_at: Optional[datetime] = None


class FinancedExpense(ApiRecord):
    id: str
    title: str
    description: Optional[str] = None
    total_amount_cents: int = 0
    monthly_payment_cents: int = 0
    interest_rate_percent: float = 0.0
    financing_term_months: int = 0
    purchase_date: Optional[str] = None
    first_payment_date: Optional[str] = None
    is_active: bool = True
    split_mode: str = "amount"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    splits: list[FinancedExpenseSplit] = Field(default_factory=list)
    payments: Optional[list[FinancedExpensePayment]] = None

    @property
    def paid_installments(self) -> int:
        return sum(1 for p in self.payments or [] if p.is_paid)

    @property
    def next_unpaid_payment(self) -> Optional[FinancedExpensePayment]:
        """Earliest unpaid installment by due date, if any."""
        unpaid = [p for p in self.payments or [] if not p.is_paid]
        if not unpaid:
            return None
        return min(unpaid, key=lambda p: (p.due_date or "", p.payment_number))
