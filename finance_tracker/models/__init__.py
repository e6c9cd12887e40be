"""
Data Models Package

Pydantic models for every record exchanged with the finance tracker API,
plus the typed payloads used to create and update them.
"""

from finance_tracker.models.common import (
    ApiInput,
    ApiRecord,
    Cents,
    DeleteResult,
    PaymentMethod,
    RecurrenceFrequency,
    SplitMode,
)
from finance_tracker.models.household import (
    Bill,
    BillSplit,
    Member,
    Payment,
    PaymentAllocation,
    RecurringBill,
    RecurringBillSplit,
)
from finance_tracker.models.mortgage import (
    Mortgage,
    MortgagePayment,
    MortgagePaymentAllocation,
    MortgagePaymentBreakdown,
    MortgageSplit,
)
from finance_tracker.models.financed import (
    FinancedExpense,
    FinancedExpensePayment,
    FinancedExpenseSplit,
)
from finance_tracker.models.inputs import (
    AllocationInput,
    BillInput,
    FinancedExpenseInput,
    MarkPaidInput,
    MemberCreate,
    MortgageInput,
    MortgagePaymentInput,
    PaymentInput,
    PaymentUpdate,
    RecurringBillInput,
    SplitInput,
)

__all__ = [
    # Shared
    "ApiInput",
    "ApiRecord",
    "Cents",
    "DeleteResult",
    "PaymentMethod",
    "RecurrenceFrequency",
    "SplitMode",
    # Household
    "Bill",
    "BillSplit",
    "Member",
    "Payment",
    "PaymentAllocation",
    "RecurringBill",
    "RecurringBillSplit",
    # Mortgages
    "Mortgage",
    "MortgagePayment",
    "MortgagePaymentAllocation",
    "MortgagePaymentBreakdown",
    "MortgageSplit",
    # Financed expenses
    "FinancedExpense",
    "FinancedExpensePayment",
    "FinancedExpenseSplit",
    # Inputs
    "AllocationInput",
    "BillInput",
    "FinancedExpenseInput",
    "MarkPaidInput",
    "MemberCreate",
    "MortgageInput",
    "MortgagePaymentInput",
    "PaymentInput",
    "PaymentUpdate",
    "RecurringBillInput",
    "SplitInput",
]
