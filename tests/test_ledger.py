"""Tests for split calculation, due dates and cycle resolution."""

from datetime import date

import pytest

from finance_tracker.ledger import (
    CycleStatus,
    allocate_payment_proportionally,
    calculate_split_amounts,
    compute_first_due_date,
    month_end,
    normalize_due_date,
    parse_calendar_date,
    resolve_bill_cycle,
    resolve_mortgage_cycle,
)
from finance_tracker.models import Bill, BillSplit, Mortgage, SplitInput


def splits(*pairs):
    return [BillSplit(member_id=m, value=v) for m, v in pairs]


def as_dict(results):
    return {r.member_id: r.amount_cents for r in results}


class TestDueDates:

    def test_normalize_clamps_to_month_end(self):
        assert normalize_due_date(2025, 2, 31) == date(2025, 2, 28)
        assert normalize_due_date(2024, 2, 31) == date(2024, 2, 29)
        assert normalize_due_date(2025, 4, 31) == date(2025, 4, 30)
        assert normalize_due_date(2025, 1, 15) == date(2025, 1, 15)

    def test_month_end(self):
        assert month_end(date(2024, 2, 10)) == date(2024, 2, 29)
        assert month_end(date(2024, 12, 1)) == date(2024, 12, 31)

    def test_first_due_same_month(self):
        assert compute_first_due_date(date(2024, 1, 10), 15) == date(2024, 1, 15)
        assert compute_first_due_date(date(2024, 1, 15), 15) == date(2024, 1, 15)

    def test_first_due_next_month(self):
        assert compute_first_due_date(date(2024, 1, 20), 15) == date(2024, 2, 15)

    def test_first_due_rolls_year_and_clamps(self):
        assert compute_first_due_date(date(2024, 12, 31), 30) == date(2025, 1, 30)
        assert compute_first_due_date(date(2025, 1, 31), 30) == date(2025, 2, 28)

    def test_parse_calendar_date(self):
        assert parse_calendar_date("2024-03-15") == date(2024, 3, 15)
        assert parse_calendar_date("2024-03-15T00:00:00.000Z") == date(2024, 3, 15)
        assert parse_calendar_date("") is None
        assert parse_calendar_date(None) is None
        assert parse_calendar_date("garbage") is None


class TestSplitAmounts:

    def test_amount_mode_verbatim(self):
        result = calculate_split_amounts(10000, "amount", splits(("a", 7000), ("b", 3000)))
        assert as_dict(result) == {"a": 7000, "b": 3000}

    def test_percent_even(self):
        result = calculate_split_amounts(10000, "percent", splits(("a", 50), ("b", 50)))
        assert as_dict(result) == {"a": 5000, "b": 5000}

    def test_percent_rescaled(self):
        """Test percentages that do not total 100 are rescaled."""
        result = calculate_split_amounts(10000, "percent", splits(("a", 30), ("b", 30)))
        assert as_dict(result) == {"a": 5000, "b": 5000}

    def test_shares_penny_distribution(self):
        """Test leftover cents go to the largest remainders, ties by member id."""
        result = calculate_split_amounts(10000, "shares", splits(("c", 1), ("a", 1), ("b", 1)))
        assert as_dict(result) == {"a": 3334, "b": 3333, "c": 3333}

    def test_sum_always_matches_total(self):
        for total in (1, 7, 99, 10001, 123457):
            result = calculate_split_amounts(
                total, "shares", splits(("a", 3), ("b", 5), ("c", 7))
            )
            assert sum(r.amount_cents for r in result) == total

    def test_percent_fractional_values(self):
        result = calculate_split_amounts(
            999, "percent", splits(("a", 33.3), ("b", 33.3), ("c", 33.4))
        )
        assert sum(r.amount_cents for r in result) == 999

    def test_zero_amount(self):
        result = calculate_split_amounts(0, "shares", splits(("a", 1)), member_ids=["a", "b"])
        assert as_dict(result) == {"a": 0, "b": 0}

    def test_unknown_members_ignored(self):
        result = calculate_split_amounts(
            1000, "shares", splits(("a", 1), ("gone", 1)), member_ids=["a"]
        )
        assert as_dict(result) == {"a": 1000}

    def test_zero_value_splits_ignored(self):
        result = calculate_split_amounts(1000, "shares", splits(("a", 1), ("b", 0)))
        assert as_dict(result) == {"a": 1000}

    def test_unknown_mode_is_zero(self):
        result = calculate_split_amounts(1000, "custom", splits(("a", 1), ("b", 1)))
        assert as_dict(result) == {"a": 0, "b": 0}

    def test_works_with_input_splits(self):
        result = calculate_split_amounts(
            100, "shares", [SplitInput(member_id="a", value=1), SplitInput(member_id="b", value=3)]
        )
        assert as_dict(result) == {"a": 25, "b": 75}


class TestAllocatePayment:

    def test_proportional(self):
        result = allocate_payment_proportionally(
            3000, 12000, "amount", splits(("a", 8000), ("b", 4000))
        )
        assert as_dict(result) == {"a": 2000, "b": 1000}

    def test_sum_matches_payment(self):
        result = allocate_payment_proportionally(
            1001, 3000, "shares", splits(("a", 1), ("b", 1), ("c", 1))
        )
        assert sum(r.amount_cents for r in result) == 1001

    def test_non_positive_payment(self):
        """Test a zero or negative payment is not attributed to anyone."""
        assert allocate_payment_proportionally(0, 1000, "shares", splits(("a", 1))) == []
        assert allocate_payment_proportionally(-500, 1000, "shares", splits(("a", 1))) == []

    def test_nothing_owed(self):
        assert allocate_payment_proportionally(500, 0, "shares", splits(("a", 1))) == []


def make_bill(payments=None, amount=10000, due="2024-03-15"):
    return Bill.model_validate({
        "id": "b1",
        "name": "Electric",
        "amountCents": amount,
        "dueDate": due,
        "splitMode": "shares",
        "splits": [{"memberId": "a", "value": 1}, {"memberId": "b", "value": 1}],
        "payments": payments,
    })


class TestBillCycle:

    def test_unpaid(self):
        cycle = resolve_bill_cycle(make_bill(), None, date(2024, 3, 10))
        assert cycle.status == CycleStatus.UNPAID
        assert cycle.total_remaining_cents == 10000
        assert cycle.cycle_start == date(2024, 3, 1)
        assert cycle.cycle_end == date(2024, 3, 15)

    def test_due_today_is_not_overdue(self):
        cycle = resolve_bill_cycle(make_bill(), None, date(2024, 3, 15))
        assert cycle.status == CycleStatus.UNPAID

    def test_overdue(self):
        cycle = resolve_bill_cycle(make_bill(), None, date(2024, 3, 16))
        assert cycle.status == CycleStatus.OVERDUE

    def test_partially_paid_proportional(self):
        bill = make_bill(payments=[
            {"id": "p1", "billId": "b1", "paidDate": "2024-03-05", "amountCents": 4000, "allocations": []},
        ])
        cycle = resolve_bill_cycle(bill, None, date(2024, 3, 10))
        assert cycle.status == CycleStatus.PARTIALLY_PAID
        assert cycle.total_paid_cents == 4000
        per_member = {m.member_id: m for m in cycle.per_member}
        assert per_member["a"].paid_cents == 2000
        assert per_member["b"].remaining_cents == 3000

    def test_paid_with_explicit_allocations(self):
        bill = make_bill(payments=[
            {
                "id": "p1",
                "billId": "b1",
                "paidDate": "2024-03-05",
                "amountCents": 10000,
                "allocations": [{"memberId": "a", "amountCents": 10000}],
            },
        ])
        cycle = resolve_bill_cycle(bill, None, date(2024, 4, 1))
        assert cycle.status == CycleStatus.PAID
        per_member = {m.member_id: m for m in cycle.per_member}
        assert per_member["a"].paid_cents == 10000
        assert per_member["b"].paid_cents == 0
        assert per_member["b"].remaining_cents == 5000

    def test_payments_for_other_bills_ignored(self):
        bill = make_bill()
        other = make_bill(payments=[
            {"id": "p9", "billId": "other", "paidDate": "2024-03-05", "amountCents": 10000},
        ]).payments
        cycle = resolve_bill_cycle(bill, other, date(2024, 3, 10))
        assert cycle.total_paid_cents == 0

    def test_negative_payment_does_not_reduce_totals(self):
        bill = make_bill(payments=[
            {"id": "p1", "billId": "b1", "paidDate": "2024-03-05", "amountCents": -2500},
        ])
        cycle = resolve_bill_cycle(bill, None, date(2024, 3, 10))
        assert cycle.status == CycleStatus.UNPAID
        assert cycle.total_paid_cents == 0
        assert cycle.total_remaining_cents == 10000
        assert all(m.paid_cents == 0 for m in cycle.per_member)

    def test_explicit_payment_list_replaces_embedded(self):
        """Test a payments list passed positionally is used instead of bill.payments."""
        bill = make_bill(payments=[
            {"id": "p1", "billId": "b1", "paidDate": "2024-03-05", "amountCents": 10000},
        ])
        cycle = resolve_bill_cycle(bill, [], date(2024, 3, 1))
        assert cycle.status == CycleStatus.UNPAID
        assert cycle.total_paid_cents == 0

    def test_missing_due_date(self):
        assert resolve_bill_cycle(make_bill(due=None), None, date(2024, 3, 10)) is None


def make_mortgage(payments=None):
    return Mortgage.model_validate({
        "id": "mg1",
        "name": "House",
        "scheduledPaymentCents": 200000,
        "paymentDay": 1,
        "startDate": "2024-01-15",
        "splitMode": "percent",
        "splits": [{"memberId": "a", "value": 60}, {"memberId": "b", "value": 40}],
        "payments": payments,
    })


class TestMortgageCycle:

    def test_upcoming_before_first_due(self):
        cycle = resolve_mortgage_cycle(make_mortgage(), None, date(2024, 1, 20))
        assert cycle.status == CycleStatus.UPCOMING
        assert cycle.is_upcoming
        assert cycle.first_due_date == date(2024, 2, 1)
        assert cycle.total_remaining_cents == 200000
        assert {m.member_id: m.owed_cents for m in cycle.per_member} == {"a": 120000, "b": 80000}

    def test_first_cycle_starts_at_start_date(self):
        cycle = resolve_mortgage_cycle(make_mortgage(), None, date(2024, 2, 1))
        assert cycle.status == CycleStatus.UNPAID
        assert cycle.cycle_start == date(2024, 1, 15)
        assert cycle.cycle_end == date(2024, 2, 1)

    def test_later_cycle_paid(self):
        mortgage = make_mortgage(payments=[
            {"id": "mp1", "mortgageId": "mg1", "paidDate": "2024-02-20", "amountCents": 200000},
            # Previous cycle, not counted
            {"id": "mp0", "mortgageId": "mg1", "paidDate": "2024-02-01", "amountCents": 200000},
        ])
        cycle = resolve_mortgage_cycle(mortgage, None, date(2024, 3, 1))
        assert cycle.cycle_start == date(2024, 2, 2)
        assert cycle.cycle_end == date(2024, 3, 1)
        assert cycle.total_paid_cents == 200000
        assert cycle.status == CycleStatus.PAID

    def test_explicit_payment_list(self):
        payments = make_mortgage(payments=[
            {"id": "mp1", "mortgageId": "mg1", "paidDate": "2024-02-20", "amountCents": 50000},
        ]).payments
        cycle = resolve_mortgage_cycle(make_mortgage(), payments, date(2024, 3, 1))
        assert cycle.status == CycleStatus.PARTIALLY_PAID
        assert cycle.total_paid_cents == 50000

    def test_overdue_after_due_day(self):
        cycle = resolve_mortgage_cycle(make_mortgage(), None, date(2024, 3, 5))
        assert cycle.status == CycleStatus.OVERDUE

    def test_unreadable_start_date(self):
        mortgage = make_mortgage()
        mortgage.start_date = "soon"
        assert resolve_mortgage_cycle(mortgage, None, date(2024, 3, 5)) is None


@pytest.mark.parametrize("payment_day, expected", [(31, date(2024, 2, 29)), (30, date(2024, 2, 29))])
def test_mortgage_due_day_clamped_in_february(payment_day, expected):
    mortgage = make_mortgage()
    mortgage.payment_day = payment_day
    cycle = resolve_mortgage_cycle(mortgage, None, date(2024, 2, 10))
    assert cycle.due_date == expected
