"""
Split Calculation

Turns a total and a list of splits into what each member owes, in integer
cents.

DESIGN DECISION: The sum of the calculated amounts ALWAYS equals the total
for percent and shares modes. Each raw share is floored to a whole cent and
the leftover cents are handed out one at a time, largest remainder first,
ties broken by member id. The result is deterministic for a given input.

In amount mode the split values ARE the amounts, so nothing is
redistributed and the sum may differ from the total. Detecting that is the
caller's job.
"""

from fractions import Fraction
from typing import Iterable, Optional, Protocol, Union

from pydantic import BaseModel, Field

from finance_tracker.diagnostics import get_logger
from finance_tracker.models import SplitMode


logger = get_logger(__name__)


class SplitLike(Protocol):
    """Anything with a member id and a split value (response or input splits)."""
    member_id: str
    value: Union[int, float]


class CalculatedSplit(BaseModel):
    """What one member owes (or was allocated)."""
    member_id: str
    amount_cents: int = Field(ge=0)


def distribute_cents(
    total_cents: int,
    weights: list[tuple[str, Fraction]],
) -> list[CalculatedSplit]:
    """
    Split total_cents proportionally to weights without losing a cent.

    Args:
        total_cents: Amount to distribute
        weights: (member_id, weight) pairs. Weights must be positive.

    Returns:
        One CalculatedSplit per weight, ordered by largest remainder
        first, then member id.
    """
    weight_total = sum(w for _, w in weights)
    if weight_total <= 0:
        return [CalculatedSplit(member_id=m, amount_cents=0) for m, _ in weights]

    shares = []
    for member_id, weight in weights:
        raw = Fraction(total_cents) * weight / weight_total
        floored = raw.numerator // raw.denominator
        shares.append([member_id, floored, raw - floored])

    leftover = total_cents - sum(s[1] for s in shares)

    shares.sort(key=lambda s: (-s[2], s[0]))
    for i in range(leftover):
        shares[i % len(shares)][1] += 1

    return [CalculatedSplit(member_id=m, amount_cents=amount) for m, amount, _ in shares]


def _zero_for(member_ids: Iterable[str]) -> list[CalculatedSplit]:
    return [CalculatedSplit(member_id=m, amount_cents=0) for m in member_ids]


def calculate_split_amounts(
    amount_cents: int,
    split_mode: Union[SplitMode, str],
    splits: Iterable[SplitLike],
    member_ids: Optional[Iterable[str]] = None,
) -> list[CalculatedSplit]:
    """
    Calculate what each member owes for an item.

    Args:
        amount_cents: The item's total
        split_mode: 'amount', 'percent' or 'shares'
        splits: The item's splits
        member_ids: Current household members. Splits for anyone else are
                    ignored. None accepts every split's member.

    Returns:
        Per-member amounts. Zero for everyone when the total is not
        positive or nobody has a positive split.
    """
    splits = list(splits)
    known = list(member_ids) if member_ids is not None else None
    everyone = known if known is not None else [s.member_id for s in splits]

    if amount_cents <= 0 or not splits:
        return _zero_for(everyone)

    active = [
        s for s in splits
        if s.value > 0 and (known is None or s.member_id in known)
    ]
    if not active:
        return _zero_for(everyone)

    mode = split_mode.value if isinstance(split_mode, SplitMode) else str(split_mode)

    if mode == SplitMode.AMOUNT.value:
        return [
            CalculatedSplit(member_id=s.member_id, amount_cents=int(round(s.value)))
            for s in active
        ]

    if mode in (SplitMode.PERCENT.value, SplitMode.SHARES.value):
        # Percentages that do not add up to 100 are rescaled, which makes
        # both modes a plain proportional split.
        weights = [(s.member_id, Fraction(str(s.value))) for s in active]
        return distribute_cents(amount_cents, weights)

    logger.warning("unknown_split_mode", split_mode=mode)
    return _zero_for(s.member_id for s in splits)


def allocate_payment_proportionally(
    payment_cents: int,
    amount_cents: int,
    split_mode: Union[SplitMode, str],
    splits: Iterable[SplitLike],
    member_ids: Optional[Iterable[str]] = None,
) -> list[CalculatedSplit]:
    """
    Attribute a payment to members in proportion to what they owe.

    Returns an empty list when nobody owes anything or the payment is not
    positive.
    """
    if payment_cents <= 0:
        return []
    owed = calculate_split_amounts(amount_cents, split_mode, splits, member_ids)
    weights = [(s.member_id, Fraction(s.amount_cents)) for s in owed if s.amount_cents > 0]
    if not weights:
        return []
    return distribute_cents(payment_cents, weights)
