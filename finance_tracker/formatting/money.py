"""Currency display for integer cent amounts."""

from decimal import Decimal
from typing import Optional

from babel.numbers import format_currency as babel_format_currency

from finance_tracker.config import get_settings


def cents_to_decimal(cents: int) -> Decimal:
    """Exact major-unit value of a cent amount: 12345 -> Decimal('123.45')."""
    return Decimal(cents) / Decimal(100)


def format_cents(
    cents: int,
    currency: Optional[str] = None,
    locale: Optional[str] = None,
) -> str:
    """
    Format an amount in cents as localized currency.

    Example:
        >>> format_cents(149999, currency="USD", locale="en_US")
        '$1,499.99'
    """
    settings = get_settings().formatting
    return babel_format_currency(
        cents_to_decimal(cents),
        currency or settings.currency,
        locale=locale or settings.locale,
    )
