"""User-facing text formatting."""

from finance_tracker.formatting.dates import (
    DATE_NOT_SET,
    INVALID_DATE,
    format_date,
    parse_date_value,
)
from finance_tracker.formatting.money import cents_to_decimal, format_cents
from finance_tracker.formatting.text import (
    frequency_phrase,
    ordinal_suffix,
    recurrence_sentence,
)

__all__ = [
    "DATE_NOT_SET",
    "INVALID_DATE",
    "cents_to_decimal",
    "format_cents",
    "format_date",
    "frequency_phrase",
    "ordinal_suffix",
    "parse_date_value",
    "recurrence_sentence",
]
