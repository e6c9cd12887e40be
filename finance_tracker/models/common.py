"""
Shared Model Building Blocks

DESIGN DECISION: Python attributes are snake_case, the wire format is
camelCase. Every record declares the mapping once through the base classes
below instead of per-field aliases.

Response records are LENIENT (unknown server fields are kept, most fields
optional) because the server owns the shape. Input records are STRICT
(unknown fields rejected, money validated) because they are ours.
"""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Integer minor currency units. Never a float.
Cents = Annotated[int, Field(ge=0, description="Amount in cents")]


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class SplitMode(str, Enum):
    """
    How a split's `value` is read.

    AMOUNT: value is cents owed by the member
    PERCENT: value is a percentage of the total
    SHARES: value is a number of shares of the total
    """
    AMOUNT = "amount"
    PERCENT = "percent"
    SHARES = "shares"


class RecurrenceFrequency(str, Enum):
    """How often a recurring bill generates a new bill."""
    MONTHLY = "monthly"
    BI_MONTHLY = "bi-monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUALLY = "semi-annually"
    YEARLY = "yearly"


class PaymentMethod(str, Enum):
    """How a payment was made."""
    ACH = "ach"
    CARD = "card"
    CASH = "cash"
    CHECK = "check"
    ZELLE = "zelle"
    VENMO = "venmo"
    OTHER = "other"


# =============================================================================
# BASE RECORDS
# =============================================================================

class ApiRecord(BaseModel):
    """Base for records returned by the server."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict:
        """Dump back to the camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ApiInput(BaseModel):
    """Base for payloads sent to the server."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    def to_wire(self) -> dict:
        """Serialize to a JSON-ready camelCase dict, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DeleteResult(ApiRecord):
    """Acknowledgement returned by every DELETE endpoint."""
    success: bool = False
