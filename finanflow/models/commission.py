"""
Commission Workflow Models

A CommissionQuote is the frozen result of the calculator: who gets paid,
at which rate, and from which sales. It is what the user confirms.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finanflow.models.transaction import CommissionReceiver, Transaction


class CommissionState(str, Enum):
    """States of the commission calculator."""
    NO_RECEIVER_SELECTED = "no_receiver_selected"
    RECEIVER_SELECTED = "receiver_selected"
    SALES_SELECTED = "sales_selected"
    PENDING_CONFIRMATION = "pending_confirmation"
    COMMITTED = "committed"


class CommissionQuote(BaseModel):
    """Computed commission awaiting confirmation."""

    model_config = ConfigDict(frozen=True)

    receiver: CommissionReceiver
    rate: Decimal = Field(description="Percent actually applied")
    sales_base: Decimal = Field(description="Sum of the selected sale amounts")
    amount: Decimal = Field(ge=0, description="Commission, rounded to cents")
    sale_ids: tuple[str, ...] = Field(min_length=1)

    @property
    def count(self) -> int:
        return len(self.sale_ids)


class LaunchOutcome(BaseModel):
    """
    Result of a commission calculator action.

    Validation failures come back here with `success=False` and a
    user-facing message. They are never raised.
    """

    success: bool
    message: str
    quote: Optional[CommissionQuote] = None
    expense: Optional[Transaction] = None
