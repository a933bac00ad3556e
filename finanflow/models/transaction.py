"""
Core Data Models for FinanFlow

These models define the schemas for all data flowing through the ledger.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for storage (flat camelCase records)

DESIGN DECISION: Ledger records are frozen. The Ledger Store replaces
records instead of mutating them, so every snapshot handed out stays
valid for as long as the caller holds it.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
)
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return str(uuid4())


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a ledger movement."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class PaymentStatus(str, Enum):
    """
    Settlement status.

    Only PAID movements affect the balance.
    """
    PAID = "PAID"
    PENDING = "PENDING"

    def toggled(self) -> "PaymentStatus":
        return PaymentStatus.PENDING if self is PaymentStatus.PAID else PaymentStatus.PAID


# =============================================================================
# RECORD MODELS
# =============================================================================

class _Record(BaseModel):
    """Base for persisted records: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )

    def to_record(self) -> dict[str, Any]:
        """Serialize to a flat JSON-compatible record."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: dict[str, Any]):
        """Build from a stored record (alias or field names accepted)."""
        return cls.model_validate(record)


class TransactionData(_Record):
    """
    A transaction without its identity.

    This is what the form (or the Commission Engine) hands to
    LedgerStore.create().
    """

    description: str = Field(
        ...,
        max_length=300,
        description="Free text description"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Amount in BRL"
    )
    type: TransactionType
    category: str = Field(
        ...,
        description="Category (see taxonomy, not enforced here)"
    )
    subcategory: str = Field(
        default="",
        description="Subcategory (see taxonomy, not enforced here)"
    )
    booking_date: date = Field(
        ...,
        alias="date",
        description="Accounting/booking date"
    )
    due_date: date = Field(
        ...,
        description="Date the obligation is due"
    )
    status: PaymentStatus = PaymentStatus.PENDING

    # Meaningful only for INCOME sales: set once a commission batch used it
    commission_paid: bool = False

    # Only set on generated commission expenses
    receiver_id: Optional[str] = Field(
        default=None,
        description="Receiver a commission expense was paid to"
    )
    source_sale_ids: tuple[str, ...] = Field(
        default=(),
        description="Sales a commission expense was computed from"
    )

    @field_serializer("amount", when_used="json")
    def _amount_as_number(self, v: Decimal) -> float:
        return float(v)

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_paid(self) -> bool:
        return self.status is PaymentStatus.PAID


class Transaction(TransactionData):
    """A ledger transaction. `id` never changes after creation."""

    id: str = Field(
        default_factory=new_id,
        min_length=1,
        description="Opaque unique identifier"
    )

    def data(self) -> TransactionData:
        """Strip the identity (e.g. to pre-fill an edit form)."""
        return TransactionData.model_validate(self.model_dump(exclude={"id"}))


class CommissionReceiver(_Record):
    """
    A team member who can receive sales commissions.

    There is no foreign key from commission expenses back to a receiver
    besides the optional `receiver_id` on the expense; removing a receiver
    never touches expenses already generated in their name.
    """

    id: str = Field(
        default_factory=new_id,
        min_length=1,
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=120,
    )
    role: str = Field(
        default="Vendedor",
        description="Vendedor, Gestor, Líder, Parceiro (suggested, not enforced)"
    )
    default_rate: Decimal = Field(
        ...,
        description="Default commission rate in percent (0-100 expected)"
    )

    @field_serializer("default_rate", when_used="json")
    def _rate_as_number(self, v: Decimal) -> float:
        return float(v)
