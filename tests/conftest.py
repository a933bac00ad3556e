"""
Shared fixtures for FinanFlow tests.

Test strategy:
1. Unit tests for pure functions (aggregation, commission math, formatting)
2. Component tests for the store, registry and calculator session
   over InMemoryStorage
3. No real API calls in tests (fake Gemini model, fake Sheets client)
"""

from datetime import date
from decimal import Decimal

import pytest

from finanflow.ledger import LedgerStore, ReceiverRegistry
from finanflow.models import (
    CommissionReceiver,
    PaymentStatus,
    Transaction,
    TransactionData,
    TransactionType,
)
from finanflow.services.storage import InMemoryStorage


TODAY = date(2024, 6, 15)


def make_data(**overrides) -> TransactionData:
    """A paid course sale booked on TODAY unless overridden."""
    fields = dict(
        description="Venda Curso Básico",
        amount=Decimal("100.00"),
        type=TransactionType.INCOME,
        category="Receitas",
        subcategory="Venda de Cursos",
        booking_date=TODAY,
        due_date=TODAY,
        status=PaymentStatus.PAID,
    )
    fields.update(overrides)
    return TransactionData(**fields)


def make_transaction(**overrides) -> Transaction:
    transaction_id = overrides.pop("id", None)
    data = make_data(**overrides)
    if transaction_id is None:
        return Transaction(**data.model_dump())
    return Transaction(**data.model_dump(), id=transaction_id)


def make_expense(**overrides) -> Transaction:
    fields = dict(
        description="Facebook Ads",
        type=TransactionType.EXPENSE,
        category="Marketing & Tráfego",
        subcategory="Facebook/Instagram Ads",
    )
    fields.update(overrides)
    return make_transaction(**fields)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage) -> LedgerStore:
    return LedgerStore(storage)


@pytest.fixture
def registry(storage) -> ReceiverRegistry:
    return ReceiverRegistry(storage)


@pytest.fixture
def ana() -> CommissionReceiver:
    return CommissionReceiver(id="r-ana", name="Ana", role="Vendedor", default_rate=Decimal("10"))
