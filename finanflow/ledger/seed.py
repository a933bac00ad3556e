"""Demo content written on first run, when no ledger was ever saved."""

from datetime import date
from decimal import Decimal

from finanflow.models.transaction import (
    PaymentStatus,
    TransactionData,
    TransactionType,
)


def demo_transactions(today: date) -> list[TransactionData]:
    """One paid course sale and one paid ads expense, both booked today."""
    return [
        TransactionData(
            description="Venda Curso Básico - Turma A",
            amount=Decimal("15000.00"),
            type=TransactionType.INCOME,
            category="Receitas",
            subcategory="Venda de Cursos",
            booking_date=today,
            due_date=today,
            status=PaymentStatus.PAID,
        ),
        TransactionData(
            description="Facebook Ads - Campanha Lançamento",
            amount=Decimal("3200.00"),
            type=TransactionType.EXPENSE,
            category="Marketing & Tráfego",
            subcategory="Facebook/Instagram Ads",
            booking_date=today,
            due_date=today,
            status=PaymentStatus.PAID,
        ),
    ]
