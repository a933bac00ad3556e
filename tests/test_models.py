"""
Tests for FinanFlow models

Records, taxonomy and the validation result model.
"""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from finanflow.models import (
    CommissionQuote,
    CommissionReceiver,
    FinancialSummary,
    MonthlyTotals,
    PaymentStatus,
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)
from finanflow.models.taxonomy import (
    CATEGORIES_CONFIG,
    FALLBACK_SUBCATEGORY,
    MAIN_CATEGORIES,
    is_known_pair,
    subcategories_for,
)

from conftest import make_data, make_transaction


class TestTransactionModel:
    """Tests for the Transaction record."""

    def test_transaction_gets_unique_id(self):
        """Test that every new transaction gets its own id."""
        first = make_transaction()
        second = make_transaction()
        assert first.id
        assert first.id != second.id

    def test_transaction_is_frozen(self):
        """Test that records cannot be mutated in place."""
        t = make_transaction()
        with pytest.raises(ValidationError):
            t.amount = Decimal("1.00")

    def test_transaction_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            make_data(amount=Decimal("-1.00"))

    def test_transaction_rejects_three_decimals(self):
        """Test that amounts are limited to cents."""
        with pytest.raises(ValidationError):
            make_data(amount=Decimal("1.005"))

    def test_transaction_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        t = make_transaction(description="  Venda Turma B  ")
        assert t.description == "Venda Turma B"

    def test_to_record_uses_camel_case(self):
        """Test the stored record shape."""
        t = make_transaction(id="t1", amount=Decimal("15000.00"))
        record = t.to_record()
        assert record["id"] == "t1"
        assert record["date"] == "2024-06-15"
        assert record["dueDate"] == "2024-06-15"
        assert record["commissionPaid"] is False
        assert record["amount"] == 15000.0
        assert record["type"] == "INCOME"
        assert record["status"] == "PAID"
        assert record["sourceSaleIds"] == []

    def test_from_record_restores_transaction(self):
        """Test that a stored record loads back to an equal transaction."""
        t = make_transaction(amount=Decimal("1234.56"), commission_paid=True)
        assert Transaction.from_record(t.to_record()) == t

    def test_from_record_applies_defaults_for_legacy_records(self):
        """Test that records without the newer fields still load."""
        legacy = {
            "id": "old-1",
            "description": "Venda antiga",
            "amount": 500,
            "type": "INCOME",
            "category": "Receitas",
            "subcategory": "Matrículas",
            "date": "2023-01-10",
            "dueDate": "2023-01-10",
            "status": "PENDING",
        }
        t = Transaction.from_record(legacy)
        assert t.commission_paid is False
        assert t.receiver_id is None
        assert t.source_sale_ids == ()
        assert t.booking_date == date(2023, 1, 10)

    def test_data_strips_identity(self):
        """Test that data() returns the transaction without its id."""
        t = make_transaction(id="t1")
        data = t.data()
        assert not hasattr(data, "id")
        assert data.amount == t.amount

    def test_status_toggled(self):
        """Test PAID <-> PENDING flip."""
        assert PaymentStatus.PAID.toggled() is PaymentStatus.PENDING
        assert PaymentStatus.PENDING.toggled() is PaymentStatus.PAID

    def test_convenience_properties(self):
        """Test is_income and is_paid."""
        t = make_transaction(type=TransactionType.EXPENSE, status=PaymentStatus.PENDING)
        assert t.is_income is False
        assert t.is_paid is False


class TestCommissionReceiverModel:
    """Tests for the CommissionReceiver record."""

    def test_receiver_defaults(self):
        """Test default role and generated id."""
        receiver = CommissionReceiver(name="Bruno", default_rate=Decimal("12.5"))
        assert receiver.role == "Vendedor"
        assert receiver.id

    def test_receiver_requires_name(self):
        """Test that an empty name is rejected."""
        with pytest.raises(ValidationError):
            CommissionReceiver(name="   ", default_rate=Decimal("10"))

    def test_receiver_record_round_trip(self):
        """Test that the rate is stored as a number and loads back."""
        receiver = CommissionReceiver(name="Bruno", default_rate=Decimal("12.5"))
        record = receiver.to_record()
        assert record["defaultRate"] == 12.5
        assert CommissionReceiver.from_record(record) == receiver


class TestDerivedModels:
    """Tests for summary and commission view models."""

    def test_cash_forecast(self):
        """Test that forecast adds pending income and subtracts pending expense."""
        summary = FinancialSummary(
            balance=Decimal("100"),
            pending_income=Decimal("50"),
            pending_expense=Decimal("30"),
        )
        assert summary.cash_forecast == Decimal("120")

    def test_monthly_label(self):
        """Test the chart label format."""
        assert MonthlyTotals(year=2024, month=3).label == "3/2024"

    def test_quote_requires_sales(self):
        """Test that a quote without sales cannot exist."""
        receiver = CommissionReceiver(name="Ana", default_rate=Decimal("10"))
        with pytest.raises(ValidationError):
            CommissionQuote(
                receiver=receiver,
                rate=Decimal("10"),
                sales_base=Decimal("0"),
                amount=Decimal("0"),
                sale_ids=(),
            )


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(issues=[
            ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Informe o valor.",
                severity="error",
            ),
        ])
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.is_valid is False
        assert result.user_message == "Informe o valor."

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(issues=[
            ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message="Categoria desconhecida",
                severity="warning",
            ),
        ])
        assert result.has_errors is False
        assert result.error_count == 0
        assert result.user_message is None


class TestTaxonomy:
    """Tests for the category taxonomy."""

    def test_main_categories_order(self):
        """Test that categories keep their configured order."""
        assert MAIN_CATEGORIES[0] == "Receitas"
        assert len(MAIN_CATEGORIES) == len(CATEGORIES_CONFIG) == 6

    def test_subcategories_for_known_category(self):
        """Test subcategory lookup."""
        assert subcategories_for("Comercial")[0] == "Comissão de Vendedores"

    def test_subcategories_for_unknown_category(self):
        """Test the generic fallback."""
        assert subcategories_for("Nova Categoria") == [FALLBACK_SUBCATEGORY]

    def test_is_known_pair(self):
        """Test pair membership."""
        assert is_known_pair("Receitas", "Matrículas") is True
        assert is_known_pair("Receitas", "Impostos") is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
