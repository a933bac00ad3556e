"""Tests for the Commission Engine."""

import pytest
from decimal import Decimal

from finanflow.commissions import (
    STALE_SELECTION_MESSAGE,
    build_commission_expense,
    build_quote,
    commission_history,
    compute_commission,
    eligible_sales,
    is_commission_expense,
    is_eligible_sale,
    is_sale,
    launch_commission,
    parse_rate,
    resolve_rate,
    sales_for_commission,
)
from finanflow.models import PaymentStatus, TransactionType

from conftest import TODAY, make_data, make_expense, make_transaction


class TestSalePredicates:
    """Tests for sale classification and eligibility."""

    def test_revenue_category_is_sale(self):
        """Test that anything in the revenue category counts."""
        assert is_sale(make_transaction(subcategory="Mentorias")) is True

    def test_subcategory_substrings(self):
        """Test the loose 'Venda' / 'Matrícula' match outside the revenue category."""
        assert is_sale(make_transaction(category="Outros", subcategory="Venda Avulsa")) is True
        assert is_sale(make_transaction(category="Outros", subcategory="Matrículas")) is True
        assert is_sale(make_transaction(category="Outros", subcategory="Patrocínio")) is False

    def test_substring_is_case_sensitive(self):
        """Test that lowercase 'venda' does not match."""
        assert is_sale(make_transaction(category="Outros", subcategory="revenda")) is False

    def test_expense_is_never_eligible(self):
        """Test that only income can be eligible."""
        expense = make_expense(category="Receitas", subcategory="Venda de Cursos")
        assert is_sale(expense) is True
        assert is_eligible_sale(expense) is False

    def test_commission_paid_is_never_eligible(self):
        """Test that a sale already used is excluded."""
        assert is_eligible_sale(make_transaction(commission_paid=True)) is False

    def test_pending_sales_are_eligible(self):
        """Test that settlement status does not matter."""
        assert is_eligible_sale(make_transaction(status=PaymentStatus.PENDING)) is True

    def test_eligible_sales_newest_first(self):
        """Test filtering and ordering."""
        older = make_transaction(id="older", booking_date=TODAY.replace(day=1))
        newer = make_transaction(id="newer")
        used = make_transaction(id="used", commission_paid=True)
        ads = make_expense(id="ads")
        assert [t.id for t in eligible_sales([older, used, ads, newer])] == ["newer", "older"]

    def test_commission_history(self):
        """Test that history holds only commission expenses."""
        commission = make_expense(
            id="c1", category="Comercial", subcategory="Comissão de Vendedores"
        )
        salary = make_expense(id="s1", category="Comercial", subcategory="Salário Vendedores")
        assert is_commission_expense(commission) is True
        assert is_commission_expense(salary) is False
        assert [t.id for t in commission_history([salary, commission])] == ["c1"]


class TestRates:
    """Tests for rate parsing and resolution."""

    @pytest.mark.parametrize("raw, expected", [
        ("12.5", Decimal("12.5")),
        (" 12,5 ", Decimal("12.5")),
        (15, Decimal("15")),
        (7.5, Decimal("7.5")),
        (Decimal("3"), Decimal("3")),
        ("12%", Decimal("12")),
        ("12 %", Decimal("12")),
        ("12abc", Decimal("12")),
        ("12,5%", Decimal("12.5")),
        ("-5", Decimal("-5")),
    ])
    def test_parse_rate_valid(self, raw, expected):
        """Test accepted rate inputs."""
        assert parse_rate(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "%12", "NaN", "inf", float("inf"), True])
    def test_parse_rate_invalid(self, raw):
        """Test rejected rate inputs."""
        assert parse_rate(raw) is None

    def test_resolve_rate_override_wins(self, ana):
        """Test that a valid override replaces the default."""
        assert resolve_rate(ana, "15") == Decimal("15")

    def test_resolve_rate_falls_back_to_default(self, ana):
        """Test that blank or garbage overrides use the default rate."""
        assert resolve_rate(ana, "") == Decimal("10")
        assert resolve_rate(ana, None) == Decimal("10")
        assert resolve_rate(ana, "dez") == Decimal("10")

    def test_zero_override_is_not_blank(self, ana):
        """Test that an explicit 0 is honored."""
        assert resolve_rate(ana, "0") == Decimal("0")


class TestComputeCommission:
    """Tests for commission math."""

    def test_simple_rate(self):
        """Test base * rate / 100."""
        assert compute_commission([Decimal("1000.00"), Decimal("500.00")], Decimal("10")) == Decimal("150.00")

    def test_split_sales_sum_exactly(self):
        """Test 333.33 + 333.33 + 333.34 at 15%."""
        amounts = [Decimal("333.33"), Decimal("333.33"), Decimal("333.34")]
        assert compute_commission(amounts, Decimal("15")) == Decimal("150.00")

    def test_rounds_once_on_final_value(self):
        """Test that rounding is applied to the total, not per sale."""
        amounts = [Decimal("33.33")] * 3
        assert compute_commission(amounts, Decimal("10")) == Decimal("10.00")

    def test_rounds_half_up(self):
        """Test that exact halves round away from zero."""
        assert compute_commission([Decimal("1.25")], Decimal("10")) == Decimal("0.13")

    def test_empty_base(self):
        """Test that no sales means zero."""
        assert compute_commission([], Decimal("10")) == Decimal("0.00")

    def test_build_quote(self, ana):
        """Test that a quote freezes rate, base and ids."""
        sales = [
            make_transaction(id="s1", amount=Decimal("1000.00")),
            make_transaction(id="s2", amount=Decimal("234.56")),
        ]
        quote = build_quote(ana, sales, rate_override="12,5")
        assert quote.rate == Decimal("12.5")
        assert quote.sales_base == Decimal("1234.56")
        assert quote.amount == Decimal("154.32")
        assert quote.sale_ids == ("s1", "s2")
        assert quote.count == 2

    @pytest.mark.parametrize("override", ["-5", "-0,01", "1e30"])
    def test_build_quote_unusable_rate(self, ana, override):
        """Test that negative or oversized rates yield no quote."""
        sales = [make_transaction(amount=Decimal("1000.00"))]
        assert build_quote(ana, sales, rate_override=override) is None

    def test_build_quote_negative_default_rate(self, ana):
        """Test a receiver whose stored default rate is negative."""
        receiver = ana.model_copy(update={"default_rate": Decimal("-5")})
        assert build_quote(receiver, [make_transaction()]) is None


class TestCommissionExpense:
    """Tests for the generated expense."""

    def test_expense_shape(self, ana):
        """Test every field of a generated commission expense."""
        expense = build_commission_expense(ana, Decimal("150.00"), ["s1", "s2"], today=TODAY)
        assert expense.description == "Comissão - Ana"
        assert expense.amount == Decimal("150.00")
        assert expense.type is TransactionType.EXPENSE
        assert expense.category == "Comercial"
        assert expense.subcategory == "Comissão de Vendedores"
        assert expense.booking_date == TODAY
        assert expense.due_date == TODAY
        assert expense.status is PaymentStatus.PENDING
        assert expense.commission_paid is False
        assert expense.receiver_id == ana.id
        assert expense.source_sale_ids == ("s1", "s2")


class TestLaunchCommission:
    """Tests for the commission commit."""

    def test_launch_marks_sales_and_books_expense(self, store, ana):
        """Test the successful commit."""
        s1 = store.create(make_data(amount=Decimal("1000.00")))
        s2 = store.create(make_data(amount=Decimal("500.00")))
        untouched = store.create(make_data(amount=Decimal("700.00")))

        outcome = launch_commission(store, build_quote(ana, [s1, s2]), today=TODAY)

        assert outcome.success is True
        assert "R$ 150,00" in outcome.message
        assert store.get(s1.id).commission_paid is True
        assert store.get(s2.id).commission_paid is True
        assert store.get(untouched.id).commission_paid is False
        assert store.get(outcome.expense.id).amount == Decimal("150.00")
        assert len(store) == 4

    def test_launched_sales_are_no_longer_eligible(self, store, ana):
        """Test that a sale can only be commissioned once."""
        sale = store.create(make_data())
        launch_commission(store, build_quote(ana, [sale]), today=TODAY)
        assert eligible_sales(store.snapshot()) == []

    def test_stale_selection_writes_nothing(self, store, ana):
        """Test that a sale deleted after quoting rejects the whole batch."""
        s1 = store.create(make_data())
        s2 = store.create(make_data())
        quote = build_quote(ana, [s1, s2])
        store.delete(s2.id)
        version = store.version

        outcome = launch_commission(store, quote, today=TODAY)

        assert outcome.success is False
        assert outcome.message == STALE_SELECTION_MESSAGE
        assert store.version == version
        assert store.get(s1.id).commission_paid is False

    def test_already_paid_sale_is_stale(self, store, ana):
        """Test that a double launch of the same quote is rejected."""
        sale = store.create(make_data())
        quote = build_quote(ana, [sale])
        assert launch_commission(store, quote, today=TODAY).success is True
        assert launch_commission(store, quote, today=TODAY).success is False

    def test_deleting_expense_keeps_sales_paid(self, store, ana):
        """Test that deleting a commission expense does not reopen its sales."""
        sale = store.create(make_data())
        outcome = launch_commission(store, build_quote(ana, [sale]), today=TODAY)

        store.delete(outcome.expense.id)

        assert store.get(sale.id).commission_paid is True
        assert eligible_sales(store.snapshot()) == []

    def test_sales_for_commission(self, store, ana):
        """Test the audit lookup from expense back to its sales."""
        s1 = store.create(make_data())
        s2 = store.create(make_data())
        outcome = launch_commission(store, build_quote(ana, [s1, s2]), today=TODAY)

        store.delete(s2.id)

        found = sales_for_commission(store.snapshot(), outcome.expense)
        assert [t.id for t in found] == [s1.id]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
