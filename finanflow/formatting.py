"""Currency and date formatting for user-facing text (pt-BR)."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal


CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_brl(value: Decimal) -> str:
    """Format as Brazilian reais, e.g. R$ 1.234,56 (negative: -R$ 10,00)."""
    value = round2(value)
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,.2f}"  # 1,234.56
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {grouped}"


def format_date_br(value: date) -> str:
    """dd/mm/yyyy"""
    return value.strftime("%d/%m/%Y")
