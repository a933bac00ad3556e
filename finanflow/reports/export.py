"""
Report Exports

Pure formatting of a ledger snapshot:
- CSV for spreadsheets/accountants
- Printable HTML report with summary cards

Nothing here reads or writes files; callers decide where bytes go.
"""

import csv
import io
from collections.abc import Sequence
from datetime import date, datetime
from html import escape
from typing import Optional

from finanflow.aggregation.engine import report_totals
from finanflow.formatting import format_brl, format_date_br
from finanflow.models.transaction import PaymentStatus, Transaction, TransactionType


CSV_HEADERS = [
    "Vencimento",
    "Status",
    "Descrição",
    "Categoria",
    "Subcategoria",
    "Tipo",
    "Valor",
    "Data Lançamento",
]

STATUS_LABELS = {
    PaymentStatus.PAID: "PAGO",
    PaymentStatus.PENDING: "PENDENTE",
}

REPORT_STYLE = """
body { font-family: 'Helvetica', sans-serif; padding: 40px; color: #333; }
h1 { color: #111; border-bottom: 2px solid #333; padding-bottom: 10px; }
.meta { color: #666; margin-bottom: 30px; }
table { width: 100%; border-collapse: collapse; margin-top: 20px; font-size: 12px; }
th, td { border-bottom: 1px solid #ddd; padding: 10px; text-align: left; }
th { background-color: #f9f9f9; font-weight: bold; text-transform: uppercase; }
.summary-box { display: flex; gap: 20px; margin-bottom: 30px; }
.card { border: 1px solid #ddd; padding: 15px; border-radius: 8px; flex: 1; }
.val { font-size: 18px; font-weight: bold; margin-top: 5px; }
.green { color: #10B981; }
.red { color: #EF4444; }
"""


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"DicaDeTattoo_Financeiro_{today.isoformat()}.csv"


def to_csv(transactions: Sequence[Transaction]) -> str:
    """
    Flat CSV, one row per transaction, in ledger order.

    Dates are ISO, amounts use a dot and two decimals.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for t in transactions:
        writer.writerow([
            t.due_date.isoformat(),
            t.status.value,
            t.description,
            t.category,
            t.subcategory,
            t.type.value,
            f"{t.amount:.2f}",
            t.booking_date.isoformat(),
        ])
    return buffer.getvalue()


def _card(label: str, value: str, css: str = "") -> str:
    return (
        '<div class="card">'
        f"<div>{escape(label)}</div>"
        f'<div class="val {css}">{escape(value)}</div>'
        "</div>"
    )


def _row(t: Transaction) -> str:
    color = "green" if t.type is TransactionType.INCOME else "red"
    return (
        "<tr>"
        f"<td>{format_date_br(t.due_date)}</td>"
        f"<td>{STATUS_LABELS[t.status]}</td>"
        f"<td>{escape(t.description)}</td>"
        f"<td>{escape(t.category)} <small>({escape(t.subcategory)})</small></td>"
        f'<td style="color: {color}">{escape(format_brl(t.amount))}</td>'
        "</tr>"
    )


def to_html_report(
    transactions: Sequence[Transaction],
    generated_at: Optional[datetime] = None,
    company_name: str = "Dica de Tattoo",
) -> str:
    """Printable HTML report: summary cards followed by the transaction table."""
    generated_at = generated_at or datetime.now()
    totals = report_totals(transactions)
    company = escape(company_name)

    cards = "".join([
        _card("Total Receitas", format_brl(totals.total_income), "green"),
        _card("Total Despesas", format_brl(totals.total_expense), "red"),
        _card("Despesas Pagas", format_brl(totals.paid_expense)),
        _card("Resultado", format_brl(totals.result)),
    ])
    rows = "".join(_row(t) for t in transactions)

    return (
        "<html><head>"
        f"<title>Relatório - {company}</title>"
        f"<style>{REPORT_STYLE}</style>"
        "</head><body>"
        f"<h1>{company} - Relatório Financeiro</h1>"
        f'<p class="meta">Gerado em: {generated_at.strftime("%d/%m/%Y")} '
        f'às {generated_at.strftime("%H:%M:%S")}</p>'
        f'<div class="summary-box">{cards}</div>'
        "<table><thead><tr>"
        "<th>Vencimento</th><th>Status</th><th>Descrição</th>"
        "<th>Categoria</th><th>Valor</th>"
        "</tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table></body></html>"
    )
