"""Report rendering: tabular documents (PDF) and CSV export."""

from datetime import date
from decimal import Decimal
from typing import Iterable

from finsight.domain.entities import BalanceSheet, CategoryBreakdown, Transaction
from finsight.reports.csv_export import export_csv
from finsight.reports.documents import (
    TabularDocument,
    build_balance_sheet,
    build_expense_report,
    build_income_statement,
)
from finsight.reports.pdf import render_pdf
from finsight.utils.currency import format_currency


def report_filename(report_name: str, today: date) -> str:
    """e.g. 'balance-sheet-2024-01-31.pdf'."""
    return f"{report_name}-{today:%Y-%m-%d}.pdf"


def csv_filename(today: date) -> str:
    """e.g. 'financial-report-2024-01-31.csv'."""
    return f"financial-report-{today:%Y-%m-%d}.csv"


class ReportRenderer:
    """Turns aggregates into tabular documents and delimited exports."""

    def __init__(self, currency_prefix: str = "Rp", thousands_separator: str = "."):
        self.currency_prefix = currency_prefix
        self.thousands_separator = thousands_separator

    def format_amount(self, value: Decimal) -> str:
        return format_currency(value, self.currency_prefix, self.thousands_separator)

    def income_statement(
        self, breakdown: CategoryBreakdown, start_date: date, end_date: date
    ) -> TabularDocument:
        return build_income_statement(breakdown, start_date, end_date)

    def expense_report(
        self, breakdown: CategoryBreakdown, start_date: date, end_date: date
    ) -> TabularDocument:
        return build_expense_report(breakdown, start_date, end_date)

    def balance_sheet(self, sheet: BalanceSheet) -> TabularDocument:
        return build_balance_sheet(sheet, self.currency_prefix, self.thousands_separator)

    def render_pdf(self, document: TabularDocument) -> bytes:
        return render_pdf(document, self.format_amount)

    def export_csv(self, transactions: Iterable[Transaction]) -> str:
        return export_csv(transactions)


__all__ = [
    "ReportRenderer",
    "TabularDocument",
    "csv_filename",
    "report_filename",
]
