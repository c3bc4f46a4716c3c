"""Layout model for tabular financial documents."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from finsight.domain.entities import BalanceSheet, CategoryBreakdown
from finsight.utils.currency import format_currency

DATE_FORMAT = "%b %d, %Y"


@dataclass(frozen=True)
class TableRow:
    """One label/amount row; total rows are bold and ruled above."""

    label: str
    amount: Decimal
    is_total: bool = False


@dataclass(frozen=True)
class TableSection:
    """Headed two-column table."""

    heading: str
    rows: tuple[TableRow, ...]
    column_headers: Optional[tuple[str, str]] = None


@dataclass(frozen=True)
class TabularDocument:
    """Title, period line, sections and trailing summary lines."""

    name: str
    title: str
    period_line: str
    sections: tuple[TableSection, ...]
    summary_lines: tuple[str, ...] = ()


def format_day(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def period_line(start_date: date, end_date: date) -> str:
    return f"Period: {format_day(start_date)} - {format_day(end_date)}"


def _category_section(
    heading: str, breakdown: CategoryBreakdown, total_label: str
) -> TableSection:
    # Categories keep their grouping order
    rows = [TableRow(label=name, amount=amount) for name, amount in breakdown.totals.items()]
    rows.append(TableRow(label=total_label, amount=breakdown.total, is_total=True))
    return TableSection(heading=heading, rows=tuple(rows), column_headers=("Category", "Amount"))


def build_income_statement(
    breakdown: CategoryBreakdown, start_date: date, end_date: date
) -> TabularDocument:
    return TabularDocument(
        name="income-statement",
        title="Income Statement",
        period_line=period_line(start_date, end_date),
        sections=(_category_section("Income by Category", breakdown, "Total Income"),),
    )


def build_expense_report(
    breakdown: CategoryBreakdown, start_date: date, end_date: date
) -> TabularDocument:
    return TabularDocument(
        name="expense-report",
        title="Expense Report",
        period_line=period_line(start_date, end_date),
        sections=(_category_section("Expenses by Category", breakdown, "Total Expenses"),),
    )


def build_balance_sheet(
    sheet: BalanceSheet, currency_prefix: str = "Rp", thousands_separator: str = "."
) -> TabularDocument:
    """Balance sheet layout.

    Holdings (assets, then investments) are listed before the totals. The
    "Total Assets" row includes investments so that the verification line
    compares both sides of Assets = Liabilities + Equity.
    """

    def money(value: Decimal) -> str:
        return format_currency(value, currency_prefix, thousands_separator)

    holdings = [TableRow(label=line.name, amount=line.value) for line in sheet.assets]
    holdings.extend(TableRow(label=line.name, amount=line.value) for line in sheet.investments)
    gross_assets = sheet.total_assets + sheet.total_investments
    holdings.append(TableRow(label="Total Assets", amount=gross_assets, is_total=True))

    sections = (
        TableSection(heading="Assets", rows=tuple(holdings), column_headers=("Asset", "Value")),
        TableSection(
            heading="Liabilities",
            rows=(
                TableRow(label="Total Liabilities (Expenses)", amount=sheet.total_liabilities),
                TableRow(label="Total Liabilities", amount=sheet.total_liabilities, is_total=True),
            ),
        ),
        TableSection(
            heading="Equity",
            rows=(TableRow(label="Total Equity (Assets - Liabilities)", amount=sheet.equity),),
        ),
    )

    summary_lines = (
        f"Assets: {money(gross_assets)}",
        f"Liabilities: {money(sheet.total_liabilities)}",
        f"Equity: {money(sheet.equity)}",
        "Verification (Assets = Liabilities + Equity):",
        f"{money(gross_assets)} = {money(sheet.total_liabilities + sheet.equity)}",
    )

    return TabularDocument(
        name="balance-sheet",
        title="Balance Sheet",
        period_line=f"As of: {format_day(sheet.as_of)}",
        sections=sections,
        summary_lines=summary_lines,
    )
