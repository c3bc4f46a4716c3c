"""Tests for report layout, PDF rendering and CSV export."""

from datetime import date
from decimal import Decimal

import fitz  # PyMuPDF
import pytest

from finsight.domain.aggregation import AggregationPipeline
from finsight.domain.entities import (
    BalanceSheet,
    BalanceSheetLine,
    TransactionType,
)
from finsight.reports import ReportRenderer, csv_filename, report_filename
from finsight.reports.csv_export import CSV_HEADER, export_csv

EXPENSE = TransactionType.EXPENSE
INCOME = TransactionType.INCOME


def pdf_text(content: bytes) -> str:
    """Extract all text from a rendered PDF."""
    with fitz.open(stream=content, filetype="pdf") as doc:
        return "\n".join(page.get_text() for page in doc)


@pytest.fixture
def renderer():
    return ReportRenderer()


@pytest.fixture
def sheet():
    return BalanceSheet(
        as_of=date(2024, 1, 31),
        assets=(BalanceSheetLine("House", Decimal("500000")),),
        investments=(BalanceSheetLine("Index Fund", Decimal("25000")),),
        total_assets=Decimal("500000"),
        total_investments=Decimal("25000"),
        total_liabilities=Decimal("1500"),
        equity=Decimal("523500"),
    )


class TestCsvExport:
    def test_header_bom_and_line_endings(self):
        content = export_csv([])

        assert content.startswith("\ufeff")
        assert content == "\ufeff" + ";".join(CSV_HEADER) + "\r\n"

    def test_row_format(self, make_txn):
        txn = make_txn("45.50", category="Food", description="Lunch", on=date(2024, 1, 5))

        lines = export_csv([txn]).lstrip("\ufeff").split("\r\n")

        assert lines[0] == "Date;Description;Category;Type;Amount"
        assert lines[1] == '2024-01-05;"Lunch";"Food";"expense";45.5'
        assert lines[2] == ""

    def test_embedded_quotes_are_doubled(self, make_txn):
        txn = make_txn(10, description='He said "hi"', on=date(2024, 1, 5))

        row = export_csv([txn]).split("\r\n")[1]

        assert '"He said ""hi"""' in row

    def test_whole_amount_has_no_decimals(self, make_txn):
        txn = make_txn("1200.00", txn_type=INCOME, category="Salary", description="Pay")

        row = export_csv([txn]).split("\r\n")[1]

        assert row.endswith(";1200")

    def test_missing_description_and_category(self, make_txn):
        row = export_csv([make_txn(3, on=date(2024, 2, 1))]).split("\r\n")[1]

        assert row == '2024-02-01;"";"";"expense";3'


class TestDocuments:
    def test_expense_report_layout(self, renderer, make_txn):
        txns = [
            make_txn(30, category="Transport"),
            make_txn(50, category="Food"),
            make_txn(20, category="Transport"),
        ]
        breakdown = AggregationPipeline().category_breakdown(txns, EXPENSE)

        document = renderer.expense_report(breakdown, date(2024, 1, 1), date(2024, 1, 31))

        assert document.title == "Expense Report"
        assert document.period_line == "Period: Jan 01, 2024 - Jan 31, 2024"
        section = document.sections[0]
        assert section.heading == "Expenses by Category"
        assert [row.label for row in section.rows] == ["Transport", "Food", "Total Expenses"]
        assert section.rows[-1].amount == Decimal("100")
        assert section.rows[-1].is_total

    def test_balance_sheet_verification_balances(self, renderer, sheet):
        document = renderer.balance_sheet(sheet)

        assert document.period_line == "As of: Jan 31, 2024"
        assert [section.heading for section in document.sections] == [
            "Assets",
            "Liabilities",
            "Equity",
        ]
        assets_rows = document.sections[0].rows
        assert [row.label for row in assets_rows] == ["House", "Index Fund", "Total Assets"]
        assert assets_rows[-1].amount == Decimal("525000")
        assert document.summary_lines[-1] == "Rp525.000 = Rp525.000"


class TestPdfRendering:
    def test_income_statement_pdf(self, renderer, make_txn):
        txns = [make_txn(1500000, txn_type=INCOME, category="Salary")]
        breakdown = AggregationPipeline().category_breakdown(txns, INCOME)
        document = renderer.income_statement(breakdown, date(2024, 1, 1), date(2024, 1, 31))

        content = renderer.render_pdf(document)

        assert content.startswith(b"%PDF")
        text = pdf_text(content)
        assert "Income Statement" in text
        assert "Income by Category" in text
        assert "Salary" in text
        assert "Total Income" in text
        assert "Rp1.500.000" in text

    def test_page_size_is_a4(self, renderer, sheet):
        content = renderer.render_pdf(renderer.balance_sheet(sheet))

        with fitz.open(stream=content, filetype="pdf") as doc:
            rect = doc[0].rect
            assert (rect.width, rect.height) == (595, 842)

    def test_balance_sheet_pdf_text(self, renderer, sheet):
        text = pdf_text(renderer.render_pdf(renderer.balance_sheet(sheet)))

        assert "Balance Sheet" in text
        assert "House" in text
        assert "Total Liabilities" in text
        assert "Verification (Assets = Liabilities + Equity):" in text

    def test_long_report_spills_onto_more_pages(self, renderer, make_txn):
        txns = [make_txn(10, category=f"Category {i}") for i in range(60)]
        breakdown = AggregationPipeline().category_breakdown(txns, EXPENSE)
        document = renderer.expense_report(breakdown, date(2024, 1, 1), date(2024, 1, 31))

        content = renderer.render_pdf(document)

        with fitz.open(stream=content, filetype="pdf") as doc:
            assert doc.page_count > 1
        assert "Category 59" in pdf_text(content)


def test_custom_currency_format():
    renderer = ReportRenderer(currency_prefix="$", thousands_separator=",")

    assert renderer.format_amount(Decimal("1234567.4")) == "$1,234,567"


def test_filenames():
    assert report_filename("balance-sheet", date(2024, 1, 31)) == "balance-sheet-2024-01-31.pdf"
    assert csv_filename(date(2024, 1, 31)) == "financial-report-2024-01-31.csv"
