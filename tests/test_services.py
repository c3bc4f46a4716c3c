"""Tests for the request-scoped domain services."""

import random
from datetime import date
from decimal import Decimal

import fitz  # PyMuPDF
import pytest

from finsight.domain.chat import SETUP_REPLY, ChatService
from finsight.domain.dashboard import DashboardService
from finsight.domain.entities import (
    ConversationalReply,
    InsightType,
    ParsedTransactionDraft,
    Priority,
    ReportRequest,
    TransactionType,
)
from finsight.domain.errors import (
    ConflictError,
    NotFoundError,
    PersistenceUnavailableError,
    UserNotFoundError,
    ValidationError,
)
from finsight.domain.insight_service import InsightService
from finsight.domain.parser import TextTransactionParser
from finsight.domain.reporting import ReportService, resolve_window

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE
TODAY = date(2024, 3, 20)


def _titles(insights):
    return [insight.title for insight in insights]


class TestUserAndCategoryServices:
    def test_duplicate_user(self, user_service, sample_user):
        with pytest.raises(ConflictError, match="already exists"):
            user_service.create_user("user-1", "Someone")

    def test_blank_user_name(self, user_service):
        with pytest.raises(ValidationError):
            user_service.create_user("user-2", "  ")

    def test_duplicate_category_any_case(self, category_service, sample_categories):
        with pytest.raises(ConflictError):
            category_service.create_category("food")

    def test_invalid_category_type(self, category_service):
        with pytest.raises(ValidationError, match="Invalid category type"):
            category_service.create_category("Misc", category_type="transfer")


class TestTransactionService:
    def test_create_transaction(self, transaction_service, sample_user, sample_categories):
        txn_id = transaction_service.create_transaction(
            user_id="user-1",
            transaction_type="Expense",
            amount=Decimal("12.50"),
            date=date(2024, 1, 5),
            description="Sandwich",
            category_name="food",
        )

        txns = transaction_service.list_transactions("user-1")
        assert [t.id for t in txns] == [txn_id]
        assert txns[0].category_name == "Food"
        assert txns[0].type == EXPENSE

    def test_negative_amount_rejected(self, transaction_service, sample_user):
        with pytest.raises(ValidationError, match="zero or positive"):
            transaction_service.create_transaction("user-1", "expense", Decimal("-1"), TODAY)

    def test_invalid_type_rejected(self, transaction_service, sample_user):
        with pytest.raises(ValidationError, match="Invalid transaction type"):
            transaction_service.create_transaction("user-1", "transfer", Decimal("1"), TODAY)

    def test_unknown_user_rejected(self, transaction_service):
        with pytest.raises(UserNotFoundError):
            transaction_service.create_transaction("ghost", "expense", Decimal("1"), TODAY)

    def test_unknown_category_rejected(self, transaction_service, sample_user):
        with pytest.raises(NotFoundError, match="Category 'Travel' not found"):
            transaction_service.create_transaction(
                "user-1", "expense", Decimal("1"), TODAY, category_name="Travel"
            )

    def test_save_draft_creates_category_once(self, transaction_service, temp_db, sample_user):
        parser = TextTransactionParser()
        first = parser.parse("spent 10 on coffee", user_id="user-1")
        second = parser.parse("paid 12 for dinner", user_id="user-1")

        transaction_service.save_draft(first, on_date=TODAY)
        transaction_service.save_draft(second, on_date=TODAY)

        food = temp_db.get_category_by_name("FOOD")
        assert food is not None
        assert food.type == "expense"
        assert [c.name for c in temp_db.list_categories()] == ["food"]
        txns = transaction_service.list_transactions("user-1")
        assert sorted(t.amount for t in txns) == [Decimal("10"), Decimal("12")]
        assert all(t.category_name == "food" for t in txns)

    def test_save_draft_reuses_existing_category(
        self, transaction_service, temp_db, sample_user, sample_categories
    ):
        draft = TextTransactionParser().parse("spent 10 on lunch", user_id="user-1")

        transaction_service.save_draft(draft, on_date=TODAY)

        txn = transaction_service.list_transactions("user-1")[0]
        assert txn.category_id == sample_categories["Food"]

    def test_save_draft_without_user(self, transaction_service):
        draft = TextTransactionParser().parse("spent 10 on lunch")

        with pytest.raises(ValidationError):
            transaction_service.save_draft(draft, on_date=TODAY)


class TestChatService:
    def test_unknown_user_gets_setup_reply(self, temp_db):
        result = ChatService(temp_db).process_message("ghost", "spent 10 on lunch")

        assert result == ConversationalReply(message=SETUP_REPLY)

    def test_known_user_gets_draft(self, temp_db, sample_user):
        result = ChatService(temp_db).process_message("user-1", "spent 10 on lunch")

        assert isinstance(result, ParsedTransactionDraft)
        assert result.user_id == "user-1"

    def test_empty_message_rejected(self, temp_db, sample_user):
        with pytest.raises(ValidationError):
            ChatService(temp_db).process_message("user-1", "   ")

    def test_seeded_parser_is_deterministic(self, temp_db, sample_user):
        def reply():
            service = ChatService(temp_db, parser=TextTransactionParser(rng=random.Random(7)))
            return service.process_message("user-1", "hello there")

        assert reply() == reply()


class TestInsightService:
    def test_anonymous_query(self, temp_db):
        insights = InsightService(temp_db).get_insights(query="how do I save?")

        assert _titles(insights) == ["Query Analysis"]

    def test_anonymous_without_query(self, temp_db):
        insights = InsightService(temp_db).get_insights()

        assert _titles(insights) == ["Welcome to Financial Insights"]
        assert insights[0].priority == Priority.LOW

    def test_unknown_user(self, temp_db):
        insights = InsightService(temp_db).get_insights("ghost")

        assert _titles(insights) == ["Setup Required"]
        assert insights[0].priority == Priority.MEDIUM
        assert insights[0].action == "Complete your profile"

    def test_user_lookup_failure(self, temp_db, monkeypatch):
        def fail(user_id):
            raise PersistenceUnavailableError("down")

        monkeypatch.setattr(temp_db, "get_user", fail)

        insights = InsightService(temp_db).get_insights("user-1")

        assert _titles(insights) == ["Database Unavailable"]
        assert insights[0].priority == Priority.HIGH

    def test_transaction_fetch_failure(self, temp_db, sample_user, monkeypatch):
        def fail(*args, **kwargs):
            raise PersistenceUnavailableError("down")

        monkeypatch.setattr(temp_db, "list_transactions", fail)

        insights = InsightService(temp_db).get_insights("user-1")

        assert _titles(insights) == ["Data Unavailable"]
        assert insights[0].priority == Priority.HIGH

    def test_unexpected_failure(self, temp_db, sample_user, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(temp_db, "list_transactions", fail)

        insights = InsightService(temp_db).get_insights("user-1")

        assert _titles(insights) == ["Service Unavailable"]

    def test_investment_failure_degrades_inside_generator(
        self, temp_db, transaction_service, sample_user, monkeypatch
    ):
        transaction_service.create_transaction("user-1", "expense", Decimal("10"), TODAY)

        def fail(user_id):
            raise PersistenceUnavailableError("down")

        monkeypatch.setattr(temp_db, "list_investments", fail)

        insights = InsightService(temp_db).get_insights(
            "user-1", insight_type="investment-suggestions"
        )

        assert _titles(insights) == ["Investment Data Unavailable"]

    def test_invalid_type_rejected(self, temp_db, sample_user):
        with pytest.raises(ValidationError, match="Invalid insight type"):
            InsightService(temp_db).get_insights("user-1", insight_type="horoscope")

    def test_no_transactions(self, temp_db, sample_user):
        insights = InsightService(temp_db).get_insights(
            "user-1", insight_type=InsightType.SAVINGS_TIPS
        )

        assert _titles(insights) == ["Start Tracking Your Finances"]

    def test_query_with_user_runs_generators(self, temp_db, transaction_service, sample_user):
        transaction_service.create_transaction("user-1", "income", Decimal("1000"), TODAY)
        transaction_service.create_transaction("user-1", "expense", Decimal("100"), TODAY)

        insights = InsightService(temp_db).get_insights("user-1", query="how do I save?")

        assert "Great Savings Rate" in _titles(insights)

    def test_all_insights(self, temp_db, transaction_service, sample_user):
        for _ in range(3):
            transaction_service.create_transaction(
                "user-1", "expense", Decimal("25"), TODAY, description="Coffee"
            )

        titles = _titles(InsightService(temp_db).get_all_insights("user-1"))

        assert "Start Investing" in titles
        assert "Review Coffee Expenses" in titles


class TestDashboardService:
    @pytest.fixture
    def populated(self, temp_db, transaction_service, holding_service, sample_user):
        for txn_type, amount, day in [
            ("income", "1000", date(2024, 2, 1)),
            ("expense", "400", date(2024, 2, 10)),
            ("income", "500", date(2024, 3, 1)),
            ("expense", "200", date(2024, 3, 5)),
        ]:
            transaction_service.create_transaction("user-1", txn_type, Decimal(amount), day)
        holding_service.create_asset("user-1", "Car", date(2022, 1, 1), Decimal("5000"))
        holding_service.create_investment(
            "user-1", "Index Fund", "etf", date(2023, 1, 1), Decimal("1000")
        )
        return temp_db

    def test_all_time_summary(self, populated):
        summary = DashboardService(populated).get_summary("user-1")

        assert summary.total_income == Decimal("1500")
        assert summary.total_expenses == Decimal("600")
        assert summary.profit_loss == Decimal("900")
        assert summary.total_investments == Decimal("0")
        assert summary.net_worth == Decimal("4400")

    def test_monthly_summary(self, populated):
        summary = DashboardService(populated).get_monthly_summary("user-1", today=TODAY)

        assert summary.profit_loss == Decimal("300")
        assert summary.monthly_change == Decimal("-50.00")

    def test_chart_series(self, populated):
        series = DashboardService(populated).get_chart_series("user-1", days=30, today=TODAY)

        assert [entry.date for entry in series] == [
            date(2024, 3, 1),
            date(2024, 3, 5),
        ]
        assert series[-1].income == Decimal("500.00")
        assert series[-1].expenses == Decimal("200.00")
        assert series[-1].net_worth == Decimal("300.00")

    @pytest.mark.parametrize("days", [0, -5])
    def test_non_positive_days_rejected(self, populated, days):
        with pytest.raises(ValidationError):
            DashboardService(populated).get_chart_series("user-1", days=days)

    def test_unknown_user(self, temp_db):
        with pytest.raises(UserNotFoundError):
            DashboardService(temp_db).get_summary("ghost")


class TestReportService:
    @pytest.fixture
    def populated(
        self, temp_db, transaction_service, holding_service, sample_user, sample_categories
    ):
        for txn_type, amount, day, category, description in [
            ("income", "5000000", date(2024, 3, 1), "Salary", "March pay"),
            ("expense", "150000", date(2024, 3, 2), "Food", 'Dinner "special"'),
            ("expense", "50000", date(2024, 3, 3), "Transport", "Bus"),
            ("expense", "75000", date(2024, 2, 20), "Food", "Groceries"),
        ]:
            transaction_service.create_transaction(
                "user-1",
                txn_type,
                Decimal(amount),
                day,
                description=description,
                category_name=category,
            )
        holding_service.create_asset("user-1", "House", date(2020, 1, 1), Decimal("900000000"))
        return temp_db

    def test_resolve_window_defaults(self):
        assert resolve_window(None, None, TODAY) == (date(2024, 3, 1), TODAY)

    def test_resolve_window_rejects_inverted(self):
        with pytest.raises(ValidationError):
            resolve_window(date(2024, 3, 10), date(2024, 3, 1), TODAY)

    def test_expense_report_defaults_to_month_to_date(self, populated):
        report = ReportService(populated).expense_report("user-1", today=TODAY)

        assert report.filename == "expense-report-2024-03-20.pdf"
        assert report.media_type == "application/pdf"
        rows = report.document.sections[0].rows
        assert [(row.label, row.amount) for row in rows] == [
            ("Transport", Decimal("50000")),
            ("Food", Decimal("150000")),
            ("Total Expenses", Decimal("200000")),
        ]
        assert report.document.period_line == "Period: Mar 01, 2024 - Mar 20, 2024"
        with fitz.open(stream=report.content, filetype="pdf") as doc:
            assert "Rp200.000" in doc[0].get_text()

    def test_income_statement(self, populated):
        report = ReportService(populated).income_statement(
            "user-1", start_date=date(2024, 1, 1), end_date=date(2024, 3, 31), today=TODAY
        )

        rows = report.document.sections[0].rows
        assert [row.label for row in rows] == ["Salary", "Total Income"]
        assert rows[-1].amount == Decimal("5000000")

    def test_balance_sheet(self, populated):
        report = ReportService(populated).balance_sheet(
            "user-1", as_of=date(2024, 2, 29), today=TODAY
        )

        assert report.filename == "balance-sheet-2024-03-20.pdf"
        liabilities = report.document.sections[1].rows[-1]
        assert liabilities.amount == Decimal("75000")
        equity = report.document.sections[2].rows[0]
        assert equity.amount == Decimal("900000000") - Decimal("75000")

    def test_export_csv(self, populated):
        request = ReportRequest(from_date=date(2024, 3, 1), to_date=date(2024, 3, 31))

        report = ReportService(populated).export("user-1", request, today=TODAY)

        assert report.filename == "financial-report-2024-03-20.csv"
        lines = report.content.split("\r\n")
        assert lines[0] == "\ufeffDate;Description;Category;Type;Amount"
        assert lines[1] == '2024-03-03;"Bus";"Transport";"expense";50000'
        assert lines[2] == '2024-03-02;"Dinner ""special""";"Food";"expense";150000'
        assert len([line for line in lines if line]) == 4

    @pytest.mark.parametrize("export_format", ["pdf", "xlsx", None, ""])
    def test_export_rejects_other_formats(self, populated, export_format):
        with pytest.raises(ValidationError, match="Only CSV is supported"):
            ReportService(populated).export("user-1", ReportRequest(format=export_format))

    def test_export_accepts_uppercase_csv(self, populated):
        request = ReportRequest(format="CSV")

        report = ReportService(populated).export("user-1", request, today=TODAY)

        assert report.media_type == "text/csv"

    def test_unknown_user(self, temp_db):
        with pytest.raises(UserNotFoundError):
            ReportService(temp_db).expense_report("ghost")
