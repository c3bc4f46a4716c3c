"""Report generation service."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from finsight.database.base import Database
from finsight.domain.aggregation import AggregationPipeline
from finsight.domain.entities import ReportRequest, TransactionType
from finsight.domain.errors import (
    UserNotFoundError,
    ValidationError,
    invalid_date_window,
    unsupported_export_format,
    user_not_found,
)
from finsight.logger import get_logger
from finsight.reports import ReportRenderer, TabularDocument, csv_filename, report_filename
from finsight.utils.date_parser import month_range

logger = get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
CSV_MEDIA_TYPE = "text/csv"


@dataclass(frozen=True)
class RenderedReport:
    """A finished report ready to be written out."""

    filename: str
    media_type: str
    content: Union[bytes, str]
    document: Optional[TabularDocument] = None


def resolve_window(
    start_date: Optional[date], end_date: Optional[date], today: date
) -> tuple[date, date]:
    """Fill a missing window with the first of today's month through today.

    Raises:
        ValidationError: If the window ends before it starts
    """
    start = start_date or month_range(today)[0]
    end = end_date or today
    if start > end:
        raise ValidationError(invalid_date_window(start, end))
    return start, end


class ReportService:
    """Service producing income statements, expense reports, balance sheets and exports."""

    def __init__(
        self,
        db: Database,
        renderer: Optional[ReportRenderer] = None,
        pipeline: Optional[AggregationPipeline] = None,
    ):
        """Initialize report service.

        Args:
            db: Database instance
            renderer: Report renderer carrying the currency format
            pipeline: Aggregation pipeline
        """
        self.db = db
        self.renderer = renderer or ReportRenderer()
        self.pipeline = pipeline or AggregationPipeline()

    def income_statement(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> RenderedReport:
        """Render income grouped by category as a PDF.

        Args:
            user_id: User ID
            start_date: Window start (defaults to the first of the month)
            end_date: Window end (defaults to today)
            today: Reference date (defaults to today)

        Returns:
            RenderedReport holding PDF bytes
        """
        return self._category_report(
            user_id, TransactionType.INCOME, start_date, end_date, today or date.today()
        )

    def expense_report(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> RenderedReport:
        """Render expenses grouped by category as a PDF."""
        return self._category_report(
            user_id, TransactionType.EXPENSE, start_date, end_date, today or date.today()
        )

    def balance_sheet(
        self,
        user_id: str,
        as_of: Optional[date] = None,
        today: Optional[date] = None,
    ) -> RenderedReport:
        """Render the balance sheet as of a date as a PDF.

        Liabilities are the expenses dated on or before ``as_of``.
        """
        today = today or date.today()
        as_of = as_of or today
        self._require_user(user_id)

        sheet = self.pipeline.balance_sheet(
            self.db.list_assets(user_id),
            self.db.list_investments(user_id),
            self.db.list_transactions(
                user_id, end_date=as_of, transaction_type=TransactionType.EXPENSE
            ),
            as_of,
        )
        document = self.renderer.balance_sheet(sheet)
        return self._render(document, today)

    def export(
        self, user_id: str, request: ReportRequest, today: Optional[date] = None
    ) -> RenderedReport:
        """Export a user's transactions in the requested window.

        Raises:
            ValidationError: If the format isn't csv or the window is inverted
        """
        export_format = (request.format or "").strip().lower()
        if export_format != "csv":
            raise ValidationError(unsupported_export_format(request.format))

        today = today or date.today()
        start, end = resolve_window(request.from_date, request.to_date, today)
        self._require_user(user_id)

        transactions = self.db.list_transactions(user_id, start_date=start, end_date=end)
        logger.debug("Exporting %d transactions for %s", len(transactions), user_id)
        return RenderedReport(
            filename=csv_filename(today),
            media_type=CSV_MEDIA_TYPE,
            content=self.renderer.export_csv(transactions),
        )

    def _category_report(
        self,
        user_id: str,
        txn_type: TransactionType,
        start_date: Optional[date],
        end_date: Optional[date],
        today: date,
    ) -> RenderedReport:
        start, end = resolve_window(start_date, end_date, today)
        self._require_user(user_id)

        transactions = self.db.list_transactions(
            user_id, start_date=start, end_date=end, transaction_type=txn_type
        )
        breakdown = self.pipeline.category_breakdown(transactions, txn_type, start, end)
        if txn_type == TransactionType.INCOME:
            document = self.renderer.income_statement(breakdown, start, end)
        else:
            document = self.renderer.expense_report(breakdown, start, end)
        return self._render(document, today)

    def _render(self, document: TabularDocument, today: date) -> RenderedReport:
        logger.debug("Rendering %s", document.name)
        return RenderedReport(
            filename=report_filename(document.name, today),
            media_type=PDF_MEDIA_TYPE,
            content=self.renderer.render_pdf(document),
            document=document,
        )

    def _require_user(self, user_id: str) -> None:
        if self.db.get_user(user_id) is None:
            raise UserNotFoundError(user_not_found(user_id))
