"""Dashboard summaries and chart series."""

from typing import Optional
from datetime import date

from finsight.database.base import Database
from finsight.domain.aggregation import DEFAULT_CHART_DAYS, AggregationPipeline
from finsight.domain.entities import AggregateSummary, DailySeriesEntry
from finsight.domain.errors import UserNotFoundError, ValidationError, invalid_days, user_not_found


class DashboardService:
    """Service for dashboard figures."""

    def __init__(self, db: Database, pipeline: Optional[AggregationPipeline] = None):
        """Initialize dashboard service.

        Args:
            db: Database instance
            pipeline: Aggregation pipeline
        """
        self.db = db
        self.pipeline = pipeline or AggregationPipeline()

    def get_summary(self, user_id: str) -> AggregateSummary:
        """All-time totals for a user.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        self._require_user(user_id)
        return self.pipeline.summarize(
            self.db.list_transactions(user_id),
            self.db.list_assets(user_id),
            self.db.list_investments(user_id),
        )

    def get_monthly_summary(self, user_id: str, today: Optional[date] = None) -> AggregateSummary:
        """Totals for the calendar month of ``today`` with month-over-month change.

        Args:
            user_id: User ID
            today: Reference date (defaults to today)

        Returns:
            AggregateSummary with monthly_change set
        """
        self._require_user(user_id)
        return self.pipeline.monthly_summary(
            self.db.list_transactions(user_id),
            self.db.list_assets(user_id),
            self.db.list_investments(user_id),
            today or date.today(),
        )

    def get_chart_series(
        self,
        user_id: str,
        days: int = DEFAULT_CHART_DAYS,
        today: Optional[date] = None,
    ) -> list[DailySeriesEntry]:
        """Cumulative income/expense series over the last ``days`` days.

        Raises:
            ValidationError: If days is not positive
            UserNotFoundError: If the user doesn't exist
        """
        if days <= 0:
            raise ValidationError(invalid_days(days))
        self._require_user(user_id)

        start_date, end_date = self.pipeline.chart_window(today or date.today(), days)
        transactions = self.db.list_transactions(user_id, start_date=start_date, end_date=end_date)
        return self.pipeline.cumulative_series(transactions, start_date, end_date)

    def _require_user(self, user_id: str) -> None:
        if self.db.get_user(user_id) is None:
            raise UserNotFoundError(user_not_found(user_id))
