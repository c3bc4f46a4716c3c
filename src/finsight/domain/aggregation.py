"""Aggregation of transaction/asset/investment snapshots.

Every function here is pure: it works only on the records it is handed and
takes the reference date as a parameter.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from finsight.domain.entities import (
    AggregateSummary,
    Asset,
    BalanceSheet,
    BalanceSheetLine,
    CategoryBreakdown,
    DailySeriesEntry,
    Investment,
    Transaction,
    TransactionType,
)
from finsight.utils.currency import round_money
from finsight.utils.date_parser import month_key, month_range, previous_month_range

ZERO = Decimal("0")
HUNDRED = Decimal("100")
UNCATEGORIZED = "Uncategorized"
DEFAULT_CHART_DAYS = 90


def category_label(txn: Transaction) -> str:
    """Grouping key for a transaction: its category display name."""
    return txn.category_name or UNCATEGORIZED


class AggregationPipeline:
    """Pure aggregation functions over a single user's snapshot."""

    def filter_window(
        self,
        transactions: Iterable[Transaction],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """Keep transactions dated within [start_date, end_date]."""
        return [
            txn
            for txn in transactions
            if (start_date is None or txn.date >= start_date)
            and (end_date is None or txn.date <= end_date)
        ]

    def filter_type(
        self, transactions: Iterable[Transaction], txn_type: TransactionType
    ) -> list[Transaction]:
        return [txn for txn in transactions if txn.type == txn_type]

    def total(self, transactions: Iterable[Transaction], txn_type: TransactionType) -> Decimal:
        """Sum of amounts for one transaction type."""
        return sum((txn.amount for txn in transactions if txn.type == txn_type), ZERO)

    def sum_by_type(self, transactions: Iterable[Transaction]) -> dict[TransactionType, Decimal]:
        """Totals keyed by transaction type; both types are always present."""
        totals = {TransactionType.INCOME: ZERO, TransactionType.EXPENSE: ZERO}
        for txn in transactions:
            totals[txn.type] += txn.amount
        return totals

    def group_by_category(
        self,
        transactions: Iterable[Transaction],
        txn_type: Optional[TransactionType] = TransactionType.EXPENSE,
    ) -> dict[str, Decimal]:
        """Sum amounts per category name, in first-seen order.

        Args:
            transactions: Transactions to group
            txn_type: Only include this type; None includes both

        Returns:
            Mapping of category name to total
        """
        totals: dict[str, Decimal] = {}
        for txn in transactions:
            if txn_type is not None and txn.type != txn_type:
                continue
            label = category_label(txn)
            totals[label] = totals.get(label, ZERO) + txn.amount
        return totals

    def category_breakdown(
        self,
        transactions: Iterable[Transaction],
        txn_type: TransactionType,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> CategoryBreakdown:
        """Per-category totals of one type inside a window."""
        windowed = self.filter_window(transactions, start_date, end_date)
        return CategoryBreakdown(
            type=txn_type,
            start_date=start_date,
            end_date=end_date,
            totals=self.group_by_category(windowed, txn_type),
        )

    def group_by_month(
        self, transactions: Iterable[Transaction], txn_type: TransactionType
    ) -> dict[str, Decimal]:
        """Totals per YYYY-MM bucket for one type, ordered by month."""
        buckets: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for txn in transactions:
            if txn.type == txn_type:
                buckets[month_key(txn.date)] += txn.amount
        return {key: buckets[key] for key in sorted(buckets)}

    def chart_window(self, today: date, days: int = DEFAULT_CHART_DAYS) -> tuple[date, date]:
        """Window covering the last ``days`` days up to ``today``."""
        return (today - timedelta(days=days), today)

    def cumulative_series(
        self,
        transactions: Iterable[Transaction],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[DailySeriesEntry]:
        """Running income/expense totals per transaction date.

        Running totals start from zero at the window start. Only dates with at
        least one transaction are emitted, ascending, rounded to 2 places.
        """
        daily: dict[date, dict[TransactionType, Decimal]] = {}
        for txn in self.filter_window(transactions, start_date, end_date):
            bucket = daily.setdefault(
                txn.date, {TransactionType.INCOME: ZERO, TransactionType.EXPENSE: ZERO}
            )
            bucket[txn.type] += txn.amount

        series: list[DailySeriesEntry] = []
        cumulative_income = ZERO
        cumulative_expenses = ZERO
        for day in sorted(daily):
            cumulative_income += daily[day][TransactionType.INCOME]
            cumulative_expenses += daily[day][TransactionType.EXPENSE]
            series.append(
                DailySeriesEntry(
                    date=day,
                    income=round_money(cumulative_income),
                    expenses=round_money(cumulative_expenses),
                    net_worth=round_money(cumulative_income - cumulative_expenses),
                )
            )
        return series

    def total_assets(self, assets: Iterable[Asset]) -> Decimal:
        return sum((asset.value for asset in assets), ZERO)

    def total_investments(self, investments: Iterable[Investment]) -> Decimal:
        return sum((investment.value for investment in investments), ZERO)

    def summarize(
        self,
        transactions: Iterable[Transaction],
        assets: Sequence[Asset],
        investments: Sequence[Investment],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> AggregateSummary:
        """Period totals; net worth = assets + investments - expenses."""
        totals = self.sum_by_type(self.filter_window(transactions, start_date, end_date))
        total_income = totals[TransactionType.INCOME]
        total_expenses = totals[TransactionType.EXPENSE]
        total_assets = self.total_assets(assets)
        total_investments = self.total_investments(investments)
        return AggregateSummary(
            total_income=total_income,
            total_expenses=total_expenses,
            net_worth=total_assets + total_investments - total_expenses,
            profit_loss=total_income - total_expenses,
            total_assets=total_assets,
            total_investments=total_investments,
        )

    def monthly_summary(
        self,
        transactions: Sequence[Transaction],
        assets: Sequence[Asset],
        investments: Sequence[Investment],
        today: date,
    ) -> AggregateSummary:
        """Summary of ``today``'s calendar month with month-over-month change."""
        start_date, end_date = month_range(today)
        current = self.summarize(transactions, assets, investments, start_date, end_date)

        prev_start, prev_end = previous_month_range(today)
        previous_totals = self.sum_by_type(self.filter_window(transactions, prev_start, prev_end))
        previous_profit_loss = (
            previous_totals[TransactionType.INCOME] - previous_totals[TransactionType.EXPENSE]
        )

        return AggregateSummary(
            total_income=current.total_income,
            total_expenses=current.total_expenses,
            net_worth=current.net_worth,
            profit_loss=current.profit_loss,
            total_assets=current.total_assets,
            total_investments=current.total_investments,
            monthly_change=self.monthly_change(current.profit_loss, previous_profit_loss),
        )

    @staticmethod
    def monthly_change(current: Decimal, previous: Decimal) -> Decimal:
        """Percentage change of profit/loss against the previous month.

        A zero previous value yields +100 for a positive current value,
        -100 for a negative one and 0 otherwise.
        """
        current = Decimal(current)
        previous = Decimal(previous)
        if previous != 0:
            change = (current - previous) / abs(previous) * HUNDRED
        elif current > 0:
            change = HUNDRED
        elif current < 0:
            change = -HUNDRED
        else:
            change = ZERO
        return round_money(change)

    def balance_sheet(
        self,
        assets: Sequence[Asset],
        investments: Sequence[Investment],
        transactions: Iterable[Transaction],
        as_of: date,
    ) -> BalanceSheet:
        """Balance sheet as of a date; liabilities are expenses up to it."""
        total_assets = self.total_assets(assets)
        total_investments = self.total_investments(investments)
        total_liabilities = self.total(
            self.filter_window(transactions, end_date=as_of), TransactionType.EXPENSE
        )
        return BalanceSheet(
            as_of=as_of,
            assets=tuple(BalanceSheetLine(asset.name, asset.value) for asset in assets),
            investments=tuple(
                BalanceSheetLine(investment.name, investment.value) for investment in investments
            ),
            total_assets=total_assets,
            total_investments=total_investments,
            total_liabilities=total_liabilities,
            equity=total_assets + total_investments - total_liabilities,
        )
