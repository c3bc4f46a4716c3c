"""Insight generation from aggregated transaction data.

Five independent generators each turn a user's snapshot into zero or more
prioritized insights. The engine runs the requested generators in order and
folds each result into the output: a failed generator contributes one
fallback insight and the remaining generators still run.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from finsight.domain.aggregation import AggregationPipeline, category_label
from finsight.domain.entities import (
    Insight,
    InsightType,
    Investment,
    Priority,
    Transaction,
    TransactionType,
)
from finsight.domain.errors import GeneratorError, PersistenceUnavailableError
from finsight.logger import get_logger
from finsight.utils.labels import capitalize

logger = get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

SAVINGS_RATE_TARGET = Decimal("20")
CATEGORY_SHARE_LIMIT = Decimal("15")
TOP_CATEGORY_COUNT = 3
INCOME_TO_EXPENSE_RATIO = Decimal("1.5")
RECURRING_MIN_COUNT = 3
RECURRING_MIN_AMOUNT = Decimal("20")
ACTIVE_CATEGORY_MIN_COUNT = 5
CATEGORY_SPENDING_LIMIT = Decimal("200")

START_TRACKING = Insight(
    title="Start Tracking Your Finances",
    description="You don't have any transactions yet. Start by adding your income and expenses to get insights.",
    priority=Priority.HIGH,
    action="Add your first transaction",
)

FALLBACK_INSIGHTS: dict[InsightType, Insight] = {
    InsightType.SPENDING_ANALYSIS: Insight(
        title="Analysis Unavailable",
        description="Unable to generate spending analysis due to data processing issues.",
        priority=Priority.MEDIUM,
    ),
    InsightType.BUDGET_ADVICE: Insight(
        title="Advice Unavailable",
        description="Unable to generate budget advice due to data processing issues.",
        priority=Priority.MEDIUM,
    ),
    InsightType.INVESTMENT_SUGGESTIONS: Insight(
        title="Investment Info Unavailable",
        description="Unable to generate investment suggestions due to data processing issues.",
        priority=Priority.MEDIUM,
    ),
    InsightType.SAVINGS_TIPS: Insight(
        title="Savings Tips Unavailable",
        description="Unable to generate savings tips due to data processing issues.",
        priority=Priority.MEDIUM,
    ),
    InsightType.CATEGORY_INSIGHTS: Insight(
        title="Category Insights Unavailable",
        description="Unable to generate category insights due to data processing issues.",
        priority=Priority.MEDIUM,
    ),
}

INVESTMENT_DATA_UNAVAILABLE = Insight(
    title="Investment Data Unavailable",
    description="Unable to retrieve your investment data due to database connectivity issues.",
    priority=Priority.HIGH,
)


@dataclass(frozen=True)
class InsightContext:
    """Snapshot handed to the generators.

    Investments are loaded lazily because only one generator needs them.
    """

    transactions: tuple[Transaction, ...]
    load_investments: Callable[[], Sequence[Investment]] = tuple


@dataclass(frozen=True)
class GeneratorResult:
    """Outcome of one generator: its insights, or the error it raised."""

    insight_type: InsightType
    insights: tuple[Insight, ...] = ()
    error: Optional[GeneratorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_insight_type(value: str) -> Optional[InsightType]:
    """Return the InsightType named by ``value``, or None if unknown."""
    try:
        return InsightType(value)
    except ValueError:
        return None


class InsightEngine:
    """Runs insight generators over a transaction snapshot."""

    def __init__(self, pipeline: Optional[AggregationPipeline] = None):
        self.pipeline = pipeline or AggregationPipeline()
        self.generators: dict[InsightType, Callable[[InsightContext], list[Insight]]] = {
            InsightType.SPENDING_ANALYSIS: self.spending_analysis,
            InsightType.BUDGET_ADVICE: self.budget_advice,
            InsightType.INVESTMENT_SUGGESTIONS: self.investment_suggestions,
            InsightType.SAVINGS_TIPS: self.savings_tips,
            InsightType.CATEGORY_INSIGHTS: self.category_insights,
        }

    def generate(
        self,
        context: InsightContext,
        insight_types: Optional[Iterable[InsightType]] = None,
    ) -> list[Insight]:
        """Run generators and collect their insights in order.

        Args:
            context: Snapshot for one user
            insight_types: Generators to run; all five when omitted

        Returns:
            Ordered insights. A user without transactions always gets exactly
            one "Start Tracking Your Finances" insight.
        """
        if not context.transactions:
            logger.debug("No transactions in snapshot, returning default insight")
            return [START_TRACKING]

        selected = list(insight_types) if insight_types is not None else list(InsightType)
        insights: list[Insight] = []
        for insight_type in selected:
            result = self.run_generator(insight_type, context)
            if result.ok:
                insights.extend(result.insights)
            else:
                insights.append(FALLBACK_INSIGHTS[insight_type])

        logger.debug("Generated %d insights", len(insights))
        return insights

    def run_generator(self, insight_type: InsightType, context: InsightContext) -> GeneratorResult:
        """Run a single generator, capturing its failure as a result."""
        generator = self.generators[insight_type]
        logger.debug(
            "Running %s over %d transactions", insight_type.value, len(context.transactions)
        )
        try:
            insights = generator(context)
        except Exception as e:
            logger.exception("Insight generator %s failed", insight_type.value)
            return GeneratorResult(insight_type, error=GeneratorError(insight_type, e))
        return GeneratorResult(insight_type, insights=tuple(insights))

    def spending_analysis(self, context: InsightContext) -> list[Insight]:
        """Savings rate and category concentration."""
        transactions = context.transactions
        totals = self.pipeline.sum_by_type(transactions)
        total_income = totals[TransactionType.INCOME]
        total_expenses = totals[TransactionType.EXPENSE]
        category_spending = self.pipeline.group_by_category(transactions, TransactionType.EXPENSE)
        logger.debug("Total income: %s, total expenses: %s", total_income, total_expenses)

        insights: list[Insight] = []

        if total_income > 0:
            savings_rate = (total_income - total_expenses) / total_income * HUNDRED
            if savings_rate < SAVINGS_RATE_TARGET:
                insights.append(
                    Insight(
                        title="Low Savings Rate",
                        description=(
                            f"Your current savings rate is {savings_rate:.1f}%. "
                            "Financial experts recommend saving at least 20% of your income."
                        ),
                        priority=Priority.HIGH,
                        action="Review your expenses and look for areas to reduce spending",
                    )
                )
            else:
                insights.append(
                    Insight(
                        title="Great Savings Rate",
                        description=(
                            f"Your savings rate of {savings_rate:.1f}% is excellent! "
                            "You're on track for financial stability."
                        ),
                        priority=Priority.LOW,
                    )
                )

        # sorted() is stable, so equal totals keep first-seen order
        ranked = sorted(category_spending.items(), key=lambda item: item[1], reverse=True)
        for category, amount in ranked[:TOP_CATEGORY_COUNT]:
            share = amount / total_expenses * HUNDRED if total_expenses > 0 else ZERO
            if share > CATEGORY_SHARE_LIMIT:
                insights.append(
                    Insight(
                        title=f"High Spending on {capitalize(category)}",
                        description=(
                            f"You're spending {share:.1f}% of your total expenses on {category}. "
                            "Consider reviewing if this is necessary."
                        ),
                        priority=Priority.MEDIUM,
                        action=f"Look for ways to reduce {category} spending",
                    )
                )

        return insights

    def budget_advice(self, context: InsightContext) -> list[Insight]:
        """Month-over-month expense growth for the two latest months."""
        monthly_expenses = self.pipeline.group_by_month(
            context.transactions, TransactionType.EXPENSE
        )
        recent = list(monthly_expenses.values())[-2:]
        if len(recent) < 2:
            return []

        previous, latest = recent
        if previous <= 0 or latest <= previous:
            return []

        increase = (latest - previous) / previous * HUNDRED
        return [
            Insight(
                title="Increased Monthly Expenses",
                description=(
                    f"Your expenses increased by {increase:.1f}% from the previous month. "
                    "Consider reviewing your spending."
                ),
                priority=Priority.MEDIUM,
                action="Create a monthly budget to control spending",
            )
        ]

    def investment_suggestions(self, context: InsightContext) -> list[Insight]:
        """Portfolio presence, diversification and income headroom."""
        insights: list[Insight] = []

        try:
            investments = context.load_investments()
        except PersistenceUnavailableError as e:
            logger.warning("Investment data unavailable: %s", e)
            insights.append(INVESTMENT_DATA_UNAVAILABLE)
        else:
            if not investments:
                insights.append(
                    Insight(
                        title="Start Investing",
                        description=(
                            "You don't have any investments yet. "
                            "Consider starting with low-cost index funds or ETFs."
                        ),
                        priority=Priority.MEDIUM,
                        action="Research investment options that match your risk tolerance",
                    )
                )
            elif len({investment.type for investment in investments}) <= 2:
                insights.append(
                    Insight(
                        title="Portfolio Diversification",
                        description=(
                            "Your investment portfolio could benefit from "
                            "diversification across more asset classes."
                        ),
                        priority=Priority.MEDIUM,
                        action="Consider adding bonds, international stocks, or REITs to your portfolio",
                    )
                )

        incomes = self.pipeline.filter_type(context.transactions, TransactionType.INCOME)
        expenses = self.pipeline.filter_type(context.transactions, TransactionType.EXPENSE)
        if incomes and expenses:
            avg_income = sum((txn.amount for txn in incomes), ZERO) / len(incomes)
            avg_expense = sum((txn.amount for txn in expenses), ZERO) / len(expenses)
            if avg_income > avg_expense * INCOME_TO_EXPENSE_RATIO:
                insights.append(
                    Insight(
                        title="Investment Opportunity",
                        description=(
                            "You have a good income-to-expense ratio, which provides "
                            "an opportunity for growth investments."
                        ),
                        priority=Priority.MEDIUM,
                        action="Explore growth-oriented investments to maximize your returns",
                    )
                )

        return insights

    def savings_tips(self, context: InsightContext) -> list[Insight]:
        """Recurring expenses grouped by exact description."""
        recurring: dict[str, dict] = {}
        for txn in self.pipeline.filter_type(context.transactions, TransactionType.EXPENSE):
            if not txn.description:
                continue
            entry = recurring.setdefault(
                txn.description, {"count": 0, "total": ZERO, "amount": txn.amount}
            )
            entry["count"] += 1
            entry["total"] += txn.amount

        insights: list[Insight] = []
        for description, data in recurring.items():
            if data["count"] >= RECURRING_MIN_COUNT and data["amount"] > RECURRING_MIN_AMOUNT:
                insights.append(
                    Insight(
                        title=f"Review {description} Expenses",
                        description=(
                            f"You've spent {data['total']:.2f} on {description} over "
                            f"{data['count']} transactions. Consider if this is necessary."
                        ),
                        priority=Priority.MEDIUM,
                        action="Evaluate if you need this expense or if there are cheaper alternatives",
                    )
                )
        return insights

    def category_insights(self, context: InsightContext) -> list[Insight]:
        """Activity and spending per category, income and expense alike."""
        category_data: dict[str, dict] = {}
        for txn in context.transactions:
            data = category_data.setdefault(
                category_label(txn), {"expenses": ZERO, "incomes": ZERO, "transactions": 0}
            )
            if txn.type == TransactionType.EXPENSE:
                data["expenses"] += txn.amount
            else:
                data["incomes"] += txn.amount
            data["transactions"] += 1

        insights: list[Insight] = []
        for category, data in category_data.items():
            if data["transactions"] >= ACTIVE_CATEGORY_MIN_COUNT:
                insights.append(
                    Insight(
                        title=f"Active {capitalize(category)} Category",
                        description=(
                            f"You've had {data['transactions']} transactions in the {category} "
                            "category. This is an active area of your finances."
                        ),
                        priority=Priority.LOW,
                    )
                )
            if data["expenses"] > CATEGORY_SPENDING_LIMIT:
                insights.append(
                    Insight(
                        title=f"High Spending in {capitalize(category)}",
                        description=(
                            f"You've spent {data['expenses']:.2f} in the {category} category. "
                            "This is a significant expense area."
                        ),
                        priority=Priority.MEDIUM,
                        action="Review your spending in this category for potential savings",
                    )
                )
        return insights


def analyze_general_query(query: str) -> Insight:
    """Answer a free-text finance question with a keyword-selected reply."""
    lower_query = query.lower()

    if "save" in lower_query or "savings" in lower_query:
        analysis = (
            "To save more money, consider reviewing your recurring expenses and finding areas "
            "where you can reduce spending. Automating savings can help ensure you consistently "
            "set aside money each month."
        )
    elif "invest" in lower_query or "investment" in lower_query:
        analysis = (
            "For investment, consider diversifying across different asset classes. Start with "
            "low-cost index funds if you're new to investing, and gradually expand to other "
            "investment types as your knowledge grows."
        )
    elif "budget" in lower_query or "spending" in lower_query:
        analysis = (
            "Creating a budget involves tracking your income and expenses. Consider the 50/30/20 "
            "rule: 50% for needs, 30% for wants, and 20% for savings and debt repayment."
        )
    else:
        analysis = (
            "Based on your query, I recommend reviewing your financial goals and tracking your "
            "expenses to better understand your spending patterns. This will help you make more "
            "informed financial decisions."
        )

    return Insight(title="Query Analysis", description=analysis, priority=Priority.MEDIUM)
