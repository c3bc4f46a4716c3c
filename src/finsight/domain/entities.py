"""Domain model entities for finsight.

These are pure data classes representing business concepts, independent of
database schema. The analytics core consumes and emits only these records.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class Priority(str, Enum):
    """Priority of an insight."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class InsightType(str, Enum):
    """Independently invokable insight generators, in run order."""

    SPENDING_ANALYSIS = "spending-analysis"
    BUDGET_ADVICE = "budget-advice"
    INVESTMENT_SUGGESTIONS = "investment-suggestions"
    SAVINGS_TIPS = "savings-tips"
    CATEGORY_INSIGHTS = "category-insights"


@dataclass(frozen=True)
class User:
    """User profile domain entity."""

    id: str
    name: str
    email: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity.

    ``type`` is one of income, expense, asset, investment, transaction or None.
    """

    id: int
    name: str
    type: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity with its resolved category name."""

    id: int
    user_id: str
    category_id: Optional[int]
    category_name: Optional[str]
    type: TransactionType
    amount: Decimal
    description: Optional[str]
    date: date
    is_approved: bool = False
    receipt_url: Optional[str] = None


@dataclass(frozen=True)
class Asset:
    """Asset domain entity."""

    id: int
    user_id: str
    name: str
    purchase_date: date
    purchase_price: Decimal
    current_value: Optional[Decimal] = None
    description: Optional[str] = None
    depreciation_rate: Optional[Decimal] = None
    category_id: Optional[int] = None

    @property
    def value(self) -> Decimal:
        """Current value, falling back to the purchase price."""
        return self.current_value if self.current_value is not None else self.purchase_price


@dataclass(frozen=True)
class Investment:
    """Investment domain entity."""

    id: int
    user_id: str
    name: str
    type: str
    purchase_date: date
    purchase_price: Decimal
    current_value: Optional[Decimal] = None
    quantity: Optional[Decimal] = None
    roi: Optional[Decimal] = None
    description: Optional[str] = None
    category_id: Optional[int] = None

    @property
    def value(self) -> Decimal:
        """Current value; an unvalued investment counts as zero."""
        return self.current_value if self.current_value is not None else Decimal("0")


@dataclass(frozen=True)
class Insight:
    """Prioritized, human-readable observation or recommendation."""

    title: str
    description: str
    priority: Priority
    action: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
        }
        if self.action is not None:
            data["action"] = self.action
        return data


@dataclass(frozen=True)
class ParsedTransactionDraft:
    """Unpersisted transaction candidate extracted from free text."""

    amount: Decimal
    description: str
    category: str
    type: TransactionType
    message: str
    user_id: Optional[str] = None


@dataclass(frozen=True)
class ConversationalReply:
    """Canned reply returned when a message holds no transaction."""

    message: str


ParseResult = Union[ParsedTransactionDraft, ConversationalReply]


@dataclass(frozen=True)
class AggregateSummary:
    """Period totals derived from a transaction/asset/investment snapshot.

    ``net_worth`` is assets + investments - expenses. It is reported beside
    the balance sheet's ``equity`` but computed separately.
    """

    total_income: Decimal
    total_expenses: Decimal
    net_worth: Decimal
    profit_loss: Decimal
    total_assets: Decimal
    total_investments: Decimal
    monthly_change: Optional[Decimal] = None


@dataclass(frozen=True)
class DailySeriesEntry:
    """One cumulative chart point; one entry per distinct transaction date."""

    date: date
    income: Decimal
    expenses: Decimal
    net_worth: Decimal


@dataclass(frozen=True)
class BalanceSheetLine:
    """Named holding shown on the balance sheet."""

    name: str
    value: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    """Balance sheet totals as of a date.

    Liabilities are the expenses dated on or before ``as_of``;
    ``equity`` is assets + investments - liabilities.
    """

    as_of: date
    assets: tuple[BalanceSheetLine, ...]
    investments: tuple[BalanceSheetLine, ...]
    total_assets: Decimal
    total_investments: Decimal
    total_liabilities: Decimal
    equity: Decimal


@dataclass(frozen=True)
class CategoryBreakdown:
    """Per-category totals for one transaction type over a window."""

    type: TransactionType
    start_date: Optional[date]
    end_date: Optional[date]
    totals: dict[str, Decimal] = field(default_factory=dict)

    @property
    def total(self) -> Decimal:
        return sum(self.totals.values(), Decimal("0"))


@dataclass(frozen=True)
class ReportRequest:
    """Export request; the window defaults to the current month to date."""

    from_date: Optional[date] = None
    to_date: Optional[date] = None
    format: Optional[str] = "csv"
