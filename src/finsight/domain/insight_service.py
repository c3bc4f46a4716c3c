"""Insight request handling: user resolution, snapshot loading and degradation."""

from functools import partial
from typing import Iterable, Optional, Union

from finsight.database.base import Database
from finsight.domain.entities import Insight, InsightType, Priority
from finsight.domain.errors import (
    PersistenceUnavailableError,
    ValidationError,
    invalid_insight_type,
)
from finsight.domain.insights import (
    InsightContext,
    InsightEngine,
    analyze_general_query,
    parse_insight_type,
)
from finsight.logger import get_logger

logger = get_logger(__name__)

WELCOME = Insight(
    title="Welcome to Financial Insights",
    description="Sign in to get personalized financial insights based on your transactions.",
    priority=Priority.LOW,
)

DATABASE_UNAVAILABLE = Insight(
    title="Database Unavailable",
    description="We couldn't reach your account data right now. Please try again later.",
    priority=Priority.HIGH,
)

SETUP_REQUIRED = Insight(
    title="Setup Required",
    description="Your account hasn't been fully set up yet, so there is nothing to analyze.",
    priority=Priority.MEDIUM,
    action="Complete your profile",
)

DATA_UNAVAILABLE = Insight(
    title="Data Unavailable",
    description="We couldn't load your transactions right now. Please try again later.",
    priority=Priority.HIGH,
)

SERVICE_UNAVAILABLE = Insight(
    title="Service Unavailable",
    description="Financial insights are temporarily unavailable. Please try again later.",
    priority=Priority.HIGH,
)


def resolve_insight_type(value: Union[str, InsightType, None]) -> InsightType:
    """Resolve a requested type, defaulting to spending analysis.

    Raises:
        ValidationError: If the type is not one of the five generators
    """
    if value is None:
        return InsightType.SPENDING_ANALYSIS
    if isinstance(value, InsightType):
        return value
    insight_type = parse_insight_type(value)
    if insight_type is None:
        raise ValidationError(invalid_insight_type(value))
    return insight_type


class InsightService:
    """Service producing insights for a user.

    Every failure past argument validation degrades to a single
    explanatory insight instead of raising.
    """

    def __init__(self, db: Database, engine: Optional[InsightEngine] = None):
        """Initialize insight service.

        Args:
            db: Database instance
            engine: Insight engine; a default one is built when omitted
        """
        self.db = db
        self.engine = engine or InsightEngine()

    def get_insights(
        self,
        user_id: Optional[str] = None,
        insight_type: Union[str, InsightType, None] = None,
        query: Optional[str] = None,
    ) -> list[Insight]:
        """Get insights of one type for a user.

        Args:
            user_id: Requesting user; anonymous when None
            insight_type: Generator to run, spending analysis by default
            query: Free-text question; answered directly for anonymous callers

        Returns:
            Ordered list of insights, never empty

        Raises:
            ValidationError: If insight_type is unknown
        """
        if query and not user_id:
            return [analyze_general_query(query)]
        return self._generate(user_id, [resolve_insight_type(insight_type)])

    def get_all_insights(self, user_id: Optional[str] = None) -> list[Insight]:
        """Run all five generators in order for a user."""
        return self._generate(user_id, list(InsightType))

    def _generate(
        self, user_id: Optional[str], insight_types: Iterable[InsightType]
    ) -> list[Insight]:
        if not user_id:
            return [WELCOME]

        try:
            try:
                user = self.db.get_user(user_id)
            except PersistenceUnavailableError:
                logger.warning("User lookup failed for %s", user_id)
                return [DATABASE_UNAVAILABLE]
            if user is None:
                return [SETUP_REQUIRED]

            try:
                transactions = self.db.list_transactions(user_id)
            except PersistenceUnavailableError:
                logger.warning("Transaction fetch failed for %s", user_id)
                return [DATA_UNAVAILABLE]

            context = InsightContext(
                transactions=tuple(transactions),
                load_investments=partial(self.db.list_investments, user_id),
            )
            return self.engine.generate(context, insight_types)
        except Exception:
            logger.exception("Unexpected failure generating insights for %s", user_id)
            return [SERVICE_UNAVAILABLE]
