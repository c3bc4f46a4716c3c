"""Free-text transaction extraction."""

import random
import re
from typing import Optional

from finsight.domain.classifier import classify_category, classify_type
from finsight.domain.entities import (
    ConversationalReply,
    ParsedTransactionDraft,
    ParseResult,
)
from finsight.logger import get_logger
from finsight.utils.amount_parser import parse_amount
from finsight.utils.labels import capitalize

logger = get_logger(__name__)

TRANSACTION_PATTERN = re.compile(
    r"(?:spent|paid|bought|invested|earned|received|got)\s*"
    r"(?:usd|us|dollar|\$)?\s*"
    r"(\d[\d,]*(?:\.\d{1,2})?)\s*"
    r"(?:(?:on|for|at|in)\s+)?"
    r"(.+)",
    re.IGNORECASE,
)

CANNED_REPLIES: tuple[str, ...] = (
    "Based on your recent transactions, you might want to consider setting aside more for savings.",
    "Your spending on entertainment has increased by 20% this month compared to last month.",
    "You could save approximately $50 monthly by switching to a more affordable phone plan.",
    "Consider creating a category for investments to better track your portfolio growth.",
    "Your food expenses are 15% higher than your budgeted amount for this month.",
    "Great job! Your savings rate has improved by 8% this quarter.",
    "You've been consistent with your monthly investments. Keep it up!",
    "Consider reviewing your subscription services to cancel unused ones.",
)


class TextTransactionParser:
    """Extract a draft transaction from a message, or reply conversationally."""

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize parser.

        Args:
            rng: Random source used to pick canned replies
        """
        self.rng = rng or random.Random()

    def parse(self, message: str, user_id: Optional[str] = None) -> ParseResult:
        """Parse a natural-language message.

        Only the first amount/description pair captured by the pattern is
        used. The message is lower-cased before matching.

        Args:
            message: Raw user message
            user_id: Caller's user ID, echoed on the draft

        Returns:
            ParsedTransactionDraft on a match, otherwise ConversationalReply
        """
        match = TRANSACTION_PATTERN.search(message.lower())
        if match is None:
            logger.debug("No transaction pattern in message; replying with canned insight")
            return ConversationalReply(message=self.rng.choice(CANNED_REPLIES))

        amount = parse_amount(match.group(1))
        description = match.group(2).strip()
        category = classify_category(description)
        txn_type = classify_type(description)

        confirmation = (
            f"I've recorded your {txn_type.value} of {amount:.2f} for {description}. "
            f"Category: {capitalize(category)}. Is this correct?"
        )
        logger.debug(
            "Parsed draft amount=%s category=%s type=%s", amount, category, txn_type.value
        )
        return ParsedTransactionDraft(
            amount=amount,
            description=description,
            category=category,
            type=txn_type,
            message=confirmation,
            user_id=user_id,
        )
