"""Conversational transaction capture."""

from typing import Optional

from finsight.database.base import Database
from finsight.domain.entities import ConversationalReply, ParseResult
from finsight.domain.errors import ValidationError
from finsight.domain.parser import TextTransactionParser
from finsight.logger import get_logger

logger = get_logger(__name__)

SETUP_REPLY = (
    "Your account hasn't been fully set up in our system. "
    "Please complete your profile setup first."
)


class ChatService:
    """Service turning chat messages into draft transactions or replies."""

    def __init__(self, db: Database, parser: Optional[TextTransactionParser] = None):
        """Initialize chat service.

        Args:
            db: Database instance
            parser: Text parser; pass one with a seeded random source for
                reproducible replies
        """
        self.db = db
        self.parser = parser or TextTransactionParser()

    def process_message(self, user_id: str, message: str) -> ParseResult:
        """Parse a message for a user.

        The draft is not persisted; see TransactionService.save_draft.

        Raises:
            ValidationError: If the message is empty
        """
        if not message or not message.strip():
            raise ValidationError("Message must not be empty")

        if self.db.get_user(user_id) is None:
            logger.warning("Chat message from unknown user %s", user_id)
            return ConversationalReply(message=SETUP_REPLY)

        return self.parser.parse(message, user_id=user_id)
