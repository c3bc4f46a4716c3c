"""Transaction domain service."""

from typing import Optional, Union
from datetime import date
from decimal import Decimal

from finsight.database.base import Database
from finsight.domain.entities import (
    ParsedTransactionDraft,
    Transaction as TransactionEntity,
    TransactionType,
)
from finsight.domain.errors import (
    NotFoundError,
    UserNotFoundError,
    ValidationError,
    category_not_found,
    invalid_transaction_type,
    negative_amount,
    user_not_found,
)


def parse_transaction_type(value: Union[str, TransactionType]) -> TransactionType:
    """Coerce a string such as 'Income' into a TransactionType.

    Raises:
        ValidationError: If the value is not income or expense
    """
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(invalid_transaction_type(value))


class TransactionService:
    """Service for recording transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        user_id: str,
        transaction_type: Union[str, TransactionType],
        amount: Decimal,
        date: date,
        description: Optional[str] = None,
        category_name: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            user_id: Owner of the transaction
            transaction_type: income or expense
            amount: Nonnegative amount
            date: Transaction date
            description: Optional description
            category_name: Optional existing category name

        Returns:
            Transaction ID

        Raises:
            ValidationError: If type or amount is invalid
            UserNotFoundError: If the user doesn't exist
            NotFoundError: If the category doesn't exist
        """
        txn_type = parse_transaction_type(transaction_type)
        if amount < 0:
            raise ValidationError(negative_amount(amount))

        self._require_user(user_id)

        category_id = None
        if category_name:
            category = self.db.get_category_by_name(category_name)
            if category is None:
                raise NotFoundError(category_not_found(category_name))
            category_id = category.id

        return self.db.create_transaction(
            user_id=user_id,
            transaction_type=txn_type,
            amount=amount,
            date=date,
            description=description,
            category_id=category_id,
        )

    def save_draft(self, draft: ParsedTransactionDraft, on_date: date) -> int:
        """Persist a parsed draft, creating its category on demand.

        Args:
            draft: Draft produced by the text parser, carrying its user ID
            on_date: Date to record the transaction under

        Returns:
            Transaction ID
        """
        if not draft.user_id:
            raise ValidationError("Draft has no user ID")
        if draft.amount < 0:
            raise ValidationError(negative_amount(draft.amount))
        self._require_user(draft.user_id)

        category = self.db.get_category_by_name(draft.category)
        if category is None:
            category_id = self.db.create_category(draft.category, category_type=draft.type.value)
        else:
            category_id = category.id

        return self.db.create_transaction(
            user_id=draft.user_id,
            transaction_type=draft.type,
            amount=draft.amount,
            date=on_date,
            description=draft.description,
            category_id=category_id,
        )

    def list_transactions(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List a user's transactions, newest first."""
        return self.db.list_transactions(user_id, start_date=start_date, end_date=end_date)

    def _require_user(self, user_id: str) -> None:
        if self.db.get_user(user_id) is None:
            raise UserNotFoundError(user_not_found(user_id))
