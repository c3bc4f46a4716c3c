"""Asset and investment domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal

from finsight.database.base import Database
from finsight.domain.entities import Asset, Investment
from finsight.domain.errors import (
    UserNotFoundError,
    ValidationError,
    user_not_found,
)


class HoldingService:
    """Service for recording assets and investments."""

    def __init__(self, db: Database):
        """Initialize holding service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_asset(
        self,
        user_id: str,
        name: str,
        purchase_date: date,
        purchase_price: Decimal,
        current_value: Optional[Decimal] = None,
        description: Optional[str] = None,
    ) -> int:
        """Record an asset.

        Args:
            user_id: Owner
            name: Asset name
            purchase_date: Date of purchase
            purchase_price: Price paid
            current_value: Current value; the purchase price stands in when omitted
            description: Optional description

        Returns:
            Asset ID

        Raises:
            ValidationError: If a value is negative or the name is blank
            UserNotFoundError: If the user doesn't exist
        """
        self._validate(user_id, name, purchase_price, current_value)
        return self.db.create_asset(
            user_id=user_id,
            name=name.strip(),
            purchase_date=purchase_date,
            purchase_price=purchase_price,
            current_value=current_value,
            description=description,
        )

    def create_investment(
        self,
        user_id: str,
        name: str,
        investment_type: str,
        purchase_date: date,
        purchase_price: Decimal,
        current_value: Optional[Decimal] = None,
        quantity: Optional[Decimal] = None,
        description: Optional[str] = None,
    ) -> int:
        """Record an investment.

        Args:
            user_id: Owner
            name: Investment name
            investment_type: Kind of investment, e.g. "stock" or "bond"
            purchase_date: Date of purchase
            purchase_price: Price paid
            current_value: Current value; counted as zero in totals when omitted
            quantity: Optional number of units held
            description: Optional description

        Returns:
            Investment ID
        """
        self._validate(user_id, name, purchase_price, current_value)
        if not investment_type or not investment_type.strip():
            raise ValidationError("Investment type must not be empty")
        return self.db.create_investment(
            user_id=user_id,
            name=name.strip(),
            investment_type=investment_type.strip(),
            purchase_date=purchase_date,
            purchase_price=purchase_price,
            current_value=current_value,
            quantity=quantity,
            description=description,
        )

    def list_assets(self, user_id: str) -> list[Asset]:
        return self.db.list_assets(user_id)

    def list_investments(self, user_id: str) -> list[Investment]:
        return self.db.list_investments(user_id)

    def _validate(
        self,
        user_id: str,
        name: str,
        purchase_price: Decimal,
        current_value: Optional[Decimal],
    ) -> None:
        if not name or not name.strip():
            raise ValidationError("Name must not be empty")
        if purchase_price < 0:
            raise ValidationError(f"Purchase price must be zero or positive, got {purchase_price}")
        if current_value is not None and current_value < 0:
            raise ValidationError(f"Current value must be zero or positive, got {current_value}")
        if self.db.get_user(user_id) is None:
            raise UserNotFoundError(user_not_found(user_id))
