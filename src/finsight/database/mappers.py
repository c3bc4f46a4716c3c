"""Mapper functions to convert between domain models and SQLAlchemy models."""

from typing import Optional

from finsight.domain import entities as domain
from finsight.database.models import (
    Asset as ORMAsset,
    Category as ORMCategory,
    Investment as ORMInvestment,
    Transaction as ORMTransaction,
    User as ORMUser,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        created_at=orm_user.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        type=orm_category.type,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(
    orm_transaction: ORMTransaction, category_name: Optional[str]
) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        category_id=orm_transaction.category_id,
        category_name=category_name,
        type=domain.TransactionType(orm_transaction.type),
        amount=orm_transaction.amount,
        description=orm_transaction.description,
        date=orm_transaction.date,
        is_approved=orm_transaction.is_approved,
        receipt_url=orm_transaction.receipt_url,
    )


def asset_to_domain(orm_asset: ORMAsset) -> domain.Asset:
    """Convert SQLAlchemy Asset model to domain Asset entity."""
    return domain.Asset(
        id=orm_asset.id,
        user_id=orm_asset.user_id,
        name=orm_asset.name,
        purchase_date=orm_asset.purchase_date,
        purchase_price=orm_asset.purchase_price,
        current_value=orm_asset.current_value,
        description=orm_asset.description,
        depreciation_rate=orm_asset.depreciation_rate,
        category_id=orm_asset.category_id,
    )


def investment_to_domain(orm_investment: ORMInvestment) -> domain.Investment:
    """Convert SQLAlchemy Investment model to domain Investment entity."""
    return domain.Investment(
        id=orm_investment.id,
        user_id=orm_investment.user_id,
        name=orm_investment.name,
        type=orm_investment.type,
        purchase_date=orm_investment.purchase_date,
        purchase_price=orm_investment.purchase_price,
        current_value=orm_investment.current_value,
        quantity=orm_investment.quantity,
        roi=orm_investment.roi,
        description=orm_investment.description,
        category_id=orm_investment.category_id,
    )
