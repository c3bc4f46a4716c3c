"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class UserNotFoundError(NotFoundError):
    """Referenced user has no backing profile."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class PersistenceUnavailableError(DomainError):
    """Fetching records from the persistence layer failed."""


class GeneratorError(DomainError):
    """An insight generator failed while processing a snapshot."""

    def __init__(self, insight_type, cause: Exception):
        self.insight_type = insight_type
        self.cause = cause
        super().__init__(f"Insight generator '{insight_type.value}' failed: {cause}")


def user_not_found(user_id: str) -> str:
    """Return message for missing user."""
    return f"User '{user_id}' not found"


def category_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def duplicate_user(user_id: str) -> str:
    """Return message for duplicate user ID."""
    return f"User '{user_id}' already exists"


def duplicate_category(name: str) -> str:
    """Return message for duplicate category name."""
    return f"Category '{name}' already exists"


def negative_amount(amount) -> str:
    """Return message for a negative transaction amount."""
    return f"Amount must be zero or positive, got {amount}"


def invalid_transaction_type(value: str) -> str:
    """Return message for an unknown transaction type."""
    return f"Invalid transaction type '{value}'. Must be one of: expense, income"


def invalid_insight_type(value: str) -> str:
    """Return message for an unknown insight type."""
    return (
        f"Invalid insight type '{value}'. Must be one of: spending-analysis, "
        "budget-advice, investment-suggestions, savings-tips, category-insights"
    )


def unsupported_export_format(value) -> str:
    """Return message for export formats other than CSV."""
    return f"Unsupported format '{value}'. Only CSV is supported."


def invalid_days(days: int) -> str:
    """Return message for a non-positive chart window."""
    return f"Days must be a positive integer, got {days}"


def invalid_date_window(start, end) -> str:
    """Return message when a window ends before it starts."""
    return f"Start date {start} is after end date {end}"
