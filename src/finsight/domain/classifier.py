"""Keyword-based category classification."""

from finsight.domain.entities import TransactionType

DEFAULT_CATEGORY = "other"

# Evaluated in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: tuple[tuple[str, frozenset[str]], ...] = (
    (
        "food",
        frozenset(
            {"lunch", "dinner", "breakfast", "groceries", "restaurant", "coffee", "food", "meal", "eat", "snack"}
        ),
    ),
    (
        "transportation",
        frozenset(
            {"gas", "fuel", "taxi", "uber", "lyft", "car", "bus", "train", "transport", "parking", "metro", "subway"}
        ),
    ),
    (
        "shopping",
        frozenset(
            {"shopping", "retail", "store", "amazon", "buy", "purchase", "mall", "market", "clothes", "clothing"}
        ),
    ),
    (
        "entertainment",
        frozenset(
            {"movie", "cinema", "game", "concert", "entertainment", "ticket", "music", "streaming", "sports"}
        ),
    ),
    (
        "health",
        frozenset(
            {"pharmacy", "medicine", "doctor", "health", "medical", "hospital", "clinic", "gym", "fitness"}
        ),
    ),
    (
        "bills",
        frozenset(
            {"rent", "electricity", "water", "internet", "phone", "bill", "utilities", "insurance", "subscription"}
        ),
    ),
    (
        "income",
        frozenset(
            {"salary", "payment", "income", "received", "earned", "refund", "money", "wage", "freelance", "investment"}
        ),
    ),
)

INCOME_KEYWORDS: frozenset[str] = dict(CATEGORY_KEYWORDS)["income"]


def _contains_any(text: str, keywords: frozenset[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def classify_category(description: str) -> str:
    """Map a free-text description to a category label.

    Keywords are matched as substrings of the lower-cased description.

    Args:
        description: Transaction description

    Returns:
        Category label, or "other" when no keyword matches
    """
    text = description.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if _contains_any(text, keywords):
            return category
    return DEFAULT_CATEGORY


def classify_type(description: str) -> TransactionType:
    """Decide income vs expense; expense unless an income keyword appears."""
    if _contains_any(description.lower(), INCOME_KEYWORDS):
        return TransactionType.INCOME
    return TransactionType.EXPENSE
