"""Currency and number formatting for rendered reports."""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round a monetary value to 2 decimal places."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(value: Decimal, prefix: str = "Rp", separator: str = ".") -> str:
    """Render a whole-unit amount grouped by thousands, e.g. 'Rp1.234.567'.

    Args:
        value: Amount to render
        prefix: Currency prefix
        separator: Thousands separator

    Returns:
        Formatted amount with zero decimal places
    """
    whole = Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    grouped = f"{whole:,.0f}".replace(",", separator)
    return f"{prefix}{grouped}"


def format_plain_number(value: Decimal) -> str:
    """Render a number without grouping or trailing zeros, e.g. 45.5 or 1200."""
    value = Decimal(value)
    if value == value.to_integral_value():
        return str(value.quantize(Decimal("1")))
    return format(value.normalize(), "f")
