"""Utility functions for finsight."""

from finsight.utils.date_parser import parse_date
from finsight.utils.amount_parser import parse_amount
from finsight.utils.currency import format_currency, round_money
from finsight.utils.labels import capitalize

__all__ = ["parse_date", "parse_amount", "format_currency", "round_money", "capitalize"]
