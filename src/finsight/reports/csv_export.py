"""Delimited text export of transactions."""

from typing import Iterable

from finsight.domain.entities import Transaction
from finsight.utils.currency import format_plain_number

BOM = "\ufeff"
DELIMITER = ";"
LINE_END = "\r\n"
CSV_HEADER = ("Date", "Description", "Category", "Type", "Amount")


def quote(value: str) -> str:
    """Wrap a field in double quotes, doubling embedded quotes."""
    return '"' + value.replace('"', '""') + '"'


def format_row(txn: Transaction) -> str:
    return DELIMITER.join(
        (
            txn.date.strftime("%Y-%m-%d"),
            quote(txn.description or ""),
            quote(txn.category_name or ""),
            quote(txn.type.value),
            format_plain_number(txn.amount),
        )
    )


def export_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions as ';'-delimited text with a BOM and CRLF endings.

    Text fields are double-quoted; the amount is an unquoted number.
    """
    lines = [DELIMITER.join(CSV_HEADER)]
    lines.extend(format_row(txn) for txn in transactions)
    return BOM + "".join(line + LINE_END for line in lines)
