"""Display label helpers."""


def capitalize(label: str) -> str:
    """Upper-case only the first character of a label.

    Unlike ``str.capitalize`` the rest of the label is left as is, so
    "salary payment" becomes "Salary payment" and "ETF" stays "ETF".
    """
    return label[:1].upper() + label[1:]
