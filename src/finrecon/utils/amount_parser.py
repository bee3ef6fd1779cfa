"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles "123.45", "$123.45", "₹1,234.56", "-123.45" and the accounting
    form "(123.45)" for negatives.

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥₹]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def parse_split(split_str: str) -> tuple[str, Decimal]:
    """Parse a "CATEGORY=AMOUNT" pair used for multi-category transactions.

    Raises:
        ValueError: If the pair is missing a category or amount
    """
    category, sep, amount = split_str.rpartition("=")
    if not sep or not category.strip():
        raise ValueError(f"Invalid split '{split_str}'. Expected CATEGORY=AMOUNT")
    return category.strip(), parse_amount(amount)
