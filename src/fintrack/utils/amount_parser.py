"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a non-negative Decimal.

    Handles:
    - "123.45"
    - "1,234.56" (thousands separators)
    - "-50" (sign dropped, direction comes from the transaction type)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    return abs(amount)
