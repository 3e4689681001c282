from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Convert a price-like value to Decimal without binary float noise.
    None becomes 0; anything unparseable raises ValueError.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a monetary amount: {value!r}") from e


def round_money(value: Union[str, int, float, Decimal]) -> Decimal:
    """Round to cents, half up, for display and storage."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)
