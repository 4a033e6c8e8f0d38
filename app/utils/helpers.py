"""
Helper Functions Module
Utility functions used across the application
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

TWO_PLACES = Decimal("0.01")


def parse_date(value: Any) -> Optional[date]:
    """Parse a YYYY-MM-DD string (or date/datetime) into a date, empty means unset"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def to_decimal(value: Any) -> Decimal:
    """Convert a number or numeric string to Decimal without float noise"""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Not a number: {value!r}") from e


def round_money(amount: Decimal) -> Decimal:
    """Round to two decimals for display; stored values keep full precision"""
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal, symbol: str = "₹") -> str:
    """Format amount the way the ledger screens show it, e.g. ₹ 5,300.00"""
    return f"{symbol} {round_money(amount):,.2f}"


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings"""
    return value is None or not str(value).strip()
