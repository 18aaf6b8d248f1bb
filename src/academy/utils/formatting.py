"""Display formatting helpers.

Small pure functions used when presenting backend data: status labels,
dates, money, file sizes and percentages.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

PAYMENT_STATUS_LABELS = {
    "pending": "Pending",
    "approved": "Approved",
    "rejected": "Rejected",
}

FILE_SIZE_UNITS = ["bytes", "KB", "MB", "GB"]


def payment_status_label(status: str | None) -> str:
    """Human label for a payment status ("Unknown" for anything else)."""
    return PAYMENT_STATUS_LABELS.get(status or "", "Unknown")


def usage_percentage(current_uses: int, max_uses: int) -> float:
    """Percentage of uses consumed; 0 when ``max_uses`` is 0.

    >>> usage_percentage(5, 20)
    25.0
    >>> usage_percentage(0, 0)
    0.0
    """
    if max_uses <= 0:
        return 0.0
    return current_uses / max_uses * 100


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp, accepting the ``Z`` suffix."""
    if isinstance(value, datetime):
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_date(value: str | datetime, long_month: bool = True) -> str:
    """Format a timestamp as e.g. ``March 5, 2025, 14:30``.

    Args:
        value: ISO string or datetime
        long_month: Use the full month name (``Mar`` otherwise)
    """
    moment = parse_timestamp(value)
    month = "%B" if long_month else "%b"
    return moment.strftime(f"{month} {moment.day}, %Y, %H:%M")


def format_currency(amount: float | Decimal | str, currency: str = "EGP") -> str:
    """Format an amount with thousands separators and its currency."""
    number = Decimal(str(amount))
    if number == number.to_integral_value():
        text = f"{number:,.0f}"
    else:
        text = f"{number:,.2f}"
    return f"{text} {currency}"


def format_file_size(size: int) -> str:
    """Format a byte count as e.g. ``1.5 MB``."""
    if size <= 0:
        return "0 bytes"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(FILE_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    value = round(value, 2)
    text = str(int(value)) if value == int(value) else str(value)
    return f"{text} {FILE_SIZE_UNITS[unit]}"
