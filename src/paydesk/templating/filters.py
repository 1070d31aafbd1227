"""Built-in paydesk template filters.

Registered automatically on every paydesk kida Environment.
"""

from datetime import UTC, datetime
from typing import Any
from urllib.parse import quote, urlencode

# ISO 4217 currencies without a minor unit
ZERO_DECIMAL_CURRENCIES = frozenset({"bif", "clp", "jpy", "krw", "pyg", "vnd", "xaf", "xof"})


def money(amount: int, currency: str = "usd") -> str:
    """Format an amount in minor units for display.

    Example:
        {{ charge.amount | money(charge.currency) }}  → "10.00 USD"

    """
    code = currency.upper()
    if currency.lower() in ZERO_DECIMAL_CURRENCIES:
        return f"{amount:,} {code}"
    return f"{amount / 100:,.2f} {code}"


def qs(base: str, **params: Any) -> str:
    """Append query-string parameters to a URL path.

    Omits parameters whose values are falsy so callers can pass
    optional values without manual guards.

    Example:
        {{ "/error" | qs(reason=code) }}  → "/error?reason=card_declined"

    """
    filtered = {k: v for k, v in params.items() if v}
    if not filtered:
        return base
    encoded = urlencode({k: str(v) for k, v in filtered.items()}, quote_via=quote)
    sep = "&" if "?" in base else "?"
    return f"{base}{sep}{encoded}"


def format_time(unix_ts: float) -> str:
    """Format a unix timestamp as ``YYYY-MM-DD HH:MM:SS UTC``."""
    return datetime.fromtimestamp(unix_ts, UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


BUILTIN_FILTERS: dict[str, Any] = {
    "format_time": format_time,
    "money": money,
    "qs": qs,
}
