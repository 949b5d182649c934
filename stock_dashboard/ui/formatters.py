"""Display formatting for prices, volumes and percentages."""

import math


SUFFIXES = [
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
]

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "KRW": "₩",
    "CNY": "CN¥",
    "CAD": "CA$",
    "AUD": "A$",
    "HKD": "HK$",
    "BRL": "R$",
    "MXN": "MX$",
    "ILS": "₪",
    "TWD": "NT$",
    "NZD": "NZ$",
}

# Currencies with no minor unit
ZERO_DECIMAL_CURRENCIES = {"JPY", "KRW", "CLP", "ISK", "VND"}


def _missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def format_large_number(value: float | None) -> str:
    """Format with a T/B/M/K suffix, e.g. 2.5e12 -> "2.50T", 999 -> "999.00"."""
    if _missing(value):
        return "N/A"

    magnitude = abs(value)
    for threshold, suffix in SUFFIXES:
        if magnitude >= threshold:
            return f"{value / threshold:.2f}{suffix}"
    return f"{value:.2f}"


def format_currency(value: float | None, currency: str = "USD") -> str:
    """Format as en-US currency: "$1,234.56", "-€12.00", "¥1,235"."""
    if _missing(value):
        return "N/A"

    code = (currency or "USD").upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code}\u00a0")
    decimals = 0 if code in ZERO_DECIMAL_CURRENCIES else 2

    amount = f"{abs(value):,.{decimals}f}"
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{amount}"


def format_signed_currency(value: float | None, currency: str = "USD") -> str:
    """Currency with an explicit "+" for non-negative changes."""
    if _missing(value):
        return "N/A"
    prefix = "+" if value >= 0 else ""
    return prefix + format_currency(value, currency)


def format_percentage(value: float | None) -> str:
    """Two decimals with explicit sign: 0 -> "+0.00%", -3.456 -> "-3.46%"."""
    if _missing(value):
        return "N/A"
    prefix = "+" if value >= 0 else ""
    return f"{prefix}{value:.2f}%"


def format_ratio(value: float | None) -> str:
    if _missing(value):
        return "N/A"
    return f"{value:.2f}"
