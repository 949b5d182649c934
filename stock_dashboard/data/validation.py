"""Ticker symbol syntax checks."""

import re


SYMBOL_PATTERN = re.compile(r"^[A-Za-z0-9.\-]{1,10}$")


def validate_symbol(symbol) -> bool:
    """Return True if `symbol` is 1-10 letters, digits, dots or dashes after trimming."""
    if not symbol or not isinstance(symbol, str):
        return False
    return bool(SYMBOL_PATTERN.match(symbol.strip()))


def normalize_symbol(symbol: str) -> str:
    """Trim and uppercase a symbol for use in request URLs."""
    return symbol.strip().upper()
