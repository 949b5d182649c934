"""Data fetching and normalization."""

from .fetcher import ResilientFetcher, ProxyChain, ProxyStep
from .quote_service import QuoteService
from .validation import validate_symbol, normalize_symbol
from .errors import (
    StockDataError,
    FetchExhausted,
    InvalidSymbol,
    NoHistoricalData,
    DetailUnavailable,
)

__all__ = [
    "ResilientFetcher",
    "ProxyChain",
    "ProxyStep",
    "QuoteService",
    "validate_symbol",
    "normalize_symbol",
    "StockDataError",
    "FetchExhausted",
    "InvalidSymbol",
    "NoHistoricalData",
    "DetailUnavailable",
]
