"""Dashboard configuration."""

from .settings import (
    Settings,
    CHART_URL,
    QUOTE_SUMMARY_URL,
    CORS_PROXIES,
    DETAIL_MODULES,
    REQUEST_TIMEOUT,
    REQUEST_HEADERS,
    BACKOFF_SECONDS,
    ERROR_DISPLAY_SECONDS,
    TIME_RANGES,
    DEFAULT_TIME_RANGE,
)

__all__ = [
    "Settings",
    "CHART_URL",
    "QUOTE_SUMMARY_URL",
    "CORS_PROXIES",
    "DETAIL_MODULES",
    "REQUEST_TIMEOUT",
    "REQUEST_HEADERS",
    "BACKOFF_SECONDS",
    "ERROR_DISPLAY_SECONDS",
    "TIME_RANGES",
    "DEFAULT_TIME_RANGE",
]
