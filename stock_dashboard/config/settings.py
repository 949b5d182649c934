"""Configuration settings for the dashboard."""

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv


load_dotenv()


# Yahoo Finance endpoints
CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart"
QUOTE_SUMMARY_URL = "https://query2.finance.yahoo.com/v10/finance/quoteSummary"

# CORS relays tried after the direct request, in order
CORS_PROXIES: tuple[str, ...] = (
    "https://api.allorigins.win/raw?url=",
    "https://cors-anywhere.herokuapp.com/",
    "https://api.codetabs.com/v1/proxy?quest=",
)

# quoteSummary modules requested for the detail bundle
DETAIL_MODULES: tuple[str, ...] = (
    "summaryDetail",
    "defaultKeyStatistics",
    "financialData",
    "calendarEvents",
    "upgradeDowngradeHistory",
)

REQUEST_TIMEOUT = 10.0  # seconds, per attempt
BACKOFF_SECONDS = 1.0  # delay after attempt i is BACKOFF_SECONDS * (i + 1)
ERROR_DISPLAY_SECONDS = 5.0

REQUEST_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

# UI range label -> Yahoo range parameter
TIME_RANGES: dict[str, str] = {
    "1D": "1d",
    "5D": "5d",
    "1M": "1mo",
    "3M": "3mo",
    "1Y": "1y",
}
DEFAULT_TIME_RANGE = "1D"


def _env_proxies() -> tuple[str, ...]:
    raw = os.getenv("STOCK_DASHBOARD_PROXIES", "")
    if not raw.strip():
        return CORS_PROXIES
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@dataclass
class Settings:
    """Application settings."""

    chart_url: str = CHART_URL
    quote_summary_url: str = QUOTE_SUMMARY_URL
    proxies: tuple[str, ...] = field(default_factory=_env_proxies)
    timeout: float = field(
        default_factory=lambda: float(os.getenv("STOCK_DASHBOARD_TIMEOUT", REQUEST_TIMEOUT))
    )
    backoff_seconds: float = BACKOFF_SECONDS
    error_display_seconds: float = ERROR_DISPLAY_SECONDS
    detail_modules: tuple[str, ...] = DETAIL_MODULES

    def validate(self) -> None:
        """Validate settings."""
        if self.timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.timeout}")
        for prefix in self.proxies:
            if not prefix.startswith(("http://", "https://")):
                raise ValueError(f"Proxy prefix must be an http(s) URL: {prefix!r}")
