"""Shared fixtures: canned Yahoo payloads and a mock-transport service."""

import httpx
import pytest

from stock_dashboard.config import Settings
from stock_dashboard.data import QuoteService, ResilientFetcher


PROXIES = ("https://relay-one.example/raw?url=", "https://relay-two.example/")


def chart_payload(
    symbol: str = "AAPL",
    price: float = 190.0,
    previous_close: float = 185.0,
    timestamps: list[int] | None = None,
    closes: list[float | None] | None = None,
    **meta,
) -> dict:
    timestamps = timestamps if timestamps is not None else [1700000000, 1700086400]
    closes = closes if closes is not None else [186.0, 190.0]
    return {
        "chart": {
            "result": [
                {
                    "meta": {
                        "symbol": symbol,
                        "regularMarketPrice": price,
                        "previousClose": previous_close,
                        "regularMarketVolume": 52_000_000,
                        "currency": "USD",
                        "exchangeName": "NMS",
                        **meta,
                    },
                    "timestamp": timestamps,
                    "indicators": {
                        "quote": [
                            {
                                "close": closes,
                                "open": list(closes),
                                "high": list(closes),
                                "low": list(closes),
                                "volume": [1000] * len(closes),
                            }
                        ]
                    },
                }
            ],
            "error": None,
        }
    }


def summary_payload() -> dict:
    return {
        "quoteSummary": {
            "result": [
                {
                    "summaryDetail": {
                        "dayHigh": {"raw": 191.5, "fmt": "191.50"},
                        "dayLow": {"raw": 184.25, "fmt": "184.25"},
                        "fiftyTwoWeekHigh": {"raw": 199.62, "fmt": "199.62"},
                        "fiftyTwoWeekLow": {"raw": 124.17, "fmt": "124.17"},
                    },
                    "defaultKeyStatistics": {
                        "trailingPE": {"raw": 31.234, "fmt": "31.23"},
                    },
                    "financialData": {"currentPrice": {"raw": 190.0}},
                }
            ],
            "error": None,
        }
    }


class Recorder:
    """Collects requests and sleep delays made through a fetcher."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.delays: list[float] = []

    def sleep(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def settings() -> Settings:
    return Settings(proxies=PROXIES, timeout=10.0)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_fetcher(settings, recorder):
    """Build a ResilientFetcher whose transport calls `handler(request)`."""
    fetchers = []

    def factory(handler, **kwargs) -> ResilientFetcher:
        def record(request: httpx.Request) -> httpx.Response:
            recorder.requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(record))
        fetcher = ResilientFetcher(settings, client=client, sleep=recorder.sleep, **kwargs)
        fetchers.append((fetcher, client))
        return fetcher

    yield factory

    for _, client in fetchers:
        client.close()


@pytest.fixture
def make_service(settings, make_fetcher):
    def factory(handler) -> QuoteService:
        return QuoteService(settings, fetcher=make_fetcher(handler))

    return factory
