"""Yahoo Finance quote, detail and history lookups."""

import logging
from concurrent.futures import ThreadPoolExecutor

from stock_dashboard.config import Settings
from stock_dashboard.data.errors import (
    DetailUnavailable,
    FetchExhausted,
    InvalidSymbol,
    NoHistoricalData,
)
from stock_dashboard.data.fetcher import ResilientFetcher
from stock_dashboard.data.validation import normalize_symbol, validate_symbol
from stock_dashboard.models import DetailBundle, HistoricalSeries, Period, Quote


logger = logging.getLogger(__name__)


def _chart_result(data: dict) -> dict | None:
    """Return chart.result[0], or None if the response lacks it."""
    if not isinstance(data, dict):
        return None
    chart = data.get("chart")
    if not isinstance(chart, dict):
        return None
    results = chart.get("result")
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        return None
    return results[0]


def _previous_close(meta: dict) -> float | None:
    previous = meta.get("previousClose")
    if previous is None:
        # range=1d payloads often carry only chartPreviousClose
        previous = meta.get("chartPreviousClose")
    return previous


def _series_from_result(result: dict, period: Period | None = None) -> HistoricalSeries:
    indicators = result.get("indicators")
    quotes = indicators.get("quote") if isinstance(indicators, dict) else None
    ohlcv = quotes[0] if isinstance(quotes, list) and quotes else None
    if not isinstance(ohlcv, dict):
        ohlcv = {}

    return HistoricalSeries(
        timestamps=list(result.get("timestamp") or []),
        closes=list(ohlcv.get("close") or []),
        opens=list(ohlcv.get("open") or []),
        highs=list(ohlcv.get("high") or []),
        lows=list(ohlcv.get("low") or []),
        volumes=list(ohlcv.get("volume") or []),
        period=period,
    )


class QuoteService:
    """Builds endpoint URLs, fetches them and normalizes the payloads."""

    def __init__(
        self,
        settings: Settings | None = None,
        fetcher: ResilientFetcher | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.fetcher = fetcher or ResilientFetcher(self.settings)

    def close(self) -> None:
        self.fetcher.close()

    def __enter__(self) -> "QuoteService":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _symbol(self, symbol: str) -> str:
        if not validate_symbol(symbol):
            raise InvalidSymbol(str(symbol))
        return normalize_symbol(symbol)

    # URL builders

    def chart_url(self, symbol: str) -> str:
        return f"{self.settings.chart_url}/{normalize_symbol(symbol)}"

    def summary_url(self, symbol: str) -> str:
        modules = ",".join(self.settings.detail_modules)
        return f"{self.settings.quote_summary_url}/{normalize_symbol(symbol)}?modules={modules}"

    def history_url(self, symbol: str, period: Period) -> str:
        return f"{self.chart_url(symbol)}?range={period.value}&interval=1d"

    # Operations

    def get_quote(self, symbol: str) -> Quote:
        """
        Fetch the current quote for a symbol.

        Raises:
            InvalidSymbol: Bad syntax, or the response has no chart result
            FetchExhausted: Every request attempt failed
        """
        symbol = self._symbol(symbol)
        logger.info(f"Fetching quote for {symbol}...")

        result = _chart_result(self.fetcher.request_json(self.chart_url(symbol)))
        if result is None:
            logger.warning(f"  {symbol}: chart response has no result")
            raise InvalidSymbol(symbol)

        meta = result.get("meta")
        if not isinstance(meta, dict):
            meta = {}
        try:
            series = _series_from_result(result)
        except ValueError as e:
            logger.warning(f"  {symbol}: misaligned chart arrays - {e}")
            raise InvalidSymbol(symbol) from e

        return Quote(
            symbol=meta.get("symbol") or symbol,
            price=meta.get("regularMarketPrice"),
            previous_close=_previous_close(meta),
            volume=meta.get("regularMarketVolume"),
            market_cap=meta.get("marketCap"),
            currency=meta.get("currency") or "USD",
            exchange_name=meta.get("exchangeName"),
            long_name=meta.get("longName") or meta.get("shortName") or symbol,
            series=series,
        )

    def _fetch_details(self, symbol: str) -> DetailBundle:
        try:
            data = self.fetcher.request_json(self.summary_url(symbol))
        except FetchExhausted as e:
            raise DetailUnavailable(symbol, "request failed") from e

        summary = data.get("quoteSummary") if isinstance(data, dict) else None
        results = summary.get("result") if isinstance(summary, dict) else None
        if not isinstance(results, list) or not results or not isinstance(results[0], dict):
            raise DetailUnavailable(symbol, "response has no quoteSummary result")

        result = results[0]
        modules = {}
        for name in self.settings.detail_modules:
            module = result.get(name)
            modules[name] = module if isinstance(module, dict) else {}
        return DetailBundle(modules)

    def get_details(self, symbol: str) -> DetailBundle:
        """
        Fetch secondary statistics for a symbol.

        Best effort: any failure is logged and an empty bundle is returned.
        """
        try:
            symbol = self._symbol(symbol)
            logger.info(f"Fetching details for {symbol}...")
            return self._fetch_details(symbol)
        except (DetailUnavailable, InvalidSymbol) as e:
            logger.warning(f"  Details unavailable: {e.message}")
            return DetailBundle.empty()

    def get_history(self, symbol: str, period: Period | str = Period.ONE_MONTH) -> HistoricalSeries:
        """
        Fetch daily price history for a symbol.

        Args:
            symbol: Ticker symbol
            period: Period or its range string (1d, 5d, 1mo, 3mo, 1y)

        Raises:
            NoHistoricalData: The response has no chart result
            FetchExhausted: Every request attempt failed
        """
        symbol = self._symbol(symbol)
        period = Period(period)
        logger.info(f"Fetching {period.value} history for {symbol}...")

        result = _chart_result(self.fetcher.request_json(self.history_url(symbol, period)))
        if result is None:
            logger.warning(f"  {symbol}: no historical data for {period.value}")
            raise NoHistoricalData(symbol, period.value)

        try:
            return _series_from_result(result, period)
        except ValueError as e:
            raise NoHistoricalData(symbol, period.value) from e

    def get_quote_with_details(self, symbol: str) -> tuple[Quote, DetailBundle]:
        """Fetch quote and details concurrently; details never raise."""
        with ThreadPoolExecutor(max_workers=2) as pool:
            quote_future = pool.submit(self.get_quote, symbol)
            details_future = pool.submit(self.get_details, symbol)
            details = details_future.result()
            quote = quote_future.result()
        return quote, details
