"""Errors raised by the data layer."""


class StockDataError(Exception):
    """Base error; `message` is safe to show to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FetchExhausted(StockDataError):
    """Every attempt in the proxy chain failed."""

    def __init__(self, url: str, attempts: int, last_error: Exception | None) -> None:
        super().__init__(f"All {attempts} request attempts failed for {url}: {last_error}")
        self.url = url
        self.attempts = attempts
        self.last_error = last_error


class InvalidSymbol(StockDataError):
    """Symbol is malformed or the chart response has no result for it."""

    def __init__(self, symbol: str) -> None:
        super().__init__(
            f"Failed to fetch data for {symbol}. Please check the symbol and try again."
        )
        self.symbol = symbol


class NoHistoricalData(StockDataError):
    """Chart response for a history request has no result."""

    def __init__(self, symbol: str, period: str) -> None:
        super().__init__("Failed to fetch historical data")
        self.symbol = symbol
        self.period = period


class DetailUnavailable(StockDataError):
    """quoteSummary data could not be loaded. Always recovered locally."""

    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(f"Unable to fetch detailed information for {symbol}: {reason}")
        self.symbol = symbol
