"""Per-session dashboard state: current symbol, loaded data and error banner."""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable

from stock_dashboard.config import DEFAULT_TIME_RANGE, TIME_RANGES, Settings
from stock_dashboard.data import QuoteService, StockDataError, validate_symbol
from stock_dashboard.data.errors import FetchExhausted
from stock_dashboard.models import DetailBundle, HistoricalSeries, Period, Quote
from stock_dashboard.ui.view_model import DashboardView, build_view_model, export_csv, export_filename


logger = logging.getLogger(__name__)


EMPTY_SYMBOL_MESSAGE = "Please enter a stock symbol"
BAD_SYMBOL_MESSAGE = "Please enter a valid stock symbol (1-10 characters, alphanumeric)"
HISTORY_ERROR_MESSAGE = "Failed to fetch historical data for the selected time range"
NO_EXPORT_MESSAGE = "No data available to export"


@dataclass
class ErrorBanner:
    message: str
    expires_at: float


class DashboardController:
    """Runs searches and range changes against a QuoteService.

    Every request takes a generation number when it starts; a result whose
    generation has since been superseded is dropped, so a slow older response
    never replaces a newer view. Failures leave the displayed data untouched.
    """

    def __init__(
        self,
        service: QuoteService,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.service = service
        self.settings = settings or service.settings
        self._clock = clock
        self._lock = threading.Lock()
        self._search_generation = 0
        self._history_generation = 0

        self.current_symbol: str = ""
        self.quote: Quote | None = None
        self.details: DetailBundle = DetailBundle.empty()
        self.history: HistoricalSeries | None = None
        self.time_range: str = DEFAULT_TIME_RANGE
        # Last range asked for; time_range only moves once its history loads
        self.requested_range: str = DEFAULT_TIME_RANGE
        self.error: ErrorBanner | None = None

    # Error banner

    def show_error(self, message: str) -> None:
        """Replace any current error with `message` for the display duration."""
        logger.warning(f"Showing error: {message}")
        self.error = ErrorBanner(message, self._clock() + self.settings.error_display_seconds)

    def clear_error(self) -> None:
        self.error = None

    def active_error(self) -> str | None:
        """Current error message, or None once it has expired."""
        if self.error is None:
            return None
        if self._clock() >= self.error.expires_at:
            self.error = None
            return None
        return self.error.message

    # Actions

    def _begin_search(self) -> int:
        with self._lock:
            self._search_generation += 1
            # Any pending history request belongs to the previous symbol
            self._history_generation += 1
            return self._search_generation

    def _begin_history(self) -> int:
        with self._lock:
            self._history_generation += 1
            return self._history_generation

    def search(self, raw_symbol: str) -> bool:
        """
        Load quote and details for a symbol.

        Returns:
            True if the view now shows the symbol
        """
        symbol = (raw_symbol or "").strip().upper()
        if not symbol:
            self.show_error(EMPTY_SYMBOL_MESSAGE)
            return False
        if not validate_symbol(symbol):
            self.show_error(BAD_SYMBOL_MESSAGE)
            return False

        generation = self._begin_search()
        self.clear_error()

        try:
            quote, details = self.service.get_quote_with_details(symbol)
        except FetchExhausted as e:
            logger.error(f"Error fetching stock data: {e}")
            if generation == self._search_generation:
                self.show_error(
                    f"Failed to fetch data for {symbol}. Please check the symbol and try again."
                )
            return False
        except StockDataError as e:
            logger.error(f"Error fetching stock data: {e}")
            if generation == self._search_generation:
                self.show_error(e.message)
            return False

        with self._lock:
            if generation != self._search_generation:
                logger.info(f"Discarding stale result for {symbol}")
                return False
            self.current_symbol = symbol
            self.quote = quote
            self.details = details
            self.history = None
            self.time_range = DEFAULT_TIME_RANGE
            self.requested_range = DEFAULT_TIME_RANGE
        return True

    def change_time_range(self, time_range: str) -> bool:
        """
        Load history for the current symbol over a new range.

        Returns:
            True if the chart now shows the new range
        """
        if not self.current_symbol:
            return False
        if time_range not in TIME_RANGES:
            logger.warning(f"Unknown time range {time_range!r}, using 1M")
            time_range = "1M"

        self.requested_range = time_range
        symbol = self.current_symbol
        generation = self._begin_history()

        try:
            history = self.service.get_history(symbol, Period.from_label(time_range))
        except StockDataError as e:
            logger.error(f"Error fetching historical data: {e}")
            if generation == self._history_generation:
                self.show_error(HISTORY_ERROR_MESSAGE)
            return False

        with self._lock:
            if generation != self._history_generation or symbol != self.current_symbol:
                logger.info(f"Discarding stale {time_range} history for {symbol}")
                return False
            self.history = history
            self.time_range = time_range
        return True

    # Output

    def view(self, tz: tzinfo | None = None) -> DashboardView | None:
        if self.quote is None:
            return None
        return build_view_model(
            self.quote, self.details, self.history, time_range=self.time_range, tz=tz
        )

    def export(self) -> tuple[str, str] | None:
        """Return (filename, csv text) for the current table, or None if empty."""
        view = self.view()
        if view is None:
            self.show_error(NO_EXPORT_MESSAGE)
            return None
        return export_filename(self.current_symbol), export_csv(view)
