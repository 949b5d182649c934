"""Quote, detail and history data models."""

from .market_data import Period, Quote, DetailBundle, HistoricalSeries

__all__ = ["Period", "Quote", "DetailBundle", "HistoricalSeries"]
