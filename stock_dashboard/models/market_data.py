"""Data models for quote and price history data."""

import math
from dataclasses import dataclass, field
from enum import Enum

import pandas as pd

from stock_dashboard.config import TIME_RANGES, DETAIL_MODULES


class Period(str, Enum):
    """History ranges supported by the chart endpoint."""

    INTRADAY = "1d"
    FIVE_DAY = "5d"
    ONE_MONTH = "1mo"
    THREE_MONTH = "3mo"
    ONE_YEAR = "1y"

    @classmethod
    def from_label(cls, label: str) -> "Period":
        """Map a UI range label (1D, 5D, 1M, 3M, 1Y) to a period, defaulting to 1mo."""
        return cls(TIME_RANGES.get(label, cls.ONE_MONTH.value))


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


@dataclass
class HistoricalSeries:
    """Index-aligned price/volume arrays for one symbol."""

    timestamps: list[int]
    closes: list[float | None]
    opens: list[float | None] = field(default_factory=list)
    highs: list[float | None] = field(default_factory=list)
    lows: list[float | None] = field(default_factory=list)
    volumes: list[float | None] = field(default_factory=list)
    period: Period | None = None

    def __post_init__(self) -> None:
        n = len(self.timestamps)
        # Yahoo omits empty arrays entirely; pad those so every column aligns
        for name in ("closes", "opens", "highs", "lows", "volumes"):
            values = getattr(self, name)
            if not values:
                setattr(self, name, [None] * n)
            elif len(values) != n:
                raise ValueError(
                    f"{name} has {len(values)} values but there are {n} timestamps"
                )

    def __len__(self) -> int:
        return len(self.timestamps)

    @property
    def is_empty(self) -> bool:
        return len(self.timestamps) == 0

    def dropna(self) -> "HistoricalSeries":
        """Drop non-trading ticks (missing close), filtering every column together."""
        keep = [i for i, close in enumerate(self.closes) if not _is_missing(close)]
        return HistoricalSeries(
            timestamps=[self.timestamps[i] for i in keep],
            closes=[self.closes[i] for i in keep],
            opens=[self.opens[i] for i in keep],
            highs=[self.highs[i] for i in keep],
            lows=[self.lows[i] for i in keep],
            volumes=[self.volumes[i] for i in keep],
            period=self.period,
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Convert to a DataFrame.

        Returns:
            DataFrame with UTC DatetimeIndex and open/high/low/close/volume columns
        """
        df = pd.DataFrame(
            {
                "open": self.opens,
                "high": self.highs,
                "low": self.lows,
                "close": self.closes,
                "volume": self.volumes,
            },
            index=pd.to_datetime(self.timestamps, unit="s", utc=True),
            dtype="float64",
        )
        df.index.name = "date"
        return df


@dataclass
class Quote:
    """Point-in-time snapshot for a symbol plus its intraday series.

    Change and change percent are always derived from price and previous close.
    """

    symbol: str
    price: float | None
    previous_close: float | None
    volume: float | None = None
    market_cap: float | None = None
    currency: str = "USD"
    exchange_name: str | None = None
    long_name: str = ""
    series: HistoricalSeries = field(
        default_factory=lambda: HistoricalSeries(timestamps=[], closes=[])
    )

    def __post_init__(self) -> None:
        if not self.long_name:
            self.long_name = self.symbol

    @property
    def change(self) -> float | None:
        if _is_missing(self.price) or _is_missing(self.previous_close):
            return None
        return self.price - self.previous_close

    @property
    def change_percent(self) -> float | None:
        change = self.change
        if change is None or self.previous_close == 0:
            return None
        return change / self.previous_close * 100

    @property
    def is_up(self) -> bool:
        change = self.change
        return change is not None and change >= 0


DETAIL_CATEGORIES = DETAIL_MODULES


@dataclass
class DetailBundle:
    """Best-effort quoteSummary modules keyed by category name."""

    categories: dict[str, dict] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in DETAIL_CATEGORIES:
            self.categories.setdefault(name, {})

    @classmethod
    def empty(cls) -> "DetailBundle":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not any(self.categories.values())

    def get(self, category: str) -> dict:
        return self.categories.get(category) or {}

    def raw(self, category: str, name: str) -> float | None:
        """Unwrap a Yahoo {"raw": ..., "fmt": ...} value, or None if absent."""
        value = self.get(category).get(name)
        if isinstance(value, dict):
            value = value.get("raw")
        if _is_missing(value) or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return value
        return None
