"""Turn quote, detail and history data into display rows and chart points.

Nothing here touches the network or Streamlit, so the same view model backs
the web dashboard, the CLI and CSV export.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo

import pandas as pd

from stock_dashboard.models import DetailBundle, HistoricalSeries, Quote
from stock_dashboard.ui.formatters import (
    format_currency,
    format_large_number,
    format_percentage,
    format_ratio,
    format_signed_currency,
)


CSV_COLUMNS = ["Metric", "Value", "Description"]


@dataclass
class TableRow:
    metric: str
    value: str
    description: str


@dataclass
class OverviewMetrics:
    """Headline numbers shown above the chart."""

    name: str
    price: str
    change: str
    change_percent: str
    volume: str
    market_cap: str
    is_up: bool


@dataclass
class ChartData:
    title: str
    labels: list[str]
    prices: list[float]
    timestamps: list[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.prices


@dataclass
class DashboardView:
    symbol: str
    overview: OverviewMetrics
    rows: list[TableRow]
    chart: ChartData


def build_overview(quote: Quote) -> OverviewMetrics:
    return OverviewMetrics(
        name=quote.long_name or quote.symbol,
        price=format_currency(quote.price, quote.currency),
        change=format_signed_currency(quote.change, quote.currency),
        change_percent=format_percentage(quote.change_percent),
        volume=format_large_number(quote.volume),
        market_cap=format_large_number(quote.market_cap),
        is_up=quote.is_up,
    )


def build_table_rows(quote: Quote, details: DetailBundle | None = None) -> list[TableRow]:
    """Metric rows for the data table; detail rows appear only when present."""
    currency = quote.currency
    rows = [
        TableRow("Symbol", quote.symbol, "Stock ticker symbol"),
        TableRow("Current Price", format_currency(quote.price, currency), "Current market price"),
        TableRow(
            "Previous Close",
            format_currency(quote.previous_close, currency),
            "Previous trading day close price",
        ),
        TableRow("Change", format_currency(quote.change, currency), "Price change from previous close"),
        TableRow(
            "Change %",
            format_percentage(quote.change_percent),
            "Percentage change from previous close",
        ),
        TableRow("Volume", format_large_number(quote.volume), "Number of shares traded"),
        TableRow("Market Cap", format_large_number(quote.market_cap), "Total market value of shares"),
        TableRow("Exchange", quote.exchange_name or "N/A", "Stock exchange"),
        TableRow("Currency", currency or "USD", "Trading currency"),
    ]

    if details is None or details.is_empty:
        return rows

    price_fields = [
        ("dayHigh", "Day High", "Today's highest price"),
        ("dayLow", "Day Low", "Today's lowest price"),
        ("fiftyTwoWeekHigh", "52W High", "52-week high price"),
        ("fiftyTwoWeekLow", "52W Low", "52-week low price"),
    ]
    for name, metric, description in price_fields:
        value = details.raw("summaryDetail", name)
        if value:
            rows.append(TableRow(metric, format_currency(value, currency), description))

    pe = details.raw("defaultKeyStatistics", "trailingPE") or details.raw("summaryDetail", "trailingPE")
    if pe:
        rows.append(TableRow("P/E Ratio", format_ratio(pe), "Price-to-earnings ratio"))

    dividend_yield = details.raw("defaultKeyStatistics", "dividendYield") or details.raw(
        "summaryDetail", "dividendYield"
    )
    if dividend_yield:
        rows.append(
            TableRow("Dividend Yield", format_percentage(dividend_yield * 100), "Annual dividend yield")
        )

    return rows


def format_timestamp(timestamp: int, time_range: str, tz: tzinfo | None = None) -> str:
    """Axis label: clock time for the 1D range, month and day otherwise."""
    moment = datetime.fromtimestamp(timestamp, tz=tz)
    if time_range == "1D":
        return moment.strftime("%H:%M")
    return moment.strftime("%b %d")


def chart_points(
    series: HistoricalSeries,
    time_range: str,
    title: str = "Price",
    tz: tzinfo | None = None,
) -> ChartData:
    """Chart labels and prices with non-trading ticks removed from both."""
    clean = series.dropna()
    return ChartData(
        title=title,
        labels=[format_timestamp(ts, time_range, tz) for ts in clean.timestamps],
        prices=[float(p) for p in clean.closes],
        timestamps=list(clean.timestamps),
    )


def build_view_model(
    quote: Quote,
    details: DetailBundle | None = None,
    history: HistoricalSeries | None = None,
    time_range: str = "1D",
    tz: tzinfo | None = None,
) -> DashboardView:
    """
    Build everything the dashboard displays for one symbol.

    Args:
        quote: Current quote
        details: Optional detail bundle (merged when present)
        history: Series for the chart; defaults to the quote's own series
        time_range: UI range label used for axis labels
        tz: Timezone for axis labels (default: local time)
    """
    series = history if history is not None else quote.series
    return DashboardView(
        symbol=quote.symbol,
        overview=build_overview(quote),
        rows=build_table_rows(quote, details),
        chart=chart_points(series, time_range, title=f"{quote.symbol} Price", tz=tz),
    )


def table_frame(view: DashboardView) -> pd.DataFrame:
    return pd.DataFrame(
        [(row.metric, row.value, row.description) for row in view.rows],
        columns=CSV_COLUMNS,
    )


def export_csv(view: DashboardView) -> str:
    """Data table as CSV text with a Metric,Value,Description header."""
    return table_frame(view).to_csv(index=False)


def export_filename(symbol: str, today: date | None = None) -> str:
    today = today or date.today()
    return f"{symbol}_stock_data_{today.isoformat()}.csv"
