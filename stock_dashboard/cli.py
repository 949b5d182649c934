"""Command line access to quotes, history and CSV export."""

import logging

from stock_dashboard.config import Settings, TIME_RANGES
from stock_dashboard.data import QuoteService, StockDataError, validate_symbol
from stock_dashboard.models import Period
from stock_dashboard.ui.formatters import format_currency, format_large_number
from stock_dashboard.ui.view_model import build_view_model, export_csv, export_filename


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    import argparse
    import sys

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Fetch stock quotes from Yahoo Finance")
    subparsers = parser.add_subparsers(dest="command", required=True)

    quote_parser = subparsers.add_parser("quote", help="Show quote and key statistics")
    quote_parser.add_argument("symbol", type=str, help="Ticker symbol, e.g. AAPL")

    history_parser = subparsers.add_parser("history", help="Show daily price history")
    history_parser.add_argument("symbol", type=str, help="Ticker symbol, e.g. AAPL")
    history_parser.add_argument(
        "--range",
        dest="time_range",
        type=str,
        choices=list(TIME_RANGES.keys()),
        default="1M",
        help="Time range (default: 1M)",
    )

    export_parser = subparsers.add_parser("export", help="Export the metrics table as CSV")
    export_parser.add_argument("symbol", type=str, help="Ticker symbol, e.g. AAPL")
    export_parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output path (default: SYMBOL_stock_data_YYYY-MM-DD.csv)",
    )
    args = parser.parse_args(argv)

    if not validate_symbol(args.symbol):
        print(f"Invalid symbol: {args.symbol!r} (1-10 characters, alphanumeric)")
        sys.exit(1)

    try:
        with QuoteService(Settings()) as service:
            if args.command == "history":
                series = service.get_history(args.symbol, Period.from_label(args.time_range))
                frame = series.dropna().to_frame()
                print(f"\n{args.symbol.upper()} - {args.time_range} daily history")
                print("-" * 72)
                for ts, row in frame.iterrows():
                    print(
                        f"{ts:%Y-%m-%d} | O {row['open']:>10.2f} | H {row['high']:>10.2f} | "
                        f"L {row['low']:>10.2f} | C {row['close']:>10.2f} | "
                        f"V {format_large_number(row['volume']):>8}"
                    )
                return

            quote, details = service.get_quote_with_details(args.symbol)
            view = build_view_model(quote, details)

            if args.command == "export":
                path = args.output or export_filename(view.symbol)
                with open(path, "w", encoding="utf-8", newline="") as f:
                    f.write(export_csv(view))
                print(f"Exported {len(view.rows)} rows to: {path}")
                return

            print(f"\n{view.overview.name} ({view.symbol})")
            print(
                f"{format_currency(quote.price, quote.currency)}  "
                f"{view.overview.change} ({view.overview.change_percent})"
            )
            print("-" * 72)
            for row in view.rows:
                print(f"{row.metric:16} | {row.value:>16} | {row.description}")

    except StockDataError as e:
        print(f"Error: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
