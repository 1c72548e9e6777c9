"""CLI wrapper for the sales sheet pipeline.

This module provides a command-line interface for fetching the published
sheet and printing the sales report. All core logic is in sheet_sales.sales.

Examples:
  # This month's report from the sheet in SHEET_CSV_URL
  sheet-sales

  # A custom range from an explicit URL
  sheet-sales --url "https://docs.google.com/.../pub?output=csv" \
      --start 2024-07-01 --end 2024-07-31

  # Demo data with an AI summary (needs GEMINI_API_KEY)
  sheet-sales --mock --preset all --analyze

  # Demo data, reprinted every minute until Ctrl+C
  sheet-sales --mock --watch --interval 60
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time

from sheet_sales import insights
from sheet_sales.config import DEFAULT_REFRESH_INTERVAL, SheetConfig
from sheet_sales.dashboard import SalesDashboard
from sheet_sales.etl.utils import PRESETS, parse_day
from sheet_sales.exceptions import ConfigError, FetchError, NoDataError
from sheet_sales.formatters.console import format_analysis_for_console, format_report_for_console
from sheet_sales.sales.api import SalesReport

AI_API_KEY_ENV = "GEMINI_API_KEY"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sales report from a published spreadsheet.")
    parser.add_argument("--url", type=str, help="Published CSV URL (default: $SHEET_CSV_URL)")
    parser.add_argument("--start", type=parse_day, help="First day, YYYY-MM-DD")
    parser.add_argument("--end", type=parse_day, help="Last day, YYYY-MM-DD")
    parser.add_argument(
        "--preset",
        choices=PRESETS,
        default="this_month",
        help="Quick date range, ignored when --start/--end are given (default: this_month)",
    )
    parser.add_argument("--mock", action="store_true", help="Use synthetic demo data")
    parser.add_argument(
        "--analyze",
        action="store_true",
        help=f"Append an AI summary of the daily stats (needs ${AI_API_KEY_ENV})",
    )
    parser.add_argument("--watch", action="store_true", help="Keep refreshing and reprinting")
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Refresh interval in seconds for --watch (default: config value)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    return parser.parse_args(argv)


def _apply_filter(dashboard: SalesDashboard, args: argparse.Namespace) -> None:
    if args.start or args.end:
        dashboard.set_range(args.start, args.end)
    else:
        dashboard.apply_preset(args.preset)


def _print_analysis(report: SalesReport) -> None:
    api_key = os.environ.get(AI_API_KEY_ENV)
    if not api_key:
        print(f"[WARNING] {AI_API_KEY_ENV} not set, skipping AI analysis")
        return
    result = insights.analyze_daily_stats(report.daily_stats, api_key, insights.gemini_generate)
    if result is None:
        print("[WARNING] AI analysis unavailable")
        return
    print("\n" + format_analysis_for_console(result))


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Process exit code: 0 on success, 1 when the sheet could not be
        loaded.

    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.mock:
        dashboard = SalesDashboard()
        dashboard.load_synthetic()
        print("[INFO] Using synthetic demo data")
    else:
        try:
            config = SheetConfig.from_env(csv_url=args.url)
        except ConfigError as e:
            print(f"[ERROR] {e}")
            return 1
        dashboard = SalesDashboard(config)
        try:
            dashboard.load()
        except NoDataError as e:
            print(f"[ERROR] {e}")
            return 1
        except FetchError as e:
            print(f"[ERROR] Could not load the sheet: {e}")
            print("        Retry later, or run with --mock to use demo data.")
            return 1

    _apply_filter(dashboard, args)
    report = dashboard.report()
    print(format_report_for_console(report))
    if args.analyze:
        _print_analysis(report)

    if not args.watch:
        return 0

    # demo data is static, only the sheet gets refreshed
    handle = None if args.mock else dashboard.start_auto_refresh(args.interval)
    interval = handle.interval if handle else (args.interval or DEFAULT_REFRESH_INTERVAL)
    try:
        while True:
            time.sleep(interval)
            print("\n" + format_report_for_console(dashboard.report()))
    except KeyboardInterrupt:
        pass
    finally:
        if handle is not None:
            handle.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
