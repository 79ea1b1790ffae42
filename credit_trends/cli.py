#!/usr/bin/env python3
"""
Credit Trends CLI — summaries, exports, filter options, and the API server.

USAGE:
  python -m credit_trends.cli summary data.csv                          # Summary report to stdout
  python -m credit_trends.cli summary data.csv --year 2022 --state CA   # Filtered summary
  python -m credit_trends.cli options data.csv                          # Distinct values per dimension

  python -m credit_trends.cli export data.csv                           # Filtered CSV to exports folder
  python -m credit_trends.cli export data.csv --format txt --output ./out

  python -m credit_trends.cli serve                                     # Start API server
  python -m credit_trends.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from credit_trends.config import EXPORTS_FOLDER, LOG_LEVEL
from credit_trends.data.errors import EmptyDatasetError, EmptyExportError
from credit_trends.data.schemas import Dimension, FilterSelection, selection_from_mapping
from credit_trends.data.store import DataStore

_FILTER_ARGS = [
    ("year", Dimension.YEARS),
    ("state", Dimension.STATES),
    ("credit_type", Dimension.CREDIT_TYPES),
    ("sector", Dimension.SECTORS),
    ("income_bracket", Dimension.INCOME_BRACKETS),
]


def _build_selection(args) -> FilterSelection:
    """Build a FilterSelection from repeated --year/--state/... flags."""
    raw = {dim.value: getattr(args, attr, None) for attr, dim in _FILTER_ARGS}
    return selection_from_mapping(raw)


def _load(args) -> DataStore:
    store = DataStore().load_file(Path(args.file))
    store.set_selection(_build_selection(args))
    return store


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  CREDIT TRENDS — {title}")
    print("=" * 70)


def cmd_summary(args) -> int:
    """Print the summary report for the (filtered) file."""
    from credit_trends.reports.summary_report import to_summary_report

    store = _load(args)
    print(to_summary_report(store.get_active()))
    return 0


def cmd_options(args) -> int:
    """Print the distinct values available for each filter dimension."""
    store = DataStore().load_file(Path(args.file))
    _banner("FILTER OPTIONS")
    print(f"  {store.row_count():,} records from {store.source_name} ({store.skipped_rows:,} rows skipped)\n")
    for dim in Dimension:
        values = store.filter_options()[dim.value]
        print(f"  {dim.label} ({len(values)}):")
        print("    " + ", ".join(str(v) for v in values))
    print()
    return 0


def cmd_export(args) -> int:
    """Write the filtered CSV or the summary report using the dated file name."""
    from credit_trends.reports.csv_export import write_csv
    from credit_trends.reports.summary_report import write_report

    store = _load(args)
    active = store.get_active()
    output = Path(args.output)

    _banner("EXPORT")
    print(f"  Records: {len(active):,} of {store.row_count():,} "
          f"({store.selection.active_count()} active filters)")

    if args.format == "csv":
        path = write_csv(active, output)
    else:
        path = write_report(active, output)

    print(f"\n  Saved to: {path}")
    print("=" * 70 + "\n")
    return 0


def cmd_serve(args) -> int:
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Credit Trends API on port {args.port}...")
    uvicorn.run("credit_trends.main:app", host=args.host, port=args.port, reload=args.reload,
                timeout_keep_alive=65)
    return 0


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="CSV file (Year, State, Tax_Credit_Type, Sector, "
                                "Claimed_Amount, Claims_Count, Income_Bracket, Source)")
    p.add_argument("--year", type=int, action="append", help="Year (repeatable)")
    p.add_argument("--state", action="append", help="State (repeatable)")
    p.add_argument("--credit-type", dest="credit_type", action="append", help="Credit type (repeatable)")
    p.add_argument("--sector", action="append", help="Sector (repeatable)")
    p.add_argument("--income-bracket", dest="income_bracket", action="append", help="Income bracket (repeatable)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Credit Trends — Tax credit utilization analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # summary subcommand
    summary_parser = subparsers.add_parser("summary", help="Print summary report")
    _add_filter_args(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    # options subcommand
    options_parser = subparsers.add_parser("options", help="List filter values")
    options_parser.add_argument("file", help="CSV file")
    options_parser.set_defaults(func=cmd_options)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Export filtered CSV or summary report")
    _add_filter_args(export_parser)
    export_parser.add_argument("--format", choices=["csv", "txt"], default="csv", help="Output format (default csv)")
    export_parser.add_argument("--output", default=str(EXPORTS_FOLDER), help=f"Output directory (default: {EXPORTS_FOLDER})")
    export_parser.set_defaults(func=cmd_export)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind host (default 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (EmptyDatasetError, EmptyExportError) as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"  File not found: {exc.filename}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
