#!/usr/bin/env python3
"""
Roster CLI: stats, validation and filtered export for roster CSV files.

USAGE:
  python -m roster.cli stats students.csv                        # Gender + domain stats
  python -m roster.cli stats students.csv -d nationality -d college --top 5
  python -m roster.cli stats students.csv --json                 # Snapshot as JSON

  python -m roster.cli validate students.csv                     # Accepted/skipped rows

  python -m roster.cli export students.csv                       # Re-export all rows
  python -m roster.cli export students.csv --gender female --domain gmail.com
  python -m roster.cli export students.csv --sort-by name --direction desc --output ./out
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from roster.analytics.stats import compute_stats
from roster.config import EXPORT_COLUMNS, EXPORTS_FOLDER, REQUIRED_COLUMNS, TOP_GROUPS_DEFAULT
from roster.data.csv_codec import decode
from roster.data.export import read_upload, to_download
from roster.data.schemas import RecordFilter
from roster.errors import CsvFormatError


def _read_csv(path: str) -> str:
    return read_upload(Path(path).read_bytes())


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  ROSTER — {title}")
    print("=" * 70)


def cmd_stats(args) -> int:
    """Print grouped statistics for a roster CSV."""
    result = decode(_read_csv(args.file), required_columns=())
    snapshot = compute_stats(result.records, args.dimension or None)

    if args.json:
        print(json.dumps(snapshot.to_dict(), indent=2))
        return 0

    _banner("STATISTICS")
    print(f"\n  Total records: {snapshot.total:,}")
    for name, dim in snapshot.dimensions.items():
        print(f"\n  {name.upper()} ({dim.contributing:,} contributing)\n")
        for i, g in enumerate(dim.top(args.top), 1):
            print(f"  {i:<4}{g.key[:40]:<42}{g.count:>8,}{g.percentage:>8.1f}%")
        if len(dim.ranking) > args.top:
            print(f"      ... {len(dim.ranking) - args.top} more")
    print()
    return 0


def cmd_validate(args) -> int:
    """Report how many rows of a roster CSV would be imported."""
    _banner("IMPORT CHECK")
    result = decode(_read_csv(args.file), REQUIRED_COLUMNS)
    print(f"\n  Columns:  {', '.join(result.columns)}")
    print(f"  Accepted: {result.accepted:,}")
    print(f"  Skipped:  {result.skipped:,}")
    if not result.ok:
        print("\n  Nothing to import: no valid rows\n")
        return 1
    print()
    return 0


def cmd_export(args) -> int:
    """Filter, sort and re-export a roster CSV."""
    _banner("EXPORT")
    result = decode(_read_csv(args.file), required_columns=())
    flt = RecordFilter(
        gender=args.gender,
        domain=args.domain,
        sort_by=args.sort_by,
        direction=args.direction,
    )
    rows = flt.apply(result.records)
    columns = args.columns.split(",") if args.columns else EXPORT_COLUMNS
    download = to_download(rows, columns)

    out_dir = Path(args.output) if args.output else EXPORTS_FOLDER
    out_dir.mkdir(parents=True, exist_ok=True)
    out = out_dir / download.filename
    out.write_bytes(download.content)

    print(f"\n  {flt.label}")
    print(f"  {len(rows):,} of {result.accepted:,} rows → {out}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Roster: record statistics and CSV import/export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # stats subcommand
    stats_parser = subparsers.add_parser("stats", help="Grouped statistics")
    stats_parser.add_argument("file", help="Roster CSV file")
    stats_parser.add_argument("-d", "--dimension", action="append",
                              help="gender, email_domain or any column (repeatable)")
    stats_parser.add_argument("--top", type=int, default=TOP_GROUPS_DEFAULT,
                              help=f"Groups shown per dimension (default {TOP_GROUPS_DEFAULT})")
    stats_parser.add_argument("--json", action="store_true", help="Print the snapshot as JSON")
    stats_parser.set_defaults(func=cmd_stats)

    # validate subcommand
    validate_parser = subparsers.add_parser("validate", help="Check a CSV before import")
    validate_parser.add_argument("file", help="Roster CSV file")
    validate_parser.set_defaults(func=cmd_validate)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Filtered CSV export")
    export_parser.add_argument("file", help="Roster CSV file")
    export_parser.add_argument("--gender", help="MALE, FEMALE or OTHER")
    export_parser.add_argument("--domain", help="Email domain, e.g. gmail.com")
    export_parser.add_argument("--sort-by", default="id", help="Sort field (default id)")
    export_parser.add_argument("--direction", choices=["asc", "desc"], default="asc")
    export_parser.add_argument("--columns", help="Comma-separated columns (default id,name,email,gender)")
    export_parser.add_argument("--output", help=f"Output directory (default {EXPORTS_FOLDER})")
    export_parser.set_defaults(func=cmd_export)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if not args.command:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except CsvFormatError as exc:
        print(f"  Invalid CSV: {exc}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
