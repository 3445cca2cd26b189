"""CLI log inspector — query, delete from, and summarize category log files."""

import argparse
import json
import logging
import sys
from dataclasses import replace

from log_insight.categories import CATEGORY_NAMES
from log_insight.config import load_config
from log_insight.errors import InvalidRequest, IOFailure
from log_insight.parser import format_time
from log_insight.service import LogService


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="log-inspector", description="Inspect category log files")
    parser.add_argument("--log-dir", help="Directory containing log files (overrides config)")
    sub = parser.add_subparsers(dest="command", required=True)

    q = sub.add_parser("query", help="Show records newest first")
    q.add_argument("category", choices=CATEGORY_NAMES)
    q.add_argument("--page", type=int, default=1)
    q.add_argument("--limit", type=int, default=50)
    q.add_argument("--search", default="", help="Case-insensitive text match")
    q.add_argument("--start-date", help="ISO-8601 lower bound (inclusive)")
    q.add_argument("--end-date", help="ISO-8601 upper bound (inclusive)")
    q.add_argument("--output", choices=["text", "json"], default="text")

    d = sub.add_parser("delete", help="Delete records by date window or search text")
    d.add_argument("category", choices=CATEGORY_NAMES)
    d.add_argument("--start-date")
    d.add_argument("--end-date")
    d.add_argument("--search")

    s = sub.add_parser("stats", help="Line count, size and mtime per category")
    s.add_argument("--output", choices=["text", "json"], default="text")
    return parser


def _print_query(result, output: str):
    if output == "json":
        print(json.dumps(result.to_dict(), indent=2))
        return
    for entry in result.entries:
        print(json.dumps(entry, separators=(",", ":")))
    print(
        f"--- page {result.page}/{result.total_pages}, {result.total} record(s) ---",
        file=sys.stderr,
    )


def _print_stats(stats: dict, output: str):
    if output == "json":
        print(json.dumps({name: s.to_dict() for name, s in stats.items()}, indent=2))
        return
    for name, s in stats.items():
        modified = format_time(s.last_modified) if s.last_modified else "-"
        print(f"  {name:8s} {s.count:6d} lines  {_format_size(s.size):>10s}  {modified}")


def run(args) -> int:
    config = load_config()
    if args.log_dir:
        config = replace(config, log_dir=args.log_dir)
    service = LogService(config)

    try:
        if args.command == "query":
            result = service.query(
                args.category,
                page=args.page,
                limit=args.limit,
                search=args.search,
                start_date=args.start_date,
                end_date=args.end_date,
            )
            _print_query(result, args.output)
        elif args.command == "delete":
            result = service.delete_where(args.category, {
                "startDate": args.start_date,
                "endDate": args.end_date,
                "search": args.search,
            })
            print(f"Deleted {result.deleted_count} record(s) from {args.category}.")
        elif args.command == "stats":
            _print_stats(service.stats(), args.output)
    except InvalidRequest as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except IOFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


def main():
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [log-inspector] %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    args = build_parser().parse_args()
    sys.exit(run(args))


if __name__ == "__main__":
    main()
