"""Query engine — date/search filtering, newest-first sort, and pagination."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from log_insight.errors import InvalidRequest
from log_insight.parser import Record, parse_date_bound, parse_line

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50


@dataclass
class QueryResult:
    entries: list[dict] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    total_pages: int = 0
    limit: int = DEFAULT_LIMIT

    def to_dict(self) -> dict:
        return {
            "entries": self.entries,
            "total": self.total,
            "page": self.page,
            "totalPages": self.total_pages,
            "limit": self.limit,
        }


def coerce_positive_int(value, default: int) -> int:
    """Return *value* as an int >= 1, or *default* if it is absent or unusable."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def in_date_range(record: Record, start: datetime | None, end: datetime | None) -> bool:
    """True if the record's time lies within [start, end].

    A record without an orderable time fails any bound it is checked against.
    """
    if start is None and end is None:
        return True
    if record.timestamp is None:
        return False
    if start is not None and record.timestamp < start:
        return False
    if end is not None and record.timestamp > end:
        return False
    return True


def sort_newest_first(records: list[Record]) -> list[Record]:
    """Dated records newest first, then undated records in file order."""
    dated = [r for r in records if r.timestamp is not None]
    undated = [r for r in records if r.timestamp is None]
    dated.sort(key=lambda r: r.timestamp, reverse=True)
    return dated + undated


def run_query(
    lines: Iterable[str],
    page=None,
    limit=None,
    search: str = "",
    start_date=None,
    end_date=None,
    max_limit: int | None = None,
) -> QueryResult:
    """Filter, sort and paginate the records found in *lines*."""
    page = coerce_positive_int(page, DEFAULT_PAGE)
    limit = coerce_positive_int(limit, DEFAULT_LIMIT)
    if max_limit is not None:
        limit = min(limit, max_limit)
    if search is None:
        search = ""
    if not isinstance(search, str):
        raise InvalidRequest("search must be a string")
    start = parse_date_bound(start_date, "startDate")
    end = parse_date_bound(end_date, "endDate")

    matched = []
    for line in lines:
        parsed = parse_line(line)
        if not isinstance(parsed, Record):
            continue
        if not in_date_range(parsed, start, end):
            continue
        if search and not parsed.contains(search):
            continue
        matched.append(parsed)

    ordered = sort_newest_first(matched)
    total = len(ordered)
    offset = (page - 1) * limit

    return QueryResult(
        entries=[r.fields for r in ordered[offset:offset + limit]],
        total=total,
        page=page,
        total_pages=math.ceil(total / limit),
        limit=limit,
    )
