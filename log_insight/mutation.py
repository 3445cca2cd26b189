"""Mutation engine — decide which records a conditional delete removes."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from log_insight.errors import InvalidRequest
from log_insight.parser import Record, parse_date_bound, parse_line


@dataclass(frozen=True)
class DeleteConditions:
    start_date: datetime | None = None
    end_date: datetime | None = None
    search: str = ""

    @classmethod
    def from_dict(cls, d: dict | None) -> "DeleteConditions":
        """Build conditions from a ``{startDate, endDate, search}`` mapping."""
        d = d or {}
        if not isinstance(d, dict):
            raise InvalidRequest("Delete conditions must be an object")
        search = d.get("search") or ""
        if not isinstance(search, str):
            raise InvalidRequest("search must be a string")
        return cls(
            start_date=parse_date_bound(d.get("startDate"), "startDate"),
            end_date=parse_date_bound(d.get("endDate"), "endDate"),
            search=search,
        )

    @property
    def has_date_bound(self) -> bool:
        return self.start_date is not None or self.end_date is not None

    @property
    def is_empty(self) -> bool:
        return not self.has_date_bound and not self.search


@dataclass(frozen=True)
class DeleteResult:
    deleted_count: int = 0

    def to_dict(self) -> dict:
        return {"deletedCount": self.deleted_count}


def matches_date_window(record: Record, conditions: DeleteConditions) -> bool:
    """True if the record falls inside the supplied date bound(s).

    Unlike the query filter, a record without an orderable time never
    matches here, so a date-only delete keeps it.
    """
    ts = record.timestamp
    if ts is None or not conditions.has_date_bound:
        return False
    if conditions.start_date is not None and ts < conditions.start_date:
        return False
    if conditions.end_date is not None and ts > conditions.end_date:
        return False
    return True


def should_delete(record: Record, conditions: DeleteConditions) -> bool:
    """A record goes if it matches the date window OR the search text."""
    if matches_date_window(record, conditions):
        return True
    return bool(conditions.search) and record.contains(conditions.search)


def partition_lines(lines: Iterable[str], conditions: DeleteConditions) -> tuple[list[str], int]:
    """Split *lines* into (lines to keep, number of records deleted).

    Opaque lines are always kept, verbatim and in place.
    """
    kept = []
    deleted = 0
    for line in lines:
        parsed = parse_line(line)
        if isinstance(parsed, Record) and should_delete(parsed, conditions):
            deleted += 1
        else:
            kept.append(line)
    return kept, deleted
