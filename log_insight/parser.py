"""Line parser — turns a raw line into a Record or keeps it as an Opaque line."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from log_insight.errors import InvalidDate


@dataclass(frozen=True)
class Record:
    fields: dict[str, Any]
    line: str
    timestamp: datetime | None

    def serialized(self) -> str:
        """Compact JSON form of the record, used for text search."""
        return json.dumps(_js_numbers(self.fields), separators=(",", ":"), ensure_ascii=False)

    def contains(self, text: str) -> bool:
        """True if *text* occurs in the serialized record (case-insensitive)."""
        return text.lower() in self.serialized().lower()


@dataclass(frozen=True)
class Opaque:
    line: str


def _js_numbers(value):
    """Render integral floats as ints, the way JSON.stringify prints them."""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, dict):
        return {k: _js_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_js_numbers(v) for v in value]
    return value


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def format_time(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_timestamp(value) -> datetime | None:
    """Parse a record's ``time`` value into an aware datetime.

    Accepts ISO-8601 strings and epoch milliseconds. Returns None when the
    value cannot be ordered. Naive values are taken as UTC.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_date_bound(value, field: str) -> datetime | None:
    """Parse a caller-supplied date bound. Empty or None means no bound."""
    if value is None or value == "":
        return None
    parsed = parse_timestamp(value) if isinstance(value, str) else None
    if parsed is None:
        raise InvalidDate(field, value)
    return parsed


def parse_line(line: str) -> Record | Opaque:
    """Strictly parse *line* as a JSON object. Anything else is Opaque."""
    try:
        data = json.loads(line, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return Opaque(line)
    if not isinstance(data, dict):
        return Opaque(line)
    return Record(fields=data, line=line, timestamp=parse_timestamp(data.get("time")))
