"""Category writer — appends structured JSON records to one category file."""

import json
from datetime import datetime, timezone

from log_insight.categories import resolve_category
from log_insight.errors import InvalidRequest
from log_insight.line_store import LineStore
from log_insight.parser import format_time

LEVELS = ("trace", "debug", "info", "warn", "error", "fatal")


class CategoryWriter:
    def __init__(self, store: LineStore, category: str, time_func=None):
        resolve_category(category)
        self._store = store
        self._category = category
        self._time_func = time_func or (lambda: datetime.now(timezone.utc))

    @property
    def category(self) -> str:
        return self._category

    def write(self, level: str, msg: str, **fields) -> dict:
        """Append one record and return it."""
        level = str(level).lower()
        if level not in LEVELS:
            raise InvalidRequest(f"Unknown log level: {level!r}")
        record = {"level": level, "time": format_time(self._time_func()), "msg": msg}
        record.update(fields)
        self._store.append_line(self._category, json.dumps(record, separators=(",", ":"), default=str))
        return record

    def info(self, msg: str, **fields) -> dict:
        return self.write("info", msg, **fields)

    def warn(self, msg: str, **fields) -> dict:
        return self.write("warn", msg, **fields)

    def error(self, msg: str, **fields) -> dict:
        return self.write("error", msg, **fields)
