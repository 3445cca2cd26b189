"""Per-category file statistics — line count, byte size, last modification."""

from dataclasses import dataclass
from datetime import datetime, timezone

from log_insight.categories import CATEGORY_NAMES
from log_insight.line_store import LineStore
from log_insight.parser import format_time


@dataclass
class CategoryStats:
    count: int = 0
    size: int = 0
    last_modified: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "size": self.size,
            "lastModified": format_time(self.last_modified) if self.last_modified else None,
        }


def collect_stats(store: LineStore) -> dict[str, CategoryStats]:
    """Return stats for every category, in registry order."""
    stats = {}
    for category in CATEGORY_NAMES:
        st = store.stat(category)
        if st is None:
            stats[category] = CategoryStats()
            continue
        stats[category] = CategoryStats(
            count=len(store.load_lines(category)),
            size=st.st_size,
            last_modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )
    return stats
