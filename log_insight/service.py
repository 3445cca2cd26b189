"""LogService — composition root that wires the line store to the query, delete and stats engines."""

import logging

from log_insight.categories import CATEGORY_NAMES, resolve_category
from log_insight.config import Config
from log_insight.line_store import LineStore
from log_insight.mutation import DeleteConditions, DeleteResult, partition_lines
from log_insight.query import QueryResult, run_query
from log_insight.stats import CategoryStats, collect_stats
from log_insight.writer import CategoryWriter

logger = logging.getLogger(__name__)


class LogService:
    def __init__(self, config: Config, time_func=None):
        self._config = config
        self._store = LineStore(config.log_dir)
        self._writers = {
            name: CategoryWriter(self._store, name, time_func=time_func)
            for name in CATEGORY_NAMES
        }

    @property
    def store(self) -> LineStore:
        return self._store

    def writer(self, category: str) -> CategoryWriter:
        resolve_category(category)
        return self._writers[category]

    def query(self, category: str, page=None, limit=None, search: str = "",
              start_date=None, end_date=None) -> QueryResult:
        """Filtered, newest-first, paginated read of one category."""
        lines = self._store.load_lines(category)
        result = run_query(
            lines,
            page=page,
            limit=limit,
            search=search,
            start_date=start_date,
            end_date=end_date,
            max_limit=self._config.max_page_size,
        )
        logger.debug(
            "Query %s page=%d limit=%d matched %d of %d line(s)",
            category, result.page, result.limit, result.total, len(lines),
        )
        return result

    def delete_where(self, category: str, conditions) -> DeleteResult:
        """Remove records matching *conditions* and rewrite the file with the rest."""
        resolve_category(category)
        if not isinstance(conditions, DeleteConditions):
            conditions = DeleteConditions.from_dict(conditions)
        if conditions.is_empty:
            return DeleteResult(deleted_count=0)

        with self._store.locked(category):
            lines = self._store.load_lines(category)
            if not lines:
                return DeleteResult(deleted_count=0)
            kept, deleted = partition_lines(lines, conditions)
            if deleted:
                self._store.replace_lines(category, kept)

        logger.info(
            "Deleted %d record(s) from %s (startDate=%s endDate=%s search=%r)",
            deleted, category, conditions.start_date, conditions.end_date, conditions.search,
        )
        return DeleteResult(deleted_count=deleted)

    def stats(self) -> dict[str, CategoryStats]:
        return collect_stats(self._store)
