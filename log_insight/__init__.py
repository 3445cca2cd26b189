"""log-insight — category-partitioned JSON-lines log store with query, delete and stats."""

__version__ = "1.0.0"
