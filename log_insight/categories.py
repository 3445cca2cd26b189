"""Fixed registry of log categories and their backing file names."""

from types import MappingProxyType

from log_insight.errors import InvalidCategory

CATEGORIES = MappingProxyType({
    "general": "general.log",
    "login": "login.log",
    "tokens": "tokens.log",
    "app": "app.log",
})

CATEGORY_NAMES = tuple(CATEGORIES)


def resolve_category(category) -> str:
    """Return the file name for *category*. Raises InvalidCategory for anything else."""
    if not isinstance(category, str) or category not in CATEGORIES:
        raise InvalidCategory(category)
    return CATEGORIES[category]
