"""Tests for the category registry."""

import pytest

from log_insight.categories import CATEGORIES, CATEGORY_NAMES, resolve_category
from log_insight.errors import InvalidCategory, InvalidRequest


class TestResolveCategory:
    @pytest.mark.parametrize("name,filename", [
        ("general", "general.log"),
        ("login", "login.log"),
        ("tokens", "tokens.log"),
        ("app", "app.log"),
    ])
    def test_known_categories(self, name, filename):
        assert resolve_category(name) == filename

    @pytest.mark.parametrize("name", ["", "General", "audit", "../general", None, 3])
    def test_unknown_category_raises(self, name):
        with pytest.raises(InvalidCategory) as exc_info:
            resolve_category(name)
        assert exc_info.value.category == name

    def test_invalid_category_is_client_error(self):
        with pytest.raises(InvalidRequest):
            resolve_category("nope")


class TestRegistry:
    def test_fixed_set(self):
        assert CATEGORY_NAMES == ("general", "login", "tokens", "app")

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            CATEGORIES["audit"] = "audit.log"
