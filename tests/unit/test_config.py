"""
Unit tests for separator configuration.

Tests the default path separator and its process-wide and scoped overrides.
"""

import threading

import pytest

from datapage.config import (
    DEFAULT_SEPARATOR,
    get_default_separator,
    set_default_separator,
    using_separator,
)
from datapage.request import Sort
from datapage.sorting import sort_records
from tests.records import Address, Person


@pytest.mark.unit
class TestSeparatorConfig:
    """Test default separator lookup."""

    def test_builtin_default(self) -> None:
        assert DEFAULT_SEPARATOR == "_"
        assert get_default_separator() == "_"

    def test_set_default_separator(self, restore_default_separator) -> None:
        set_default_separator(".")
        assert get_default_separator() == "."
        assert Sort.by("address.city").effective_separator == "."

    def test_explicit_sort_separator_wins(self, restore_default_separator) -> None:
        set_default_separator(".")
        assert Sort.by("address_city", separator="_").effective_separator == "_"

    def test_using_separator_scope(self) -> None:
        with using_separator("/"):
            assert get_default_separator() == "/"
        assert get_default_separator() == "_"

    def test_using_separator_overrides_process_default(self, restore_default_separator) -> None:
        set_default_separator(".")
        with using_separator("/"):
            assert get_default_separator() == "/"
        assert get_default_separator() == "."

    @pytest.mark.parametrize("bad", ["", None, 3])
    def test_invalid_separator(self, bad) -> None:
        with pytest.raises(ValueError, match="non-empty string"):
            set_default_separator(bad)
        with pytest.raises(ValueError):
            with using_separator(bad):
                pass

    def test_scoped_separator_used_for_sorting(self) -> None:
        people = [
            Person("b", address=Address("X", zip_code="2")),
            Person("a", address=Address("Y", zip_code="1")),
        ]
        with using_separator("."):
            result = sort_records(people, Sort.by("address.zip_code"))
        assert [p.name for p in result] == ["a", "b"]

    def test_scoped_separator_does_not_leak_from_threads(self) -> None:
        seen = {}

        def worker() -> None:
            with using_separator("/"):
                seen["thread"] = get_default_separator()

        t = threading.Thread(target=worker)
        t.start()
        t.join()

        assert seen["thread"] == "/"
        assert get_default_separator() == "_"
