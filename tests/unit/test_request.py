"""
Unit tests for the request value types: Direction, SortOrder, Sort and
PageRequest.
"""

import pytest
from pydantic import ValidationError

from datapage.exceptions import InvalidPageRequestError
from datapage.request import Direction, PageRequest, Sort, SortOrder


@pytest.mark.unit
class TestDirection:
    @pytest.mark.parametrize("raw", ["asc", "ASC", "Asc"])
    def test_from_string_ascending(self, raw):
        assert Direction.from_string(raw) is Direction.ASC

    def test_from_string_descending(self):
        assert Direction.from_string("desc") is Direction.DESC
        assert not Direction.DESC.is_ascending

    def test_from_string_invalid(self):
        with pytest.raises(InvalidPageRequestError) as exc_info:
            Direction.from_string("sideways")
        assert exc_info.value.field == "direction"


@pytest.mark.unit
class TestSort:
    def test_by_paths(self):
        sort = Sort.by("last", "first", direction=Direction.DESC)

        assert [o.path for o in sort.orders] == ["last", "first"]
        assert all(o.direction is Direction.DESC for o in sort.orders)
        assert len(sort) == 2
        assert sort.is_sorted

    def test_by_mixed(self):
        sort = Sort.by(SortOrder.desc("created"), "name")
        assert sort.orders == (SortOrder.desc("created"), SortOrder.asc("name"))

    def test_unsorted(self):
        assert not Sort.unsorted().is_sorted
        assert Sort.unsorted().orders == ()

    def test_get_order_for(self):
        sort = Sort.by("a", SortOrder.desc("b"))
        assert sort.get_order_for("b") == SortOrder.desc("b")
        assert sort.get_order_for("c") is None

    def test_empty_path_rejected(self):
        with pytest.raises(InvalidPageRequestError) as exc_info:
            Sort.by("name", "")
        assert isinstance(exc_info.value.original_error, ValidationError)

    def test_empty_separator_rejected(self):
        with pytest.raises(InvalidPageRequestError):
            Sort.by("name", separator="")

    def test_sort_is_immutable(self):
        sort = Sort.by("name")
        with pytest.raises(ValidationError):
            sort.separator = "."

    def test_with_orders_keeps_separator(self):
        sort = Sort.by("a", separator=".").with_orders([SortOrder.desc("b")])
        assert sort.separator == "."
        assert sort.orders == (SortOrder.desc("b"),)

    def test_with_orders_accepts_any_iterable(self):
        sort = Sort.by("a").with_orders(o for o in (SortOrder.desc("b"), SortOrder.asc("c")))
        assert sort.orders == (SortOrder.desc("b"), SortOrder.asc("c"))


@pytest.mark.unit
class TestSortOrder:
    def test_with_path(self):
        order = SortOrder.desc("a").ignoring_case().with_path("b")

        assert order.path == "b"
        assert order.direction is Direction.DESC
        assert order.ignore_case is True

    def test_with_empty_path_rejected(self):
        with pytest.raises(InvalidPageRequestError) as exc_info:
            SortOrder.asc("a").with_path("")
        assert exc_info.value.field == "path"

    def test_defaults(self):
        order = SortOrder(path="a")
        assert order.is_ascending
        assert order.ignore_case is False


@pytest.mark.unit
class TestPageRequest:
    def test_of(self):
        request = PageRequest.of(2, 10)

        assert request.page == 2
        assert request.size == 10
        assert request.offset == 20
        assert request.is_paged
        assert request.sort == Sort.unsorted()

    @pytest.mark.parametrize("page, size, field", [(-1, 10, "page"), (0, -1, "size")])
    def test_negative_values_rejected(self, page, size, field):
        with pytest.raises(InvalidPageRequestError) as exc_info:
            PageRequest.of(page, size)
        assert exc_info.value.field == field

    def test_zero_size_allowed(self):
        assert PageRequest.of(0, 0).size == 0

    def test_next_and_previous(self):
        sort = Sort.by("name")
        request = PageRequest.of(1, 5, sort)

        assert request.next() == PageRequest.of(2, 5, sort)
        assert request.previous_or_first() == PageRequest.of(0, 5, sort)
        assert request.first() == PageRequest.of(0, 5, sort)

    def test_previous_of_first_is_first(self):
        request = PageRequest.of(0, 5)
        assert request.previous_or_first() == request

    def test_unpaged(self):
        request = PageRequest.unpaged(Sort.by("name"))

        assert not request.is_paged
        assert request.offset == 0
        assert request.next() is request
        assert request.previous_or_first() is request
        assert request.sort == Sort.by("name")

    def test_with_sort(self):
        request = PageRequest.of(3, 5).with_sort(Sort.by("x"))

        assert request.page == 3
        assert request.sort == Sort.by("x")

    def test_requests_are_hashable(self):
        assert hash(PageRequest.of(1, 2, Sort.by("a"))) == hash(PageRequest.of(1, 2, Sort.by("a")))
