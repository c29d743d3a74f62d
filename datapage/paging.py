"""
Windowing over in-memory lists.

to_page / to_slice sort a full list by the request's sort and cut out the
requested window. remap_sort_keys rewrites the sort paths of a request, e.g.
to translate API field names into record attribute paths.

Usage:
    request = PageRequest.of(1, 10, Sort.by("address_city", "name"))
    page = to_page(users, request)
    page.total_elements, page.has_next, page.next_window()
"""

from collections.abc import Iterable, Mapping
from typing import TypeVar

from ._logging import describe_sort, logger
from .exceptions import InvalidPageRequestError
from .pagination import PageResult, SliceResult
from .request import PageRequest, SortOrder
from .sorting import sort_records

T = TypeVar("T")


def _window_bounds(window: PageRequest, length: int) -> tuple[int, int]:
    if not window.is_paged:
        return 0, length
    start = window.offset
    return start, min(start + window.size, length)


def sort_list(records: Iterable[T], window: PageRequest | None = None) -> list[T]:
    """Returns a sorted copy of `records` using the request's sort."""
    return sort_records(records, window.sort if window is not None else None)


def to_page(records: Iterable[T], window: PageRequest | None = None) -> PageResult[T]:
    """
    Sorts `records` and returns the window described by `window`.

    - Empty input gives an empty page, whatever the window.
    - No window means a single page holding the whole list.
    - A window starting past the end gives an empty page.

    The total of the returned page is the length of the full list.
    """
    items = list(records)
    if not items:
        return PageResult.empty()

    if window is None:
        window = PageRequest.of(0, len(items))

    start, end = _window_bounds(window, len(items))

    logger.debug(
        "Building page",
        extra={
            "operation": "to_page",
            "page": window.page,
            "size": window.size,
            "paged": window.is_paged,
            "count": len(items),
            "orders": describe_sort(window.sort),
        },
    )

    if start >= len(items):
        return PageResult.empty()

    sorted_items = sort_records(items, window.sort)
    return PageResult(content=sorted_items[start:end], window=window, total=len(sorted_items))


def to_slice(records: Iterable[T], window: PageRequest | None = None) -> SliceResult[T]:
    """
    Like to_page, but returns a SliceResult. Since the full list is known,
    has_next is exact: True when records remain after the window.
    """
    items = list(records)
    if not items:
        return SliceResult.empty()

    if window is None:
        window = PageRequest.of(0, len(items))

    start, end = _window_bounds(window, len(items))

    logger.debug(
        "Building slice",
        extra={
            "operation": "to_slice",
            "page": window.page,
            "size": window.size,
            "paged": window.is_paged,
            "count": len(items),
            "orders": describe_sort(window.sort),
        },
    )

    if start >= len(items):
        return SliceResult.empty()

    sorted_items = sort_records(items, window.sort)
    return SliceResult(
        content=sorted_items[start:end],
        window=window,
        known_has_next=end < len(sorted_items),
    )


def remap_sort_keys(
    window: PageRequest, rename: Mapping[str, str], keep_all: bool = False
) -> PageRequest:
    """
    Returns a copy of `window` with sort paths renamed through `rename`.

    Args:
        window: Request whose sort keys are rewritten
        rename: Old path -> new path
        keep_all: If True, every key is kept (renamed where mapped, verbatim
            otherwise). If False, only mapped keys are kept AND the walk stops
            at the first mapped key: later keys are dropped even if they have
            a mapping.

    Usage:
        remap_sort_keys(request, {"city": "address_city"}, keep_all=True)
    """
    orders: list[SortOrder] = []
    for order in window.sort.orders:
        mapped = rename.get(order.path)
        if mapped is not None:
            orders.append(order.with_path(mapped))
            if not keep_all:
                logger.debug(
                    "Stopping sort key remap at first mapped key",
                    extra={
                        "operation": "remap_sort_keys",
                        "orders": describe_sort(window.sort),
                        "kept": len(orders),
                    },
                )
                return window.with_sort(window.sort.with_orders(orders))
        elif keep_all:
            orders.append(order)

    return window.with_sort(window.sort.with_orders(orders))


def page_limit(window: PageRequest) -> int:
    """
    Number of records a backing store has to return so that the window can
    be served from memory: everything up to the end of the requested page.

    Raises:
        InvalidPageRequestError: If the request is unpaged
    """
    if not window.is_paged:
        raise InvalidPageRequestError("Unpaged requests have no limit", field="paged", value=False)
    return (window.page + 1) * window.size
