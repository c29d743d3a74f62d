"""
Multi-key, null-aware sorting for datapage.

Records are ordered by a Sort: each SortOrder resolves a (possibly nested)
path on both records and the first key that is not tied decides.

Null handling:
- both values None -> tied, the next key decides
- one value None   -> None first for ASC, last for DESC
- values that can't be ordered against each other -> tied

Intrinsic ordering shortcut:
If the records themselves are orderable (str, int, datetime, dataclasses with
order=True, any type defining __lt__), they are compared as whole values and
the sort keys are IGNORED, even when the Sort has keys. Sorting ["b", "a"]
with Sort.by("length") still yields ["a", "b"].

Sorting always goes through Python's stable sort, so records that compare
equal on every key keep their input order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from functools import cmp_to_key
from typing import Any, TypeVar

from ._logging import describe_sort, logger
from .request import Sort, SortOrder
from .resolver import Accessor, AccessorCache, resolve

T = TypeVar("T")

Comparator = Callable[[Any, Any], int]


def has_intrinsic_order(value: Any) -> bool:
    """True if instances of this value's type can be ordered as whole values."""
    if value is None or isinstance(value, Mapping):
        return False
    return getattr(type(value), "__lt__", None) is not object.__lt__


def _three_way(left: Any, right: Any) -> int:
    if left < right:
        return -1
    if right < left:
        return 1
    return 0


def compare_values(left: Any, right: Any, order: SortOrder) -> int:
    """
    Compares two resolved values for a single sort key.

    Returns:
        -1, 0 or 1, already adjusted for the key's direction
    """
    ascending = order.is_ascending

    if left is None and right is None:
        return 0
    if left is None:
        return -1 if ascending else 1
    if right is None:
        return 1 if ascending else -1

    if order.ignore_case and isinstance(left, str) and isinstance(right, str):
        left, right = left.casefold(), right.casefold()

    try:
        result = _three_way(left, right)
    except TypeError:
        # Not comparable (e.g. str vs int, plain objects)
        return 0
    return result if ascending else -result


def _intrinsic_compare(left: Any, right: Any) -> int:
    return _three_way(left, right)


def build_comparator(
    sort: Sort,
    sample: Any,
    cache: AccessorCache[tuple[type, str, str], Accessor] | None = None,
) -> Comparator:
    """
    Builds a cmp-style function (-1/0/1) for records shaped like `sample`.

    Accessors are resolved once here against type(sample); the comparator
    itself holds no locks and is safe to call from several threads.
    """
    if has_intrinsic_order(sample):
        return _intrinsic_compare

    separator = sort.effective_separator
    record_type = type(sample)
    keys = [(resolve(record_type, order.path, separator, cache), order) for order in sort.orders]

    def compare(left: Any, right: Any) -> int:
        for accessor, order in keys:
            result = compare_values(accessor(left), accessor(right), order)
            if result != 0:
                return result
        return 0

    return compare


def sort_records(
    records: Iterable[T],
    sort: Sort | None = None,
    cache: AccessorCache[tuple[type, str, str], Accessor] | None = None,
) -> list[T]:
    """
    Returns a new list with `records` ordered by `sort`. The input is never
    mutated. The first record is used as the sample for the record type.

    Raises:
        FieldAccessError: If a sort path hits a property that can't be read
    """
    items = list(records)
    if not items:
        return items

    sort = sort if sort is not None else Sort()
    sample = items[0]

    logger.debug(
        "Sorting records",
        extra={
            "operation": "sort",
            "record_type": type(sample).__name__,
            "orders": describe_sort(sort),
            "count": len(items),
            "intrinsic": has_intrinsic_order(sample),
        },
    )

    comparator = build_comparator(sort, sample, cache)
    return sorted(items, key=cmp_to_key(comparator))
