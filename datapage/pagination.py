"""
Page and slice results for datapage.

This module provides the data structures describing one window of content:
PageResult when the total number of records is known, SliceResult when only
"is there more?" can be answered.

Both own a private copy of their content, so later changes to the caller's
list don't leak into an already built result.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .request import PageRequest, Sort
from .sorting import sort_records

T = TypeVar("T")
U = TypeVar("U")


def compute_total(window: PageRequest, content_size: int, total: int) -> int:
    """
    Reconciles a caller-supplied total with the content actually present.

    When the window is paged, has content, and would reach past `total`,
    the total is too small (an optimistic count) and is replaced with
    offset + content_size. Otherwise `total` is returned unchanged.
    """
    if window.is_paged and content_size > 0 and window.offset + window.size > total:
        return window.offset + content_size
    return total


@dataclass
class Chunk(Generic[T]):
    """
    Common part of PageResult and SliceResult.

    Attributes:
        content: Records in this window
        window: The request this window answers
    """

    content: list[T]
    window: PageRequest = field(default_factory=PageRequest.unpaged)

    def __post_init__(self) -> None:
        self.content = list(self.content)

    @property
    def number(self) -> int:
        """Zero-based page number, 0 when unpaged."""
        return self.window.page if self.window.is_paged else 0

    @property
    def size(self) -> int:
        """Requested page size, or the content length when unpaged."""
        return self.window.size if self.window.is_paged else len(self.content)

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    @property
    def sort(self) -> Sort:
        return self.window.sort

    @property
    def is_first(self) -> bool:
        return self.number == 0

    @property
    def has_next(self) -> bool:
        return self.window.is_paged and self.number_of_elements == self.size

    @property
    def is_last(self) -> bool:
        return not self.has_next

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    def next_window(self) -> PageRequest:
        return self.window.next() if self.has_next else PageRequest.unpaged()

    def previous_window(self) -> PageRequest:
        return self.window.previous_or_first() if self.has_previous else PageRequest.unpaged()

    def converted_content(self, converter: Callable[[T], U]) -> list[U]:
        return [converter(item) for item in self.content]

    def replace_content(self, items: Iterable[T]) -> None:
        """Swaps the content in place, keeping the window and counts."""
        self.content = list(items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)


@dataclass
class PageResult(Chunk[T]):
    """
    A window of content plus the total number of records.

    The given total is reconciled on construction (see compute_total), so
    total_elements may be larger than what the caller passed in. When no
    total is passed, offset + len(content) is assumed.

    Attributes:
        total: Total number of records across all pages
    """

    total: int | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        given = self.total if self.total is not None else self.window.offset + len(self.content)
        self.total = compute_total(self.window, len(self.content), given)

    @classmethod
    def of_list(cls, items: Iterable[T]) -> PageResult[T]:
        """A single unpaged page holding every item."""
        content = list(items)
        return cls(content=content, window=PageRequest.unpaged(), total=len(content))

    @classmethod
    def empty(cls, window: PageRequest | None = None) -> PageResult[T]:
        return cls(content=[], window=window or PageRequest.unpaged(), total=0)

    @property
    def total_elements(self) -> int:
        assert self.total is not None
        return self.total

    @property
    def total_pages(self) -> int:
        """1 for a zero page size, otherwise ceil(total / size)."""
        if self.size == 0:
            return 1
        return (self.total_elements + self.size - 1) // self.size

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    def map(self, converter: Callable[[T], U]) -> PageResult[U]:
        """Converts every record, keeping window and total."""
        return PageResult(
            content=self.converted_content(converter),
            window=self.window,
            total=self.total_elements,
        )

    def sorted(self) -> PageResult[T]:
        """Returns a page with the same metadata and content ordered by this page's sort."""
        return PageResult(
            content=sort_records(self.content, self.sort),
            window=self.window,
            total=self.total_elements,
        )


@dataclass
class SliceResult(Chunk[T]):
    """
    A window of content without a total count.

    has_next is a fill-based hint: the window is assumed to have a successor
    when it came back full. This is wrong when the remaining records exactly
    fill the last window. Producers that know better pass known_has_next.

    Attributes:
        known_has_next: Exact answer for has_next, if the producer has one
    """

    known_has_next: bool | None = None

    @classmethod
    def empty(cls, window: PageRequest | None = None) -> SliceResult[T]:
        return cls(content=[], window=window or PageRequest.unpaged(), known_has_next=False)

    @property
    def has_next(self) -> bool:
        if self.known_has_next is not None:
            return self.known_has_next
        return super().has_next

    def map(self, converter: Callable[[T], U]) -> SliceResult[U]:
        return SliceResult(
            content=self.converted_content(converter),
            window=self.window,
            known_has_next=self.known_has_next,
        )

    def sorted(self) -> SliceResult[T]:
        return SliceResult(
            content=sort_records(self.content, self.sort),
            window=self.window,
            known_has_next=self.known_has_next,
        )
