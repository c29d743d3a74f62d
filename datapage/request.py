"""
Request value types for datapage.

PageRequest describes the window a caller wants (page number, page size and
sort), Sort/SortOrder describe the ordering. All of them are frozen Pydantic
models, so a request is built once and never mutated.

Usage:
    request = PageRequest.of(0, 20, Sort.by("name", Direction.DESC))
    request.next()  # page 1, same size and sort
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError

from .config import get_default_separator
from .exceptions import InvalidPageRequestError


class Direction(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @property
    def is_ascending(self) -> bool:
        return self is Direction.ASC

    @classmethod
    def from_string(cls, value: str) -> Direction:
        """Parses "asc"/"DESC" style values, case-insensitively."""
        try:
            return cls(value.upper())
        except (ValueError, AttributeError) as e:
            raise InvalidPageRequestError(
                f"Invalid sort direction {value!r}, expected ASC or DESC",
                field="direction",
                value=value,
                original_error=e,
            ) from e


def _wrap_validation_error(e: ValidationError) -> InvalidPageRequestError:
    """Converts the first Pydantic error into an InvalidPageRequestError."""
    first = e.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    return InvalidPageRequestError(
        f"Validation failed for field '{field}': {first.get('msg')}",
        field=field,
        value=first.get("input"),
        original_error=e,
    )


class SortOrder(BaseModel):
    """
    A single sort key: a property path plus a direction.

    ignore_case only applies when both compared values are strings.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    direction: Direction = Direction.ASC
    ignore_case: bool = False

    @classmethod
    def asc(cls, path: str) -> SortOrder:
        return cls(path=path, direction=Direction.ASC)

    @classmethod
    def desc(cls, path: str) -> SortOrder:
        return cls(path=path, direction=Direction.DESC)

    @property
    def is_ascending(self) -> bool:
        return self.direction.is_ascending

    def with_path(self, path: str) -> SortOrder:
        """Returns a copy pointing at another path, keeping direction and case handling."""
        try:
            return SortOrder(path=path, direction=self.direction, ignore_case=self.ignore_case)
        except ValidationError as e:
            raise _wrap_validation_error(e) from e

    def ignoring_case(self) -> SortOrder:
        return self.model_copy(update={"ignore_case": True})


class Sort(BaseModel):
    """
    Ordered sort specification. The first order has the highest priority.

    The separator splits nested paths ("address_city" -> address.city).
    When it is None, the configured default applies (see datapage.config).
    """

    model_config = ConfigDict(frozen=True)

    orders: tuple[SortOrder, ...] = ()
    separator: Annotated[str, StringConstraints(min_length=1)] | None = None

    @classmethod
    def by(
        cls,
        *paths: str | SortOrder,
        direction: Direction = Direction.ASC,
        separator: str | None = None,
    ) -> Sort:
        """
        Builds a Sort from property paths and/or SortOrder instances.
        Plain paths get the given direction.

        Usage:
            Sort.by("last_name", "first_name")
            Sort.by(SortOrder.desc("created"), "name")

        Raises:
            InvalidPageRequestError: If a path or the separator is empty
        """
        try:
            orders = tuple(
                p if isinstance(p, SortOrder) else SortOrder(path=p, direction=direction)
                for p in paths
            )
            return cls(orders=orders, separator=separator)
        except ValidationError as e:
            raise _wrap_validation_error(e) from e

    @classmethod
    def unsorted(cls) -> Sort:
        return cls()

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    @property
    def effective_separator(self) -> str:
        return self.separator if self.separator is not None else get_default_separator()

    def get_order_for(self, path: str) -> SortOrder | None:
        for order in self.orders:
            if order.path == path:
                return order
        return None

    def with_orders(self, orders: Iterable[SortOrder]) -> Sort:
        """Returns a copy with other orders and the same separator."""
        return Sort(orders=tuple(orders), separator=self.separator)

    def __len__(self) -> int:
        return len(self.orders)


class PageRequest(BaseModel):
    """
    A window over a sequence: zero-based page number, page size and sort.

    The unpaged sentinel (PageRequest.unpaged()) stands for "no window":
    it covers all content and has no adjacent pages.
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0)
    size: int = Field(default=0, ge=0)
    sort: Sort = Field(default_factory=Sort)
    paged: bool = True

    @classmethod
    def of(cls, page: int, size: int, sort: Sort | None = None) -> PageRequest:
        """
        Creates a paged request.

        Raises:
            InvalidPageRequestError: If page or size is negative
        """
        try:
            return cls(page=page, size=size, sort=sort if sort is not None else Sort())
        except ValidationError as e:
            raise _wrap_validation_error(e) from e

    @classmethod
    def unpaged(cls, sort: Sort | None = None) -> PageRequest:
        return cls(sort=sort if sort is not None else Sort(), paged=False)

    @property
    def is_paged(self) -> bool:
        return self.paged

    @property
    def offset(self) -> int:
        """Index of the first record of this window. Always 0 when unpaged."""
        if not self.paged:
            return 0
        return self.page * self.size

    def next(self) -> PageRequest:
        if not self.paged:
            return self
        return PageRequest(page=self.page + 1, size=self.size, sort=self.sort)

    def previous_or_first(self) -> PageRequest:
        if not self.paged:
            return self
        if self.page == 0:
            return self
        return PageRequest(page=self.page - 1, size=self.size, sort=self.sort)

    def first(self) -> PageRequest:
        if not self.paged:
            return self
        return PageRequest(page=0, size=self.size, sort=self.sort)

    def with_sort(self, sort: Sort) -> PageRequest:
        return self.model_copy(update={"sort": sort})
