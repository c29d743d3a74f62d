"""
Path-based field resolution for datapage.

A sort path such as "address_city" is split on the separator and walked
segment by segment against a record. Mappings are read by key, everything
else is treated as a struct and read by attribute name.

Architectural Note:
-------------------
Attribute lookup does not rely on plain getattr(). Each class is turned into
an explicit, ordered list of "shapes" (the class itself, then its ancestors
in MRO order) and a name only counts as a field when one of those shapes
declares it: through an annotation (dataclasses, Pydantic models, typed
classes), __slots__, or a property/descriptor in the class namespace.
Undeclared names fall back to the instance __dict__ so plain classes that
assign attributes in __init__ keep working. Methods never count as fields.

Resolved accessors are memoised in a process-wide AccessorCache keyed by
(record type, path, separator). Entries are created lazily and live for the
whole process; there is no eviction.
"""

from __future__ import annotations

import inspect
import sys
import threading
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, Generic, TypeVar

from ._logging import logger
from .config import get_default_separator
from .exceptions import field_access_errors

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Accessor = Callable[[Any], Any]


class AccessorCache(Generic[K, V]):
    """
    Grow-only memo table safe for concurrent use.

    Reads are lock-free dict lookups. A miss computes the value outside the
    lock and then stores it with set-if-absent under the lock, so two threads
    racing on the same key may both compute, but the entry stored first is
    the one every caller gets back. Stored values must not be None.
    """

    def __init__(self, name: str = "accessors") -> None:
        self.name = name
        self._entries: dict[K, V] = {}
        self._lock = threading.Lock()

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        entry = self._entries.get(key)
        if entry is not None:
            return entry

        created = factory()
        with self._lock:
            return self._entries.setdefault(key, created)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# Process-wide caches, shared by every sort call
ACCESSOR_CACHE: AccessorCache[tuple[type, str, str], Accessor] = AccessorCache("accessors")
_SHAPE_CACHE: AccessorCache[type, tuple[type, ...]] = AccessorCache("shapes")
_DECLARED_CACHE: AccessorCache[tuple[type, str], bool] = AccessorCache("declared")


def field_shapes(record_type: type) -> tuple[type, ...]:
    """
    Returns the ordered shapes searched for a named field:
    the type itself first, then each ancestor, `object` excluded.
    """
    return _SHAPE_CACHE.get_or_create(
        record_type, lambda: tuple(c for c in record_type.__mro__ if c is not object)
    )


def _annotated_names(shape: type) -> Iterable[str]:
    if sys.version_info >= (3, 14):
        import annotationlib

        # Lazy annotations: FORWARDREF keeps names whose types don't resolve
        return annotationlib.get_annotations(shape, format=annotationlib.Format.FORWARDREF).keys()
    return inspect.get_annotations(shape).keys()


def _slot_names(shape: type) -> tuple[str, ...]:
    slots = vars(shape).get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(slots)


def declares(shape: type, name: str) -> bool:
    """True if this class (ignoring its ancestors) declares `name` as a field."""
    if name in _annotated_names(shape) or name in _slot_names(shape):
        return True

    namespace = vars(shape)
    if name not in namespace:
        return False

    attr = namespace[name]
    # Behaviour, not data
    if inspect.isroutine(attr) or isinstance(attr, (classmethod, staticmethod, type)):
        return False
    return True


def _is_declared(record_type: type, name: str) -> bool:
    return _DECLARED_CACHE.get_or_create(
        (record_type, name),
        lambda: any(declares(shape, name) for shape in field_shapes(record_type)),
    )


def read_field(value: Any, name: str) -> Any:
    """
    Reads one named field from a struct-like value.

    Returns None when the field is not declared anywhere in the value's type
    hierarchy, or is declared but unset.

    Raises:
        FieldAccessError: If the field exists but reading it fails
    """
    record_type = type(value)

    if _is_declared(record_type, name):
        with field_access_errors(name, record_type):
            try:
                return getattr(value, name)
            except AttributeError:
                return None

    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict):
        return instance_dict.get(name)
    return None


def _walk(record: Any, segments: tuple[str, ...]) -> Any:
    current = record
    for segment in segments:
        if current is None:
            break
        if isinstance(current, Mapping):
            current = current.get(segment)
        else:
            current = read_field(current, segment)
    return current


def _build_accessor(record_type: type, path: str, separator: str) -> Accessor:
    segments = tuple(path.split(separator))

    logger.debug(
        "Building field accessor",
        extra={
            "operation": "resolve",
            "record_type": record_type.__name__,
            "path": path,
            "segments": len(segments),
        },
    )

    def accessor(record: Any) -> Any:
        return _walk(record, segments)

    return accessor


def resolve(
    record_type: type,
    path: str,
    separator: str | None = None,
    cache: AccessorCache[tuple[type, str, str], Accessor] | None = None,
) -> Accessor:
    """
    Returns the memoised accessor for `path` on records of `record_type`.

    Args:
        record_type: Type the accessor is cached under
        path: Property path, e.g. "child_name"
        separator: Segment delimiter, defaults to the configured separator
        cache: Cache to use instead of the process-wide one

    Usage:
        get_city = resolve(User, "address_city")
        get_city(user)  # user.address.city, or None if any step is missing
    """
    sep = separator if separator is not None else get_default_separator()
    accessors = cache if cache is not None else ACCESSOR_CACHE
    return accessors.get_or_create(
        (record_type, path, sep), lambda: _build_accessor(record_type, path, sep)
    )


def get_value(record: Any, path: str, separator: str | None = None) -> Any:
    """Resolves `path` against a single record."""
    return resolve(type(record), path, separator)(record)
