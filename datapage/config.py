from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar

DEFAULT_SEPARATOR = "_"

# Process-wide default, replaced with set_default_separator()
_default_separator: str = DEFAULT_SEPARATOR

# Scoped override, see using_separator()
_separator_context: ContextVar[str | None] = ContextVar("datapage_separator", default=None)


def _validate_separator(separator: str) -> str:
    if not isinstance(separator, str) or not separator:
        raise ValueError(f"Path separator must be a non-empty string, got {separator!r}")
    return separator


def get_default_separator() -> str:
    """
    Returns the separator used for sort paths that don't specify one.

    Lookup order:
    1. A separator scoped with using_separator() (thread-safe/async-safe)
    2. The process-wide default from set_default_separator()
    3. DEFAULT_SEPARATOR ("_")
    """
    ctx_separator = _separator_context.get()
    if ctx_separator is not None:
        return ctx_separator
    return _default_separator


def set_default_separator(separator: str) -> None:
    """Replaces the process-wide default path separator."""
    global _default_separator
    _default_separator = _validate_separator(separator)


@contextmanager
def using_separator(separator: str) -> Generator[None, None, None]:
    """
    Context manager to scope a path separator to a block of code.
    Thread-safe and Async-safe using contextvars.

    Usage:
        with using_separator("."):
            sort_records(users, Sort.by("address.city"))
    """
    token = _separator_context.set(_validate_separator(separator))
    try:
        yield
    finally:
        _separator_context.reset(token)
