from collections.abc import Generator
from contextlib import contextmanager
from typing import Any


class DataPageError(Exception):
    """Base exception for all datapage errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class FieldAccessError(DataPageError):
    """
    Raised when a declared property exists on a record but cannot be read.

    This signals a mismatch between the record type and the sort keys the
    caller asked for, so sorting cannot continue.
    """

    def __init__(
        self,
        field_name: str,
        record_type: type | None = None,
        original_error: Exception | None = None,
    ) -> None:
        type_name = record_type.__name__ if record_type is not None else "unknown"
        msg = f"Error accessing field '{field_name}' on {type_name}"
        if original_error is not None:
            msg += f": {original_error!s}"
        super().__init__(msg, original_error)
        self.field_name = field_name
        self.record_type = record_type


class InvalidPageRequestError(DataPageError):
    """Raised when a page request or sort specification fails validation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.field = field
        self.value = value


@contextmanager
def field_access_errors(field_name: str, record_type: type) -> Generator[None, None, None]:
    """
    Context manager that translates failures while reading a record property
    into FieldAccessError.

    AttributeError passes through untouched: the resolver treats it as a
    missing value, not as a failure.

    Usage:
        with field_access_errors("name", type(record)):
            value = getattr(record, "name")
    """
    try:
        yield
    except AttributeError:
        raise
    except DataPageError:
        raise
    except Exception as e:
        raise FieldAccessError(field_name, record_type, original_error=e) from e
