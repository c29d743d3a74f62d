from .config import get_default_separator, set_default_separator, using_separator
from .exceptions import DataPageError, FieldAccessError, InvalidPageRequestError
from .pagination import PageResult, SliceResult, compute_total
from .paging import page_limit, remap_sort_keys, sort_list, to_page, to_slice
from .request import Direction, PageRequest, Sort, SortOrder
from .resolver import ACCESSOR_CACHE, AccessorCache, get_value, resolve
from .sorting import build_comparator, sort_records

__all__ = [
    "PageRequest",
    "Sort",
    "SortOrder",
    "Direction",
    "PageResult",
    "SliceResult",
    # Windowing
    "to_page",
    "to_slice",
    "sort_list",
    "remap_sort_keys",
    "page_limit",
    "compute_total",
    # Sorting & field resolution
    "sort_records",
    "build_comparator",
    "resolve",
    "get_value",
    "AccessorCache",
    "ACCESSOR_CACHE",
    # Configuration
    "get_default_separator",
    "set_default_separator",
    "using_separator",
    # Exceptions
    "DataPageError",
    "FieldAccessError",
    "InvalidPageRequestError",
]
