import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .request import Sort

# Create the library logger
logger = logging.getLogger("datapage")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def describe_sort(sort: "Sort | None") -> str:
    """
    Renders sort orders compactly for log context.
    E.g.: "name:ASC,child_age:DESC" or "UNSORTED".
    """
    if sort is None or not sort.orders:
        return "UNSORTED"
    return ",".join(f"{order.path}:{order.direction.value}" for order in sort.orders)
