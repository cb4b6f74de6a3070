"""Fixed catalog of bookable tour packages."""

from .catalog import (
    CATALOG,
    TourPackage,
    get_package,
    find_by_name,
    format_catalog,
    format_price,
)

__all__ = [
    "CATALOG",
    "TourPackage",
    "get_package",
    "find_by_name",
    "format_catalog",
    "format_price",
]
