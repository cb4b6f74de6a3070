from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from accounts.errors import InvalidTourIndex


@dataclass(frozen=True)
class TourPackage:
    code: int
    name: str
    price: Decimal   # per ticket, in rupees


CATALOG: Tuple[TourPackage, ...] = (
    TourPackage(1, "Paris, France", Decimal("400000")),
    TourPackage(2, "Tokyo, Japan", Decimal("600000")),
    TourPackage(3, "Bangkok, Thailand", Decimal("250000")),
    TourPackage(4, "Abu Dhabi, UAE", Decimal("380000")),
    TourPackage(5, "Miami, USA", Decimal("120000")),
    TourPackage(6, "Rome, Italy", Decimal("100000")),
    TourPackage(7, "Munich, Germany", Decimal("300000")),
    TourPackage(8, "Madrid, Spain", Decimal("320000")),
    TourPackage(9, "Istanbul, Turkey", Decimal("450000")),
    TourPackage(10, "Gilgit, Pakistan", Decimal("75000")),
)


def get_package(code) -> TourPackage:
    """Look up a package by its 1-based tour code."""
    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidTourIndex(code)
    if not 1 <= code <= len(CATALOG):
        raise InvalidTourIndex(code)
    return CATALOG[code - 1]


def find_by_name(name: str) -> Optional[TourPackage]:
    for package in CATALOG:
        if package.name == name:
            return package
    return None


def format_price(amount: Decimal) -> str:
    return f"Rs {amount:,.0f}"


def format_catalog() -> str:
    lines = ["MENU", ""]
    for package in CATALOG:
        label = f"{package.code}. {package.name}"
        lines.append(f"  {label:<24} - {format_price(package.price)}")
    return "\n".join(lines)
