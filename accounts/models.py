from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, List

# stored place for a user without a booking
NO_BOOKING = "N/A"


@dataclass
class UserRecord:
    # basic account information
    username: str
    password: str   # plaintext

    # booking triple, always updated together
    booked_place: str = NO_BOOKING
    price_per_ticket: Decimal = Decimal("0")
    ticket_count: int = 0

    # constructor
    @staticmethod
    def new(username: str, password: str) -> "UserRecord":
        return UserRecord(username=username, password=password)

    def has_booking(self) -> bool:
        return self.booked_place != NO_BOOKING and self.ticket_count > 0

    def set_booking(self, place: str, price: Decimal, count: int) -> None:
        self.booked_place = place
        self.price_per_ticket = price
        self.ticket_count = count

    def clear_booking(self) -> None:
        self.set_booking(NO_BOOKING, Decimal("0"), 0)

    def to_row(self) -> List[Any]:
        """The five persisted fields, in file order."""
        return [
            self.username,
            self.password,
            self.booked_place,
            str(self.price_per_ticket),
            self.ticket_count,
        ]

    @classmethod
    def from_row(cls, row: List[Any]) -> "UserRecord":
        """
        Build a record from five persisted fields.
        Raises ValueError if the row has the wrong shape or bad numbers.
        """
        if len(row) != 5:
            raise ValueError(f"expected 5 fields, got {len(row)}")
        username, password, place, price, count = row
        if not all(isinstance(field, str) for field in (username, password, place, price)):
            raise ValueError("username, password, place and price must be strings")
        if not username or any(ch.isspace() for ch in username):
            raise ValueError(f"invalid username {username!r}")

        try:
            price = Decimal(price)
            if not price.is_finite():
                raise ValueError(f"invalid price {price!r}")
            # legacy files write floats like 250000.000000
            if price == price.to_integral_value():
                price = price.quantize(Decimal(1))
        except InvalidOperation as e:
            raise ValueError(f"invalid price {price!r}") from e

        # legacy lines carry the count as text, JSON lines as an integer
        if isinstance(count, str):
            count = int(count)
        elif isinstance(count, bool) or not isinstance(count, int):
            raise ValueError(f"invalid ticket count {count!r}")
        if price < 0 or count < 0:
            raise ValueError("price and ticket count must not be negative")

        record = cls(username=username, password=password)
        # a half-filled triple counts as no booking
        if place != NO_BOOKING and count > 0 and price > 0:
            record.set_booking(place, price, count)
        return record
