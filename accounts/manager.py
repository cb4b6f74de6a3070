import logging
from decimal import Decimal
from typing import Dict, List, Optional

from tours.catalog import TourPackage, get_package, find_by_name

from .errors import (
    AlreadyBooked,
    DuplicateUsername,
    EmptyPassword,
    InvalidUsername,
    NoActiveBooking,
    UserNotFound,
    WrongPassword,
    ZeroTickets,
)
from .models import UserRecord
from .storage import IStorage

logger = logging.getLogger(__name__)


class UserStore:
    """
    In-memory user records backed by a storage file.

    Records are kept in insertion order, keyed by username. Every mutating
    operation rewrites the whole file through the storage backend.
    """

    def __init__(self, storage: IStorage, users: Optional[List[UserRecord]] = None):
        self.storage = storage
        self._users: Dict[str, UserRecord] = {}
        for user in users or []:
            if user.username in self._users:
                logger.warning("Ignoring duplicate record for '%s'", user.username)
                continue
            self._users[user.username] = user

    @classmethod
    def load(cls, storage: IStorage) -> "UserStore":
        """Read every record from storage. A missing file gives an empty store."""
        return cls(storage, storage.load_users())

    def save(self) -> None:
        self.storage.save_users(self._users.values())

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, username: str) -> bool:
        return username in self._users

    def all_users(self) -> List[UserRecord]:
        return list(self._users.values())

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        return self._users.get(username)

    def register(self, username: str, password: str) -> UserRecord:
        if not username or any(ch.isspace() for ch in username):
            raise InvalidUsername(username)
        if username in self._users:
            raise DuplicateUsername(username)
        if not password:
            raise EmptyPassword()

        user = UserRecord.new(username, password)
        self._users[username] = user
        logger.info("Registered user '%s'", username)
        self.save()
        return user

    def authenticate(self, username: str, password: str) -> UserRecord:
        user = self._users.get(username)
        if user is None:
            logger.info("Login failed: unknown user '%s'", username)
            raise UserNotFound(username)
        if user.password != password:
            logger.info("Login failed: wrong password for '%s'", username)
            raise WrongPassword()
        return user

    def book(self, user: UserRecord, tour_code: int, ticket_count: int) -> TourPackage:
        """
        Book `ticket_count` tickets of catalog package `tour_code` for `user`.
        Checks run in order: existing booking, tour code, ticket count.
        """
        if user.has_booking():
            raise AlreadyBooked(user.booked_place)
        package = get_package(tour_code)
        if ticket_count <= 0:
            raise ZeroTickets(ticket_count)

        user.set_booking(package.name, package.price, ticket_count)
        logger.info("User '%s' booked %d ticket(s) to %s",
                    user.username, ticket_count, package.name)
        self.save()
        return package

    def cancel(self, user: UserRecord) -> Decimal:
        """Drop the user's booking and return the refund amount."""
        # places outside the catalog are not cancellable bookings either
        if not user.has_booking() or find_by_name(user.booked_place) is None:
            raise NoActiveBooking()

        refund = user.price_per_ticket * user.ticket_count
        logger.info("User '%s' cancelled booking to %s, refund %s",
                    user.username, user.booked_place, refund)
        user.clear_booking()
        self.save()
        return refund

    def change_password(self, user: UserRecord, current_password: str, new_password: str) -> None:
        if user.password != current_password:
            logger.info("Password change refused for '%s'", user.username)
            raise WrongPassword()
        if not new_password:
            raise EmptyPassword()

        user.password = new_password
        logger.info("Password changed for '%s'", user.username)
        self.save()

    @staticmethod
    def total_cost(user: UserRecord) -> Decimal:
        if not user.has_booking():
            raise NoActiveBooking()
        return user.price_per_ticket * user.ticket_count
