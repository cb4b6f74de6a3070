"""Errors raised by the account store and session.

Every error is recoverable: the CLI reports it and returns to the menu.
They all derive from ValueError so callers can catch them the same way
they catch bad input.
"""


class TourBookingError(ValueError):
    """Base class for all account and booking failures."""


class DuplicateUsername(TourBookingError):
    def __init__(self, username: str):
        super().__init__(f"Username '{username}' already exists.")
        self.username = username


class InvalidUsername(TourBookingError):
    def __init__(self, username: str):
        super().__init__("Username cannot be empty or contain spaces.")
        self.username = username


class EmptyPassword(TourBookingError):
    def __init__(self):
        super().__init__("Password cannot be empty.")


class UserNotFound(TourBookingError):
    def __init__(self, username: str):
        super().__init__(f"User '{username}' not found! Please register first.")
        self.username = username


class WrongPassword(TourBookingError):
    def __init__(self):
        super().__init__("Wrong password! Access denied.")


class AlreadyBooked(TourBookingError):
    def __init__(self, place: str):
        super().__init__(
            f"You already have an active booking for {place}. "
            "Please cancel it before booking a new one."
        )
        self.place = place


class InvalidTourIndex(TourBookingError):
    def __init__(self, code):
        super().__init__(f"Invalid tour code number: {code}")
        self.code = code


class ZeroTickets(TourBookingError):
    def __init__(self, count: int):
        super().__init__("Number of tickets must be at least 1.")
        self.count = count


class NoActiveBooking(TourBookingError):
    def __init__(self):
        super().__init__("No tour has been booked!")


class NotLoggedIn(TourBookingError):
    def __init__(self):
        super().__init__("No user is currently logged in. Please log in first.")


class StorageIOError(TourBookingError):
    """Reading or writing the user database failed."""
