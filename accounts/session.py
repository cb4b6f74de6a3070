"""Login state for the interactive menu.

A Session is an immutable value: login and logout return a new Session
instead of changing a global. The CLI keeps the current one and passes it
to each menu handler.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import NotLoggedIn, UserNotFound
from .manager import UserStore
from .models import UserRecord


@dataclass(frozen=True)
class Session:
    """Either anonymous (username is None) or logged in as `username`."""

    username: Optional[str] = None

    @staticmethod
    def anonymous() -> "Session":
        return Session()

    @property
    def is_authenticated(self) -> bool:
        return self.username is not None

    def login(self, store: UserStore, username: str, password: str) -> "Session":
        """
        Authenticate against the store.

        Raises:
            UserNotFound, WrongPassword: the session stays anonymous.
        """
        user = store.authenticate(username, password)
        return Session(username=user.username)

    def logout(self) -> "Session":
        if not self.is_authenticated:
            raise NotLoggedIn()
        return Session.anonymous()

    def current_user(self, store: UserStore) -> UserRecord:
        """Return the logged-in user's record."""
        if not self.is_authenticated:
            raise NotLoggedIn()
        user = store.find_by_username(self.username)
        if user is None:
            raise UserNotFound(self.username)
        return user

    def __str__(self) -> str:
        return f"Session(username={self.username!r})"
