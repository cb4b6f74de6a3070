from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, List
from .errors import StorageIOError
from .models import UserRecord
import json, logging, os, tempfile

logger = logging.getLogger(__name__)


def _parse_legacy_line(line: str) -> List[str]:
    """
    Split an old-style `username password place price count` line.
    The place may contain spaces (e.g. "Abu Dhabi, UAE"), so everything
    between the password and the last two tokens is the place.
    """
    tokens = line.split()
    if len(tokens) < 5:
        raise ValueError(f"expected at least 5 fields, got {len(tokens)}")
    return [tokens[0], tokens[1], " ".join(tokens[2:-2]), tokens[-2], tokens[-1]]


def parse_line(line: str) -> UserRecord:
    line = line.strip()
    if line.startswith("["):
        row = json.loads(line)
        if not isinstance(row, list):
            raise ValueError("record is not a list")
    else:
        row = _parse_legacy_line(line)
    return UserRecord.from_row(row)


def format_line(user: UserRecord) -> str:
    return json.dumps(user.to_row(), ensure_ascii=False)


class IStorage(ABC):
    @abstractmethod
    def load_users(self) -> List[UserRecord]: ...
    @abstractmethod
    def save_users(self, users: Iterable[UserRecord]) -> None: ...


class TextFileStorage(IStorage):
    """One JSON array per line: username, password, place, price, ticket count."""

    def __init__(self, path: str = "users.txt"):
        self.path = path

    def load_users(self) -> List[UserRecord]:
        if not os.path.exists(self.path):
            logger.info("No data file at %s, starting empty", self.path)
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageIOError(f"Could not read {self.path}: {e}") from e

        users = []
        for lineno, line in enumerate(lines, 1):
            if not line.strip():
                continue
            try:
                users.append(parse_line(line))
            except (ValueError, TypeError) as e:
                raise StorageIOError(f"{self.path}:{lineno}: malformed record ({e})") from e
        logger.debug("Loaded %d user(s) from %s", len(users), self.path)
        return users

    def save_users(self, users: Iterable[UserRecord]) -> None:
        directory = os.path.dirname(self.path) or "."
        # atomic-ish write to avoid truncating the database
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix="users.", suffix=".tmp", dir=directory)
        except OSError as e:
            raise StorageIOError(f"Could not write {self.path}: {e}") from e
        try:
            count = 0
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                for user in users:
                    f.write(format_line(user) + "\n")
                    count += 1
            os.replace(tmp, self.path)
            logger.debug("Saved %d user(s) to %s", count, self.path)
        except OSError as e:
            raise StorageIOError(f"Could not write {self.path}: {e}") from e
        finally:
            if os.path.exists(tmp):
                try: os.remove(tmp)
                except OSError: pass
