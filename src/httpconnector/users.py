"""
=============================================================================
CREDENTIAL STORE
=============================================================================

User records and the repository the login and register handlers consult.

Handlers only depend on the UserRepository interface:

    find_by_account(account) → Optional[User]
    save(user)               → User   (with its id assigned)

InMemoryUserRepository is the implementation the server runs with. It is
seeded with one demo account so the login page works out of the box:

    account:  gugu
    password: password

=============================================================================
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    """An account. The password never appears in repr() or logs."""

    account: str
    password: str = field(repr=False)
    email: str = ""
    id: Optional[int] = None

    def check_password(self, candidate: Optional[str]) -> bool:
        return candidate is not None and self.password == candidate


class UserRepository(ABC):
    """Lookup and persistence of user accounts."""

    @abstractmethod
    def find_by_account(self, account: Optional[str]) -> Optional[User]:
        """Return the user with this account name, or None."""

    @abstractmethod
    def save(self, user: User) -> User:
        """Persist a user and return it with its id assigned."""


class InMemoryUserRepository(UserRepository):
    """
    Dict-backed repository, safe to share between worker threads.

    Saving an account name that already exists replaces the stored user.
    """

    def __init__(self, seed_demo_user: bool = True):
        self._users: Dict[str, User] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        if seed_demo_user:
            self.save(User(account="gugu", password="password", email="hkkang@woowahan.com"))

    def find_by_account(self, account: Optional[str]) -> Optional[User]:
        if account is None:
            return None
        with self._lock:
            return self._users.get(account)

    def save(self, user: User) -> User:
        with self._lock:
            stored = replace(user, id=next(self._ids))
            self._users[stored.account] = stored
        logger.debug(f"User saved: {stored}")
        return stored

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
