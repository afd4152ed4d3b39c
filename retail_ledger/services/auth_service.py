"""
Auth service — staff sign-in against an identity provider.

The provider is a collaborator behind one method, so the
fixed demo accounts can be swapped for a real directory
without touching the store or the API.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from retail_ledger.models.enums import LoginStatus, UserRole
from retail_ledger.schemas.session import LoginEvent, LoginRequest, SessionUser
from retail_ledger.services.store import SnapshotStore
from retail_ledger.time_utils import stamped_id, utcnow

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    def authenticate(self, username: str, password: str) -> SessionUser | None:
        ...


@dataclass(frozen=True)
class StaffAccount:
    username: str
    password: str
    user_id: str
    name: str
    role: UserRole


class StaticIdentityProvider:
    """Checks credentials against a fixed list. Usernames are case-insensitive."""

    def __init__(self, accounts: list[StaffAccount]):
        self.accounts = {a.username.lower(): a for a in accounts}

    @classmethod
    def from_tuples(cls, rows) -> "StaticIdentityProvider":
        return cls([StaffAccount(*row) for row in rows])

    def authenticate(self, username: str, password: str) -> SessionUser | None:
        account = self.accounts.get(username.strip().lower())
        if account is None or account.password != password:
            return None
        return SessionUser(id=account.user_id, name=account.name, role=account.role)


class AuthService:

    def __init__(self, store: SnapshotStore, provider: IdentityProvider):
        self.store = store
        self.provider = provider

    def _new_log_id(self, now: datetime) -> str:
        taken = {e.id for e in self.store.snapshot.login_logs}
        return stamped_id("LOG", now, taken)

    def login(
        self, request: LoginRequest, now: datetime | None = None
    ) -> SessionUser:
        """
        Sign a user in.

        Every attempt lands in the login log. A failed attempt is
        logged under the username that was typed, with no role,
        and raises ValueError.
        """
        now = now or utcnow()
        user = self.provider.authenticate(request.username, request.password)

        with self.store.lock:
            if user is None:
                self.store.record_login(LoginEvent(
                    id=self._new_log_id(now),
                    user_name=request.username,
                    timestamp=now,
                    status=LoginStatus.FAILED,
                ))
            else:
                self.store.record_login(
                    LoginEvent(
                        id=self._new_log_id(now),
                        user_name=user.name,
                        role=user.role,
                        timestamp=now,
                        status=LoginStatus.SUCCESS,
                    ),
                    user=user,
                )

        if user is None:
            logger.warning("Failed login for %s", request.username)
            raise ValueError("Authentication failed")

        logger.info("%s signed in as %s", user.name, user.role.value)
        return user

    def logout(self) -> None:
        self.store.logout()
