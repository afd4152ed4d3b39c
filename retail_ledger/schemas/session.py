"""
Pydantic schemas for staff sessions and the login log.
"""

from datetime import datetime

from pydantic import Field

from retail_ledger.models.enums import UserRole, LoginStatus
from retail_ledger.schemas.common import DomainModel


class SessionUser(DomainModel):
    """The user the current session belongs to. Empty id means nobody."""
    id: str = ""
    name: str = ""
    role: UserRole = UserRole.ADMIN


class LoginEvent(DomainModel):
    id: str = Field(min_length=1)
    user_name: str
    # None for failed attempts that matched no account
    role: UserRole | None = None
    timestamp: datetime
    status: LoginStatus


class LoginRequest(DomainModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=100)


class SessionResponse(DomainModel):
    active: bool
    user: SessionUser
