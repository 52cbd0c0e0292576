"""User service - lookups against the credential store."""

import logging
from dataclasses import dataclass, fields
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chronosync.core.roles import UserRole
from chronosync.models.user import User

logger = logging.getLogger(__name__)


class UserNotFoundError(Exception):
    """No user with the requested id."""

    pass


# Text columns matched with a case-insensitive substring LIKE
_LIKE_FIELDS = (
    "first_name",
    "last_name",
    "identification_number",
    "address",
    "phone",
    "email",
)


@dataclass(frozen=True)
class UserFilter:
    """Optional criteria for querying users.

    Ids, the exact username and the role match by equality; the personal
    detail fields match by case-insensitive substring. Unset fields and
    empty strings are ignored.
    """

    id: UUID | None = None
    username: str | None = None
    role: UserRole | None = None
    firm_id: UUID | None = None
    first_name: str | None = None
    last_name: str | None = None
    identification_number: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None

    def clauses(self) -> list[Any]:
        clauses: list[Any] = []
        if self.id is not None:
            clauses.append(User.id == self.id)
        if self.username:
            clauses.append(User.username == self.username)
        if self.role is not None:
            clauses.append(User.role == self.role)
        if self.firm_id is not None:
            clauses.append(User.firm_id == self.firm_id)
        for name in _LIKE_FIELDS:
            value = getattr(self, name)
            if value:
                clauses.append(getattr(User, name).ilike(f"%{_escape_like(value)}%", escape="\\"))
        return clauses

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) in (None, "") for f in fields(self))


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserService:
    """Service for reading and enabling user records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_one(self, criteria: UserFilter) -> User | None:
        """Return the single user matching ``criteria``, or None.

        An empty filter matches nothing rather than an arbitrary user.
        """
        if criteria.is_empty():
            return None
        result = await self.db.execute(select(User).where(*criteria.clauses()))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        return await self.find_one(UserFilter(username=username))

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.find_one(UserFilter(id=user_id))

    async def list_users(self, criteria: UserFilter) -> list[User]:
        """List users matching ``criteria`` ordered by username."""
        result = await self.db.execute(
            select(User).where(*criteria.clauses()).order_by(User.username)
        )
        return list(result.scalars().all())

    async def enable(self, user_id: UUID) -> User:
        """Mark a user as enabled so they can log in."""
        user = await self.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")

        user.is_enabled = True
        await self.db.flush()
        logger.info(f"Enabled user: {user.username}")
        return user
