"""Session store - persistence of the one live token per user."""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from chronosync.models.session_token import SessionToken
from chronosync.models.user import User
from chronosync.services.exceptions import SessionNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionTokenFilter:
    """Optional equality criteria for looking up a session row."""

    user_id: UUID | None = None
    token_string: str | None = None

    def clauses(self) -> list[Any]:
        clauses: list[Any] = []
        if self.user_id is not None:
            clauses.append(SessionToken.user_id == self.user_id)
        if self.token_string is not None:
            clauses.append(SessionToken.token_string == self.token_string)
        return clauses

    @property
    def is_empty(self) -> bool:
        return self.user_id is None and self.token_string is None


class SessionStore:
    """Reads and writes ``session_tokens`` rows.

    Only AuthService writes through this class; the request gate uses it
    for lookups.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_one(self, criteria: SessionTokenFilter) -> SessionToken | None:
        """Point lookup. An empty filter matches nothing."""
        if criteria.is_empty:
            return None
        result = await self.db.execute(select(SessionToken).where(*criteria.clauses()))
        return result.unique().scalar_one_or_none()

    async def find_by_user(self, user: User) -> SessionToken | None:
        return await self.find_one(SessionTokenFilter(user_id=user.id))

    async def find_by_token(self, token_string: str) -> SessionToken | None:
        return await self.find_one(SessionTokenFilter(token_string=token_string))

    async def upsert(self, user: User, token_string: str) -> SessionToken:
        """Store ``token_string`` as the user's live token.

        Overwrites the existing row for the user, otherwise inserts one.
        """
        record = await self.find_by_user(user)
        if record is None:
            record = SessionToken(user_id=user.id, token_string=token_string)
            self.db.add(record)
            logger.debug(f"Created session for user {user.username}")
        else:
            record.token_string = token_string
            logger.debug(f"Replaced session for user {user.username}")

        await self.db.flush()
        return record

    async def delete(self, record: SessionToken) -> None:
        """Remove a stored session row.

        Raises SessionNotFoundError if the record was never persisted or
        has already been deleted.
        """
        state = inspect(record)
        if not state.persistent:
            raise SessionNotFoundError("Session not found")
        await self.db.delete(record)
        await self.db.flush()
