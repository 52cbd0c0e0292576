"""Request authentication gate.

Runs once per request before any endpoint logic and establishes the
caller's identity from an ``Authorization: Bearer <token>`` header.

The gate never rejects a request. A missing, malformed, expired or
revoked token simply leaves the SecurityContext empty; the authorization
check decides later whether the route needed an identity.

A token is accepted only when all of these hold:
- its signature verifies and its subject names an active user
- that exact token string is stored as the session row of that user
- both the stored and presented token are live for that user
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from chronosync.core.database import get_db
from chronosync.core.request_utils import extract_bearer_token
from chronosync.core.security import SecurityContext
from chronosync.services.exceptions import MalformedTokenError
from chronosync.services.session_store import SessionStore
from chronosync.services.token_codec import is_token_live, parse_subject
from chronosync.services.user import UserService

logger = logging.getLogger(__name__)


class RequestAuthenticationGate:
    """Resolves a bearer token to an identity. Read-only on the session store."""

    def __init__(self, users: UserService, sessions: SessionStore):
        self.users = users
        self.sessions = sessions

    async def evaluate(self, authorization: str | None, context: SecurityContext) -> None:
        token = extract_bearer_token(authorization)
        if token is None:
            return

        try:
            username = parse_subject(token)
        except MalformedTokenError as e:
            logger.debug(f"Ignoring unparseable bearer token: {e}")
            return

        if context.is_authenticated:
            return

        user = await self.users.get_by_username(username)
        if user is None or not user.can_authenticate:
            logger.debug(f"Token subject {username} is unknown or inactive")
            return

        record = await self.sessions.find_by_token(token)
        valid = (
            record is not None
            and record.user_id == user.id
            and is_token_live(record.token_string, user.username)
            and is_token_live(token, user.username)
        )
        if not valid:
            logger.debug(f"Token for {username} is revoked or expired")
            return

        context.authenticate(user)


async def get_security_context(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> SecurityContext:
    """Dependency: the request's SecurityContext, evaluated once.

    The context is kept on ``request.state`` so every dependency and
    endpoint in the same request sees the same identity.
    """
    context = getattr(request.state, "security_context", None)
    if context is not None:
        return context

    context = SecurityContext()
    request.state.security_context = context

    gate = RequestAuthenticationGate(UserService(db), SessionStore(db))
    await gate.evaluate(request.headers.get("Authorization"), context)
    return context
