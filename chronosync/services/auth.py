"""Authentication service for JWT-based login and logout.

Login verifies credentials, mints a bearer token and records it as the
user's single live session. Logout deletes that record, which revokes
the token before it expires.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from chronosync.core.request_utils import extract_bearer_token
from chronosync.core.security import SecurityContext
from chronosync.models.user import User
from chronosync.services.exceptions import (
    AccountDisabledError,
    AccountLockedError,
    AuthenticationFailedError,
    AuthError,
    InvalidAuthorizationHeaderError,
    InvalidCredentialsError,
    MalformedTokenError,
    SessionNotFoundError,
)
from chronosync.services.passwords import burn_verification, verify_password
from chronosync.services.session_store import SessionStore
from chronosync.services.token_codec import mint_token
from chronosync.services.user import UserService

logger = logging.getLogger(__name__)

__all__ = [
    "AccountDisabledError",
    "AccountLockedError",
    "AuthError",
    "AuthService",
    "AuthenticationFailedError",
    "AuthenticationManager",
    "InvalidAuthorizationHeaderError",
    "InvalidCredentialsError",
    "MalformedTokenError",
    "SessionNotFoundError",
]


class AuthenticationManager:
    """Checks a username/password pair against the credential store."""

    def __init__(self, users: UserService):
        self.users = users

    async def authenticate(self, username: str, password: str) -> User:
        """Return the user if the pair matches an active account.

        Raises InvalidCredentialsError for both "user not found" and
        "wrong password" to prevent user enumeration.
        """
        user = await self.users.get_by_username(username)

        if user is None:
            # Perform a dummy verification to prevent timing attacks
            burn_verification(password)
            raise InvalidCredentialsError("Invalid username or password")

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Invalid username or password")

        if not user.is_enabled:
            raise AccountDisabledError("User account is disabled")

        if user.is_locked:
            raise AccountLockedError("User account is locked")

        return user


class AuthService:
    """The only entry point that changes authentication state."""

    def __init__(
        self,
        session: AsyncSession,
        manager: AuthenticationManager | None = None,
    ):
        self.session = session
        self.users = UserService(session)
        self.sessions = SessionStore(session)
        self.manager = manager or AuthenticationManager(self.users)

    async def authenticate(self, username: str, password: str) -> str:
        """Log a user in and return their new bearer token.

        Any session the user already has is overwritten, so only the
        returned token stays valid.
        """
        await self.manager.authenticate(username, password)

        user = await self.users.get_by_username(username)
        if user is None:
            logger.error(f"User {username} passed credential check but could not be loaded")
            raise AuthenticationFailedError("User authentication failed")

        token = mint_token(user.username)
        await self.sessions.upsert(user, token)

        logger.info(f"User logged in: {user.username}")
        return token

    async def logout(self, authorization: str | None, context: SecurityContext) -> None:
        """Revoke the session identified by the request's bearer token."""
        token = extract_bearer_token(authorization)
        if token is None:
            raise InvalidAuthorizationHeaderError("Missing or invalid authorization header")

        record = await self.sessions.find_by_token(token)
        if record is None:
            raise SessionNotFoundError("Session not found")

        await self.sessions.delete(record)
        context.clear()

        logger.info(f"User logged out: user_id={record.user_id}")
