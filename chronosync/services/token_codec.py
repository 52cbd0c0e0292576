"""Signed bearer tokens (JWT, HS256).

A token carries only the username as ``sub`` plus ``iat``/``exp``.
Signing key, algorithm and lifetime come from settings, which are
loaded once at startup.
"""

import logging
from datetime import UTC, datetime
from typing import Any

import jwt
from jwt.exceptions import PyJWTError

from chronosync.core import settings
from chronosync.services.exceptions import MalformedTokenError

logger = logging.getLogger(__name__)


def mint_token(subject: str, issued_at: datetime | None = None) -> str:
    """Create a signed token for ``subject`` valid for the configured lifetime."""
    if issued_at is None:
        issued_at = datetime.now(UTC)
    payload = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + settings.jwt_expiration,
    }
    token = jwt.encode(
        payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    # PyJWT 2.x returns str; older type stubs may declare bytes
    return str(token)


def _decode(token: str, verify_exp: bool) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": verify_exp, "require": ["sub", "exp"]},
        )
    except PyJWTError as e:
        raise MalformedTokenError(f"Invalid token: {e}") from e


def parse_subject(token: str) -> str:
    """Return the username a token was issued for.

    Only the signature and payload structure are checked; an expired but
    otherwise valid token still yields its subject.
    """
    payload = _decode(token, verify_exp=False)
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise MalformedTokenError("Token missing subject")
    return subject


def is_token_live(token: str, expected_subject: str) -> bool:
    """True if the token verifies, belongs to ``expected_subject`` and has not expired."""
    try:
        payload = _decode(token, verify_exp=True)
    except MalformedTokenError as e:
        # ExpiredSignatureError lands here too
        logger.debug(f"Token rejected: {e}")
        return False
    return payload.get("sub") == expected_subject
