"""Authentication API endpoints."""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from chronosync.core import get_db, settings
from chronosync.core.request_utils import get_client_ip
from chronosync.core.security import SecurityContext
from chronosync.middleware.auth_gate import get_security_context
from chronosync.schemas.auth import LoginRequest, MessageResponse, TokenResponse
from chronosync.services.auth import (
    AccountDisabledError,
    AccountLockedError,
    AuthenticationFailedError,
    AuthService,
    InvalidAuthorizationHeaderError,
    InvalidCredentialsError,
    SessionNotFoundError,
)

logger = logging.getLogger(__name__)

# Failed login timestamps per client IP; only IPs with recent failures are kept
_login_attempts: dict[str, list[float]] = {}


def _prune_stale_attempts(now: float, window: int) -> None:
    """Drop IPs whose newest failure is outside the window."""
    stale = [ip for ip, times in _login_attempts.items() if now - times[-1] >= window]
    for ip in stale:
        del _login_attempts[ip]


def _check_login_rate_limit(client_ip: str) -> None:
    """Check if a client IP has exceeded the failed login limit."""
    now = time.monotonic()
    window = settings.login_rate_limit_window_seconds
    _prune_stale_attempts(now, window)
    recent = [t for t in _login_attempts.get(client_ip, []) if now - t < window]
    if not recent:
        _login_attempts.pop(client_ip, None)
        return
    _login_attempts[client_ip] = recent
    if len(recent) >= settings.login_rate_limit_attempts:
        logger.warning("Login rate limit exceeded for %s", client_ip)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please try again later.",
        )


def _record_login_attempt(client_ip: str) -> None:
    """Record a failed login attempt for rate limiting."""
    _login_attempts.setdefault(client_ip, []).append(time.monotonic())


router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Dependency to get auth service."""
    return AuthService(db)


async def _login(
    request: LoginRequest,
    http_request: Request,
    auth_service: AuthService,
) -> TokenResponse:
    client_ip = get_client_ip(http_request) or "unknown"
    _check_login_rate_limit(client_ip)

    try:
        token = await auth_service.authenticate(
            username=request.username,
            password=request.password,
        )
    except AccountDisabledError as e:
        _record_login_attempt(client_ip)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is disabled",
        ) from e
    except AccountLockedError as e:
        _record_login_attempt(client_ip)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is locked",
        ) from e
    except InvalidCredentialsError as e:
        _record_login_attempt(client_ip)
        logger.info(f"Failed login from {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        ) from e
    except AuthenticationFailedError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication failed",
        ) from e

    return TokenResponse(
        jwt_string=token,
        expires_in=int(settings.jwt_expiration.total_seconds()),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Authenticate and get a JWT bearer token.

    Replaces any session the user already had. Failed attempts are rate
    limited per client IP.
    """
    return await _login(request, http_request, auth_service)


@router.post("/authenticate", response_model=TokenResponse, include_in_schema=False)
async def authenticate(
    request: LoginRequest,
    http_request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Older name for /login, kept for existing clients."""
    return await _login(request, http_request, auth_service)


@router.api_route("/logout", methods=["GET", "POST"], response_model=MessageResponse)
async def logout(
    http_request: Request,
    context: SecurityContext = Depends(get_security_context),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the bearer token sent in the Authorization header."""
    try:
        await auth_service.logout(http_request.headers.get("Authorization"), context)
    except InvalidAuthorizationHeaderError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except SessionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e

    return MessageResponse(message="Logged out successfully")
