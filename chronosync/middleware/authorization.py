"""Role-based route authorization.

Every route under ``/api`` maps to a minimum role through ROUTE_ROLES.
Matching uses the longest prefix on segment boundaries, so
``/api/v1/user`` does not cover ``/api/v1/users``. Paths with no entry
still need an authenticated caller.
"""

import logging

from fastapi import Depends, HTTPException, Request, status

from chronosync.core.roles import UserRole
from chronosync.core.security import SecurityContext
from chronosync.middleware.auth_gate import get_security_context

logger = logging.getLogger(__name__)

# Reachable without an identity
PUBLIC_PATHS = [
    "/api/v1/auth",
]

# (path prefix, minimum role)
ROUTE_ROLES: list[tuple[str, UserRole]] = [
    ("/api/v1/employee", UserRole.EMPLOYEE),
    ("/api/v1/manager", UserRole.MANAGER),
    ("/api/v1/user/enable", UserRole.ADMINISTRATOR),
]


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def is_public_path(path: str) -> bool:
    return any(_matches(path, prefix) for prefix in PUBLIC_PATHS)


def required_role_for(path: str) -> UserRole | None:
    """Minimum role for ``path``, or None if no table entry covers it."""
    best: tuple[str, UserRole] | None = None
    for prefix, role in ROUTE_ROLES:
        if _matches(path, prefix) and (best is None or len(prefix) > len(best[0])):
            best = (prefix, role)
    return best[1] if best else None


def authorize(context: SecurityContext, path: str) -> None:
    """Raise 401/403 unless the context may access ``path``."""
    if is_public_path(path):
        return

    if context.identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    required = required_role_for(path)
    if required is not None and not context.identity.role.satisfies(required):
        logger.warning(
            f"Forbidden: {context.identity.username} ({context.identity.role.value}) "
            f"requires {required.value} for {path}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient role for this resource",
        )


async def require_authorization(
    request: Request,
    context: SecurityContext = Depends(get_security_context),
) -> SecurityContext:
    """Router dependency enforcing ROUTE_ROLES for the request path."""
    authorize(context, request.url.path)
    return context
