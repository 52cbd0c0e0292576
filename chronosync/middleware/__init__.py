"""Request authentication, authorization and response hardening for ChronoSync."""

from chronosync.middleware.auth_gate import RequestAuthenticationGate, get_security_context
from chronosync.middleware.authorization import (
    ROUTE_ROLES,
    authorize,
    require_authorization,
    required_role_for,
)
from chronosync.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "ROUTE_ROLES",
    "RequestAuthenticationGate",
    "SecurityHeadersMiddleware",
    "authorize",
    "get_security_context",
    "require_authorization",
    "required_role_for",
]
