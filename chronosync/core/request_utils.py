"""Helpers for reading the client address and bearer credentials off a request."""

import ipaddress
import logging

from fastapi import Request

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# Peers allowed to set X-Real-IP (a reverse proxy on the same host)
TRUSTED_PROXY_HOSTS = frozenset({"127.0.0.1", "::1", "localhost"})


def _parse_ip(value: str) -> str | None:
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        return None


def get_client_ip(request: Request) -> str | None:
    """Best-effort client address, used to key the login rate limiter.

    X-Real-IP is honoured only when the direct peer is a local reverse
    proxy. X-Forwarded-For is never read; clients can set it freely.
    """
    peer = request.client.host if request.client else None

    if peer in TRUSTED_PROXY_HOSTS:
        forwarded = request.headers.get("X-Real-IP")
        if forwarded:
            ip = _parse_ip(forwarded)
            if ip:
                return ip
            logger.warning(f"Ignoring invalid X-Real-IP from proxy: {forwarded!r}")

    return peer


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` value.

    None when the header is missing or uses any other scheme. The prefix
    is case-sensitive; an empty token after it is returned as "".
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :]
