# ChronoSync Services
from chronosync.services.auth import AuthenticationManager, AuthService
from chronosync.services.session_store import SessionStore, SessionTokenFilter
from chronosync.services.user import UserFilter, UserNotFoundError, UserService

__all__ = [
    "AuthService",
    "AuthenticationManager",
    "SessionStore",
    "SessionTokenFilter",
    "UserFilter",
    "UserNotFoundError",
    "UserService",
]
