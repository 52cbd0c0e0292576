"""Authentication error hierarchy."""


class AuthError(Exception):
    """Base authentication error."""

    pass


class InvalidCredentialsError(AuthError):
    """Invalid username or password."""

    pass


class AccountDisabledError(InvalidCredentialsError):
    """User account has not been enabled."""

    pass


class AccountLockedError(InvalidCredentialsError):
    """User account is locked."""

    pass


class AuthenticationFailedError(AuthError):
    """Credentials verified but the user could not be loaded afterwards.

    Indicates an inconsistent credential store rather than a client mistake.
    """

    pass


class InvalidAuthorizationHeaderError(AuthError):
    """Authorization header missing or not of the form ``Bearer <token>``."""

    pass


class SessionNotFoundError(AuthError):
    """No stored session matches the presented token."""

    pass


class MalformedTokenError(AuthError):
    """Token signature does not verify or its payload cannot be decoded."""

    pass
