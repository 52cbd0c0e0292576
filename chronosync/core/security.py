"""Per-request caller identity.

A SecurityContext is created for every request and passed explicitly to
whatever needs to read or change the caller's identity.
"""

from dataclasses import dataclass, field

from chronosync.core.roles import UserRole
from chronosync.models.user import User


@dataclass(frozen=True)
class Identity:
    """An authenticated caller."""

    principal: User
    authorities: tuple[str, ...]

    @classmethod
    def for_user(cls, user: User) -> "Identity":
        return cls(principal=user, authorities=user.authorities)

    @property
    def username(self) -> str:
        return self.principal.username

    @property
    def role(self) -> UserRole:
        return self.principal.role


@dataclass
class SecurityContext:
    """Holds the identity established for a single request, if any."""

    identity: Identity | None = field(default=None)

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    def authenticate(self, user: User) -> Identity:
        self.identity = Identity.for_user(user)
        return self.identity

    def clear(self) -> None:
        self.identity = None
