"""User roles and their ordering.

Roles form a chain: an administrator may do everything a manager may,
and a manager everything an employee may.
"""

import enum


class UserRole(str, enum.Enum):
    """Closed set of roles a user can hold."""

    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    ADMINISTRATOR = "ADMINISTRATOR"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    @property
    def authority(self) -> str:
        """Authority string granted by this role, e.g. ``ROLE_MANAGER``."""
        return f"ROLE_{self.value}"

    def satisfies(self, required: "UserRole") -> bool:
        """True if this role is ``required`` or sits above it."""
        return self.rank >= required.rank


_ROLE_RANK = {
    UserRole.EMPLOYEE: 1,
    UserRole.MANAGER: 2,
    UserRole.ADMINISTRATOR: 3,
}
