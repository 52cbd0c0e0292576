"""User model - the credential store for authentication."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chronosync.core.roles import UserRole
from chronosync.models.base import BaseModel

if TYPE_CHECKING:
    from chronosync.models.firm import Firm


class User(BaseModel):
    """A person who can log in.

    The username is unique and never changes once the row exists; issued
    bearer tokens carry it as their subject. Only the argon2 hash of the
    password is stored.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", create_constraint=True),
        nullable=False,
        default=UserRole.EMPLOYEE,
    )
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_locked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Personal details
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    identification_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    firm_id: Mapped[UUID | None] = mapped_column(
        Uuid,
        ForeignKey("firms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    firm: Mapped["Firm | None"] = relationship("Firm", back_populates="users")

    @property
    def authorities(self) -> tuple[str, ...]:
        return (self.role.authority,)

    @property
    def can_authenticate(self) -> bool:
        """Enabled and not locked."""
        return self.is_enabled and not self.is_locked

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.role.value})>"
