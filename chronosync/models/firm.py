"""Firm model - the tenant users belong to."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chronosync.models.base import BaseModel

if TYPE_CHECKING:
    from chronosync.models.user import User


class Firm(BaseModel):
    """A customer organisation. Every user record is scoped to one firm."""

    __tablename__ = "firms"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    users: Mapped[list["User"]] = relationship("User", back_populates="firm")

    def __repr__(self) -> str:
        return f"<Firm {self.name}>"
