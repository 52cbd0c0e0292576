"""Session token model - the allow-list of live bearer tokens."""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chronosync.models.base import BaseModel

if TYPE_CHECKING:
    from chronosync.models.user import User


class SessionToken(BaseModel):
    """The single live token of a logged-in user.

    A bearer token is honoured only while its exact string is stored here.
    Logging in again overwrites token_string on the existing row; logging
    out deletes the row, revoking the token before its natural expiry.
    """

    __tablename__ = "session_tokens"

    # JWTs are ~200 chars for HS256 with sub/iat/exp; leave headroom
    token_string: Mapped[str] = mapped_column(String(1024), nullable=False, unique=True)

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    user: Mapped["User"] = relationship("User", lazy="joined")

    def __repr__(self) -> str:
        return f"<SessionToken user_id={self.user_id}>"
