"""Pydantic schemas for user endpoints."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from chronosync.core.roles import UserRole


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    role: UserRole
    is_enabled: bool
    is_locked: bool
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    firm_id: UUID | None = None


class UserListResponse(BaseModel):
    """List of users."""

    items: list[UserResponse]
    total: int
