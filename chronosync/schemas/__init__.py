# ChronoSync Pydantic Schemas
from chronosync.schemas.auth import LoginRequest, MessageResponse, TokenResponse
from chronosync.schemas.user import UserListResponse, UserResponse

__all__ = [
    "LoginRequest",
    "MessageResponse",
    "TokenResponse",
    "UserListResponse",
    "UserResponse",
]
