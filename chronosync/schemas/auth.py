"""Pydantic schemas for authentication API."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    """Request for login."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Response with the issued bearer token.

    Serialized in camelCase (``jwtString``) for the web client.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    jwt_string: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
