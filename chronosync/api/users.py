"""User endpoints, grouped by the minimum role they require."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from chronosync.core.database import get_db
from chronosync.core.roles import UserRole
from chronosync.core.security import SecurityContext
from chronosync.middleware.authorization import require_authorization
from chronosync.schemas.user import UserListResponse, UserResponse
from chronosync.services.user import UserFilter, UserNotFoundError, UserService

logger = logging.getLogger(__name__)

employee_router = APIRouter(prefix="/employee", tags=["employee"])
manager_router = APIRouter(prefix="/manager", tags=["manager"])
admin_router = APIRouter(prefix="/user", tags=["users"])


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@employee_router.get("/me", response_model=UserResponse)
async def get_me(
    context: SecurityContext = Depends(require_authorization),
) -> UserResponse:
    """Profile of the authenticated caller."""
    return UserResponse.model_validate(context.identity.principal)


@manager_router.get("/users", response_model=UserListResponse)
async def list_firm_users(
    username: str | None = Query(None, max_length=255),
    role: UserRole | None = None,
    first_name: str | None = Query(None, max_length=100),
    last_name: str | None = Query(None, max_length=100),
    email: str | None = Query(None, max_length=255),
    phone: str | None = Query(None, max_length=50),
    context: SecurityContext = Depends(require_authorization),
    service: UserService = Depends(get_user_service),
) -> UserListResponse:
    """List users in the caller's firm, optionally filtered.

    Administrators see users of every firm.
    """
    caller = context.identity.principal
    if caller.role is not UserRole.ADMINISTRATOR and caller.firm_id is None:
        return UserListResponse(items=[], total=0)

    criteria = UserFilter(
        username=username,
        role=role,
        firm_id=None if caller.role is UserRole.ADMINISTRATOR else caller.firm_id,
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone=phone,
    )
    users = await service.list_users(criteria)
    return UserListResponse(
        items=[UserResponse.model_validate(u) for u in users],
        total=len(users),
    )


@admin_router.post("/enable/{user_id}", response_model=UserResponse)
async def enable_user(
    user_id: UUID,
    context: SecurityContext = Depends(require_authorization),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Enable a user account so it can log in."""
    try:
        user = await service.enable(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    logger.info(f"User {user.username} enabled by {context.identity.username}")
    return UserResponse.model_validate(user)
