"""ChronoSync API Router - aggregates all API routes."""

from fastapi import APIRouter, Depends

from chronosync.api import auth, users
from chronosync.middleware.authorization import require_authorization

# Main API router - all routes are prefixed with /api/v1 and pass through
# the role table; /api/v1/auth is public there
api_router = APIRouter(prefix="/api/v1", dependencies=[Depends(require_authorization)])

api_router.include_router(auth.router)
api_router.include_router(users.employee_router)
api_router.include_router(users.manager_router)
api_router.include_router(users.admin_router)
