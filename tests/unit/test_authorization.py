"""Unit tests for the role hierarchy and route table."""

import pytest
from fastapi import HTTPException

from chronosync.core.roles import UserRole
from chronosync.core.security import SecurityContext
from chronosync.middleware.authorization import (
    ROUTE_ROLES,
    authorize,
    is_public_path,
    required_role_for,
)
from chronosync.models import User


def _context(role: UserRole | None) -> SecurityContext:
    context = SecurityContext()
    if role is not None:
        context.authenticate(
            User(username="caller", password_hash="x", role=role, is_enabled=True, is_locked=False)
        )
    return context


class TestUserRole:
    def test_chain(self):
        assert UserRole.ADMINISTRATOR.satisfies(UserRole.MANAGER)
        assert UserRole.ADMINISTRATOR.satisfies(UserRole.EMPLOYEE)
        assert UserRole.MANAGER.satisfies(UserRole.EMPLOYEE)
        assert UserRole.MANAGER.satisfies(UserRole.MANAGER)

    def test_no_upward_access(self):
        assert not UserRole.EMPLOYEE.satisfies(UserRole.MANAGER)
        assert not UserRole.MANAGER.satisfies(UserRole.ADMINISTRATOR)

    def test_authority(self):
        assert UserRole.MANAGER.authority == "ROLE_MANAGER"


class TestRequiredRoleFor:
    @pytest.mark.parametrize(
        "path,role",
        [
            ("/api/v1/employee/me", UserRole.EMPLOYEE),
            ("/api/v1/manager/users", UserRole.MANAGER),
            ("/api/v1/user/enable/123", UserRole.ADMINISTRATOR),
            ("/api/v1/user/enable", UserRole.ADMINISTRATOR),
        ],
    )
    def test_table_entries(self, path, role):
        assert required_role_for(path) is role

    @pytest.mark.parametrize(
        "path",
        ["/api/v1/employees", "/api/v1/managerial", "/api/v1/user/enabled", "/api/v1/other"],
    )
    def test_segment_boundaries(self, path):
        assert required_role_for(path) is None

    def test_longest_prefix_wins(self, monkeypatch):
        monkeypatch.setattr(
            "chronosync.middleware.authorization.ROUTE_ROLES",
            ROUTE_ROLES + [("/api/v1/employee/payroll", UserRole.MANAGER)],
        )
        assert required_role_for("/api/v1/employee/payroll/2026") is UserRole.MANAGER
        assert required_role_for("/api/v1/employee/me") is UserRole.EMPLOYEE

    def test_public_paths(self):
        assert is_public_path("/api/v1/auth/login")
        assert not is_public_path("/api/v1/authx")


class TestAuthorize:
    def test_public_path_without_identity(self):
        authorize(_context(None), "/api/v1/auth/logout")

    def test_missing_identity_is_401(self):
        with pytest.raises(HTTPException) as exc_info:
            authorize(_context(None), "/api/v1/employee/me")
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_unlisted_path_still_needs_identity(self):
        with pytest.raises(HTTPException) as exc_info:
            authorize(_context(None), "/api/v1/other")
        assert exc_info.value.status_code == 401

        authorize(_context(UserRole.EMPLOYEE), "/api/v1/other")

    def test_insufficient_role_is_403(self):
        with pytest.raises(HTTPException) as exc_info:
            authorize(_context(UserRole.EMPLOYEE), "/api/v1/manager/users")
        assert exc_info.value.status_code == 403

    @pytest.mark.parametrize("role", [UserRole.MANAGER, UserRole.ADMINISTRATOR])
    def test_sufficient_role(self, role):
        authorize(_context(role), "/api/v1/manager/users")
