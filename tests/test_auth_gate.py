"""Tests for the request authentication gate against the database."""

from datetime import UTC, datetime, timedelta

import pytest

from chronosync.core.security import SecurityContext
from chronosync.middleware.auth_gate import RequestAuthenticationGate
from chronosync.services.auth import AuthService
from chronosync.services.session_store import SessionStore
from chronosync.services.token_codec import mint_token
from chronosync.services.user import UserService
from tests.conftest import TEST_PASSWORD, TEST_USERNAME

pytestmark = pytest.mark.asyncio


@pytest.fixture
def gate(db_session) -> RequestAuthenticationGate:
    return RequestAuthenticationGate(UserService(db_session), SessionStore(db_session))


async def _evaluate(gate, header) -> SecurityContext:
    context = SecurityContext()
    await gate.evaluate(header, context)
    return context


class TestGate:
    async def test_logged_in_token_establishes_identity(self, db_session, gate, employee):
        token = await AuthService(db_session).authenticate(TEST_USERNAME, TEST_PASSWORD)

        context = await _evaluate(gate, f"Bearer {token}")

        assert context.identity is not None
        assert context.identity.principal is employee
        assert context.identity.authorities == ("ROLE_EMPLOYEE",)

    async def test_no_header(self, gate, employee):
        context = await _evaluate(gate, None)
        assert context.identity is None

    async def test_not_bearer(self, gate, employee):
        context = await _evaluate(gate, "Basic amRvZTpzZWNyZXQ=")
        assert context.identity is None

    async def test_garbage_token(self, gate, employee):
        context = await _evaluate(gate, "Bearer garbage")
        assert context.identity is None

    async def test_logged_out_token(self, db_session, gate, employee):
        service = AuthService(db_session)
        token = await service.authenticate(TEST_USERNAME, TEST_PASSWORD)
        await service.logout(f"Bearer {token}", SecurityContext())

        context = await _evaluate(gate, f"Bearer {token}")

        assert context.identity is None

    async def test_expired_stored_token(self, db_session, gate, employee):
        expired = mint_token(TEST_USERNAME, issued_at=datetime.now(UTC) - timedelta(hours=25))
        await SessionStore(db_session).upsert(employee, expired)

        context = await _evaluate(gate, f"Bearer {expired}")

        assert context.identity is None

    async def test_superseded_token(self, db_session, gate, employee):
        """Only the latest login's token is honoured."""
        old = mint_token(TEST_USERNAME, issued_at=datetime.now(UTC) - timedelta(minutes=5))
        store = SessionStore(db_session)
        await store.upsert(employee, old)
        await store.upsert(employee, mint_token(TEST_USERNAME))

        context = await _evaluate(gate, f"Bearer {old}")

        assert context.identity is None

    async def test_token_for_other_users_session(self, db_session, gate, user_factory):
        """A stored token only authenticates the user named in its subject."""
        alice = await user_factory(username="alice")
        await user_factory(username="bob")
        bob_token = mint_token("bob")
        # Row owned by alice holding a token whose subject is bob
        await SessionStore(db_session).upsert(alice, bob_token)

        context = await _evaluate(gate, f"Bearer {bob_token}")

        assert context.identity is None

    async def test_unknown_subject(self, db_session, gate, employee):
        token = mint_token("ghost")
        await SessionStore(db_session).upsert(employee, token)

        context = await _evaluate(gate, f"Bearer {token}")

        assert context.identity is None

    async def test_locked_user(self, db_session, gate, employee):
        token = await AuthService(db_session).authenticate(TEST_USERNAME, TEST_PASSWORD)
        employee.is_locked = True
        await db_session.flush()

        context = await _evaluate(gate, f"Bearer {token}")

        assert context.identity is None

    async def test_never_writes_sessions(self, db_session, gate, employee):
        token = await AuthService(db_session).authenticate(TEST_USERNAME, TEST_PASSWORD)
        record = await SessionStore(db_session).find_by_token(token)

        await _evaluate(gate, f"Bearer {token}")
        await _evaluate(gate, "Bearer garbage")

        assert record in db_session
        assert record.token_string == token
        assert not db_session.dirty
