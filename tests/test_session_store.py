"""Tests for the session store adapter."""

import pytest

from chronosync.models import SessionToken
from chronosync.services.exceptions import SessionNotFoundError
from chronosync.services.session_store import SessionStore, SessionTokenFilter

pytestmark = pytest.mark.asyncio


class TestSessionStore:
    async def test_empty_filter_matches_nothing(self, db_session, employee):
        store = SessionStore(db_session)
        await store.upsert(employee, "token-1")

        assert await store.find_one(SessionTokenFilter()) is None

    async def test_find_by_user_and_token(self, db_session, employee):
        store = SessionStore(db_session)
        record = await store.upsert(employee, "token-1")

        assert await store.find_by_user(employee) is record
        assert await store.find_by_token("token-1") is record
        assert await store.find_by_token("token-2") is None

    async def test_upsert_replaces_in_place(self, db_session, employee):
        store = SessionStore(db_session)
        first = await store.upsert(employee, "token-1")
        second = await store.upsert(employee, "token-2")

        assert second.id == first.id
        assert second.token_string == "token-2"
        assert await store.find_by_token("token-1") is None

    async def test_delete(self, db_session, employee):
        store = SessionStore(db_session)
        record = await store.upsert(employee, "token-1")

        await store.delete(record)

        assert await store.find_by_user(employee) is None

    async def test_delete_unsaved_record(self, db_session, employee):
        store = SessionStore(db_session)
        record = SessionToken(user_id=employee.id, token_string="never-saved")

        with pytest.raises(SessionNotFoundError):
            await store.delete(record)

    async def test_delete_twice(self, db_session, employee):
        store = SessionStore(db_session)
        record = await store.upsert(employee, "token-1")
        await store.delete(record)

        with pytest.raises(SessionNotFoundError):
            await store.delete(record)

    async def test_deleting_user_removes_session(self, db_session, employee):
        store = SessionStore(db_session)
        await store.upsert(employee, "token-1")

        await db_session.delete(employee)
        await db_session.flush()

        assert await store.find_by_token("token-1") is None
