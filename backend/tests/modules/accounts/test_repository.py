"""Tests for user repositories."""

import pytest
from unittest.mock import MagicMock

from modules.accounts import (
    InMemoryUserRepository,
    SupabaseUserRepository,
    UsernameTakenError,
    VerificationState,
)
from modules.authz import Role
from tests.conftest import make_user


class TestInMemoryUserRepository:
    @pytest.mark.asyncio
    async def test_create_and_lookup(self):
        repo = InMemoryUserRepository()
        user = await repo.create(make_user("alice", tenant_ref="t1"))

        assert (await repo.get_by_id(user.id)).username == "alice"
        assert (await repo.get_by_username("alice")).id == user.id
        assert user.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self):
        repo = InMemoryUserRepository()
        await repo.create(make_user("alice", tenant_ref="t1"))
        with pytest.raises(UsernameTakenError):
            await repo.create(make_user("alice", tenant_ref="t2"))

    @pytest.mark.asyncio
    async def test_list_and_count_by_tenant(self):
        repo = InMemoryUserRepository()
        boss = await repo.create(make_user("boss", Role.SUB_ADMIN, "t1"))
        await repo.create(make_user("a", tenant_ref="t1"))
        await repo.create(make_user("b", tenant_ref="t1"))
        await repo.create(make_user("c", tenant_ref="t2"))

        assert len(await repo.list()) == 4
        assert {u.username for u in await repo.list(tenant_ref="t1")} == {"boss", "a", "b"}
        assert await repo.count_in_tenant("t1") == 3
        assert await repo.count_in_tenant("t1", exclude_user_id=boss.id) == 2

    @pytest.mark.asyncio
    async def test_update_and_delete(self):
        repo = InMemoryUserRepository()
        user = await repo.create(make_user("alice", tenant_ref="t1"))

        updated = await repo.update(user.id, {"verification_state": VerificationState.VERIFIED})
        assert updated.is_verified
        assert await repo.update("missing", {"role": Role.VIEWER}) is None

        assert await repo.delete(user.id) is True
        assert await repo.delete(user.id) is False
        assert await repo.get_by_id(user.id) is None


class TestSupabaseUserRepository:
    @pytest.fixture
    def db(self) -> MagicMock:
        return MagicMock()

    def _row(self, **overrides) -> dict:
        row = {
            "id": "u-1",
            "username": "alice",
            "password_hash": "hash",
            "role": "operator",
            "tenant_ref": "t-1",
            "verification_state": "verification_pending",
            "biometric_record": None,
            "requires_verification_on_next_login": True,
            "created_at": "2026-01-01T00:00:00+00:00",
        }
        row.update(overrides)
        return row

    @pytest.mark.asyncio
    async def test_get_by_id_maps_row(self, db):
        db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            self._row()
        ]
        user = await SupabaseUserRepository(db).get_by_id("u-1")

        db.table.assert_called_with("users")
        assert user.role == Role.OPERATOR
        assert user.verification_state == VerificationState.PENDING
        assert user.tenant_ref == "t-1"

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, db):
        db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []
        assert await SupabaseUserRepository(db).get_by_id("nope") is None

    @pytest.mark.asyncio
    async def test_update_serializes_enums(self, db):
        update = db.table.return_value.update
        update.return_value.eq.return_value.execute.return_value.data = [
            self._row(verification_state="verified")
        ]
        user = await SupabaseUserRepository(db).update(
            "u-1", {"verification_state": VerificationState.VERIFIED, "role": Role.VIEWER}
        )

        update.assert_called_once_with({"verification_state": "verified", "role": "viewer"})
        assert user.is_verified

    @pytest.mark.asyncio
    async def test_count_in_tenant_excludes_user(self, db):
        query = db.table.return_value.select.return_value.eq.return_value
        query.neq.return_value.execute.return_value.count = 3

        count = await SupabaseUserRepository(db).count_in_tenant("t-1", exclude_user_id="u-9")

        db.table.return_value.select.assert_called_once_with("id", count="exact")
        query.neq.assert_called_once_with("id", "u-9")
        assert count == 3
