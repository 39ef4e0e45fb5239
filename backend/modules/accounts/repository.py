"""
User repositories.

InMemoryUserRepository keeps users in process memory and is the default
backend. SupabaseUserRepository stores them in the `users` table
(see migrations/001_identity.sql).
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from modules.authz import Role
from shared.repository import BaseRepository

from .exceptions import UsernameTakenError
from .models import User, VerificationState

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryUserRepository:
    """User storage backed by a dict."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def list(self, tenant_ref: Optional[str] = None) -> list[User]:
        users = [
            u for u in self._users.values()
            if tenant_ref is None or u.tenant_ref == tenant_ref
        ]
        return sorted(users, key=lambda u: u.created_at or _EPOCH, reverse=True)

    async def count_in_tenant(self, tenant_ref: str, exclude_user_id: Optional[str] = None) -> int:
        return sum(
            1 for u in self._users.values()
            if u.tenant_ref == tenant_ref and u.id != exclude_user_id
        )

    async def create(self, user: User) -> User:
        if await self.get_by_username(user.username) is not None:
            raise UsernameTakenError(user.username)
        stored = user.model_copy(
            update={
                "id": user.id or str(uuid.uuid4()),
                "created_at": user.created_at or datetime.now(timezone.utc),
            }
        )
        self._users[stored.id] = stored
        return stored

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update=changes)
        self._users[user_id] = updated
        return updated

    async def delete(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None


class SupabaseUserRepository(BaseRepository[User]):
    """User storage in Supabase."""

    TABLE = "users"

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = self._db.table(self.TABLE).select("*").eq("id", user_id).execute()
        row = self._first(result)
        return self._map_to_user(row) if row else None

    async def get_by_username(self, username: str) -> Optional[User]:
        result = self._db.table(self.TABLE).select("*").eq("username", username).execute()
        row = self._first(result)
        return self._map_to_user(row) if row else None

    async def list(self, tenant_ref: Optional[str] = None) -> list[User]:
        query = self._db.table(self.TABLE).select("*")
        if tenant_ref is not None:
            query = query.eq("tenant_ref", tenant_ref)
        result = query.order("created_at", desc=True).execute()
        return [self._map_to_user(row) for row in result.data]

    async def count_in_tenant(self, tenant_ref: str, exclude_user_id: Optional[str] = None) -> int:
        query = self._db.table(self.TABLE).select("id", count="exact").eq("tenant_ref", tenant_ref)
        if exclude_user_id is not None:
            query = query.neq("id", exclude_user_id)
        result = query.execute()
        return result.count or 0

    async def create(self, user: User) -> User:
        if await self.get_by_username(user.username) is not None:
            raise UsernameTakenError(user.username)
        data = self._to_row(user.model_dump(exclude={"id", "created_at"}))
        result = self._db.table(self.TABLE).insert(data).execute()
        return self._map_to_user(result.data[0])

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        result = self._db.table(self.TABLE).update(self._to_row(changes)).eq("id", user_id).execute()
        row = self._first(result)
        return self._map_to_user(row) if row else None

    async def delete(self, user_id: str) -> bool:
        result = self._db.table(self.TABLE).delete().eq("id", user_id).execute()
        return bool(result.data)

    @staticmethod
    def _to_row(data: dict[str, Any]) -> dict[str, Any]:
        """Convert enum values to their database representation."""
        return {k: v.value if isinstance(v, Enum) else v for k, v in data.items()}

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        tenant_ref = data.get("tenant_ref")
        return User(
            id=str(data["id"]),
            username=data["username"],
            password_hash=data["password_hash"],
            role=Role(data.get("role", "operator")),
            tenant_ref=str(tenant_ref) if tenant_ref is not None else None,
            verification_state=VerificationState(data.get("verification_state", "unverified")),
            biometric_record=data.get("biometric_record"),
            requires_verification_on_next_login=data.get("requires_verification_on_next_login", True),
            created_at=data.get("created_at"),
        )
