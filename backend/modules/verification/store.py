"""
Verification token stores.

Tokens live apart from user records: the user row keeps only the
verification state, the store keeps the ephemeral protocol state.
Expiry is lazy; nothing sweeps old entries, every read checks the clock.
"""

from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository

from .models import VerificationToken


class InMemoryVerificationTokenStore:
    """Token storage backed by a dict."""

    def __init__(self) -> None:
        self._entries: dict[str, VerificationToken] = {}

    async def add(self, entry: VerificationToken) -> VerificationToken:
        self._entries[entry.token] = entry
        return entry

    async def get(self, token: str) -> Optional[VerificationToken]:
        return self._entries.get(token)

    async def consume(self, token: str, now: datetime) -> Optional[VerificationToken]:
        entry = self._entries.get(token)
        if entry is None or not entry.is_open(now):
            return None
        consumed = entry.model_copy(update={"consumed_at": now})
        self._entries[token] = consumed
        return consumed

    async def supersede_open(self, user_id: str) -> int:
        count = 0
        for token, entry in self._entries.items():
            if entry.user_id == user_id and entry.consumed_at is None and not entry.superseded:
                self._entries[token] = entry.model_copy(update={"superseded": True})
                count += 1
        return count


class SupabaseVerificationTokenStore(BaseRepository[VerificationToken]):
    """
    Token storage in the `verification_tokens` table.

    consume() is a single conditional UPDATE, so two concurrent callers
    cannot both see the row as open.
    """

    TABLE = "verification_tokens"

    async def add(self, entry: VerificationToken) -> VerificationToken:
        result = self._db.table(self.TABLE).insert(self._to_row(entry)).execute()
        return self._map_to_token(result.data[0])

    async def get(self, token: str) -> Optional[VerificationToken]:
        result = self._db.table(self.TABLE).select("*").eq("token", token).execute()
        row = self._first(result)
        return self._map_to_token(row) if row else None

    async def consume(self, token: str, now: datetime) -> Optional[VerificationToken]:
        result = (
            self._db.table(self.TABLE)
            .update({"consumed_at": now.isoformat()})
            .eq("token", token)
            .is_("consumed_at", "null")
            .eq("superseded", False)
            .gt("expires_at", now.isoformat())
            .execute()
        )
        row = self._first(result)
        return self._map_to_token(row) if row else None

    async def supersede_open(self, user_id: str) -> int:
        result = (
            self._db.table(self.TABLE)
            .update({"superseded": True})
            .eq("user_id", user_id)
            .is_("consumed_at", "null")
            .eq("superseded", False)
            .execute()
        )
        return len(result.data or [])

    @staticmethod
    def _to_row(entry: VerificationToken) -> dict[str, Any]:
        return entry.model_dump(mode="json")

    def _map_to_token(self, data: dict[str, Any]) -> VerificationToken:
        """Map database row to VerificationToken model."""
        return VerificationToken(
            token=data["token"],
            user_id=str(data["user_id"]),
            expires_at=data["expires_at"],
            created_at=data["created_at"],
            consumed_at=data.get("consumed_at"),
            superseded=data.get("superseded", False),
        )
