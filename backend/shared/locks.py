"""
Keyed asyncio locks.

Provides per-key mutual exclusion for in-process state such as a single
user's verification fields and outstanding tokens.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class KeyedLocks:
    """
    Hands out one asyncio.Lock per key.

    Locks are created on first use and kept for the lifetime of the
    instance. Two callers using the same key are serialized; callers
    using different keys never contend.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, key: str) -> asyncio.Lock:
        """Get (or create) the lock for a key."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for a key for the duration of the block."""
        async with self.get(key):
            yield

    def __len__(self) -> int:
        return len(self._locks)
