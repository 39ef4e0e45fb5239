"""Tests for shared/locks.py."""

import asyncio

import pytest

from shared.locks import KeyedLocks


class TestKeyedLocks:
    def test_same_key_same_lock(self):
        locks = KeyedLocks()
        assert locks.get("u-1") is locks.get("u-1")
        assert locks.get("u-1") is not locks.get("u-2")
        assert len(locks) == 2

    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self):
        locks = KeyedLocks()
        order = []

        async def worker(name: str) -> None:
            async with locks.hold("u-1"):
                order.append(f"{name}-in")
                await asyncio.sleep(0)
                order.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))

        assert order == ["a-in", "a-out", "b-in", "b-out"]

    @pytest.mark.asyncio
    async def test_different_keys_interleave(self):
        locks = KeyedLocks()
        order = []

        async def worker(key: str) -> None:
            async with locks.hold(key):
                order.append(f"{key}-in")
                await asyncio.sleep(0)
                order.append(f"{key}-out")

        await asyncio.gather(worker("u-1"), worker("u-2"))

        assert order == ["u-1-in", "u-2-in", "u-1-out", "u-2-out"]
