"""
Per-key asyncio locks.

Serializes work that targets the same (article_id, locale) pair while letting
different keys proceed concurrently. Entries are dropped once no task holds
or waits on them, so the table does not grow with the article count.

Dependencies: asyncio
System role: Mutual exclusion for delete-then-insert resyncs
"""

import asyncio
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager


class KeyedLock:
    """Lazily created asyncio.Lock per key with reference counting."""

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._waiters: dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """
        Acquire the lock for a key for the duration of the context.

        Args:
            key: Any hashable key, e.g. (article_id, locale)
        """
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def locked(self, key: Hashable) -> bool:
        """Return True while some task holds the lock for key."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
