from __future__ import annotations

from typing import Protocol


class KVStorePort(Protocol):
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store value; no ttl (or ttl <= 0) means the key never expires."""

    async def delete(self, key: str) -> int:
        """Delete a single key. Return how many keys were removed (0 or 1)."""

    async def delete_pattern(self, pattern: str) -> int:
        """
        Enumerate keys matching a glob-style pattern, then delete them in one batch.
        An empty match set is a no-op returning 0.
        """

    async def increment(self, key: str) -> int:
        """Atomically increment and return the post-increment value."""

    async def increment_window(self, key: str, window_seconds: int) -> int:
        """
        Atomically increment a fixed-window counter. The expiry is attached only
        by the increment that creates the key and is never refreshed afterwards.
        """

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        """Attach an expiry. False when the key does not exist."""

    async def exists(self, key: str) -> bool:
        """True if the key is present."""

    async def ttl(self, key: str) -> int:
        """Remaining seconds; -1 for a key without expiry, -2 for a missing key."""

    async def compare_and_delete(self, key: str, expected: str) -> bool:
        """Atomically delete the key if its value equals expected."""

    async def ping(self) -> bool:
        """True when the store answers."""
