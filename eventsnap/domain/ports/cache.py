from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol):
    """
    Advisory cache. Every operation degrades to a miss / no-op when the
    backing store fails; callers always have the system of record to fall back on.
    """

    async def get(self, key: str, type_: Any = None) -> Any | None:
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...

    async def delete_by_pattern(self, pattern: str) -> int:
        ...

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
        ttl: int | None = None,
        type_: Any = None,
    ) -> T:
        ...

    async def exists(self, key: str) -> bool:
        ...

    async def ttl(self, key: str) -> int:
        ...

    async def increment(self, key: str, ttl: int | None = None) -> int:
        ...
