import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")


class TTLCache:
    """Simple TTL cache with async support."""

    def __init__(self) -> None:
        self._cache: dict[str, tuple[Any, float]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            if key in self._cache:
                value, expires_at = self._cache[key]
                if time.time() < expires_at:
                    return value
                del self._cache[key]
        return None

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        async with self._lock:
            self._cache[key] = (value, time.time() + ttl_seconds)

    async def get_or_set(
        self, key: str, factory: Callable[[], Awaitable[T]], ttl_seconds: float
    ) -> T:
        """Return the cached value, building and storing it on a miss."""
        cached = await self.get(key)
        if cached is not None:
            return cached
        value = await factory()
        if ttl_seconds > 0:
            await self.set(key, value, ttl_seconds)
        return value

    async def invalidate_prefix(self, prefix: str) -> None:
        async with self._lock:
            to_delete = [k for k in self._cache if k.startswith(prefix)]
            for k in to_delete:
                del self._cache[k]

