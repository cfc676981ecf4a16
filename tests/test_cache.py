import asyncio

from backend.core.cache import TTLCache


def test_ttl_cache_async_wrapper():
    asyncio.run(_async_cache_tests())


async def _async_cache_tests():
    cache = TTLCache()

    # Test set and get
    await cache.set("key1", "value1", 0.1)
    assert await cache.get("key1") == "value1"

    # Test expiration
    await asyncio.sleep(0.2)
    assert await cache.get("key1") is None

    # Test prefix invalidation
    await cache.set("catalog:tree:a", "v1", 1.0)
    await cache.set("catalog:tree:b", "v2", 1.0)
    await cache.set("other:1", "v3", 1.0)

    await cache.invalidate_prefix("catalog:tree:")
    assert await cache.get("catalog:tree:a") is None
    assert await cache.get("catalog:tree:b") is None
    assert await cache.get("other:1") == "v3"


def test_get_or_set_builds_once():
    async def run():
        cache = TTLCache()
        calls = []

        async def factory():
            calls.append(1)
            return {"built": len(calls)}

        first = await cache.get_or_set("k", factory, 1.0)
        second = await cache.get_or_set("k", factory, 1.0)
        return first, second, calls

    first, second, calls = asyncio.run(run())
    assert first is second
    assert calls == [1]


def test_get_or_set_zero_ttl_never_stores():
    async def run():
        cache = TTLCache()
        calls = []

        async def factory():
            calls.append(1)
            return "v"

        await cache.get_or_set("k", factory, 0)
        await cache.get_or_set("k", factory, 0)
        return calls

    assert asyncio.run(run()) == [1, 1]
