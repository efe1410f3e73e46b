"""Tests for RateCache.

Covers:
- TTL expiry against an injected clock
- Coalescing of concurrent fetches for the same key
- Failed or empty fetches yield None and are not stored
- peek / invalidate / clear
"""

from __future__ import annotations

import asyncio
import math
from typing import Any

import pytest

from formulary.rates import RateCache


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingFetcher:
    """Fetcher returning a sequence of payloads and counting calls."""

    def __init__(self, *payloads: Any) -> None:
        self._payloads = list(payloads)
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        return self._payloads[min(self.calls, len(self._payloads)) - 1]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> RateCache:
    return RateCache(ttl_seconds=600, clock=clock)


class TestRateCacheTtl:
    """Tests for entry lifetime."""

    def test_hit_within_ttl(self, cache: RateCache, clock: FakeClock) -> None:
        """A second lookup inside the TTL does not fetch again."""
        fetcher = CountingFetcher({"v": 1}, {"v": 2})

        async def run() -> tuple[Any, Any]:
            first = await cache.get_or_fetch("latest-USD-1", fetcher)
            clock.advance(599)
            second = await cache.get_or_fetch("latest-USD-1", fetcher)
            return first, second

        first, second = asyncio.run(run())
        assert first == {"v": 1}
        assert second == {"v": 1}
        assert fetcher.calls == 1

    def test_refetch_after_ttl(self, cache: RateCache, clock: FakeClock) -> None:
        """An entry older than the TTL is replaced on the next access."""
        fetcher = CountingFetcher({"v": 1}, {"v": 2})

        async def run() -> Any:
            await cache.get_or_fetch("latest-USD-1", fetcher)
            clock.advance(600)
            return await cache.get_or_fetch("latest-USD-1", fetcher)

        assert asyncio.run(run()) == {"v": 2}
        assert fetcher.calls == 2
        assert cache.size == 1

    def test_per_call_ttl_override(self, cache: RateCache, clock: FakeClock) -> None:
        """An infinite TTL keeps the entry forever."""
        fetcher = CountingFetcher("historical")

        async def run() -> None:
            await cache.get_or_fetch("hist", fetcher, ttl_seconds=math.inf)
            clock.advance(10**9)
            await cache.get_or_fetch("hist", fetcher, ttl_seconds=math.inf)

        asyncio.run(run())
        assert fetcher.calls == 1
        assert cache.peek("hist") == "historical"

    def test_keys_are_independent(self, cache: RateCache) -> None:
        usd = CountingFetcher("usd")
        eur = CountingFetcher("eur")

        async def run() -> tuple[Any, Any]:
            return (
                await cache.get_or_fetch("latest-USD-1", usd),
                await cache.get_or_fetch("latest-EUR-1", eur),
            )

        assert asyncio.run(run()) == ("usd", "eur")
        assert cache.size == 2

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_non_positive_ttl_rejected(self, ttl: float) -> None:
        with pytest.raises(ValueError, match="ttl_seconds"):
            RateCache(ttl_seconds=ttl)


class TestRateCacheCoalescing:
    """Tests for in-flight request sharing."""

    def test_concurrent_requests_share_one_fetch(self, cache: RateCache) -> None:
        """Two overlapping lookups for one key trigger a single fetch."""
        calls = 0

        async def run() -> list[Any]:
            release = asyncio.Event()

            async def slow_fetch() -> dict[str, float]:
                nonlocal calls
                calls += 1
                await release.wait()
                return {"EUR": 0.92}

            async def release_soon() -> None:
                await asyncio.sleep(0)
                await asyncio.sleep(0)
                release.set()

            results = await asyncio.gather(
                cache.get_or_fetch("latest-USD-1", slow_fetch),
                cache.get_or_fetch("latest-USD-1", slow_fetch),
                release_soon(),
            )
            return list(results[:2])

        assert asyncio.run(run()) == [{"EUR": 0.92}, {"EUR": 0.92}]
        assert calls == 1

    def test_waiters_see_failure_as_none(self, cache: RateCache) -> None:
        """A failed shared fetch yields None to every waiter."""

        async def run() -> list[Any]:
            release = asyncio.Event()

            async def failing_fetch() -> Any:
                await release.wait()
                raise ConnectionError("network down")

            async def release_soon() -> None:
                await asyncio.sleep(0)
                release.set()

            results = await asyncio.gather(
                cache.get_or_fetch("k", failing_fetch),
                cache.get_or_fetch("k", failing_fetch),
                release_soon(),
            )
            return list(results[:2])

        assert asyncio.run(run()) == [None, None]
        assert cache.size == 0


class TestRateCacheFailures:
    """Tests for fetch failures and empty payloads."""

    def test_failure_returns_none_and_keeps_previous(
        self, cache: RateCache, clock: FakeClock
    ) -> None:
        """A failed refresh returns None and does not overwrite the store."""

        async def failing_fetch() -> Any:
            raise TimeoutError("slow upstream")

        async def run() -> Any:
            await cache.get_or_fetch("k", CountingFetcher("old"))
            clock.advance(601)
            return await cache.get_or_fetch("k", failing_fetch)

        assert asyncio.run(run()) is None
        assert cache.size == 1
        assert cache.peek("k") is None

    def test_failure_is_retried_next_time(self, cache: RateCache) -> None:
        """Failures are not cached."""
        attempts = 0

        async def flaky_fetch() -> str:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                raise ConnectionError("first call fails")
            return "ok"

        async def run() -> tuple[Any, Any]:
            return await cache.get_or_fetch("k", flaky_fetch), await cache.get_or_fetch(
                "k", flaky_fetch
            )

        assert asyncio.run(run()) == (None, "ok")
        assert attempts == 2

    def test_none_payload_not_stored(self, cache: RateCache) -> None:
        fetcher = CountingFetcher(None)

        async def run() -> None:
            await cache.get_or_fetch("k", fetcher)
            await cache.get_or_fetch("k", fetcher)

        asyncio.run(run())
        assert fetcher.calls == 2
        assert cache.size == 0


class TestRateCacheMaintenance:
    """Tests for peek, invalidate and clear."""

    def test_peek_does_not_fetch(self, cache: RateCache) -> None:
        assert cache.peek("missing") is None
        assert cache.size == 0

    def test_invalidate(self, cache: RateCache) -> None:
        fetcher = CountingFetcher("a", "b")

        async def run() -> Any:
            await cache.get_or_fetch("k", fetcher)
            assert cache.invalidate("k") is True
            assert cache.invalidate("k") is False
            return await cache.get_or_fetch("k", fetcher)

        assert asyncio.run(run()) == "b"

    def test_clear(self, cache: RateCache) -> None:
        async def run() -> None:
            await cache.get_or_fetch("a", CountingFetcher(1))
            await cache.get_or_fetch("b", CountingFetcher(2))

        asyncio.run(run())
        assert cache.size == 2
        cache.clear()
        assert cache.size == 0
        assert cache.peek("a") is None
