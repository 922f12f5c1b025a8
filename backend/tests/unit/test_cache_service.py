"""Unit tests for the cache service.

Tests the CacheService key builders and MemoryCacheService expiry behavior.
"""

import asyncio

import pytest

from app.services.cache import CacheService, MemoryCacheService
from tests.fakes import ManualClock


class TestCacheKeys:
    """Tests for cache key builders."""

    def test_weather_key_format(self) -> None:
        assert CacheService.build_weather_key("London", "celsius") == "weather:London:celsius"

    def test_refresh_key_format(self) -> None:
        assert CacheService.build_refresh_key("London") == "refresh:London"

    def test_units_get_distinct_keys(self) -> None:
        assert CacheService.build_weather_key("Paris", "celsius") != CacheService.build_weather_key(
            "Paris", "fahrenheit"
        )

    def test_namespaces_do_not_collide(self) -> None:
        weather_key = CacheService.build_weather_key("refresh", "celsius")
        refresh_key = CacheService.build_refresh_key("weather")
        assert weather_key.startswith("weather:")
        assert refresh_key.startswith("refresh:")
        assert weather_key != refresh_key


class TestMemoryCacheServiceInit:
    """Tests for MemoryCacheService initialization."""

    def test_default_initialization(self) -> None:
        cache = MemoryCacheService()
        assert cache.default_ttl == 900
        assert len(cache) == 0
        assert cache.is_sweeping is False

    def test_custom_ttl(self) -> None:
        cache = MemoryCacheService(default_ttl=60)
        assert cache.default_ttl == 60

    def test_rejects_non_positive_check_period(self) -> None:
        with pytest.raises(ValueError, match="check_period"):
            MemoryCacheService(check_period=0)


class TestMemoryCacheServiceOperations:
    """Tests for get/set/delete/clear and lazy expiry."""

    def setup_method(self) -> None:
        self.clock = ManualClock()
        self.cache = MemoryCacheService(default_ttl=900, clock=self.clock)

    def test_get_missing_key(self) -> None:
        assert self.cache.get("nope") is None

    def test_set_and_get(self) -> None:
        self.cache.set("k", {"temperature": 20.0})
        assert self.cache.get("k") == {"temperature": 20.0}

    def test_ttl_expiry(self) -> None:
        self.cache.set("k", "v", ttl_seconds=1)
        self.clock.advance(0.5)
        assert self.cache.get("k") == "v"
        self.clock.advance(1.0)
        assert self.cache.get("k") is None

    def test_entry_present_at_exact_deadline(self) -> None:
        self.cache.set("k", "v", ttl_seconds=1)
        self.clock.advance(1)
        assert self.cache.get("k") == "v"

    def test_expired_read_evicts_entry(self) -> None:
        self.cache.set("k", "v", ttl_seconds=1)
        self.clock.advance(2)
        assert len(self.cache) == 1
        assert self.cache.get("k") is None
        assert len(self.cache) == 0

    def test_default_ttl_applies(self) -> None:
        self.cache.set("k", "v")
        self.clock.advance(900)
        assert self.cache.get("k") == "v"
        self.clock.advance(1)
        assert self.cache.get("k") is None

    def test_overwrite_resets_value_and_expiry(self) -> None:
        self.cache.set("k", "old", ttl_seconds=1)
        self.clock.advance(0.9)
        self.cache.set("k", "new", ttl_seconds=10)
        self.clock.advance(5)
        assert self.cache.get("k") == "new"

    def test_delete(self) -> None:
        self.cache.set("k", "v")
        assert self.cache.delete("k") is True
        assert self.cache.get("k") is None

    def test_delete_missing_key(self) -> None:
        assert self.cache.delete("missing") is False

    def test_clear(self) -> None:
        self.cache.set("a", 1)
        self.cache.set("b", 2)
        self.cache.clear()
        assert len(self.cache) == 0
        assert self.cache.get("a") is None

    def test_exists(self) -> None:
        self.cache.set("k", "v", ttl_seconds=1)
        assert self.cache.exists("k") is True
        self.clock.advance(2)
        assert self.cache.exists("k") is False

    def test_purge_expired(self) -> None:
        self.cache.set("short", 1, ttl_seconds=1)
        self.cache.set("long", 2, ttl_seconds=100)
        self.clock.advance(10)
        assert self.cache.purge_expired() == 1
        assert len(self.cache) == 1
        assert self.cache.get("long") == 2


class TestMemoryCacheServiceSweep:
    """Tests for the background sweep task."""

    @pytest.mark.asyncio
    async def test_sweep_evicts_expired_entries(self) -> None:
        clock = ManualClock()
        cache = MemoryCacheService(check_period=0.01, clock=clock)
        cache.set("k", "v", ttl_seconds=1)
        clock.advance(5)

        await cache.start()
        try:
            await asyncio.sleep(0.1)
            assert len(cache) == 0
        finally:
            await cache.stop()

    @pytest.mark.asyncio
    async def test_sweep_keeps_live_entries(self) -> None:
        clock = ManualClock()
        cache = MemoryCacheService(check_period=0.01, clock=clock)
        cache.set("k", "v", ttl_seconds=60)

        await cache.start()
        try:
            await asyncio.sleep(0.05)
            assert cache.get("k") == "v"
        finally:
            await cache.stop()

    @pytest.mark.asyncio
    async def test_start_and_stop(self) -> None:
        cache = MemoryCacheService(check_period=0.01)
        await cache.start()
        assert cache.is_sweeping is True
        await cache.start()
        assert cache.is_sweeping is True

        await cache.stop()
        assert cache.is_sweeping is False
        await cache.stop()
        assert cache.is_sweeping is False

    @pytest.mark.asyncio
    async def test_cache_usable_after_stop(self) -> None:
        cache = MemoryCacheService(check_period=0.01)
        await cache.start()
        await cache.stop()
        cache.set("k", "v")
        assert cache.get("k") == "v"
