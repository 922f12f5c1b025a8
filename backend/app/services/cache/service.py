"""Cache service implementation.

This module provides an abstract cache service interface and a concrete
in-memory implementation with per-entry expiry, used for temperature records
and refresh guards.

Expiry is checked lazily on every read, so ``get`` is always correct on its
own. A background sweep task additionally evicts expired entries on a fixed
period to keep memory bounded; it can be started and stopped with the
application lifespan.

All operations are synchronous and run on the event loop thread, so reads,
writes and the sweep never interleave.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A cached value and its absolute expiry (epoch seconds)."""

    data: T
    expires_at: float


class CacheService(ABC):
    """Abstract base class for cache services.

    Defines the interface for caching operations including get, set,
    and deletion. Also provides static methods for building consistent
    cache keys for temperature records and refresh guards.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to look up.

        Returns:
            The cached value if found and not expired, None otherwise.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        """Store value in cache, replacing any existing entry.

        Args:
            key: The cache key to store under.
            value: The value to cache.
            ttl_seconds: Time-to-live in seconds. Uses the default if omitted.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a specific key from the cache.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key was deleted, False if it didn't exist.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry."""
        pass

    def exists(self, key: str) -> bool:
        """Check if a live (unexpired) entry exists for key."""
        return self.get(key) is not None

    @staticmethod
    def build_weather_key(location: str, unit: str) -> str:
        """Generate cache key for a temperature record.

        The key format is: ``weather:{location}:{unit}``

        Example:
            >>> CacheService.build_weather_key("London", "celsius")
            'weather:London:celsius'
        """
        return f"weather:{location}:{unit}"

    @staticmethod
    def build_refresh_key(location: str) -> str:
        """Generate cache key for a location's refresh guard.

        The key format is: ``refresh:{location}``

        Example:
            >>> CacheService.build_refresh_key("London")
            'refresh:London'
        """
        return f"refresh:{location}"


class MemoryCacheService(CacheService):
    """Process-local cache with per-entry TTL and a periodic sweep.

    Attributes:
        _entries: Mapping of key to CacheEntry.
        _default_ttl: Default TTL in seconds for cached values.
        _check_period: Seconds between background sweeps.
        _clock: Returns the current time in epoch seconds.
    """

    def __init__(
        self,
        default_ttl: float = 900,
        check_period: float = 120,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory cache service.

        Args:
            default_ttl: Default TTL in seconds. Defaults to 900 (15 minutes).
            check_period: Seconds between expiry sweeps. Defaults to 120.
            clock: Time source in epoch seconds. Defaults to ``time.time``.
        """
        if check_period <= 0:
            raise ValueError("check_period must be positive")
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._default_ttl = default_ttl
        self._check_period = check_period
        self._clock = clock
        self._sweep_task: asyncio.Task | None = None

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._entries[key]
            logger.debug(f"[CACHE] Expired on read: {key}")
            return None
        return entry.data

    def set(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        self._entries[key] = CacheEntry(data=value, expires_at=self._clock() + ttl)

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def purge_expired(self) -> int:
        """Evict every expired entry.

        Returns:
            Number of entries evicted.
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now > entry.expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"[CACHE] Sweep evicted {len(expired)} entries")
        return len(expired)

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._check_period)
            self.purge_expired()

    async def start(self) -> None:
        """Start the background sweep task.

        Must be called from a running event loop. Calling it twice is a no-op.
        """
        if self.is_sweeping:
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop())
        logger.info(f"[CACHE] Sweep started (every {self._check_period}s)")

    async def stop(self) -> None:
        """Stop the background sweep task, if running."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("[CACHE] Sweep stopped")

    @property
    def is_sweeping(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    @property
    def default_ttl(self) -> float:
        """Get the default TTL in seconds."""
        return self._default_ttl

    def __len__(self) -> int:
        return len(self._entries)
