"""Cache service module."""

from .service import CacheEntry, CacheService, MemoryCacheService

__all__ = [
    "CacheEntry",
    "CacheService",
    "MemoryCacheService",
]
