"""Weather Temperature Services.

Service layer components:
- Cache: in-memory TTL cache with a background expiry sweep
- Weather Provider: WeatherAPI.com current conditions client
- Weather: retrieval pipeline with offline fallback and refresh limiting
"""

from .cache import CacheService, MemoryCacheService
from .weather import WeatherService
from .weather_provider import WeatherAPIProviderService, WeatherProviderService

__all__ = [
    # Cache
    "CacheService",
    "MemoryCacheService",
    # Weather provider
    "WeatherAPIProviderService",
    "WeatherProviderService",
    # Weather pipeline
    "WeatherService",
]
