"""Weather service module.

Temperature retrieval pipeline with caching, offline fallback and
refresh rate limiting.
"""

from .service import (
    MAX_LOCATION_LENGTH,
    REFRESH_INTERVAL_SECONDS,
    STALE_AFTER_SECONDS,
    WeatherService,
    validate_location,
)

__all__ = [
    "MAX_LOCATION_LENGTH",
    "REFRESH_INTERVAL_SECONDS",
    "STALE_AFTER_SECONDS",
    "WeatherService",
    "validate_location",
]
