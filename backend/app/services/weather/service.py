"""Temperature retrieval pipeline.

Cache-first lookup with offline fallback:
1. Cache hit  -> return a copy labeled online, or stale if fetched > 1h ago
2. Cache miss -> fetch from provider, validate range, convert, round, cache
3. Fetch fails -> return the cached copy labeled offline if one exists,
   otherwise raise

Manual refreshes drop the cached record and record a per-location guard so
callers can enforce a minimum interval between refreshes.
"""

import logging
import time
from datetime import datetime
from typing import Callable

from app.models import (
    ConnectionStatus,
    ImplausibleReadingError,
    InvalidInputError,
    ProviderUnavailableError,
    TemperatureRecord,
    TemperatureUnit,
)
from app.services.cache import CacheService
from app.services.weather_provider import WeatherProviderService
from app.utils.units import celsius_to_fahrenheit, format_timestamp, round_temperature

logger = logging.getLogger(__name__)

MAX_LOCATION_LENGTH = 50

# Plausible surface air temperatures in Celsius (both bounds accepted)
MIN_PLAUSIBLE_CELSIUS = -90.0
MAX_PLAUSIBLE_CELSIUS = 60.0

STALE_AFTER_SECONDS = 3600
REFRESH_INTERVAL_SECONDS = 30
DEFAULT_RECORD_TTL_SECONDS = 900


def validate_location(location: str) -> None:
    if not location or len(location) > MAX_LOCATION_LENGTH:
        raise InvalidInputError(
            f"Location must be between 1 and {MAX_LOCATION_LENGTH} characters",
            location=location,
        )


def parse_unit(unit: TemperatureUnit | str) -> TemperatureUnit:
    try:
        return TemperatureUnit(unit)
    except ValueError as e:
        raise InvalidInputError(f"Unsupported temperature unit: {unit!r}") from e


class WeatherService:
    """Current temperature lookups backed by a provider and a TTL cache.

    The cache and provider are owned by the caller (normally the application
    lifespan) and passed in, so tests can substitute fakes and a manual clock.
    """

    def __init__(
        self,
        cache: CacheService,
        provider: WeatherProviderService,
        record_ttl: float = DEFAULT_RECORD_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._cache = cache
        self._provider = provider
        self._record_ttl = record_ttl
        self._clock = clock

    async def get_current_temperature(
        self, location: str, unit: TemperatureUnit = TemperatureUnit.CELSIUS
    ) -> TemperatureRecord:
        """Get the current temperature for a location.

        Args:
            location: Location name (city, state/country), 1-50 characters.
            unit: Requested temperature unit.

        Returns:
            The temperature record with its connection status.

        Raises:
            InvalidInputError: If the location is empty or too long, or the
                unit is not supported.
            ProviderUnavailableError: If the provider failed and nothing is cached.
            ImplausibleReadingError: If the provider reading is out of range
                and nothing is cached.
        """
        validate_location(location)
        unit = parse_unit(unit)
        key = CacheService.build_weather_key(location, unit.value)

        cached: TemperatureRecord | None = self._cache.get(key)
        if cached is not None:
            age = self._clock() - cached.fetched_at
            if age > STALE_AFTER_SECONDS:
                logger.debug(f"[WEATHER] Cache hit (stale, {age:.0f}s old): {key}")
                return cached.with_status(ConnectionStatus.STALE)
            logger.debug(f"[WEATHER] Cache hit: {key}")
            return cached.with_status(ConnectionStatus.ONLINE)

        logger.debug(f"[WEATHER] Cache miss: {key}")
        return await self._fetch_with_fallback(location, unit, key)

    async def refresh_temperature(
        self, location: str, unit: TemperatureUnit = TemperatureUnit.CELSIUS
    ) -> TemperatureRecord:
        """Force a fresh provider fetch for a location.

        Drops the cached record and records the refresh time for rate limiting.
        Eligibility is not re-checked here; callers gate on
        ``check_refresh_eligibility`` first.
        """
        validate_location(location)
        unit = parse_unit(unit)
        key = CacheService.build_weather_key(location, unit.value)

        self._cache.delete(key)
        self._cache.set(
            CacheService.build_refresh_key(location),
            self._clock(),
            REFRESH_INTERVAL_SECONDS,
        )
        logger.info(f"[WEATHER] Manual refresh: {location!r} ({unit.value})")
        return await self._fetch_with_fallback(location, unit, key)

    async def check_refresh_eligibility(self, location: str) -> bool:
        """Whether a manual refresh is allowed for this location now."""
        last_refresh: float | None = self._cache.get(CacheService.build_refresh_key(location))
        if last_refresh is None:
            return True
        return self._clock() - last_refresh >= REFRESH_INTERVAL_SECONDS

    async def _fetch_with_fallback(
        self, location: str, unit: TemperatureUnit, key: str
    ) -> TemperatureRecord:
        try:
            record = await self._fetch_record(location, unit)
        except (ProviderUnavailableError, ImplausibleReadingError) as e:
            fallback: TemperatureRecord | None = self._cache.get(key)
            if fallback is not None:
                logger.warning(f"[WEATHER] Serving cached data offline for {key}: {e.message}")
                return fallback.with_status(ConnectionStatus.OFFLINE)
            if isinstance(e, ImplausibleReadingError):
                raise
            raise ProviderUnavailableError(
                f"Unable to retrieve weather data and no cached data available ({e.message})",
                location=location,
            ) from e

        self._cache.set(key, record, self._record_ttl)
        return record

    async def _fetch_record(self, location: str, unit: TemperatureUnit) -> TemperatureRecord:
        response = await self._provider.fetch_current(location)
        celsius = response.current.temp_c

        if celsius < MIN_PLAUSIBLE_CELSIUS or celsius > MAX_PLAUSIBLE_CELSIUS:
            logger.warning(f"[WEATHER] Implausible reading for {location!r}: {celsius}°C")
            raise ImplausibleReadingError(
                "Temperature value outside plausible range",
                temperature=celsius,
                location=location,
            )

        value = celsius_to_fahrenheit(celsius) if unit is TemperatureUnit.FAHRENHEIT else celsius
        now = self._clock()
        return TemperatureRecord(
            temperature=round_temperature(value),
            unit=unit.symbol,
            location=response.location.name,
            last_update=format_timestamp(datetime.fromtimestamp(now)),
            connection_status=ConnectionStatus.ONLINE,
            fetched_at=now,
        )
