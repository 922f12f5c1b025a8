"""Weather provider service for current conditions.

Talks to a WeatherAPI.com compatible ``/current.json`` endpoint.

Architecture:
- Shared httpx client with connection pooling, created lazily
- Hard per-call deadline via asyncio.wait_for; the in-flight request is
  cancelled when it expires
- Every failure (timeout, transport, non-2xx, malformed body) is normalized
  into ProviderUnavailableError
- No retries; a failed attempt is terminal for that call
"""

import asyncio
import logging
from abc import ABC, abstractmethod

import httpx
from pydantic import ValidationError

from app.models import ProviderResponse
from app.models.errors import ProviderUnavailableError

logger = logging.getLogger(__name__)


class WeatherProviderService(ABC):
    """Abstract base class for weather providers."""

    @abstractmethod
    async def fetch_current(self, location: str) -> ProviderResponse:
        """Fetch current conditions for a location.

        Raises:
            ProviderUnavailableError: If the provider cannot deliver a reading.
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None


class WeatherAPIProviderService(WeatherProviderService):
    """WeatherAPI.com client for current temperature lookups."""

    DEFAULT_BASE_URL = "https://api.weatherapi.com/v1"
    DEFAULT_TIMEOUT = 5.0

    HEADERS = {
        "User-Agent": "WeatherTemperatureAPI/1.0",
        "Accept": "application/json",
    }

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the shared HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self.HEADERS,
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @property
    def current_url(self) -> str:
        return f"{self._base_url}/current.json"

    async def fetch_current(self, location: str) -> ProviderResponse:
        client = self._get_client()
        params = {"key": self._api_key, "q": location}

        try:
            response = await asyncio.wait_for(
                client.get(self.current_url, params=params),
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
            result = ProviderResponse.model_validate(payload)
        except asyncio.TimeoutError as e:
            logger.warning(f"[PROVIDER] Timeout after {self._timeout}s for {location!r}")
            raise ProviderUnavailableError(
                f"Weather provider timed out after {self._timeout}s", location=location
            ) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"[PROVIDER] HTTP {status} for {location!r}")
            raise ProviderUnavailableError(
                f"Weather API returned status {status}", location=location
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"[PROVIDER] Request error for {location!r}: {type(e).__name__}: {e}")
            raise ProviderUnavailableError(
                str(e) or "Failed to fetch weather data", location=location
            ) from e
        except (ValidationError, ValueError) as e:
            logger.warning(f"[PROVIDER] Malformed response for {location!r}: {e}")
            raise ProviderUnavailableError(
                f"Malformed weather API response: {e}", location=location
            ) from e

        logger.info(
            f"[PROVIDER] {result.location.name}: {result.current.temp_c}°C, "
            f"{result.current.condition.text or 'n/a'}"
        )
        return result
