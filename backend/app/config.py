"""Application settings loaded from the environment.

Values come from process environment variables, with a local ``.env`` file
loaded first for development.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:5173",
)


def _split_origins(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the API."""

    weather_api_url: str = "https://api.weatherapi.com/v1"
    weather_api_key: str = ""
    weather_api_timeout: float = 5.0
    cache_ttl: int = 900  # 15 minutes
    cache_check_period: int = 120
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        settings = cls(
            weather_api_url=os.getenv("WEATHER_API_URL", cls.weather_api_url),
            weather_api_key=os.getenv("WEATHER_API_KEY", ""),
            weather_api_timeout=float(os.getenv("WEATHER_API_TIMEOUT", cls.weather_api_timeout)),
            cache_ttl=int(os.getenv("CACHE_TTL", cls.cache_ttl)),
            cache_check_period=int(os.getenv("CACHE_CHECK_PERIOD", cls.cache_check_period)),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS")),
        )
        if not settings.weather_api_key:
            logger.warning("WEATHER_API_KEY not set; provider requests will be rejected")
        return settings
