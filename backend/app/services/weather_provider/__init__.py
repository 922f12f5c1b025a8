"""Weather provider service module."""

from .service import WeatherAPIProviderService, WeatherProviderService

__all__ = [
    "WeatherAPIProviderService",
    "WeatherProviderService",
]
