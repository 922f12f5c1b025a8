"""Data models for the Weather Temperature API."""

from .core import (
    AppError,
    ConnectionStatus,
    ErrorCode,
    ProviderCondition,
    ProviderCurrent,
    ProviderLocation,
    ProviderResponse,
    TemperatureRecord,
    TemperatureUnit,
)
from .errors import (
    ImplausibleReadingError,
    InvalidInputError,
    ProviderUnavailableError,
    WeatherServiceError,
)

__all__ = [
    "AppError",
    "ConnectionStatus",
    "ErrorCode",
    "ProviderCondition",
    "ProviderCurrent",
    "ProviderLocation",
    "ProviderResponse",
    "TemperatureRecord",
    "TemperatureUnit",
    # Errors
    "ImplausibleReadingError",
    "InvalidInputError",
    "ProviderUnavailableError",
    "WeatherServiceError",
]
