"""HTTP API layer."""

from .routes import ERROR_STATUS, error_response, get_weather_service, router

__all__ = [
    "ERROR_STATUS",
    "error_response",
    "get_weather_service",
    "router",
]
