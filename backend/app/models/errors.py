"""Error variants raised by the temperature retrieval pipeline.

The set is closed: every failure the pipeline surfaces is one of the three
subclasses below, each carrying a fixed ErrorCode so the API layer can map
it to a transport status without inspecting messages.
"""

from typing import Optional

from .core import AppError, ErrorCode


class WeatherServiceError(Exception):
    """Base class for pipeline failures."""

    code: ErrorCode = ErrorCode.API_ERROR
    user_message: str = "Something went wrong. Please try again."

    def __init__(self, message: str, location: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def to_app_error(self) -> AppError:
        return AppError(
            code=self.code,
            message=self.message,
            user_message=self.user_message,
        )


class InvalidInputError(WeatherServiceError):
    """Location is empty or longer than the allowed maximum."""

    code = ErrorCode.INVALID_INPUT
    user_message = "Invalid location. Please check your input."


class ProviderUnavailableError(WeatherServiceError):
    """Timeout, transport error or bad response from the weather provider."""

    code = ErrorCode.SERVICE_UNAVAILABLE
    user_message = "Weather data is currently unavailable. Please try again later."


class ImplausibleReadingError(WeatherServiceError):
    """Provider returned a temperature outside the physically plausible range."""

    code = ErrorCode.IMPLAUSIBLE_READING
    user_message = "Weather data is currently unavailable. Please try again later."

    def __init__(
        self, message: str, temperature: float, location: Optional[str] = None
    ) -> None:
        super().__init__(message, location=location)
        self.temperature = temperature
