"""Core data models for the Weather Temperature API.

This module contains the Pydantic models shared by the service layer and the
HTTP API: temperature units, connection status, the temperature record that
is cached and returned, the upstream provider payload and the error envelope.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TemperatureUnit(str, Enum):
    """Temperature units a caller may request."""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def symbol(self) -> str:
        """Display symbol for this unit."""
        return "°F" if self is TemperatureUnit.FAHRENHEIT else "°C"


class ConnectionStatus(str, Enum):
    """Where a returned temperature came from.

    - online: freshly fetched, or cached and less than an hour old
    - stale: cached and fetched more than an hour ago
    - offline: served from cache because a live fetch failed
    """

    ONLINE = "online"
    STALE = "stale"
    OFFLINE = "offline"


class TemperatureRecord(BaseModel):
    """A temperature reading as cached and returned to clients.

    Records are immutable. Relabeling (stale, offline) produces a copy via
    ``with_status`` and only the connection status changes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float = Field(..., description="Temperature rounded to one decimal")
    unit: str = Field(..., description="Unit symbol (°C or °F)")
    location: str = Field(..., min_length=1, description="Canonical location name")
    last_update: str = Field(
        ..., alias="lastUpdate", description="'Updated at HH:MM' of the provider fetch"
    )
    connection_status: ConnectionStatus = Field(
        ConnectionStatus.ONLINE, alias="connectionStatus"
    )
    # Epoch seconds of the provider fetch, used for staleness checks
    fetched_at: float = Field(..., exclude=True)

    def with_status(self, status: ConnectionStatus) -> "TemperatureRecord":
        return self.model_copy(update={"connection_status": status})


class ProviderLocation(BaseModel):
    name: str = Field(..., min_length=1)
    region: str = ""
    country: str = ""


class ProviderCondition(BaseModel):
    text: str = ""


class ProviderCurrent(BaseModel):
    temp_c: float
    temp_f: Optional[float] = None
    condition: ProviderCondition = Field(default_factory=ProviderCondition)


class ProviderResponse(BaseModel):
    """Subset of the upstream ``current.json`` payload we rely on.

    Only ``location.name`` and ``current.temp_c`` are used downstream; the
    rest is accepted so malformed payloads still fail validation early.
    """

    location: ProviderLocation
    current: ProviderCurrent


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in the error envelope."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    IMPLAUSIBLE_READING = "IMPLAUSIBLE_READING"
    API_ERROR = "API_ERROR"


class AppError(BaseModel):
    """Error payload carried in failed API responses."""

    code: ErrorCode
    message: str
    user_message: str
    details: Optional[list[dict]] = None
