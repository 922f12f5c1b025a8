"""API routes for the Weather Temperature API.

Public (unauthenticated) weather endpoints:
- GET  /weather/current  read-only lookup, served from cache when possible
- POST /weather/refresh  forced refresh, limited to one per 30s per location

Pipeline failures are mapped to HTTP statuses by error code; see ERROR_STATUS.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.models import (
    AppError,
    ConnectionStatus,
    ErrorCode,
    TemperatureRecord,
    TemperatureUnit,
    WeatherServiceError,
)
from app.services.weather import MAX_LOCATION_LENGTH, REFRESH_INTERVAL_SECONDS, WeatherService

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.RATE_LIMIT_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.IMPLAUSIBLE_READING: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.API_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


# Request/Response models
class RefreshRequest(BaseModel):
    """Request body for a manual refresh."""
    location: str = Field(..., min_length=1, max_length=MAX_LOCATION_LENGTH)
    unit: TemperatureUnit = TemperatureUnit.CELSIUS


class TemperatureData(BaseModel):
    """Public view of a temperature record."""
    model_config = ConfigDict(populate_by_name=True)

    temperature: float
    unit: str
    location: str
    last_update: str = Field(..., alias="lastUpdate")
    connection_status: ConnectionStatus = Field(..., alias="connectionStatus")

    @classmethod
    def from_record(cls, record: TemperatureRecord) -> "TemperatureData":
        return cls(
            temperature=record.temperature,
            unit=record.unit,
            location=record.location,
            last_update=record.last_update,
            connection_status=record.connection_status,
        )


class TemperatureResponse(BaseModel):
    """Response model for a temperature lookup."""
    success: bool
    data: Optional[TemperatureData] = None
    error: Optional[AppError] = None


class RefreshData(BaseModel):
    """Refreshed temperature, reported with an update status."""
    model_config = ConfigDict(populate_by_name=True)

    temperature: float
    unit: str
    location: str
    last_update: str = Field(..., alias="lastUpdate")
    status: str = "success"

    @classmethod
    def from_record(cls, record: TemperatureRecord) -> "RefreshData":
        return cls(
            temperature=record.temperature,
            unit=record.unit,
            location=record.location,
            last_update=record.last_update,
        )


class RefreshResponse(BaseModel):
    """Response model for a manual refresh."""
    success: bool
    data: Optional[RefreshData] = None
    error: Optional[AppError] = None


def error_response(error: AppError) -> JSONResponse:
    """Build the failure envelope with the status mapped from the error code."""
    return JSONResponse(
        status_code=ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        content={"success": False, "error": error.model_dump(mode="json", exclude_none=True)},
    )


def get_weather_service(request: Request) -> WeatherService:
    """Weather service created by the application lifespan."""
    return request.app.state.weather_service


@router.get(
    "/weather/current",
    response_model=TemperatureResponse,
    response_model_exclude_none=True,
)
async def get_current_temperature(
    location: str = Query(..., min_length=1, max_length=MAX_LOCATION_LENGTH),
    unit: TemperatureUnit = Query(TemperatureUnit.CELSIUS),
    service: WeatherService = Depends(get_weather_service),
):
    """Get the current temperature for a location.

    Served from cache when a record exists; connectionStatus reports whether
    the data is fresh (online), over an hour old (stale) or a fallback after
    a failed provider call (offline).
    """
    try:
        record = await service.get_current_temperature(location, unit)
    except WeatherServiceError as e:
        logger.info(f"[API] current {location!r} failed: {e.code.value}: {e.message}")
        return error_response(e.to_app_error())

    return TemperatureResponse(success=True, data=TemperatureData.from_record(record))


@router.post(
    "/weather/refresh",
    response_model=RefreshResponse,
    response_model_exclude_none=True,
)
async def refresh_temperature(
    request: RefreshRequest,
    service: WeatherService = Depends(get_weather_service),
):
    """Manually refresh temperature data for a location.

    At most one refresh per location every 30 seconds.
    """
    if not await service.check_refresh_eligibility(request.location):
        return error_response(
            AppError(
                code=ErrorCode.RATE_LIMIT_ERROR,
                message=f"Refresh for {request.location!r} requested too soon",
                user_message=(
                    f"Please wait at least {REFRESH_INTERVAL_SECONDS} seconds "
                    "between manual refresh requests"
                ),
            )
        )

    try:
        record = await service.refresh_temperature(request.location, request.unit)
    except WeatherServiceError as e:
        logger.info(f"[API] refresh {request.location!r} failed: {e.code.value}: {e.message}")
        return error_response(e.to_app_error())

    return RefreshResponse(success=True, data=RefreshData.from_record(record))
