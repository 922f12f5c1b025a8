"""Weather Temperature FastAPI Application.

Main entry point for the backend API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.api import error_response, router
from app.config import Settings
from app.models import AppError, ErrorCode, WeatherServiceError
from app.services.cache import MemoryCacheService
from app.services.weather import WeatherService
from app.services.weather_provider import WeatherAPIProviderService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)

settings = Settings.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    cache = MemoryCacheService(
        default_ttl=settings.cache_ttl,
        check_period=settings.cache_check_period,
    )
    provider = WeatherAPIProviderService(
        api_key=settings.weather_api_key,
        base_url=settings.weather_api_url,
        timeout=settings.weather_api_timeout,
    )
    app.state.weather_service = WeatherService(cache, provider, record_ttl=settings.cache_ttl)
    await cache.start()
    logger.info(f"Weather API ready (provider: {settings.weather_api_url})")
    yield
    # Shutdown
    await cache.stop()
    await provider.close()


app = FastAPI(
    title="Weather Temperature API",
    description="Current temperature lookups with caching and offline fallback",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handlers
@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle invalid query parameters and request bodies."""
    return error_response(
        AppError(
            code=ErrorCode.VALIDATION_ERROR,
            message="Invalid request parameters",
            user_message="Invalid request format. Please check your input.",
            details=[
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ],
        )
    )


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors."""
    return error_response(
        AppError(
            code=ErrorCode.VALIDATION_ERROR,
            message=str(exc),
            user_message="Invalid request format. Please check your input.",
        )
    )


@app.exception_handler(WeatherServiceError)
async def weather_exception_handler(request: Request, exc: WeatherServiceError):
    """Handle pipeline errors that escaped a route."""
    return error_response(exc.to_app_error())


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors."""
    logger.exception("Unhandled error")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {
                "code": ErrorCode.API_ERROR.value,
                "message": str(exc),
                "user_message": "Something went wrong. Please try again.",
            },
        },
    )


# Include API routes
app.include_router(router, prefix="/api/v1/external")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
