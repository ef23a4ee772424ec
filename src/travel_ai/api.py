"""HTTP surface over :class:`TravelPlanner`."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from travel_ai import __version__
from travel_ai.activities import ActivityPriceResult
from travel_ai.config.settings import Settings
from travel_ai.planner import TravelPlanner
from travel_ai.services import ProviderConfigurationError, ProviderError
from travel_ai.tasks.search_payloads import (
    ActivitySearchRequest,
    CityImageRequest,
    FlightSearchRequest,
    HotelSearchRequest,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Travel AI API",
    description="Flight, hotel and activity price lookups for trip planning",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


async def get_planner(settings: Settings = Depends(get_settings)) -> AsyncIterator[TravelPlanner]:
    async with TravelPlanner(settings) as planner:
        yield planner


def _error_details(exc: RequestValidationError) -> list[dict[str, object]]:
    return [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": _error_details(exc)})


@app.exception_handler(ProviderError)
async def _provider_error(request: Request, exc: ProviderError) -> JSONResponse:
    if isinstance(exc, ProviderConfigurationError):
        status = 500
    elif exc.status and 400 <= exc.status < 600:
        status = exc.status
    else:
        status = 502
    logger.warning("%s %s failed via %s: %s", request.method, request.url.path, exc.provider, exc)
    return JSONResponse(status_code=status, content={"error": str(exc), "provider": exc.provider})


@app.get("/")
def root():
    return {
        "service": "travel-ai",
        "status": "healthy",
        "version": __version__,
        "endpoints": {
            "flights": "/api/flights",
            "hotels": "/api/hotels",
            "activities": "/api/activities",
            "city_image": "/api/city-image",
            "city_lookup": "/api/city-lookup",
        },
    }


@app.post("/api/flights")
async def search_flights(request: FlightSearchRequest, planner: TravelPlanner = Depends(get_planner)):
    result = await planner.search_flights(request)
    return result.to_dict()


@app.post("/api/hotels")
async def search_hotels(request: HotelSearchRequest, planner: TravelPlanner = Depends(get_planner)):
    result = await planner.search_hotels(request)
    payload = result.to_dict()
    payload["nights"] = request.nights
    return payload


@app.post("/api/activities")
async def price_activities(request: ActivitySearchRequest, planner: TravelPlanner = Depends(get_planner)):
    results = await planner.price_activities(request)
    return {
        "success": True,
        "destination": request.destination,
        "activities": ActivityPriceResult.from_iterable(results),
    }


@app.post("/api/city-image")
async def city_image(request: CityImageRequest, planner: TravelPlanner = Depends(get_planner)):
    image = await planner.city_image(request.city)
    if image is None:
        return JSONResponse(status_code=404, content={"success": False, "error": f"No image found for {request.city}"})
    return image.to_dict()


@app.get("/api/city-lookup")
async def city_lookup(
    name: str = Query(..., min_length=1), planner: TravelPlanner = Depends(get_planner)
):
    result = await planner.lookup_city(name)
    return result.to_dict()


def serve() -> None:
    """Run the API with uvicorn using the configured log level."""
    import uvicorn

    from travel_ai.core.logging import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_dir)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    serve()
