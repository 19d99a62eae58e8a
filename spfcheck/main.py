from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from spfcheck.config import get_settings
from spfcheck.errors import InputError, NetworkError, NotFound, ParseError
from spfcheck.logger import setup_logger
from spfcheck.schemas import UVReport
from spfcheck.services.pipeline import UVService, classify
from spfcheck.services.presenter import build_failure_view, build_not_found_view, build_view
from spfcheck.services.weather_client import WeatherClient


settings = get_settings()
setup_logger(log_level=settings.log_level)
logger = logging.getLogger(__name__)

uv_service = UVService(settings=settings, client=WeatherClient(settings=settings))

app = FastAPI(title=settings.app_name, version=settings.app_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.frontend_origins),
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.on_event("shutdown")
async def shutdown_event() -> None:
    await uv_service.close()


@app.get("/api/health")
async def health() -> dict:
    return {
        "status": "ok",
        "service": settings.app_name,
        "timestamp_utc": datetime.now(tz=timezone.utc).isoformat(),
    }


@app.get("/api/uv")
async def uv_by_coordinate(
    latitude: float = Query(ge=-90, le=90),
    longitude: float = Query(ge=-180, le=180),
) -> dict:
    try:
        report = await uv_service.resolve_by_coordinate(latitude=latitude, longitude=longitude)
    except (NetworkError, ParseError) as exc:
        logger.error("UV lookup for (%s, %s) failed: %s", latitude, longitude, exc)
        raise HTTPException(status_code=502, detail=build_failure_view().model_dump(mode="json")) from exc
    return _serialize_report(report)


@app.get("/api/uv/search", response_model=None)
async def uv_by_name(query: str = Query(default="", max_length=120)) -> dict | Response:
    try:
        report = await uv_service.resolve_by_name(query)
    except InputError:
        # Empty search box: nothing to look up.
        return Response(status_code=204)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=build_not_found_view().model_dump(mode="json")) from exc
    except (NetworkError, ParseError) as exc:
        logger.error("UV lookup for %r failed: %s", query, exc)
        raise HTTPException(status_code=502, detail=build_failure_view().model_dump(mode="json")) from exc
    return _serialize_report(report)


@app.get("/api/advisory")
async def advisory(uv: float | None = Query(default=None)) -> dict:
    return classify(uv).model_dump(mode="json")


@app.get("/api/geocode/reverse")
async def reverse_geocode(
    latitude: float = Query(ge=-90, le=90),
    longitude: float = Query(ge=-180, le=180),
) -> dict:
    place = await uv_service.reverse_geocode(latitude=latitude, longitude=longitude)
    return {"result": place.model_dump(mode="json")}


def _serialize_report(report: UVReport) -> dict:
    return {
        "uv_now": report.uv_now,
        "uv_max": report.uv_max,
        "label": report.label,
        "location": report.location.model_dump(mode="json"),
        "advisory": classify(report.uv_now).model_dump(mode="json"),
        "view": build_view(report).model_dump(mode="json"),
    }
