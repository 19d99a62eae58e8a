from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from pydantic import ValidationError

from spfcheck.config import Settings
from spfcheck.errors import InputError
from spfcheck.schemas import Coordinate, PlaceLabel, ResolvedLocation, UVReport
from spfcheck.services.advisory import classify
from spfcheck.services.geocoding import Geocoder
from spfcheck.services.time_alignment import uv_now
from spfcheck.services.weather_client import WeatherClient


logger = logging.getLogger(__name__)

__all__ = ["UVService", "classify"]


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass
class UVService:
    """
    One lookup per call: resolve a place, fetch its forecast, read the UV for "now".

    Nothing is carried between calls, so a newer lookup simply replaces whatever the
    caller rendered from an older one.
    """

    settings: Settings
    client: WeatherClient
    clock: Callable[[], datetime] = field(default=_utc_now)
    geocoder: Geocoder = field(init=False)

    def __post_init__(self) -> None:
        self.geocoder = Geocoder(client=self.client)

    async def close(self) -> None:
        await self.client.close()

    async def resolve_by_coordinate(
        self,
        latitude: float,
        longitude: float,
        location_override: ResolvedLocation | None = None,
    ) -> UVReport:
        coordinate = _coordinate(latitude, longitude)
        if location_override is not None:
            forecast = await self.client.fetch_forecast(coordinate)
            location = location_override
        else:
            reverse_task = asyncio.create_task(self.geocoder.reverse_geocode(coordinate))
            try:
                forecast = await self.client.fetch_forecast(coordinate)
            except BaseException:
                # A failed forecast fails the lookup; the label is no longer wanted.
                reverse_task.cancel()
                raise
            place = await reverse_task
            location = ResolvedLocation(
                coordinate=coordinate,
                primary_label=place.primary_label,
                display_label=place.display_label,
            )

        current = uv_now(
            forecast,
            now=self.clock(),
            tolerance_hours=self.settings.alignment_warning_hours,
        )
        label = location.display_label or location.primary_label or coordinate.label()
        logger.info("UV at %s: now=%s max=%s", label, current, forecast.daily_max_uv)
        return UVReport(
            uv_now=current,
            uv_max=forecast.daily_max_uv,
            label=label,
            location=location,
        )

    async def reverse_geocode(self, latitude: float, longitude: float) -> PlaceLabel:
        return await self.geocoder.reverse_geocode(_coordinate(latitude, longitude))

    async def resolve_by_name(self, text: str | None) -> UVReport:
        location = await self.geocoder.geocode_by_name(text)
        return await self.resolve_by_coordinate(
            location.coordinate.latitude,
            location.coordinate.longitude,
            location_override=location,
        )


def _coordinate(latitude: float, longitude: float) -> Coordinate:
    try:
        return Coordinate(latitude=latitude, longitude=longitude)
    except ValidationError as exc:
        raise InputError(f"Invalid coordinate ({latitude}, {longitude}).") from exc
