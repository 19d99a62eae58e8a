from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from spfcheck.errors import InputError, NetworkError, NotFound, ParseError
from spfcheck.schemas import (
    BigDataCloudReverseResponse,
    Coordinate,
    GeocodeCandidate,
    OpenMeteoPlace,
    PlaceLabel,
    ResolvedLocation,
)
from spfcheck.services.query_parser import parse_query
from spfcheck.services.regions import normalize_country_name
from spfcheck.services.scoring import select_candidate
from spfcheck.services.weather_client import WeatherClient


logger = logging.getLogger(__name__)

ReverseStrategy = Callable[[Coordinate], Awaitable[PlaceLabel | None]]


@dataclass
class Geocoder:
    client: WeatherClient

    def reverse_strategies(self) -> list[tuple[str, ReverseStrategy]]:
        return [
            ("open-meteo", self._reverse_via_open_meteo),
            ("bigdatacloud", self._reverse_via_bigdatacloud),
        ]

    async def reverse_geocode(self, coordinate: Coordinate) -> PlaceLabel:
        """Best available label for a coordinate; falls back to the formatted coordinate, never raises."""
        failures: list[str] = []
        for name, strategy in self.reverse_strategies():
            try:
                label = await strategy(coordinate)
            except (NetworkError, ParseError) as exc:
                logger.warning("Reverse geocoding via %s failed: %s", name, exc)
                failures.append(f"{name}: {exc}")
                continue
            if label is not None:
                return label
            failures.append(f"{name}: no result")

        fallback = coordinate.label()
        logger.info("Reverse geocoding exhausted for %s, using coordinates (%s)", fallback, "; ".join(failures))
        return PlaceLabel(primary_label=fallback, display_label=fallback)

    async def geocode_by_name(self, raw_text: str | None) -> ResolvedLocation:
        query = parse_query(raw_text)
        if query is None:
            raise InputError("Search text is empty.")

        candidates = await self.client.search_places(query)
        if not candidates:
            raise NotFound(f"No matches found for {query.primary_name!r}.")

        hit = select_candidate(candidates, query)
        logger.debug("Resolved %r to %s (%s)", raw_text, hit.name, hit.admin1)
        return resolved_location_from_candidate(hit)

    async def _reverse_via_open_meteo(self, coordinate: Coordinate) -> PlaceLabel | None:
        place = await self.client.reverse_open_meteo(coordinate)
        if place is None:
            return None
        return label_from_open_meteo(place)

    async def _reverse_via_bigdatacloud(self, coordinate: Coordinate) -> PlaceLabel | None:
        return label_from_bigdatacloud(await self.client.reverse_bigdatacloud(coordinate))


def label_from_open_meteo(place: OpenMeteoPlace) -> PlaceLabel | None:
    primary = place.city or place.name or place.admin2 or place.admin1
    secondary = place.admin1 if place.admin1 and place.admin1 != primary else None
    country = None
    if _include_country(place.country_code):
        country = normalize_country_name(place.country or place.country_code)
    return _assemble_label(primary, secondary, country)


def label_from_bigdatacloud(data: BigDataCloudReverseResponse) -> PlaceLabel | None:
    primary = data.city or data.locality or data.principal_subdivision or data.country_name
    secondary = (
        data.principal_subdivision
        if data.principal_subdivision and data.principal_subdivision != primary
        else None
    )
    country = None
    if _include_country(data.country_code) and data.country_name != primary:
        country = normalize_country_name(data.country_name)
    return _assemble_label(primary, secondary, country)


def resolved_location_from_candidate(candidate: GeocodeCandidate) -> ResolvedLocation:
    coordinate = Coordinate(latitude=candidate.latitude, longitude=candidate.longitude)
    display = ", ".join(part for part in (candidate.name, candidate.admin1, candidate.country) if part)
    return ResolvedLocation(
        coordinate=coordinate,
        primary_label=candidate.name or display or coordinate.label(),
        display_label=display or coordinate.label(),
    )


def _include_country(country_code: str | None) -> bool:
    # US labels read "City, State"; a missing code means we cannot tell, so keep the country.
    code = (country_code or "").strip().upper()
    return code != "US" if code else True


def _assemble_label(primary: str | None, secondary: str | None, country: str | None) -> PlaceLabel | None:
    joined = ", ".join(part for part in (primary, secondary, country) if part)
    if not primary and not joined:
        return None
    return PlaceLabel(primary_label=primary or joined, display_label=joined or primary)
