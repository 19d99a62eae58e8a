from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from time import monotonic
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from spfcheck.config import Settings
from spfcheck.errors import NetworkError, ParseError
from spfcheck.schemas import (
    BigDataCloudReverseResponse,
    Coordinate,
    ForecastSeries,
    GeocodeCandidate,
    LocationQuery,
    OpenMeteoForecastResponse,
    OpenMeteoGeocodeResponse,
    OpenMeteoPlace,
)


logger = logging.getLogger(__name__)

RETRYABLE_HTTP_STATUS = {408, 429, 500, 502, 503, 504}
US_COUNTRY_FILTER = "United States"

SchemaT = TypeVar("SchemaT", bound=BaseModel)


@dataclass
class WeatherClient:
    settings: Settings
    transport: httpx.AsyncBaseTransport | None = None
    _cache: dict[str, tuple[float, Any]] = field(default_factory=dict, init=False)
    _client: httpx.AsyncClient = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._client = httpx.AsyncClient(
            timeout=self.settings.request_timeout_seconds,
            transport=self.transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_forecast(self, coordinate: Coordinate) -> ForecastSeries:
        payload = await self._get_json(
            url=self.settings.open_meteo_forecast_url,
            params={
                "latitude": coordinate.latitude,
                "longitude": coordinate.longitude,
                "hourly": "uv_index",
                "daily": "uv_index_max",
                "timezone": "auto",
                "forecast_days": 1,
            },
        )
        return _validate(OpenMeteoForecastResponse, payload, provider="Open-Meteo forecast").to_series()

    async def search_places(self, query: LocationQuery) -> list[GeocodeCandidate]:
        params: dict[str, Any] = {
            "name": query.primary_name,
            "count": 5 if query.filter_tokens else 1,
            "language": "en",
            "format": "json",
        }
        if query.likely_us:
            params["country"] = US_COUNTRY_FILTER

        payload = await self._get_json(
            url=self.settings.open_meteo_geo_url,
            params=params,
            cache_key=f"geo:{query.primary_name.lower()}:{params['count']}:{params.get('country', '')}",
            cache_ttl_seconds=self.settings.geo_cache_ttl_seconds,
        )
        response = _validate(OpenMeteoGeocodeResponse, payload, provider="Open-Meteo search")
        return [place.to_candidate() for place in response.results]

    async def reverse_open_meteo(self, coordinate: Coordinate) -> OpenMeteoPlace | None:
        payload = await self._get_json(
            url=self.settings.open_meteo_reverse_geo_url,
            params={
                "latitude": coordinate.latitude,
                "longitude": coordinate.longitude,
                "count": 1,
                "language": "en",
                "format": "json",
            },
            cache_key=f"reverse-geo:{round(coordinate.latitude, 5)}:{round(coordinate.longitude, 5)}",
            cache_ttl_seconds=self.settings.geo_cache_ttl_seconds,
        )
        response = _validate(OpenMeteoGeocodeResponse, payload, provider="Open-Meteo reverse")
        return response.results[0] if response.results else None

    async def reverse_bigdatacloud(self, coordinate: Coordinate) -> BigDataCloudReverseResponse:
        payload = await self._get_json(
            url=self.settings.bigdatacloud_reverse_geo_url,
            params={
                "latitude": coordinate.latitude,
                "longitude": coordinate.longitude,
                "localityLanguage": "en",
            },
            cache_key=f"reverse-geo-fallback:{round(coordinate.latitude, 5)}:{round(coordinate.longitude, 5)}",
            cache_ttl_seconds=self.settings.geo_cache_ttl_seconds,
        )
        return _validate(BigDataCloudReverseResponse, payload, provider="BigDataCloud reverse")

    async def _get_json(
        self,
        *,
        url: str,
        params: dict[str, Any] | None = None,
        cache_key: str | None = None,
        cache_ttl_seconds: int = 0,
    ) -> Any:
        if cache_key and cache_ttl_seconds > 0:
            cached = self._cache_get(cache_key)
            if cached is not None:
                return cached

        attempts = self.settings.api_retry_attempts
        for attempt in range(attempts + 1):
            try:
                response = await self._client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()
                if cache_key and cache_ttl_seconds > 0:
                    self._cache_set(cache_key, payload, ttl_seconds=cache_ttl_seconds)
                return payload
            except httpx.HTTPStatusError as exc:
                status_code = exc.response.status_code
                if status_code not in RETRYABLE_HTTP_STATUS or attempt >= attempts:
                    raise NetworkError(f"{url} answered {status_code}") from exc
            except httpx.RequestError as exc:
                if attempt >= attempts:
                    raise NetworkError(f"{url} request failed: {exc}") from exc
            except ValueError as exc:
                raise ParseError(f"{url} returned malformed JSON") from exc
            logger.debug("Retrying %s (attempt %d of %d)", url, attempt + 2, attempts + 1)
            await asyncio.sleep(0.35 * (attempt + 1))

        raise NetworkError(f"Failed to fetch upstream JSON payload from {url}.")

    def _cache_get(self, key: str) -> Any | None:
        entry = self._cache.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if monotonic() >= expires_at:
            self._cache.pop(key, None)
            return None
        return payload

    def _cache_set(self, key: str, payload: Any, *, ttl_seconds: int) -> None:
        now = monotonic()
        for stale_key in [k for k, (expires_at, _) in self._cache.items() if expires_at <= now]:
            del self._cache[stale_key]
        self._cache.pop(key, None)
        # Dicts keep insertion order, so the first keys are the oldest entries.
        while self._cache and len(self._cache) >= self.settings.geo_cache_max_entries:
            del self._cache[next(iter(self._cache))]
        self._cache[key] = (now + max(1, ttl_seconds), payload)


def _validate(schema: type[SchemaT], payload: Any, *, provider: str) -> SchemaT:
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise ParseError(f"{provider} payload did not match the expected shape: {exc.error_count()} error(s)") from exc
