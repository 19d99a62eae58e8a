"""
Shared provider payloads and a WeatherClient factory backed by httpx.MockTransport.
"""

import copy
from collections.abc import Callable

import httpx
import pytest

from spfcheck.config import Settings
from spfcheck.services.weather_client import WeatherClient


Handler = Callable[[httpx.Request], httpx.Response]

AUSTIN_FORECAST = {
    "latitude": 30.27,
    "longitude": -97.74,
    "utc_offset_seconds": -18000,
    "timezone": "America/Chicago",
    "hourly": {
        "time": [f"2024-06-01T{hour:02d}:00" for hour in range(24)],
        "uv_index": [
            0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.1, 0.5, 1.2, 2.4, 3.8, 5.2,
            6.6, 7.4, 7.1, 6.0, 4.6, 3.0, 1.6, 0.6, 0.1, 0.0, 0.0, 0.0,
        ],
    },
    "daily": {"time": ["2024-06-01"], "uv_index_max": [7.6]},
}

SPRINGFIELD_RESULTS = {
    "results": [
        {
            "name": "Springfield",
            "latitude": 37.21533,
            "longitude": -93.29824,
            "admin1": "Missouri",
            "admin2": "Greene",
            "country": "United States",
            "country_code": "US",
        },
        {
            "name": "Springfield",
            "latitude": 39.80172,
            "longitude": -89.64371,
            "admin1": "Illinois",
            "admin2": "Sangamon",
            "country": "United States",
            "country_code": "US",
        },
    ]
}


@pytest.fixture
def make_client() -> Callable[..., WeatherClient]:
    def _factory(handler: Handler, **overrides) -> WeatherClient:  # noqa: ANN003
        return WeatherClient(settings=Settings(**overrides), transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture
def austin_forecast() -> dict:
    return copy.deepcopy(AUSTIN_FORECAST)


@pytest.fixture
def springfield_results() -> dict:
    return copy.deepcopy(SPRINGFIELD_RESULTS)
