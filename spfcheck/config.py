from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    app_name: str = "Should I Wear SPF API"
    app_version: str = "1.0.0"
    open_meteo_forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    open_meteo_geo_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    open_meteo_reverse_geo_url: str = "https://geocoding-api.open-meteo.com/v1/reverse"
    bigdatacloud_reverse_geo_url: str = "https://api.bigdatacloud.net/data/reverse-geocode-client"
    geo_cache_ttl_seconds: int = 3600
    geo_cache_max_entries: int = 512
    api_retry_attempts: int = 0
    request_timeout_seconds: float = 12.0
    alignment_warning_hours: int = 2
    log_level: str = "INFO"
    frontend_origins: tuple[str, ...] = ("http://localhost:5173", "http://127.0.0.1:5173")


def get_settings() -> Settings:
    origins_raw = os.getenv("FRONTEND_ORIGINS", "").strip()
    cache_ttl_raw = os.getenv("API_CACHE_TTL_SECONDS", "").strip()
    retry_attempts_raw = os.getenv("API_RETRY_ATTEMPTS", "").strip()
    timeout_raw = os.getenv("REQUEST_TIMEOUT_SECONDS", "").strip()
    log_level_raw = os.getenv("LOG_LEVEL", "").strip().upper()

    parsed_origins = tuple(item.strip() for item in origins_raw.split(",") if item.strip())

    try:
        cache_ttl_seconds = int(cache_ttl_raw) if cache_ttl_raw else Settings.geo_cache_ttl_seconds
    except ValueError:
        cache_ttl_seconds = Settings.geo_cache_ttl_seconds

    try:
        retry_attempts = int(retry_attempts_raw) if retry_attempts_raw else Settings.api_retry_attempts
    except ValueError:
        retry_attempts = Settings.api_retry_attempts

    try:
        timeout_seconds = float(timeout_raw) if timeout_raw else Settings.request_timeout_seconds
    except ValueError:
        timeout_seconds = Settings.request_timeout_seconds

    if log_level_raw not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        log_level_raw = Settings.log_level

    return Settings(
        frontend_origins=parsed_origins or Settings.frontend_origins,
        geo_cache_ttl_seconds=max(0, cache_ttl_seconds),
        api_retry_attempts=max(0, retry_attempts),
        request_timeout_seconds=max(1.0, timeout_seconds),
        log_level=log_level_raw,
    )
