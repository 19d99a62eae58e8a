from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from spfcheck.schemas import ForecastSeries


logger = logging.getLogger(__name__)

# Open-Meteo hourly stamps are local wall-clock time, zero-padded and fixed width,
# so plain string comparison orders them chronologically.
HOUR_LABEL_FORMAT = "%Y-%m-%dT%H:00"


def current_hour_label(utc_offset_seconds: float | None, now: datetime | None = None) -> str:
    """
    Top of the current hour at the forecast location, formatted like the forecast stamps.

    The offset is applied to the UTC instant and the shifted fields are read as-is, which
    stands in for a tz database lookup. Without an offset the host's local clock is used.
    """
    instant = now or datetime.now(tz=timezone.utc)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)

    if utc_offset_seconds is not None and math.isfinite(utc_offset_seconds):
        shifted = instant.astimezone(timezone.utc) + timedelta(seconds=utc_offset_seconds)
    else:
        shifted = instant.astimezone()
    return shifted.replace(minute=0, second=0, microsecond=0).strftime(HOUR_LABEL_FORMAT)


def align_to_current_hour(
    timestamps: Sequence[str],
    values_length: int,
    utc_offset_seconds: float | None,
    now: datetime | None = None,
    tolerance_hours: int | None = None,
) -> int | None:
    """
    Index of the slot for "now": exact match, else the next upcoming slot, else the
    last value. Returns None when there is nothing to index.
    """
    if not timestamps or values_length <= 0:
        return None

    label = current_hour_label(utc_offset_seconds, now=now)
    try:
        return timestamps.index(label)
    except ValueError:
        pass

    upcoming = next((idx for idx, stamp in enumerate(timestamps) if stamp > label), None)
    if upcoming is None:
        return values_length - 1

    if tolerance_hours is not None:
        gap_hours = _hours_between(label, timestamps[upcoming])
        if gap_hours is not None and gap_hours > tolerance_hours:
            logger.warning(
                "Nearest forecast slot %s is %.1fh after current hour %s; check the location offset.",
                timestamps[upcoming],
                gap_hours,
                label,
            )
    return upcoming


def uv_now(
    series: ForecastSeries,
    now: datetime | None = None,
    tolerance_hours: int | None = None,
) -> float | None:
    idx = align_to_current_hour(
        series.timestamps,
        len(series.uv_by_hour),
        series.utc_offset_seconds,
        now=now,
        tolerance_hours=tolerance_hours,
    )
    if idx is None or idx >= len(series.uv_by_hour):
        return None
    value = series.uv_by_hour[idx]
    return float(value) if value is not None else None


def _hours_between(label: str, stamp: str) -> float | None:
    try:
        delta = datetime.fromisoformat(stamp) - datetime.fromisoformat(label)
    except ValueError:
        return None
    return delta.total_seconds() / 3600
