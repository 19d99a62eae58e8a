from datetime import datetime, timezone

from spfcheck.schemas import ForecastSeries
from spfcheck.services import time_alignment
from spfcheck.services.time_alignment import align_to_current_hour, current_hour_label, uv_now


TIMESTAMPS = ["2024-01-01T00:00", "2024-01-01T01:00"]


def test_current_hour_label_applies_offset_to_utc_fields() -> None:
    now = datetime(2024, 1, 1, 22, 45, 10, tzinfo=timezone.utc)

    assert current_hour_label(0, now=now) == "2024-01-01T22:00"
    assert current_hour_label(9 * 3600, now=now) == "2024-01-02T07:00"
    assert current_hour_label(-6 * 3600, now=now) == "2024-01-01T16:00"
    assert current_hour_label(int(5.5 * 3600), now=now) == "2024-01-02T04:00"


def test_current_hour_label_without_offset_uses_local_clock() -> None:
    now = datetime(2024, 7, 4, 12, 30, tzinfo=timezone.utc)
    expected = now.astimezone().replace(minute=0).strftime("%Y-%m-%dT%H:00")

    assert current_hour_label(None, now=now) == expected
    assert current_hour_label(float("nan"), now=now) == expected


def test_align_exact_match_wins() -> None:
    now = datetime(2024, 1, 1, 1, 59, tzinfo=timezone.utc)
    assert align_to_current_hour(TIMESTAMPS, 2, 0, now=now) == 1


def test_align_falls_forward_to_next_upcoming_slot() -> None:
    before_all = datetime(2023, 12, 31, 23, 10, tzinfo=timezone.utc)
    assert align_to_current_hour(TIMESTAMPS, 2, 0, now=before_all) == 0

    sparse = ["2024-01-01T00:00", "2024-01-01T03:00", "2024-01-01T06:00"]
    between = datetime(2024, 1, 1, 1, 5, tzinfo=timezone.utc)
    assert align_to_current_hour(sparse, 3, 0, now=between) == 1


def test_align_past_every_slot_uses_last_value() -> None:
    after_all = datetime(2024, 1, 1, 5, 0, tzinfo=timezone.utc)
    assert align_to_current_hour(TIMESTAMPS, 2, 0, now=after_all) == 1
    assert align_to_current_hour(TIMESTAMPS, 1, 0, now=after_all) == 0


def test_align_empty_series_has_no_index() -> None:
    now = datetime(2024, 1, 1, 1, 0, tzinfo=timezone.utc)
    assert align_to_current_hour([], 0, 0, now=now) is None
    assert align_to_current_hour(TIMESTAMPS, 0, 0, now=now) is None


def test_align_warns_when_upcoming_slot_is_far(monkeypatch) -> None:
    warnings: list[tuple] = []
    monkeypatch.setattr(time_alignment.logger, "warning", lambda *args: warnings.append(args))
    sparse = ["2024-01-01T00:00", "2024-01-01T12:00"]
    now = datetime(2024, 1, 1, 1, 0, tzinfo=timezone.utc)

    assert align_to_current_hour(sparse, 2, 0, now=now, tolerance_hours=2) == 1
    assert len(warnings) == 1
    assert warnings[0][2] == 11.0

    warnings.clear()
    assert align_to_current_hour(sparse, 2, 0, now=now, tolerance_hours=12) == 1
    assert warnings == []


def test_uv_now_reads_value_for_location_hour() -> None:
    series = ForecastSeries(
        timestamps=("2024-06-01T12:00", "2024-06-01T13:00", "2024-06-01T14:00"),
        uv_by_hour=(6.1, 7.4, None),
        daily_max_uv=7.6,
        utc_offset_seconds=-5 * 3600,
    )

    assert uv_now(series, now=datetime(2024, 6, 1, 18, 20, tzinfo=timezone.utc)) == 7.4
    assert uv_now(series, now=datetime(2024, 6, 1, 19, 0, tzinfo=timezone.utc)) is None
    assert uv_now(ForecastSeries(), now=datetime(2024, 6, 1, 19, 0, tzinfo=timezone.utc)) is None
