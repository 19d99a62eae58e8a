from __future__ import annotations

import math

from spfcheck.schemas import Advisory, AdvisoryState


YES_THRESHOLD = 3.0
MAYBE_THRESHOLD = 1.0
DISPLAY_MIN_UV = 0.0
DISPLAY_MAX_UV = 20.0
MISSING_VALUE_TEXT = "—"

ADVISORIES = {
    AdvisoryState.UNKNOWN: Advisory(
        state=AdvisoryState.UNKNOWN,
        title="Hmm…",
        subtitle="Could not read UV right now.",
    ),
    AdvisoryState.YES: Advisory(
        state=AdvisoryState.YES,
        title="yes",
        subtitle="UV is 3 or higher\nSPF it",
    ),
    AdvisoryState.MAYBE: Advisory(
        state=AdvisoryState.MAYBE,
        title="tbh prob",
        subtitle="UV is low but why risk it",
    ),
    AdvisoryState.NO: Advisory(
        state=AdvisoryState.NO,
        title="not\nright\nnow",
        subtitle="UV is minimal at the moment",
    ),
}


def classify(uv_now: float | None) -> Advisory:
    if uv_now is None or math.isnan(uv_now):
        return ADVISORIES[AdvisoryState.UNKNOWN]
    if uv_now >= YES_THRESHOLD:
        return ADVISORIES[AdvisoryState.YES]
    if uv_now >= MAYBE_THRESHOLD:
        return ADVISORIES[AdvisoryState.MAYBE]
    return ADVISORIES[AdvisoryState.NO]


def clamp_uv(value: float) -> float:
    return max(DISPLAY_MIN_UV, min(DISPLAY_MAX_UV, value))


def format_uv(value: float | None) -> str:
    if value is None or math.isnan(value):
        return MISSING_VALUE_TEXT
    return f"{clamp_uv(value):.1f}"
