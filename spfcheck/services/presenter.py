from __future__ import annotations

from spfcheck.schemas import AdvisoryState, UVReport, ViewState
from spfcheck.services.advisory import classify, format_uv


LOOKUP_FAILED_HEADLINE = "Hmm…"
LOOKUP_FAILED_SUBHEAD = "UV lookup failed. Try again or use city search."
NOT_FOUND_HEADLINE = "No luck."
NOT_FOUND_SUBHEAD = "Try a more specific city name."


def build_view(report: UVReport) -> ViewState:
    advisory = classify(report.uv_now)
    coordinate_label = report.location.coordinate.label()
    return ViewState(
        state=advisory.state,
        headline=advisory.title,
        subhead=advisory.subtitle,
        uv_now_text=format_uv(report.uv_now),
        uv_max_text=format_uv(report.uv_max),
        location_label=report.label or coordinate_label,
        coordinate_label=coordinate_label,
    )


def build_failure_view(reason: str | None = None) -> ViewState:
    return ViewState(
        state=AdvisoryState.UNKNOWN,
        headline=LOOKUP_FAILED_HEADLINE,
        subhead=reason or LOOKUP_FAILED_SUBHEAD,
        show_manual_entry=True,
    )


def build_not_found_view() -> ViewState:
    return ViewState(
        state=AdvisoryState.UNKNOWN,
        headline=NOT_FOUND_HEADLINE,
        subhead=NOT_FOUND_SUBHEAD,
        show_manual_entry=True,
    )
