import math

from spfcheck.schemas import AdvisoryState
from spfcheck.services.advisory import classify, format_uv


def test_classify_bands_include_their_lower_bound() -> None:
    assert classify(3.0).state == AdvisoryState.YES
    assert classify(11.5).state == AdvisoryState.YES
    assert classify(2.99).state == AdvisoryState.MAYBE
    assert classify(1.0).state == AdvisoryState.MAYBE
    assert classify(0.99).state == AdvisoryState.NO
    assert classify(0.0).state == AdvisoryState.NO
    assert classify(-2.0).state == AdvisoryState.NO


def test_classify_missing_values_are_unknown() -> None:
    assert classify(None).state == AdvisoryState.UNKNOWN
    assert classify(math.nan).state == AdvisoryState.UNKNOWN


def test_classify_uses_raw_value_above_display_range() -> None:
    advisory = classify(25.0)
    assert advisory.state == AdvisoryState.YES
    assert "SPF it" in advisory.subtitle


def test_format_uv_clamps_and_rounds() -> None:
    assert format_uv(4.26) == "4.3"
    assert format_uv(25.0) == "20.0"
    assert format_uv(-1.0) == "0.0"
    assert format_uv(None) == "—"
    assert format_uv(math.nan) == "—"
