from __future__ import annotations

import re

from spfcheck.schemas import LocationQuery
from spfcheck.services.regions import state_code_for_name, state_name_for_code


_WHITESPACE = re.compile(r"\s+")
_US_MARKER = re.compile(r"\busa\b|\bunited states\b|\bu\.s\.a\b|\bamerica\b", re.IGNORECASE)


def parse_query(raw: str | None) -> LocationQuery | None:
    """
    Split free-text input such as "Springfield, IL" into the place name to search for
    and the lowercase tokens used to pick between same-named candidates.
    """
    normalized = _WHITESPACE.sub(" ", (raw or "").strip())
    if not normalized:
        return None

    segments = [segment.strip() for segment in normalized.split(",")]
    segments = [segment for segment in segments if segment]
    if not segments:
        return None

    primary_name, remainder = segments[0], segments[1:]

    filter_tokens: set[str] = set()
    for segment in remainder:
        filter_tokens.add(segment.lower())
        filter_tokens.update(token.lower() for token in segment.split())

    us_state_code = _match_state(remainder[0]) if remainder else None
    if us_state_code:
        filter_tokens.add(us_state_code.lower())
        filter_tokens.add(state_name_for_code(us_state_code).lower())

    likely_us = us_state_code is not None or any(_US_MARKER.search(segment) for segment in remainder)

    return LocationQuery(
        primary_name=primary_name,
        filter_tokens=frozenset(filter_tokens),
        us_state_code=us_state_code,
        likely_us=likely_us,
    )


def _match_state(segment: str) -> str | None:
    candidate = segment.replace(".", "").strip()
    if not candidate:
        return None
    upper = candidate.upper()
    if state_name_for_code(upper):
        return upper
    return state_code_for_name(candidate)
