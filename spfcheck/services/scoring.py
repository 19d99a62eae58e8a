from __future__ import annotations

from collections.abc import Iterable, Sequence

from spfcheck.schemas import GeocodeCandidate, LocationQuery, ScoredCandidate
from spfcheck.services.regions import state_code_for_name


EXACT_MATCH_POINTS = 3
PARTIAL_MATCH_POINTS = 1
STATE_MATCH_BONUS = 5

# Some providers omit the country name on US results and only send the code.
US_COUNTRY_TOKENS = ("usa", "us", "america", "united states", "united states of america")


def candidate_tokens(candidate: GeocodeCandidate) -> set[str]:
    tokens: set[str] = set()
    for value in (
        candidate.name,
        candidate.admin1,
        candidate.admin2,
        candidate.admin3,
        candidate.country,
        candidate.country_code,
    ):
        if not value:
            continue
        lower = value.lower()
        tokens.add(lower)
        tokens.update(lower.split())

    state_code = state_code_for_name(candidate.admin1)
    if state_code:
        tokens.add(state_code.lower())

    if (candidate.country_code or "").upper() == "US":
        tokens.update(US_COUNTRY_TOKENS)

    tokens.discard("")
    return tokens


def score_candidate(
    candidate: GeocodeCandidate,
    filter_tokens: Iterable[str],
    us_state_code: str | None,
) -> int:
    tokens = candidate_tokens(candidate)
    score = 0
    for token in filter_tokens:
        if not token:
            continue
        if token in tokens:
            score += EXACT_MATCH_POINTS
        elif any(token in candidate_token for candidate_token in tokens):
            score += PARTIAL_MATCH_POINTS

    candidate_state = state_code_for_name(candidate.admin1)
    if us_state_code and candidate_state and candidate_state == us_state_code.upper():
        score += STATE_MATCH_BONUS
    return score


def rank_candidates(candidates: Sequence[GeocodeCandidate], query: LocationQuery) -> list[ScoredCandidate]:
    scored = [
        ScoredCandidate(
            candidate=candidate,
            score=score_candidate(candidate, query.filter_tokens, query.us_state_code),
        )
        for candidate in candidates
    ]
    # sorted() is stable, so equal scores keep the provider's relevance order.
    return sorted(scored, key=lambda item: item.score, reverse=True)


def select_candidate(candidates: Sequence[GeocodeCandidate], query: LocationQuery | None) -> GeocodeCandidate:
    if not candidates:
        raise ValueError("select_candidate() needs at least one candidate.")

    provider_top = candidates[0]
    if query is None or not query.filter_tokens:
        return provider_top

    ranked = rank_candidates(candidates, query)
    if ranked[0].score > 0:
        return ranked[0].candidate
    return provider_top
