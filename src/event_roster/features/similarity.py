from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein

from event_roster.config import MatchingConfig
from event_roster.records import IdentityRecord


@dataclass(frozen=True)
class ScoredIdentity:
    identity: IdentityRecord
    score: float


def calculate_similarity(
    left: str | None,
    right: str | None,
    config: MatchingConfig | None = None,
) -> float:
    """Case-insensitive closeness of two strings in [0, 1].

    Exact match scores 1.0, containment scores ``containment_similarity``, and
    anything else falls back to normalized Levenshtein distance.
    """
    config = config or MatchingConfig()
    s1 = (left or "").strip().lower()
    s2 = (right or "").strip().lower()

    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    if s1 in s2 or s2 in s1:
        return config.containment_similarity

    distance = Levenshtein.distance(s1, s2)
    return 1.0 - distance / max(len(s1), len(s2))


def score_identity(
    search_term: str,
    identity: IdentityRecord,
    config: MatchingConfig | None = None,
) -> float:
    config = config or MatchingConfig()
    search_term = search_term.strip().lower()
    if not search_term:
        return 0.0
    candidates = (
        (identity.full_name, 1.0),
        (identity.first_name, config.part_weight),
        (identity.last_name, config.part_weight),
    )

    score = 0.0
    for value, weight in candidates:
        similarity = calculate_similarity(value, search_term, config)
        if similarity > config.min_candidate_similarity:
            score = max(score, similarity * weight)

    if any(search_term in value.lower() for value, _weight in candidates):
        score = max(score, config.substring_floor)
    return score


def rank_identities(
    query: str | None,
    corpus: Iterable[IdentityRecord],
    config: MatchingConfig | None = None,
) -> list[ScoredIdentity]:
    config = config or MatchingConfig()
    search_term = (query or "").strip().lower()
    if not search_term:
        return []

    # Snapshot so a corpus rebuilt mid-search cannot be observed half-way.
    snapshot = tuple(corpus or ())
    scored = [
        ScoredIdentity(identity=identity, score=score_identity(search_term, identity, config))
        for identity in snapshot
    ]
    matches = [item for item in scored if item.score > config.min_result_score]
    # sorted() is stable, so equal scores keep corpus order.
    return sorted(matches, key=lambda item: item.score, reverse=True)


def search(
    query: str | None,
    corpus: Iterable[IdentityRecord],
    config: MatchingConfig | None = None,
) -> list[IdentityRecord]:
    return [item.identity for item in rank_identities(query, corpus, config)]
