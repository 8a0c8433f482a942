"""Tiered fuzzy ranking of catalog items against a query."""

from collections.abc import Sequence

from blink.config import RESULT_LIMIT
from blink.models import Item, ScoredMatch

# Tier scores for exact, prefix and substring matches
EXACT_SCORE = 1000
PREFIX_SCORE = 900
SUBSTRING_SCORE = 500


def fuzzy_score(query: str, target: str) -> int:
    """Greedy left-to-right subsequence score.

    Each matched character adds ``1 + run`` where ``run`` counts the
    matches immediately before it, so contiguous runs score
    super-linearly. Returns 0 unless every query character was found in
    order. Both arguments are compared as given; callers lowercase them.
    """
    query_idx = 0
    score = 0
    consecutive = 0

    for char in target:
        if query_idx >= len(query):
            break
        if char == query[query_idx]:
            score += 1 + consecutive
            consecutive += 1
            query_idx += 1
        else:
            consecutive = 0

    return score if query_idx == len(query) else 0


def score_name(query: str, name: str) -> int:
    """Score one display name against a lowercased, non-empty query."""
    name = name.lower()
    if name == query:
        return EXACT_SCORE
    if name.startswith(query):
        return PREFIX_SCORE
    if query in name:
        return SUBSTRING_SCORE
    return fuzzy_score(query, name)


def rank_scored(
    query: str, catalog: Sequence[Item], limit: int = RESULT_LIMIT
) -> list[ScoredMatch]:
    """Rank items by tier and fuzzy score.

    An empty query returns the first ``limit`` items in catalog order with
    score 0. Otherwise non-matching items are excluded and ties keep
    catalog order.

    ``limit`` can only lower the cap of RESULT_LIMIT; negative values
    are treated as 0.
    """
    limit = max(0, min(limit, RESULT_LIMIT))
    if not query:
        return [ScoredMatch(item=item, score=0) for item in catalog[:limit]]

    query = query.lower()
    scored: list[ScoredMatch] = []
    for item in catalog:
        score = score_name(query, item.display_name)
        if score > 0:
            scored.append(ScoredMatch(item=item, score=score))

    # list.sort is stable, so equal scores stay in catalog order
    scored.sort(key=lambda m: -m.score)
    return scored[:limit]


def rank(query: str, catalog: Sequence[Item], limit: int = RESULT_LIMIT) -> list[Item]:
    """Return the ordered shortlist of items for ``query``."""
    return [match.item for match in rank_scored(query, catalog, limit)]
