"""
Ranker

Ordering and filtering primitives used by the output assembler.
Two sort keys exist and are never merged:
- match score, descending (eligibility-fit mode)
- ranking position, ascending (tier and prestige modes)

Python's sort is stable, so ties keep catalog order.
"""

from enum import Enum
from typing import List, Optional

from .contracts import RankedInstitution


def rank_by_match_score(ranked: List[RankedInstitution]) -> List[RankedInstitution]:
    """Sort by match score, best first."""
    return sorted(ranked, key=lambda x: x.match_score or 0.0, reverse=True)


def rank_by_ranking(ranked: List[RankedInstitution]) -> List[RankedInstitution]:
    """Sort by global ranking, lower number (better) first."""
    return sorted(ranked, key=lambda x: x.institution.ranking_position)


def drop_non_positive(ranked: List[RankedInstitution]) -> List[RankedInstitution]:
    """Remove institutions whose match score is zero or below."""
    return [r for r in ranked if r.match_score is not None and r.match_score > 0]


def filter_by_tier(
    ranked: List[RankedInstitution],
    tier: Optional[Enum]
) -> List[RankedInstitution]:
    """Keep institutions carrying the given tier label; None keeps all."""
    if tier is None:
        return list(ranked)
    return [r for r in ranked if r.tier is tier]


def filter_by_category(
    ranked: List[RankedInstitution],
    category: Optional[Enum]
) -> List[RankedInstitution]:
    """Keep institutions carrying the given prestige category; None keeps all."""
    if category is None:
        return list(ranked)
    return [r for r in ranked if r.category is category]


def with_positions(ranked: List[RankedInstitution]) -> List[RankedInstitution]:
    """Return copies carrying their 1-based position in the list."""
    return [r.model_copy(update={"rank": position}) for position, r in enumerate(ranked, 1)]
