"""
Output Assembler

Turns a catalog into the ranked, labelled, optionally filtered result list and
wraps it into the RankingOutput contract.

Input institutions are never mutated; every result is a new RankedInstitution.
"""

import logging
import uuid
from enum import Enum
from typing import Dict, List, Optional, Union

from .contracts import (
    StudentProfile,
    Institution,
    RankedInstitution,
    RankingOutput,
    ScoreNormalization,
)
from .constants import (
    RankingMode,
    TierLabel,
    PrestigeCategory,
    LOW_RESULT_WARNING_THRESHOLD,
    ENGINE_VERSION,
)
from .aggregator import institution_normalized_score
from .classifier import (
    classify_tier,
    classify_prestige,
    parse_label_filter,
    is_unfiltered,
    get_category_counts,
)
from .matcher import score_breakdown
from .ranker import (
    rank_by_match_score,
    rank_by_ranking,
    drop_non_positive,
    filter_by_tier,
    filter_by_category,
    with_positions,
)
from .exceptions import ValidationError

logger = logging.getLogger(__name__)

LabelFilter = Union[str, Enum, None]


def decorate_fit(profile: StudentProfile, institution: Institution) -> RankedInstitution:
    breakdown = score_breakdown(profile, institution)
    return RankedInstitution(
        institution=institution,
        normalized_score=institution.normalized_score,
        match_score=breakdown.total,
        match_breakdown=breakdown,
    )


def decorate_tier(student_score: float, institution: Institution) -> RankedInstitution:
    institution_score = institution_normalized_score(institution)
    return RankedInstitution(
        institution=institution,
        normalized_score=institution_score,
        tier=classify_tier(student_score, institution_score),
    )


def decorate_prestige(institution: Institution) -> RankedInstitution:
    return RankedInstitution(
        institution=institution,
        normalized_score=institution.normalized_score,
        category=classify_prestige(institution.ranking_position),
    )


def decorate_all(
    institutions: List[Institution],
    mode: RankingMode,
    profile: Optional[StudentProfile] = None,
    student_score: Optional[float] = None
) -> List[RankedInstitution]:
    """
    Attach the mode's computed fields to every institution, in catalog order.

    Raises:
        ValidationError: if the mode's required input is missing
    """
    if mode == RankingMode.FIT:
        if profile is None:
            raise ValidationError.single("student_profile", "Student profile is required for fit ranking")
        return [decorate_fit(profile, i) for i in institutions]

    if mode == RankingMode.TIER:
        if student_score is None:
            raise ValidationError.single("student_score", "Student score is required for tier ranking")
        return [decorate_tier(student_score, i) for i in institutions]

    return [decorate_prestige(i) for i in institutions]


def label_counts(decorated: List[RankedInstitution], mode: RankingMode) -> Dict[str, int]:
    """Per-label counts for the mode's label set; empty in fit mode."""
    if mode == RankingMode.TIER:
        return get_category_counts((d.tier for d in decorated), TierLabel)
    if mode == RankingMode.PRESTIGE:
        return get_category_counts((d.category for d in decorated), PrestigeCategory)
    return {}


def order_and_filter(
    decorated: List[RankedInstitution],
    mode: RankingMode,
    label_filter: LabelFilter = None
) -> List[RankedInstitution]:
    """
    Apply the mode's filter and sort order, then number the results.

    Fit mode drops non-positive match scores and sorts by match score.
    Tier and prestige modes filter on their own label and sort by ranking.
    """
    if mode == RankingMode.FIT:
        if not is_unfiltered(label_filter):
            raise ValidationError.single("filter", "Label filters are not available in fit mode")
        return with_positions(rank_by_match_score(drop_non_positive(decorated)))

    if mode == RankingMode.TIER:
        kept = filter_by_tier(decorated, parse_label_filter(label_filter, TierLabel))
    else:
        kept = filter_by_category(decorated, parse_label_filter(label_filter, PrestigeCategory))

    return with_positions(rank_by_ranking(kept))


def assemble(
    institutions: List[Institution],
    mode: RankingMode,
    profile: Optional[StudentProfile] = None,
    student_score: Optional[float] = None,
    label_filter: LabelFilter = None
) -> List[RankedInstitution]:
    """
    Build the ranked result list for one mode.

    Args:
        institutions: Catalog records (left untouched)
        mode: Output mode
        profile: Student profile, required in fit mode
        student_score: Student aggregate score, required in tier mode
        label_filter: "all" / None, or a label of the mode's label set

    Returns:
        New RankedInstitution objects in output order
    """
    decorated = decorate_all(institutions, RankingMode(mode), profile, student_score)
    return order_and_filter(decorated, RankingMode(mode), label_filter)


def assemble_output(
    mode: RankingMode,
    results: List[RankedInstitution],
    total_evaluated: int,
    category_counts: Optional[Dict[str, int]] = None,
    student_score: Optional[float] = None,
    score_normalization: Optional[ScoreNormalization] = None,
    processing_time_ms: Optional[float] = None
) -> RankingOutput:
    """
    Assemble the final RankingOutput.

    Args:
        mode: Output mode used
        results: Ranked results
        total_evaluated: Catalog size before filtering
        category_counts: Per-label counts before filtering
        student_score: Student aggregate score, when computed
        score_normalization: Per-metric breakdown, when computed
        processing_time_ms: Processing time in milliseconds

    Returns:
        Complete RankingOutput
    """
    warnings = []

    if len(results) < LOW_RESULT_WARNING_THRESHOLD:
        warning_msg = (
            f"Low recommendation count: {len(results)} universities returned. "
            "Consider broadening search criteria."
        )
        logger.warning(warning_msg)
        warnings.append(warning_msg)

    if mode == RankingMode.FIT and total_evaluated > len(results):
        warnings.append(
            f"{total_evaluated - len(results)} universities excluded for a match score of zero or below."
        )

    return RankingOutput(
        request_id=str(uuid.uuid4()),
        mode=mode,
        student_score=student_score,
        score_normalization=score_normalization,
        results=results,
        total_evaluated=total_evaluated,
        total_returned=len(results),
        category_counts=category_counts or {},
        processing_time_ms=processing_time_ms,
        engine_version=ENGINE_VERSION,
        warnings=warnings,
    )
