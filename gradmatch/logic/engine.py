"""
Ranking Engine

Main entry point combining the scoring components into a single pipeline.

Pipeline flow:
1. Validation - Reject out-of-domain scores and missing preferences
2. Normalization & Aggregation - Student score on 0-100 (when CGPA is known)
3. Decoration - Match score, tier or prestige category per institution
4. Ordering & Filtering - Mode-specific sort key and filter
5. Output Assembly - Build RankingOutput
"""

import time
from typing import List, Optional, Tuple

from .contracts import StudentProfile, Institution, RankedInstitution, RankingOutput, ScoreNormalization
from .constants import RankingMode, ENGINE_VERSION
from .aggregator import compute_normalized_score
from .validation import validate_profile
from .output_assembler import decorate_all, order_and_filter, label_counts, assemble_output, LabelFilter
from .exceptions import ValidationError, EmptyResultError


def parse_mode(mode) -> RankingMode:
    """Resolve a mode value, raising ValidationError for unknown modes."""
    try:
        return RankingMode(mode)
    except ValueError:
        allowed = ", ".join(m.value for m in RankingMode)
        raise ValidationError.single("mode", f"Unknown mode {mode!r}; expected one of: {allowed}")


def student_normalization(profile: StudentProfile) -> Optional[ScoreNormalization]:
    """Score breakdown for the profile, or None when CGPA is absent."""
    if profile.cgpa is None:
        return None
    return compute_normalized_score(profile.gre_score, profile.ielts_score, profile.cgpa)


def _run(
    profile: StudentProfile,
    catalog: List[Institution],
    mode: RankingMode,
    label_filter: LabelFilter
) -> Tuple[List[RankedInstitution], dict, Optional[ScoreNormalization]]:
    validate_profile(profile, mode)

    if not catalog:
        raise EmptyResultError("The university catalog is empty.")

    normalization = student_normalization(profile)
    student_score = normalization.final_score if normalization else None

    decorated = decorate_all(catalog, mode, profile, student_score)
    counts = label_counts(decorated, mode)
    results = order_and_filter(decorated, mode, label_filter)

    if not results:
        raise EmptyResultError(
            "No universities found for your criteria. Try adjusting your scores "
            "or selecting a different filter."
        )
    return results, counts, normalization


def rank_institutions(
    profile: StudentProfile,
    catalog: List[Institution],
    mode: RankingMode = RankingMode.FIT,
    label_filter: LabelFilter = None
) -> List[RankedInstitution]:
    """
    Rank a fully materialized catalog for one student.

    Args:
        profile: Student's scores and preferences
        catalog: Institutions to rank (not mutated)
        mode: fit, tier or prestige
        label_filter: "all" / None, or a label of the mode's label set

    Returns:
        Ordered list of decorated institutions

    Raises:
        ValidationError: invalid scores, preferences, mode or filter
        EmptyResultError: empty catalog or nothing left after filtering
    """
    results, _, _ = _run(profile, catalog, parse_mode(mode), label_filter)
    return results


class RankingEngine:
    """
    Stateless wrapper producing the full RankingOutput contract.
    """

    def __init__(self):
        self.version = ENGINE_VERSION

    def rank(
        self,
        profile: StudentProfile,
        catalog: List[Institution],
        mode: RankingMode = RankingMode.FIT,
        label_filter: LabelFilter = None
    ) -> RankingOutput:
        """
        Rank a catalog and attach summary statistics.

        Args:
            profile: Student's scores and preferences
            catalog: Institutions to rank
            mode: fit, tier or prestige
            label_filter: Optional label filter for tier / prestige modes

        Returns:
            RankingOutput with ranked results
        """
        start_time = time.perf_counter()
        mode = parse_mode(mode)

        results, counts, normalization = _run(profile, catalog, mode, label_filter)

        processing_time = (time.perf_counter() - start_time) * 1000

        return assemble_output(
            mode=mode,
            results=results,
            total_evaluated=len(catalog),
            category_counts=counts,
            student_score=normalization.final_score if normalization else None,
            score_normalization=normalization,
            processing_time_ms=round(processing_time, 2),
        )

    def rank_from_dict(
        self,
        profile_data: dict,
        catalog: List[Institution],
        **kwargs
    ) -> RankingOutput:
        """
        Rank from a dictionary profile.

        Convenience method for API integration.
        """
        profile = StudentProfile(**profile_data)
        return self.rank(profile, catalog, **kwargs)
