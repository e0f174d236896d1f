"""
Score Aggregator

Combines normalized metric scores into one weighted competitiveness score.
Weights are fixed (GRE 0.5, IELTS 0.3, CGPA 0.2) and not configurable per call.
"""

from .constants import Metric, AGGREGATE_WEIGHTS
from .contracts import Institution, ScoreNormalization
from .normalizer import normalize_gre, normalize_ielts, normalize_cgpa
from .validation import validate_scores


def aggregate(
    normalized_gre: float,
    normalized_ielts: float,
    normalized_cgpa: float
) -> float:
    """
    Weighted sum of normalized scores.

    Unbounded: stays within 0-100 only when the inputs do. No rounding here,
    rounding is a presentation concern.
    """
    return (
        AGGREGATE_WEIGHTS[Metric.GRE] * normalized_gre
        + AGGREGATE_WEIGHTS[Metric.IELTS] * normalized_ielts
        + AGGREGATE_WEIGHTS[Metric.CGPA] * normalized_cgpa
    )


def compute_normalized_score(gre: float, ielts: float, cgpa: float) -> ScoreNormalization:
    """
    Validate, normalize and aggregate a student's raw scores.

    Args:
        gre: GRE score (260-340)
        ielts: IELTS band (0-9)
        cgpa: CGPA (0-10)

    Returns:
        ScoreNormalization with every component on 0-100

    Raises:
        ValidationError: if any score lies outside its domain
    """
    validate_scores(gre, ielts, cgpa)

    normalized_gre = normalize_gre(gre)
    normalized_ielts = normalize_ielts(ielts)
    normalized_cgpa = normalize_cgpa(cgpa)

    return ScoreNormalization(
        normalized_gre=normalized_gre,
        normalized_ielts=normalized_ielts,
        normalized_cgpa=normalized_cgpa,
        final_score=aggregate(normalized_gre, normalized_ielts, normalized_cgpa),
    )


def institution_normalized_score(institution: Institution) -> float:
    """
    Normalized 0-100 score of an institution.

    Uses the score carried by the catalog record when present; otherwise
    derives one from the eligibility minimums with the student formula.
    """
    if institution.normalized_score is not None:
        return institution.normalized_score

    req = institution.eligibility
    return aggregate(
        normalize_gre(req.min_gre),
        normalize_ielts(req.min_ielts),
        normalize_cgpa(req.min_cgpa),
    )
