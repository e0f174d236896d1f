"""
Input Validation

Checks raw student input against the documented metric domains before
anything is normalized. Out-of-domain values are rejected, never clamped.
"""

import math
from typing import Dict, Optional

from .constants import Metric, METRIC_DOMAINS, RankingMode
from .contracts import StudentProfile
from .exceptions import ValidationError


METRIC_LABELS: Dict[Metric, str] = {
    Metric.GRE: "GRE score",
    Metric.IELTS: "IELTS score",
    Metric.CGPA: "CGPA",
}


def metric_error(metric: Metric, value: Optional[float]) -> Optional[str]:
    """Return an error message if value lies outside the metric's domain, else None."""
    label = METRIC_LABELS[metric]
    if value is None:
        return f"{label} is required"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return f"{label} must be a number"
    if math.isnan(number) or math.isinf(number):
        return f"{label} must be a finite number"

    low, high = METRIC_DOMAINS[metric]
    if number < low or number > high:
        return f"{label} must be between {low:g}-{high:g}"
    return None


def validate_scores(gre: float, ielts: float, cgpa: float) -> None:
    """Validate a full GRE / IELTS / CGPA triple, collecting every field error."""
    errors: Dict[str, str] = {}
    for field, metric, value in (
        ("gre", Metric.GRE, gre),
        ("ielts", Metric.IELTS, ielts),
        ("cgpa", Metric.CGPA, cgpa),
    ):
        message = metric_error(metric, value)
        if message:
            errors[field] = message
    if errors:
        raise ValidationError(errors)


def validate_profile(profile: StudentProfile, mode: RankingMode) -> None:
    """
    Validate a student profile for the given ranking mode.

    Eligibility-fit mode needs GRE and IELTS plus at least one preferred
    country and a reason for studying. Tier mode needs all three scores
    because it compares aggregate scores. Prestige mode ignores the scores
    for labelling but still rejects any that are out of domain.
    """
    errors: Dict[str, str] = {}

    for field, metric, value in (
        ("gre_score", Metric.GRE, profile.gre_score),
        ("ielts_score", Metric.IELTS, profile.ielts_score),
    ):
        message = metric_error(metric, value)
        if message:
            errors[field] = message

    if profile.cgpa is not None or mode == RankingMode.TIER:
        message = metric_error(Metric.CGPA, profile.cgpa)
        if message:
            errors["cgpa"] = message

    if mode == RankingMode.FIT:
        if not profile.preferred_countries:
            errors["preferred_countries"] = "Please select at least one country"
        if not profile.reason_for_studying.strip():
            errors["reason_for_studying"] = "Please select a reason"

    if errors:
        raise ValidationError(errors)
