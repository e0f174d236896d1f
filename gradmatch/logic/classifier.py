"""
Classifier

Labels institutions with one of two independent policies:
- Relative-score tiers (Safe / Moderate / Ambitious) comparing the student's
  aggregate score with the institution's normalized score
- Prestige buckets (Dream / Competitive / Safe) from global ranking alone

The two label sets answer different questions and are never mixed.
"""

from typing import Dict, Iterable, Optional, Type, Union
from enum import Enum

from .constants import (
    TierLabel,
    PrestigeCategory,
    TIER_SAFE_MARGIN,
    TIER_MODERATE_MARGIN,
    PRESTIGE_DREAM_MAX_RANK,
    PRESTIGE_COMPETITIVE_MAX_RANK,
    FILTER_ALL,
)
from .exceptions import ValidationError


def classify_tier(student_score: float, institution_score: float) -> TierLabel:
    """
    Classify an institution relative to the student's aggregate score.

    A difference of exactly +5 is Safe and exactly -5 is Moderate.

    Args:
        student_score: Student's final score (0-100)
        institution_score: Institution's normalized score (0-100)

    Returns:
        TierLabel enum value
    """
    difference = student_score - institution_score

    if difference >= TIER_SAFE_MARGIN:
        return TierLabel.SAFE
    if difference >= TIER_MODERATE_MARGIN:
        return TierLabel.MODERATE
    return TierLabel.AMBITIOUS


def classify_prestige(ranking: int) -> PrestigeCategory:
    """
    Bucket an institution by global ranking. Ignores the student entirely.

    Rankings below 1 mean "unranked" and fall through to Safe.
    """
    if 1 <= ranking <= PRESTIGE_DREAM_MAX_RANK:
        return PrestigeCategory.DREAM
    if PRESTIGE_DREAM_MAX_RANK < ranking <= PRESTIGE_COMPETITIVE_MAX_RANK:
        return PrestigeCategory.COMPETITIVE
    return PrestigeCategory.SAFE


def is_unfiltered(value: Union[str, Enum, None]) -> bool:
    """True when the filter value selects every label."""
    if value is None:
        return True
    if isinstance(value, Enum):
        return False
    return str(value).strip().lower() in ("", FILTER_ALL)


def parse_label_filter(
    value: Union[str, Enum, None],
    label_type: Type[Enum]
) -> Optional[Enum]:
    """
    Resolve a filter value against one label enum.

    Args:
        value: "all", None, an enum member, or a label string such as "Dream"
        label_type: TierLabel or PrestigeCategory

    Returns:
        The matching enum member, or None when no filtering applies

    Raises:
        ValidationError: if the value is not a label of label_type
    """
    if is_unfiltered(value):
        return None
    if isinstance(value, label_type):
        return value
    if isinstance(value, Enum):
        raise ValidationError.single(
            "filter", f"{value.value!r} is not a {label_type.__name__} label"
        )

    text = str(value).strip()
    for label in label_type:
        if label.value.lower() == text.lower():
            return label

    allowed = ", ".join([FILTER_ALL] + [label.value for label in label_type])
    raise ValidationError.single("filter", f"Unknown filter {text!r}; expected one of: {allowed}")


def get_category_counts(labels: Iterable[Enum], label_type: Type[Enum]) -> Dict[str, int]:
    """
    Count institutions per label, including labels with no members.
    """
    counts = {label.value: 0 for label in label_type}
    for label in labels:
        counts[label.value] += 1
    return counts
