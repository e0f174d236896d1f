"""
Eligibility Matcher

Scores how well a student fits one institution. The score is a sum of five
bands:

    GRE          up to 0.3  partial credit within 10 points either side of the minimum
    IELTS        up to 0.3  partial credit within 1 band either side of the minimum
    Country      0.2        institution country is a preferred country
    University   0.2        a preferred name is a substring of the institution name
    Ranking      up to 0.1  always applied, decays to 0 at ranking 100

The total is not renormalized and can slightly exceed 1.0.
"""

from .contracts import StudentProfile, Institution, MatchBreakdown
from .constants import (
    GRE_BAND_MAX,
    GRE_BAND_WIDTH,
    IELTS_BAND_MAX,
    IELTS_BAND_WIDTH,
    COUNTRY_PREFERENCE_BONUS,
    UNIVERSITY_PREFERENCE_BONUS,
    RANKING_BONUS_MAX,
    RANKING_BONUS_CUTOFF,
)


def score_threshold_band(value: float, minimum: float, width: float, max_credit: float) -> float:
    """
    Piecewise partial credit against a minimum requirement.

    - value >= minimum + width: full credit
    - minimum <= value < minimum + width: ramp from half to full credit
    - minimum - width <= value < minimum: ramp from zero to half credit
    - otherwise: zero
    """
    half = max_credit / 2

    if value >= minimum:
        if value >= minimum + width:
            return max_credit
        return half + half * ((value - minimum) / width)

    if value >= minimum - width:
        return half * (1 - (minimum - value) / width)

    return 0.0


def score_gre(profile: StudentProfile, institution: Institution) -> float:
    return score_threshold_band(
        profile.gre_score, institution.eligibility.min_gre, GRE_BAND_WIDTH, GRE_BAND_MAX
    )


def score_ielts(profile: StudentProfile, institution: Institution) -> float:
    return score_threshold_band(
        profile.ielts_score, institution.eligibility.min_ielts, IELTS_BAND_WIDTH, IELTS_BAND_MAX
    )


def score_country_preference(profile: StudentProfile, institution: Institution) -> float:
    if institution.country in profile.preferred_countries:
        return COUNTRY_PREFERENCE_BONUS
    return 0.0


def score_university_preference(profile: StudentProfile, institution: Institution) -> float:
    if any(name in institution.name for name in profile.preferred_university_names):
        return UNIVERSITY_PREFERENCE_BONUS
    return 0.0


def score_ranking(institution: Institution) -> float:
    """Higher ranking (lower number) gets a larger bonus; 100 and beyond get none."""
    capped = min(institution.ranking_position, RANKING_BONUS_CUTOFF)
    return RANKING_BONUS_MAX * (1 - capped / RANKING_BONUS_CUTOFF)


def score_breakdown(profile: StudentProfile, institution: Institution) -> MatchBreakdown:
    """
    Compute every band for one institution.

    Args:
        profile: Student's scores and preferences
        institution: Catalog record to score

    Returns:
        MatchBreakdown with per-band contributions
    """
    return MatchBreakdown(
        gre=score_gre(profile, institution),
        ielts=score_ielts(profile, institution),
        country=score_country_preference(profile, institution),
        university=score_university_preference(profile, institution),
        ranking=score_ranking(institution),
    )


def match_score(profile: StudentProfile, institution: Institution) -> float:
    """Total match score for one institution. Zero or below means do not recommend."""
    return score_breakdown(profile, institution).total
