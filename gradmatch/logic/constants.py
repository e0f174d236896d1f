"""
Scoring Engine Constants

Defines metric domains, weights, band widths, thresholds and enums used by
the scoring engine. All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, Tuple


# =============================================================================
# METRICS & DOMAINS
# =============================================================================

class Metric(str, Enum):
    """Raw test metrics accepted by the normalizer."""
    GRE = "gre"
    IELTS = "ielts"
    CGPA = "cgpa"


# Documented raw domain (min, max) for each metric.
# Normalization anchors at the domain minimum: (x - min) / (max - min) * 100
METRIC_DOMAINS: Dict[Metric, Tuple[float, float]] = {
    Metric.GRE: (260.0, 340.0),
    Metric.IELTS: (0.0, 9.0),
    Metric.CGPA: (0.0, 10.0),
}

NORMALIZED_SCALE = 100.0

# =============================================================================
# AGGREGATION WEIGHTS
# =============================================================================

# Must sum to 1.0
AGGREGATE_WEIGHTS: Dict[Metric, float] = {
    Metric.GRE: 0.5,
    Metric.IELTS: 0.3,
    Metric.CGPA: 0.2,
}

# =============================================================================
# ELIGIBILITY MATCHING BANDS
# =============================================================================

GRE_BAND_MAX = 0.3
GRE_BAND_WIDTH = 10.0

IELTS_BAND_MAX = 0.3
IELTS_BAND_WIDTH = 1.0

COUNTRY_PREFERENCE_BONUS = 0.2
UNIVERSITY_PREFERENCE_BONUS = 0.2

RANKING_BONUS_MAX = 0.1
RANKING_BONUS_CUTOFF = 100

# =============================================================================
# CLASSIFICATION
# =============================================================================

class RankingMode(str, Enum):
    """Output modes of the result assembler."""
    FIT = "fit"            # eligibility fit, sorted by match score
    TIER = "tier"          # relative score tiers, sorted by ranking
    PRESTIGE = "prestige"  # global ranking buckets, sorted by ranking


class TierLabel(str, Enum):
    """Fit relative to the student's own aggregate score."""
    SAFE = "Safe"
    MODERATE = "Moderate"
    AMBITIOUS = "Ambitious"


class PrestigeCategory(str, Enum):
    """Global prestige bucket derived from ranking alone."""
    DREAM = "Dream"
    COMPETITIVE = "Competitive"
    SAFE = "Safe"


# difference = student score - institution score
TIER_SAFE_MARGIN = 5.0
TIER_MODERATE_MARGIN = -5.0

# Upper ranking bound (inclusive) per bucket
PRESTIGE_DREAM_MAX_RANK = 40
PRESTIGE_COMPETITIVE_MAX_RANK = 120

FILTER_ALL = "all"

# =============================================================================
# OUTPUT
# =============================================================================

LOW_RESULT_WARNING_THRESHOLD = 5
ENGINE_VERSION = "1.0.0"

# =============================================================================
# BOUNDARY ALIASES
# =============================================================================

# Country code / short name to the full name used by the catalog service
COUNTRY_CODE_MAP: Dict[str, str] = {
    "AU": "Australia",
    "CA": "Canada",
    "DE": "Germany",
    "GB": "United Kingdom",
    "UK": "United Kingdom",
    "IE": "Ireland",
    "US": "United States",
    "USA": "United States",
    "NZ": "New Zealand",
    "SG": "Singapore",
    "NL": "Netherlands",
    "FR": "France",
}

# Canonical field -> accepted keys in provider records, in priority order
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "ID", "_id", "university_id", "collegeId"),
    "name": ("name", "Name", "university", "university_name", "universityName", "college", "college_name"),
    "country": ("country", "Country", "country_name", "countryCode"),
    "location": ("location", "Location", "city", "City"),
    "ranking": ("ranking", "rank", "Ranking", "Rank", "rankingPosition", "ranking_position", "world_rank"),
    "website": ("website", "Website", "url", "URL", "official_website"),
    "min_gre": ("minGRE", "min_gre", "MinGRE", "minGre", "gre", "GRE"),
    "min_ielts": ("minIELTS", "min_ielts", "MinIELTS", "minIelts", "ielts", "IELTS"),
    "min_cgpa": ("minCGPA", "min_cgpa", "MinCGPA", "minCgpa", "cgpa", "CGPA"),
    "normalized_score": (
        "normalizedScore", "normalized_score", "normalisedScore", "normalised_score",
        "overall_normalised_score",
    ),
    "programs": ("programs", "Programs", "courses", "programmes"),
}

# Ranking assumed for records that carry none
DEFAULT_RANKING = 9999


def canonical_country_name(code_or_name: str) -> str:
    """Convert a country code or short name to the full catalog name."""
    if not code_or_name:
        return ""
    cleaned = code_or_name.strip()
    return COUNTRY_CODE_MAP.get(cleaned.upper(), cleaned)
