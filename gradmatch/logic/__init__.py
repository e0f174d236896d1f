"""
Ranking Logic Module

Provides the deterministic scoring engine for graduate admission matching.
"""

from .contracts import (
    StudentProfile,
    Institution,
    Eligibility,
    ScoreNormalization,
    MatchBreakdown,
    RankedInstitution,
    RankingOutput,
)
from .engine import RankingEngine, rank_institutions
from .aggregator import aggregate, compute_normalized_score
from .normalizer import normalize
from .matcher import match_score
from .classifier import classify_tier, classify_prestige
from .constants import Metric, RankingMode, TierLabel, PrestigeCategory
from .exceptions import (
    GradMatchError,
    ValidationError,
    EmptyResultError,
    UpstreamUnavailableError,
)

__all__ = [
    # Main engine
    "RankingEngine",
    "rank_institutions",
    "compute_normalized_score",

    # Components
    "normalize",
    "aggregate",
    "match_score",
    "classify_tier",
    "classify_prestige",

    # Contracts
    "StudentProfile",
    "Institution",
    "Eligibility",
    "ScoreNormalization",
    "MatchBreakdown",
    "RankedInstitution",
    "RankingOutput",

    # Enums
    "Metric",
    "RankingMode",
    "TierLabel",
    "PrestigeCategory",

    # Errors
    "GradMatchError",
    "ValidationError",
    "EmptyResultError",
    "UpstreamUnavailableError",
]
