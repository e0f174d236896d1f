"""
Data Contracts for the Scoring Engine

Defines Pydantic models for StudentProfile and Institution (input) and
RankedInstitution / RankingOutput (output).
These contracts are the API boundary for the scoring engine.
"""

from typing import List, Optional, Dict, Set
from pydantic import BaseModel, Field, field_validator

from .constants import (
    RankingMode,
    TierLabel,
    PrestigeCategory,
    ENGINE_VERSION,
    canonical_country_name,
)


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class StudentProfile(BaseModel):
    """
    Input contract for the scoring engine.
    Raw test scores plus preferences, constructed fresh per request.
    """
    # Raw scores (domains are checked by validation, not by the model)
    gre_score: float
    ielts_score: float
    cgpa: Optional[float] = None  # absent in eligibility-fit mode

    # Preferences
    preferred_countries: Set[str] = Field(default_factory=set)
    preferred_university_names: Set[str] = Field(default_factory=set)

    # Carried through, not scored
    reason_for_studying: str = ""

    @field_validator("preferred_countries", mode="before")
    @classmethod
    def _canonical_countries(cls, value):
        if value is None:
            return set()
        return {canonical_country_name(str(c)) for c in value if str(c).strip()}

    @field_validator("preferred_university_names", mode="before")
    @classmethod
    def _strip_names(cls, value):
        if value is None:
            return set()
        return {str(n).strip() for n in value if str(n).strip()}


class Eligibility(BaseModel):
    """Minimum entry requirements published by an institution."""
    min_gre: float = 0.0
    min_ielts: float = 0.0
    min_cgpa: float = 0.0

    class Config:
        frozen = True


class Institution(BaseModel):
    """
    Catalog record. Stable within a request; the engine never mutates it.
    """
    id: str
    name: str
    country: str = ""
    location: str = ""
    ranking_position: int
    website: str = ""
    eligibility: Eligibility = Field(default_factory=Eligibility)
    programs: List[str] = Field(default_factory=list)  # display only

    # Carried from catalog data when the provider supplies it
    normalized_score: Optional[float] = None

    class Config:
        frozen = True


# =============================================================================
# DERIVED STRUCTURES
# =============================================================================

class ScoreNormalization(BaseModel):
    """Per-metric normalized scores and the weighted final score, all on 0-100."""
    normalized_gre: float
    normalized_ielts: float
    normalized_cgpa: float
    final_score: float

    class Config:
        frozen = True


class MatchBreakdown(BaseModel):
    """Contribution of each eligibility band to a match score."""
    gre: float = 0.0
    ielts: float = 0.0
    country: float = 0.0
    university: float = 0.0
    ranking: float = 0.0

    class Config:
        frozen = True

    @property
    def total(self) -> float:
        return self.gre + self.ielts + self.country + self.university + self.ranking


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class RankedInstitution(BaseModel):
    """
    Decorated copy of an institution carrying the scores computed for one request.
    Which of match_score / tier / category is populated depends on the mode.
    """
    institution: Institution
    normalized_score: Optional[float] = None
    match_score: Optional[float] = None
    match_breakdown: Optional[MatchBreakdown] = None
    tier: Optional[TierLabel] = None
    category: Optional[PrestigeCategory] = None
    rank: int = 0


class RankingOutput(BaseModel):
    """
    Output contract for the scoring engine.
    Contains the ranked institutions with summary statistics.
    """
    # Request tracking
    request_id: Optional[str] = None

    mode: RankingMode
    student_score: Optional[float] = None
    score_normalization: Optional[ScoreNormalization] = None

    results: List[RankedInstitution] = Field(default_factory=list)

    # Summary Statistics
    total_evaluated: int = 0
    total_returned: int = 0
    category_counts: Dict[str, int] = Field(default_factory=dict)

    # Processing metadata
    processing_time_ms: Optional[float] = None
    engine_version: str = ENGINE_VERSION

    # Warnings/Notes
    warnings: List[str] = Field(default_factory=list)
