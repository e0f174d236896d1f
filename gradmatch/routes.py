"""
Ranking API Routes

Exposes the ranking engine via REST API.
Endpoints: POST /recommendations, POST /recommendations/score
"""

import logging
from typing import Optional, Dict, Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import get_session
from .logic.contracts import StudentProfile, RankedInstitution, RankingOutput, ScoreNormalization
from .logic.constants import RankingMode, FILTER_ALL, ENGINE_VERSION
from .logic.aggregator import compute_normalized_score
from .logic.runner import run_ranking, CatalogSource
from .logic.exceptions import ValidationError, EmptyResultError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================

class ScoreRequest(BaseModel):
    """Request body for the score breakdown endpoint."""
    gre: float = Field(..., description="GRE score (260-340)")
    ielts: float = Field(..., description="IELTS band (0-9)")
    cgpa: float = Field(..., description="CGPA (0-10)")


class RankingRequest(BaseModel):
    """Request body for recommendations endpoint."""
    student_profile: StudentProfile = Field(
        ...,
        description="Student scores and preferences",
        examples=[{
            "gre_score": 315,
            "ielts_score": 7.5,
            "cgpa": 8.5,
            "preferred_countries": ["USA", "Canada"],
            "preferred_university_names": ["Toronto"],
            "reason_for_studying": "Career advancement",
        }],
    )
    mode: RankingMode = Field(
        default=RankingMode.FIT,
        description="fit (match score), tier (Safe/Moderate/Ambitious) or prestige (Dream/Competitive/Safe)"
    )
    filter: str = Field(
        default=FILTER_ALL,
        description="Label filter for tier / prestige modes"
    )
    source: CatalogSource = Field(
        default=CatalogSource.LOCAL,
        description="Catalog source: 'local' database or 'remote' catalog service"
    )
    country: Optional[str] = Field(
        default=None,
        description="Restrict the catalog to one country"
    )
    limit: int = Field(
        default=500,
        ge=1,
        le=1000,
        description="Max universities to evaluate from the local catalog"
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/score", summary="Normalized score breakdown")
def score_breakdown(request: ScoreRequest):
    """
    Normalize GRE / IELTS / CGPA onto 0-100 and compute the weighted final score.
    """
    try:
        normalization = compute_normalized_score(request.gre, request.ielts, request.cgpa)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    return _serialize_normalization(normalization)


@router.post("", summary="Get ranked university recommendations")
@router.post("/", summary="Get ranked university recommendations", include_in_schema=False)
def get_recommendations(
    request: RankingRequest,
    db: Session = Depends(get_session)
):
    """
    Rank universities for a student profile.

    **Request Body:**
    - `student_profile`: Student's scores and preferences
    - `mode`: `fit`, `tier` or `prestige`
    - `filter`: `all` or a label of the chosen mode
    - `source`: `local` or `remote`

    **Response:**
    - Ranked universities with match score, tier or category
    - Student score breakdown and per-label counts
    """
    try:
        output = run_ranking(
            profile=request.student_profile,
            mode=request.mode,
            label_filter=request.filter,
            db=db,
            source=request.source,
            country=request.country,
            limit=request.limit,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except EmptyResultError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UpstreamUnavailableError as e:
        logger.error(f"Catalog service failure: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return _serialize_output(output)


def _serialize_normalization(normalization: ScoreNormalization) -> Dict[str, float]:
    return {
        "normalized_gre": round(normalization.normalized_gre, 2),
        "normalized_ielts": round(normalization.normalized_ielts, 2),
        "normalized_cgpa": round(normalization.normalized_cgpa, 2),
        "final_score": round(normalization.final_score, 2),
    }


def _serialize_result(ranked: RankedInstitution) -> Dict[str, Any]:
    """Convert RankedInstitution to JSON-serializable dict."""
    institution = ranked.institution
    return {
        "rank": ranked.rank,
        "id": institution.id,
        "name": institution.name,
        "country": institution.country,
        "location": institution.location,
        "ranking": institution.ranking_position,
        "website": institution.website,
        "eligibility": {
            "min_gre": institution.eligibility.min_gre,
            "min_ielts": institution.eligibility.min_ielts,
            "min_cgpa": institution.eligibility.min_cgpa,
        },
        "programs": list(institution.programs),
        "normalized_score": round(ranked.normalized_score, 2) if ranked.normalized_score is not None else None,
        "match_score": round(ranked.match_score, 3) if ranked.match_score is not None else None,
        "match_breakdown": {
            band: round(value, 3)
            for band, value in ranked.match_breakdown.model_dump().items()
        } if ranked.match_breakdown else None,
        "tier": ranked.tier.value if ranked.tier else None,
        "category": ranked.category.value if ranked.category else None,
    }


def _serialize_output(output: RankingOutput) -> Dict[str, Any]:
    return {
        "request_id": output.request_id,
        "mode": output.mode.value,
        "student_score": round(output.student_score, 2) if output.student_score is not None else None,
        "score_breakdown": _serialize_normalization(output.score_normalization) if output.score_normalization else None,
        "summary": {
            "total_evaluated": output.total_evaluated,
            "total_returned": output.total_returned,
            "category_counts": output.category_counts,
            "processing_time_ms": output.processing_time_ms,
        },
        "recommendations": [_serialize_result(r) for r in output.results],
        "warnings": output.warnings,
        "engine_version": output.engine_version,
    }


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Ranking engine health check")
def health_check():
    """Check if ranking engine is operational."""
    return {"status": "ok", "engine": "gradmatch", "version": ENGINE_VERSION}
