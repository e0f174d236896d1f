"""
Engine Runner

Orchestrates the ranking pipeline:
1. Accepts StudentProfile
2. Fetches the catalog (local database or remote catalog service)
3. Runs the ranking engine
4. Returns the RankingOutput

This is a pure orchestration layer - NO scoring, NO business logic.
"""

import logging
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from .adapter import fetch_and_transform_universities
from .catalog_client import CatalogClient
from .contracts import StudentProfile, RankingOutput
from .constants import RankingMode
from .engine import RankingEngine, parse_mode, student_normalization
from .exceptions import ValidationError, EmptyResultError
from .output_assembler import LabelFilter
from .validation import validate_profile

logger = logging.getLogger(__name__)


class CatalogSource(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


def _target_country(profile: StudentProfile, country: Optional[str]) -> Optional[str]:
    if country:
        return country
    if profile.preferred_countries:
        # Sets are unordered; pick deterministically
        return sorted(profile.preferred_countries)[0]
    return None


def run_ranking(
    profile: StudentProfile,
    mode: RankingMode = RankingMode.FIT,
    label_filter: LabelFilter = None,
    db: Optional[Session] = None,
    source: CatalogSource = CatalogSource.LOCAL,
    country: Optional[str] = None,
    limit: int = 500,
    client: Optional[CatalogClient] = None
) -> RankingOutput:
    """
    Main entry point: run the full ranking pipeline.

    Args:
        profile: Student profile with preferences
        mode: fit, tier or prestige
        label_filter: Optional label filter for tier / prestige modes
        db: Database session, required for the local catalog
        source: Where the catalog comes from
        country: Country to query; defaults to the first preferred country
        limit: Max catalog records for the local source
        client: Catalog service client for the remote source

    Returns:
        RankingOutput with ranked institutions
    """
    mode = parse_mode(mode)
    source = CatalogSource(source)

    logger.info(f"Starting ranking pipeline (mode={mode.value}, source={source.value})")
    logger.info(f"Preferred countries: {sorted(profile.preferred_countries)}")

    # Fail fast before any I/O
    validate_profile(profile, mode)

    if source == CatalogSource.REMOTE:
        target = _target_country(profile, country)
        if not target:
            raise ValidationError.single("country", "Please select a country")
        normalization = student_normalization(profile)
        if normalization is None:
            raise ValidationError.single("cgpa", "CGPA is required to query the catalog service")
        client = client or CatalogClient()
        catalog = client.find_colleges(target, normalization.final_score)
    else:
        if db is None:
            raise ValueError("A database session is required for the local catalog")
        # Fit mode scores every preferred country; only an explicit country narrows the query
        catalog = fetch_and_transform_universities(db, country_filter=country, limit=limit)

    if not catalog:
        logger.warning("No universities found matching criteria")
        raise EmptyResultError()

    logger.info(f"Catalog size for scoring: {len(catalog)}")

    output = RankingEngine().rank(profile, catalog, mode, label_filter)

    logger.info(f"Ranking complete: {output.total_returned} of {output.total_evaluated} returned")
    return output
