"""
Data Adapter for the Ranking Engine

Translates catalog records into Institution contracts before they reach the
engine. Provider responses are loosely typed and use varying field names, so
every record goes through an explicit alias resolution step.

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking/classification
- NO DB writes
"""

import logging
from typing import List, Dict, Any, Optional

from sqlalchemy.orm import Session

from .constants import FIELD_ALIASES, DEFAULT_RANKING, canonical_country_name
from .contracts import Institution, Eligibility
from gradmatch.models.university import RecUniversity

logger = logging.getLogger(__name__)


class UnusableRecordError(ValueError):
    """A catalog record lacks the fields needed to build an Institution."""


def _safe_get(data: Optional[Dict], *keys, default=None):
    """Safely traverse nested dicts."""
    if data is None:
        return default
    result = data
    for key in keys:
        if isinstance(result, dict):
            result = result.get(key)
        else:
            return default
        if result is None:
            return default
    return result


def _first_present(record: Dict[str, Any], keys) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def _to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _to_optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def _to_ranking(value: Any) -> int:
    if value is None:
        return DEFAULT_RANKING
    try:
        # "#12" and "12.0" both appear in provider data
        return int(float(str(value).lstrip("#").strip()))
    except (ValueError, TypeError, OverflowError):
        return DEFAULT_RANKING


def _to_programs(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [p.strip() for p in value.split(",") if p.strip()]
    if isinstance(value, (list, tuple)):
        return [str(p) for p in value if p]
    return []


def resolve_aliases(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a loosely typed provider record onto canonical field names.

    Eligibility minimums may sit at the top level or inside a nested
    "eligibility" / "requirements" dict; top-level values win.

    Returns:
        Dict keyed by canonical field names; unknown fields are dropped
    """
    nested = _safe_get(record, "eligibility") or _safe_get(record, "requirements") or {}
    resolved = {}
    for field, keys in FIELD_ALIASES.items():
        value = _first_present(record, keys)
        if value is None and isinstance(nested, dict):
            value = _first_present(nested, keys)
        resolved[field] = value
    return resolved


def transform_record(record: Dict[str, Any], fallback_id: Optional[str] = None) -> Institution:
    """
    Transform a single provider record into an Institution.

    Missing optional fields default: minimums to 0, programs to [], text to "".

    Raises:
        UnusableRecordError: if the record has no name
    """
    if not isinstance(record, dict):
        raise UnusableRecordError(f"Expected a mapping, got {type(record).__name__}")

    fields = resolve_aliases(record)
    name = str(fields["name"] or "").strip()
    if not name:
        raise UnusableRecordError("Record has no university name")

    record_id = fields["id"] if fields["id"] is not None else (fallback_id or name)

    return Institution(
        id=str(record_id),
        name=name,
        country=canonical_country_name(str(fields["country"] or "")),
        location=str(fields["location"] or ""),
        ranking_position=_to_ranking(fields["ranking"]),
        website=str(fields["website"] or ""),
        eligibility=Eligibility(
            min_gre=_to_float(fields["min_gre"]),
            min_ielts=_to_float(fields["min_ielts"]),
            min_cgpa=_to_float(fields["min_cgpa"]),
        ),
        programs=_to_programs(fields["programs"]),
        normalized_score=_to_optional_float(fields["normalized_score"]),
    )


def transform_records(records: List[Any]) -> List[Institution]:
    """
    Transform a batch of provider records, skipping unusable ones.

    Returns:
        Institutions in provider order
    """
    institutions = []
    for position, record in enumerate(records):
        try:
            institutions.append(transform_record(record, fallback_id=str(position + 1)))
        except UnusableRecordError as e:
            logger.warning(f"Skipping catalog record {position}: {e}")
            continue
    return institutions


def transform_university(university: RecUniversity) -> Institution:
    """
    Transform a local catalog row into an Institution.

    Goes through the same aliasing path as remote records.
    """
    return transform_record({
        "id": university.id,
        "name": university.name,
        "country": university.country,
        "location": university.location,
        "ranking": university.ranking,
        "website": university.website,
        "min_gre": university.min_gre,
        "min_ielts": university.min_ielts,
        "min_cgpa": university.min_cgpa,
        "normalized_score": university.normalized_score,
        "programs": university.programs,
    })


def fetch_and_transform_universities(
    db: Session,
    country_filter: Optional[str] = None,
    limit: int = 500
) -> List[Institution]:
    """
    Fetch universities from the local catalog and transform them.

    Args:
        db: Database session
        country_filter: Optional country (code or full name)
        limit: Max records to return

    Returns:
        List of Institutions ordered by ranking
    """
    query = db.query(RecUniversity)

    if country_filter:
        country = canonical_country_name(country_filter)
        query = query.filter(RecUniversity.country == country)
        logger.info(f"Country filter applied: {country}")

    # Unranked rows last; SQLite sorts NULL first
    rows = (
        query.order_by(RecUniversity.ranking.is_(None), RecUniversity.ranking, RecUniversity.id)
        .limit(limit)
        .all()
    )
    logger.info(f"Universities fetched from DB: {len(rows)}")

    results = []
    for row in rows:
        try:
            results.append(transform_university(row))
        except UnusableRecordError as e:
            logger.warning(f"Failed to transform university {row.id}: {e}")
            continue

    return results
