"""
Seed the local university catalog from gradmatch/data/universities.json.

Records go through the same alias resolution as remote catalog responses,
so the dataset may use provider-style keys (minGRE, ranking, ...).
Re-running updates existing rows by name.

    python seed_universities.py [path/to/universities.json]
"""

import json
import logging
import os
import sys
from typing import List, Dict, Any

from sqlalchemy.orm import Session

from db import get_db, init_db
from gradmatch.logic.adapter import transform_records
from gradmatch.models.university import RecUniversity

logger = logging.getLogger(__name__)

DATA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "gradmatch", "data", "universities.json")


def load_records(path: str = DATA_PATH) -> List[Dict[str, Any]]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def upsert_universities(db: Session, records: List[Dict[str, Any]]) -> int:
    """
    Insert or update catalog rows keyed by university name.

    Returns:
        Number of rows written
    """
    written = 0
    for institution in transform_records(records):
        row = db.query(RecUniversity).filter(RecUniversity.name == institution.name).first()
        if row is None:
            row = RecUniversity(name=institution.name)
            db.add(row)

        row.country = institution.country
        row.location = institution.location
        row.ranking = institution.ranking_position
        row.website = institution.website
        row.min_gre = institution.eligibility.min_gre
        row.min_ielts = institution.eligibility.min_ielts
        row.min_cgpa = institution.eligibility.min_cgpa
        row.normalized_score = institution.normalized_score
        row.programs = list(institution.programs)
        written += 1

    db.flush()
    return written


def main(path: str = DATA_PATH) -> None:
    init_db()
    records = load_records(path)
    with get_db() as db:
        count = upsert_universities(db, records)
    logger.info(f"Seeded {count} universities from {path}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main(sys.argv[1] if len(sys.argv) > 1 else DATA_PATH)
