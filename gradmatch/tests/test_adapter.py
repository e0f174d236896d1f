"""
Tests for catalog record aliasing and the local catalog query.
"""

import pytest

from gradmatch.logic.adapter import (
    UnusableRecordError,
    resolve_aliases,
    transform_record,
    transform_records,
    fetch_and_transform_universities,
)
from gradmatch.logic.constants import DEFAULT_RANKING
from gradmatch.models.university import RecUniversity
from seed_universities import load_records, upsert_universities


class TestTransformRecord:

    def test_provider_style_keys(self):
        institution = transform_record({
            "_id": "abc123",
            "university_name": "University of Leeds",
            "Country": "UK",
            "rank": "#82",
            "url": "https://www.leeds.ac.uk",
            "minGRE": "300",
            "minIELTS": 6.5,
            "minCGPA": 7,
            "normalisedScore": 58.2,
            "courses": "Computer Science, Data Science",
        })

        assert institution.id == "abc123"
        assert institution.name == "University of Leeds"
        assert institution.country == "United Kingdom"
        assert institution.ranking_position == 82
        assert institution.website == "https://www.leeds.ac.uk"
        assert institution.eligibility.min_gre == 300.0
        assert institution.eligibility.min_ielts == 6.5
        assert institution.eligibility.min_cgpa == 7.0
        assert institution.normalized_score == 58.2
        assert institution.programs == ["Computer Science", "Data Science"]

    def test_nested_eligibility(self):
        institution = transform_record({
            "name": "McGill University",
            "eligibility": {"minGRE": 312, "minIELTS": 6.5},
        })
        assert institution.eligibility.min_gre == 312.0
        assert institution.eligibility.min_ielts == 6.5
        assert institution.eligibility.min_cgpa == 0.0

    def test_top_level_minimum_wins_over_nested(self):
        fields = resolve_aliases({"name": "X", "min_gre": 320, "requirements": {"min_gre": 300}})
        assert fields["min_gre"] == 320

    def test_defaults_for_missing_fields(self):
        institution = transform_record({"name": "Sparse College"}, fallback_id="7")

        assert institution.id == "7"
        assert institution.country == ""
        assert institution.ranking_position == DEFAULT_RANKING
        assert institution.programs == []
        assert institution.normalized_score is None

    def test_unparseable_values_default(self):
        institution = transform_record({"name": "Odd", "ranking": "n/a", "minGRE": "tbd"})
        assert institution.ranking_position == DEFAULT_RANKING
        assert institution.eligibility.min_gre == 0.0

    @pytest.mark.parametrize("ranking", ["Infinity", "-inf", float("inf"), "1e400"])
    def test_infinite_ranking_defaults(self, ranking):
        institution = transform_record({"name": "Bad U", "ranking": ranking})
        assert institution.ranking_position == DEFAULT_RANKING

    def test_batch_keeps_record_with_infinite_ranking(self):
        institutions = transform_records([
            {"name": "Good U", "ranking": 10},
            {"name": "Bad U", "ranking": "Infinity"},
        ])
        assert [(i.name, i.ranking_position) for i in institutions] == [
            ("Good U", 10),
            ("Bad U", DEFAULT_RANKING),
        ]

    @pytest.mark.parametrize("record", [{}, {"name": "   "}, {"country": "Canada"}, "not a dict"])
    def test_unusable(self, record):
        with pytest.raises(UnusableRecordError):
            transform_record(record)

    def test_batch_skips_unusable(self):
        institutions = transform_records([
            {"name": "First"},
            {"country": "Canada"},
            {"name": "Third"},
        ])
        assert [i.name for i in institutions] == ["First", "Third"]
        assert [i.id for i in institutions] == ["1", "3"]


class TestLocalCatalog:

    def test_ordered_by_ranking(self, seeded_session):
        institutions = fetch_and_transform_universities(seeded_session)
        assert [i.ranking_position for i in institutions] == [21, 30, 179]

    def test_country_filter_accepts_codes(self, seeded_session):
        institutions = fetch_and_transform_universities(seeded_session, country_filter="US")
        assert [i.name for i in institutions] == ["Arizona State University"]
        assert institutions[0].normalized_score == 55.0

    def test_limit(self, seeded_session):
        assert len(fetch_and_transform_universities(seeded_session, limit=2)) == 2

    def test_unranked_rows_sort_last(self, seeded_session):
        seeded_session.add(RecUniversity(name="Unranked College", country="Canada", ranking=None))
        seeded_session.commit()

        institutions = fetch_and_transform_universities(seeded_session, limit=3)
        assert [i.ranking_position for i in institutions] == [21, 30, 179]

        institutions = fetch_and_transform_universities(seeded_session)
        assert institutions[-1].name == "Unranked College"
        assert institutions[-1].ranking_position == DEFAULT_RANKING

    def test_null_minimum_defaults_to_zero(self, seeded_session):
        mcgill = fetch_and_transform_universities(seeded_session, country_filter="Canada")[1]
        assert mcgill.name == "McGill University"
        assert mcgill.eligibility.min_cgpa == 0.0


class TestSeed:

    def test_bundled_dataset_loads(self, db_session):
        records = load_records()
        written = upsert_universities(db_session, records)

        assert written == len(records) == 20
        assert db_session.query(RecUniversity).count() == 20

        toronto = db_session.query(RecUniversity).filter_by(name="University of Toronto").one()
        assert toronto.min_gre == 315.0
        assert toronto.country == "Canada"

    def test_rerun_updates_in_place(self, db_session):
        upsert_universities(db_session, [{"name": "Test University", "ranking": 50}])
        upsert_universities(db_session, [{"name": "Test University", "ranking": 45}])

        rows = db_session.query(RecUniversity).all()
        assert len(rows) == 1
        assert rows[0].ranking == 45
