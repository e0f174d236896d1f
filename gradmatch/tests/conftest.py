import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import Base
from gradmatch.logic.contracts import StudentProfile, Institution, Eligibility
from gradmatch.models.university import RecUniversity


@pytest.fixture
def make_institution():
    def _make(
        id="1",
        name="Test University",
        country="United States",
        ranking=150,
        min_gre=300.0,
        min_ielts=6.5,
        min_cgpa=0.0,
        normalized_score=None,
        programs=None,
    ):
        return Institution(
            id=str(id),
            name=name,
            country=country,
            location="",
            ranking_position=ranking,
            website=f"https://{str(name).lower().replace(' ', '')}.edu",
            eligibility=Eligibility(min_gre=min_gre, min_ielts=min_ielts, min_cgpa=min_cgpa),
            programs=programs or ["Computer Science"],
            normalized_score=normalized_score,
        )
    return _make


@pytest.fixture
def student():
    """Student from the documented end-to-end example."""
    return StudentProfile(
        gre_score=315,
        ielts_score=7.5,
        cgpa=8.5,
        preferred_countries=["Canada"],
        preferred_university_names=["Toronto"],
        reason_for_studying="Career advancement",
    )


@pytest.fixture
def catalog(make_institution):
    return [
        make_institution(id=1, name="Massachusetts Institute of Technology", country="United States",
                         ranking=1, min_gre=325, min_ielts=7.0, min_cgpa=8.5),
        make_institution(id=2, name="University of Toronto", country="Canada",
                         ranking=21, min_gre=315, min_ielts=7.0, min_cgpa=8.0),
        make_institution(id=3, name="Carnegie Mellon University", country="United States",
                         ranking=52, min_gre=322, min_ielts=7.0, min_cgpa=8.0),
        make_institution(id=4, name="University of Leeds", country="United Kingdom",
                         ranking=82, min_gre=300, min_ielts=6.5, min_cgpa=7.0),
        make_institution(id=5, name="University College Dublin", country="Ireland",
                         ranking=126, min_gre=300, min_ielts=6.5, min_cgpa=6.5),
        # Out of reach on every band and unranked: scores exactly 0 in fit mode
        make_institution(id=6, name="Unreachable Institute", country="France",
                         ranking=400, min_gre=340, min_ielts=9.0, min_cgpa=9.5),
    ]


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def seeded_session(db_session):
    rows = [
        RecUniversity(name="University of Toronto", country="Canada", location="Toronto, ON", ranking=21,
                      website="https://www.utoronto.ca", min_gre=315, min_ielts=7.0, min_cgpa=8.0,
                      programs=["Computer Science"]),
        RecUniversity(name="McGill University", country="Canada", location="Montreal, QC", ranking=30,
                      website="https://www.mcgill.ca", min_gre=312, min_ielts=6.5, min_cgpa=None,
                      programs=["Bioengineering"]),
        RecUniversity(name="Arizona State University", country="United States", location="Tempe, AZ",
                      ranking=179, website="https://www.asu.edu", min_gre=300, min_ielts=6.5, min_cgpa=6.5,
                      normalized_score=55.0, programs=[]),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return db_session
