from sqlalchemy import Column, Integer, String, Float, JSON

from .base import Base


class RecUniversity(Base):
    __tablename__ = "rec_universities"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)
    country = Column(String, index=True)
    location = Column(String)
    ranking = Column(Integer, index=True)
    website = Column(String)

    # Eligibility minimums
    min_gre = Column(Float)
    min_ielts = Column(Float)
    min_cgpa = Column(Float)

    # Catalog-side 0-100 score, when published
    normalized_score = Column(Float)

    programs = Column(JSON)
