from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class User(Base):
    """User model for authentication and authorization."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    role = Column(String, nullable=False)  # 'recruiter' | 'candidate'
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    candidate_profile = relationship(
        "CandidateProfile", back_populates="user", uselist=False
    )
    recruiter_profile = relationship(
        "RecruiterProfile", back_populates="user", uselist=False
    )
    job_postings = relationship("JobPosting", back_populates="recruiter")
    applications = relationship("Application", back_populates="candidate")
