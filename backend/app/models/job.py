from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class JobPosting(Base):
    """
    Job posting owned by a recruiter.

    Only postings with is_active set are listed to candidates.
    """

    __tablename__ = "job_postings"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    location = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    salary = Column(String, nullable=True)
    job_type = Column(String, nullable=False)  # "Full-time", "Part-time", "Contract"
    department = Column(String, nullable=False)
    skills = Column(JSON, default=list, nullable=False)

    recruiter_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)

    # Relationships
    recruiter = relationship("User", back_populates="job_postings")
    applications = relationship("Application", back_populates="job")
