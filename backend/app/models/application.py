import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class ApplicationStatus(str, enum.Enum):
    """Application pipeline status. Any value may follow any other."""

    APPLIED = "applied"
    UNDER_REVIEW = "under_review"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class Application(Base):
    """
    A candidate's application to a job posting.

    ai_score/ai_notes are filled once by the AI matcher when the application
    is created, and again whenever a job-fit analysis is run for the pair.
    """

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("candidate_id", "job_id", name="uq_application_candidate_job"),
    )

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    job_id = Column(Integer, ForeignKey("job_postings.id"), index=True, nullable=False)

    status = Column(String, default=ApplicationStatus.APPLIED.value, nullable=False)

    ai_score = Column(Integer, nullable=True)  # 0-100
    ai_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    candidate = relationship("User", back_populates="applications")
    job = relationship("JobPosting", back_populates="applications")
