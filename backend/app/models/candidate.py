from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class CandidateProfile(Base):
    """Candidate profile with resume text, AI-parsed resume data and evaluation."""

    __tablename__ = "candidate_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    # 1. Self-reported data
    skills = Column(JSON, default=list)  # ["Python", "React"]
    experience = Column(Text, default="")
    education = Column(Text, default="")
    resume_text = Column(Text, default="")

    # 2. AI-parsed resume (stored as JSON to allow flexible parsing)
    parsed_resume = Column(JSON)
    contact_info = Column(JSON)
    detailed_experience = Column(JSON)
    detailed_education = Column(JSON)
    detailed_skills = Column(JSON)  # {"technical": [], "soft": [], ...}
    projects = Column(JSON)
    summary = Column(String)

    # 3. AI evaluation (profile assessment or comprehensive analysis)
    ai_evaluation = Column(JSON, default=dict)

    # 4. Meta
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    user = relationship("User", back_populates="candidate_profile")
