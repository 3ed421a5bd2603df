from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base, utcnow


class RecruiterProfile(Base):
    """Recruiter company details."""

    __tablename__ = "recruiter_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    company = Column(String, nullable=False, default="")
    position = Column(String, nullable=False, default="")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="recruiter_profile")
