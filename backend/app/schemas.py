"""
Response schemas shared across routers.

Fields are snake_case in Python and camelCase on the wire; input accepts
either spelling.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serializing to camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserResponse(CamelModel):
    """User without password hash."""

    id: int
    username: str
    email: str
    full_name: str
    role: str
    created_at: Optional[datetime] = None


class CandidateSummary(CamelModel):
    id: int
    username: str
    email: str
    full_name: str


class JobPostingResponse(CamelModel):
    id: int
    title: str
    company: str
    location: str
    description: str
    salary: Optional[str] = None
    job_type: str
    department: str
    skills: list[str] = []
    recruiter_id: int
    is_active: bool
    created_at: datetime


class ApplicationResponse(CamelModel):
    id: int
    candidate_id: int
    job_id: int
    status: str
    ai_score: Optional[int] = None
    ai_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CandidateProfileResponse(CamelModel):
    id: int
    user_id: int
    skills: Optional[list[str]] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    resume_text: Optional[str] = None
    parsed_resume: Optional[dict[str, Any]] = None
    contact_info: Optional[dict[str, Any]] = None
    detailed_experience: Optional[list[Any]] = None
    detailed_education: Optional[list[Any]] = None
    detailed_skills: Optional[dict[str, Any]] = None
    projects: Optional[list[Any]] = None
    summary: Optional[str] = None
    ai_evaluation: Optional[dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


class RecruiterProfileResponse(CamelModel):
    id: int
    user_id: int
    company: str
    position: str
    created_at: datetime


class ApplicationWithJob(ApplicationResponse):
    """Candidate view of an application."""

    job: Optional[JobPostingResponse] = None


class ApplicationWithCandidate(ApplicationResponse):
    """Recruiter view of an application."""

    candidate: Optional[CandidateSummary] = None
    profile: Optional[CandidateProfileResponse] = None
