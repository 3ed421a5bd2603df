"""
Candidate API endpoints.

Profile management plus the AI features of the candidate portal: resume
analysis, profile evaluation, career recommendations and job-fit analysis.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.routes.auth import require_candidate
from app.core.logging import get_logger
from app.db import crud
from app.db.session import get_db
from app.models import User
from app.schemas import CamelModel, CandidateProfileResponse
from app.services.candidate_analysis import (
    analyze_candidate,
    analyze_candidate_job_fit,
    process_resume,
    refresh_profile_evaluation,
)
from app.services.evaluation import get_career_recommendations

logger = get_logger("candidate")

router = APIRouter()


# ============== Pydantic Schemas ==============


class CandidateProfileUpdate(CamelModel):
    """Editable profile fields; only supplied fields change."""

    skills: Optional[list[str]] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    resume_text: Optional[str] = None


class ResumeAnalyzeRequest(CamelModel):
    resume_text: str = Field(min_length=1)


class ContactInfo(BaseModel):
    model_config = {"extra": "allow"}

    name: str = ""
    email: str = ""


class ParsedSkills(BaseModel):
    technical: list[str] = []
    soft: list[str] = []
    languages: list[str] = []
    certifications: list[str] = []


class ParsedResumeResponse(CamelModel):
    """Structured resume; every section is present even when empty."""

    contact_info: ContactInfo
    education: list[Any] = []
    experience: list[Any] = []
    skills: ParsedSkills
    projects: list[Any] = []
    summary: str = ""


class CareerRecommendations(BaseModel):
    recommendations: list[str]
    explanation: str


class JobFitResponse(BaseModel):
    score: int
    analysis: str
    strengths: list[Any]
    gaps: list[Any]
    recommendation: str


# ============== API Endpoints ==============


@router.get("/profile", response_model=CandidateProfileResponse)
async def get_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """Get the caller's profile, creating an empty one on first access."""
    return crud.get_or_create_candidate_profile(db, current_user.id)


@router.patch("/profile", response_model=CandidateProfileResponse)
def update_profile(
    data: CandidateProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """
    Update the caller's profile.

    When the resume text or skills change and the profile then has both,
    the AI profile evaluation is refreshed.
    """
    changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    profile = crud.get_or_create_candidate_profile(db, current_user.id)
    profile = crud.update_candidate_profile(db, profile, **changes)

    if "resume_text" in changes or "skills" in changes:
        profile = refresh_profile_evaluation(db, profile)

    return profile


@router.post("/resume/analyze", response_model=ParsedResumeResponse)
def analyze_resume(
    data: ResumeAnalyzeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """
    Parse a resume with AI and save the results onto the caller's profile.

    If the AI service is unavailable the resume text is still saved and an
    empty parsed resume is returned.
    """
    if not data.resume_text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Resume text is required",
        )

    _, parsed = process_resume(db, current_user.id, data.resume_text)
    return parsed


@router.get("/recommendations", response_model=CareerRecommendations)
def career_recommendations(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """AI career recommendations based on the caller's resume and skills."""
    profile = crud.get_candidate_profile(db, current_user.id)

    if not profile or not profile.resume_text or not profile.skills:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Profile incomplete. Please update your resume and skills to get recommendations.",
        )

    return get_career_recommendations(profile.resume_text, profile.skills)


@router.get("/comprehensive-analysis")
def comprehensive_analysis(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """Comprehensive AI analysis of the caller, stored on the profile."""
    profile = crud.get_candidate_profile(db, current_user.id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidate profile not found",
        )

    return analyze_candidate(db, profile)


@router.get("/jobs/{job_id}/fit", response_model=JobFitResponse)
def job_fit(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """How well the caller fits a job posting."""
    job = crud.get_job_posting(db, job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job posting not found",
        )

    profile = crud.get_candidate_profile(db, current_user.id)
    return analyze_candidate_job_fit(db, profile, current_user.id, job)
