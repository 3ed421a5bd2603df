"""
Recruiter API endpoints.

Recruiter profile, hiring analytics and AI analysis of candidates.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field
from sqlalchemy.orm import Session

from app.api.routes.auth import require_recruiter
from app.api.routes.candidate import JobFitResponse
from app.api.routes.jobs import get_owned_job
from app.db import crud
from app.db.session import get_db
from app.models import ApplicationStatus, User
from app.schemas import CamelModel, JobPostingResponse, RecruiterProfileResponse
from app.services.candidate_analysis import analyze_candidate, analyze_candidate_job_fit

router = APIRouter()


# ============== Pydantic Schemas ==============


class RecruiterProfileUpdate(CamelModel):
    company: Optional[str] = Field(default=None, min_length=1)
    position: Optional[str] = Field(default=None, min_length=1)


class JobWithApplications(JobPostingResponse):
    applications: int
    status_breakdown: dict[str, int]


class RecruiterAnalytics(CamelModel):
    total_jobs: int
    active_jobs: int
    total_applications: int
    applications_by_status: dict[str, int]
    jobs_with_applications: list[JobWithApplications]


# ============== Helper Functions ==============


def count_by_status(statuses: list[str]) -> dict[str, int]:
    """Count statuses, always reporting all five keys."""
    breakdown = {s.value: 0 for s in ApplicationStatus}
    for value in statuses:
        if value in breakdown:
            breakdown[value] += 1
    return breakdown


# ============== API Endpoints ==============


@router.get("/profile", response_model=RecruiterProfileResponse)
async def get_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """Get the caller's recruiter profile."""
    profile = crud.get_recruiter_profile(db, current_user.id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recruiter profile not found",
        )
    return profile


@router.patch("/profile", response_model=RecruiterProfileResponse)
async def update_profile(
    data: RecruiterProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """Update company and/or position."""
    profile = crud.get_recruiter_profile(db, current_user.id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recruiter profile not found",
        )

    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(profile, key, value)

    db.commit()
    db.refresh(profile)
    return profile


@router.get("/analytics", response_model=RecruiterAnalytics)
async def analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """Job and application counts across the caller's postings."""
    jobs = crud.list_job_postings_by_recruiter(db, current_user.id)

    jobs_with_applications: list[JobWithApplications] = []
    all_statuses: list[str] = []
    for job in jobs:
        statuses = [a.status for a in crud.list_applications_by_job(db, job.id)]
        all_statuses.extend(statuses)
        jobs_with_applications.append(
            JobWithApplications(
                **JobPostingResponse.model_validate(job).model_dump(),
                applications=len(statuses),
                status_breakdown=count_by_status(statuses),
            )
        )

    return RecruiterAnalytics(
        total_jobs=len(jobs),
        active_jobs=sum(1 for job in jobs if job.is_active),
        total_applications=len(all_statuses),
        applications_by_status=count_by_status(all_statuses),
        jobs_with_applications=jobs_with_applications,
    )


@router.get("/candidates/{candidate_id}/analysis")
def candidate_analysis(
    candidate_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """Comprehensive AI analysis of a candidate."""
    profile = crud.get_candidate_profile(db, candidate_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidate profile not found",
        )

    return analyze_candidate(db, profile)


@router.get("/candidates/{candidate_id}/jobs/{job_id}/fit", response_model=JobFitResponse)
def candidate_job_fit(
    candidate_id: int,
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """How well a candidate fits one of the caller's job postings."""
    job = get_owned_job(db, job_id, current_user, "access this job")
    profile = crud.get_candidate_profile(db, candidate_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidate profile not found",
        )

    return analyze_candidate_job_fit(db, profile, candidate_id, job)
