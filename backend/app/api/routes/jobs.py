"""
Job Posting API endpoints.

Public listing of active postings plus recruiter-only create/update and
per-job application review.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Field
from sqlalchemy.orm import Session

from app.api.routes.auth import require_recruiter
from app.core.logging import get_logger
from app.db import crud
from app.db.session import get_db
from app.models import JobPosting, User
from app.schemas import (
    ApplicationWithCandidate,
    CamelModel,
    CandidateProfileResponse,
    JobPostingResponse,
)

logger = get_logger("jobs")

router = APIRouter()


# ============== Pydantic Schemas ==============


class JobPostingCreate(CamelModel):
    """Schema for a new job posting. The owner is always the caller."""

    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    description: str = Field(min_length=1)
    salary: Optional[str] = None
    job_type: str = Field(min_length=1)
    department: str = Field(min_length=1)
    skills: list[str]
    is_active: bool = True


class JobPostingUpdate(CamelModel):
    """Partial update; only supplied fields change."""

    title: Optional[str] = Field(default=None, min_length=1)
    company: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[str] = None
    job_type: Optional[str] = Field(default=None, min_length=1)
    department: Optional[str] = Field(default=None, min_length=1)
    skills: Optional[list[str]] = None
    is_active: Optional[bool] = None


# ============== Helper Functions ==============


def get_owned_job(db: Session, job_id: int, recruiter: User, action: str) -> JobPosting:
    """Fetch a job posting, raising 404 if missing and 403 if not owned by the recruiter."""
    job = crud.get_job_posting(db, job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job posting not found",
        )
    if job.recruiter_id != recruiter.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action}",
        )
    return job


# ============== API Endpoints ==============


@router.get("/jobs", response_model=list[JobPostingResponse])
async def list_jobs(
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
    db: Session = Depends(get_db),
):
    """List active job postings, newest first."""
    return crud.list_active_job_postings(db, limit=limit, offset=offset)


@router.get("/jobs/{job_id}", response_model=JobPostingResponse)
async def get_job(job_id: int, db: Session = Depends(get_db)):
    """Get a single job posting."""
    job = crud.get_job_posting(db, job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job posting not found",
        )
    return job


@router.post("/jobs", response_model=JobPostingResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    data: JobPostingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """Create a job posting owned by the calling recruiter."""
    job = JobPosting(**data.model_dump(), recruiter_id=current_user.id)
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info(f"Recruiter {current_user.id} created job {job.id} '{job.title}'")
    return job


@router.patch("/jobs/{job_id}", response_model=JobPostingResponse)
async def update_job(
    job_id: int,
    data: JobPostingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """Update a job posting, including toggling isActive. Owner only."""
    job = get_owned_job(db, job_id, current_user, "update this job posting")

    for key, value in data.model_dump(exclude_unset=True).items():
        # salary is the only nullable column
        if value is None and key != "salary":
            continue
        setattr(job, key, value)

    db.commit()
    db.refresh(job)
    return job


@router.get("/recruiter/jobs", response_model=list[JobPostingResponse])
async def list_recruiter_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """All job postings of the calling recruiter, active or not."""
    return crud.list_job_postings_by_recruiter(db, current_user.id)


@router.get("/jobs/{job_id}/applications", response_model=list[ApplicationWithCandidate])
async def list_job_applications(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """Applications for one of the caller's jobs, with candidate details and profile."""
    get_owned_job(db, job_id, current_user, "view applications for this job")

    result: list[ApplicationWithCandidate] = []
    for application in crud.list_applications_by_job(db, job_id):
        item = ApplicationWithCandidate.model_validate(application)
        profile = crud.get_candidate_profile(db, application.candidate_id)
        if profile:
            item.profile = CandidateProfileResponse.model_validate(profile)
        result.append(item)

    return result
