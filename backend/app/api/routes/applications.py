"""
Application API endpoints.

Candidates apply to jobs and list their applications; recruiters move
applications between statuses on jobs they own.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.routes.auth import require_candidate, require_recruiter
from app.core.logging import get_logger
from app.db import crud
from app.db.session import get_db
from app.models import Application, ApplicationStatus, User
from app.schemas import ApplicationResponse, ApplicationWithJob, CamelModel
from app.services.candidate_analysis import score_application

logger = get_logger("applications")

router = APIRouter()


# ============== Pydantic Schemas ==============


class ApplicationCreate(CamelModel):
    job_id: int


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


# ============== API Endpoints ==============


@router.post("/applications", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
def apply_to_job(
    data: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """
    Apply to a job posting.

    The application is stored first; AI match scoring is attempted afterwards
    and never fails the request.
    """
    job = crud.get_job_posting(db, data.job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job posting not found",
        )
    if not job.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This job posting is no longer accepting applications",
        )

    already_applied = crud.get_application_by_candidate_and_job(db, current_user.id, job.id)
    if already_applied:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You have already applied to this job",
        )

    application = Application(
        candidate_id=current_user.id,
        job_id=job.id,
        status=ApplicationStatus.APPLIED.value,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request for the same pair won the unique constraint
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You have already applied to this job",
        )
    db.refresh(application)
    logger.info(f"Candidate {current_user.id} applied to job {job.id} (application {application.id})")

    profile = crud.get_candidate_profile(db, current_user.id)
    return score_application(db, application, profile, job)


@router.get("/candidate/applications", response_model=list[ApplicationWithJob])
async def list_candidate_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """The caller's applications, each with its job posting."""
    return crud.list_applications_by_candidate(db, current_user.id)


@router.patch("/applications/{application_id}", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    data: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter),
):
    """
    Set an application's status.

    Any of the five statuses may be set from any other; only the job's
    owner may change it.
    """
    application = crud.get_application(db, application_id)
    if not application:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )

    job = crud.get_job_posting(db, application.job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job posting not found",
        )

    if job.recruiter_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to update this application",
        )

    return crud.update_application(db, application, status=data.status.value)
