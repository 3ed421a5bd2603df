"""
CRUD helpers shared by routers and services.

Callers own the session and decide when to commit; helpers that create or
update rows commit and refresh so the returned object is current.
"""

from typing import Optional

from sqlalchemy.orm import Session

from app.models import Application, CandidateProfile, JobPosting, RecruiterProfile, User


# ----------------- Users -----------------

def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


# ----------------- Job postings -----------------

def get_job_posting(db: Session, job_id: int) -> Optional[JobPosting]:
    return db.query(JobPosting).filter(JobPosting.id == job_id).first()


def list_active_job_postings(
    db: Session, limit: Optional[int] = None, offset: Optional[int] = None
) -> list[JobPosting]:
    """Active postings, newest first."""
    query = (
        db.query(JobPosting)
        .filter(JobPosting.is_active.is_(True))
        .order_by(JobPosting.created_at.desc(), JobPosting.id.desc())
    )
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def list_job_postings_by_recruiter(db: Session, recruiter_id: int) -> list[JobPosting]:
    return (
        db.query(JobPosting)
        .filter(JobPosting.recruiter_id == recruiter_id)
        .order_by(JobPosting.created_at.desc(), JobPosting.id.desc())
        .all()
    )


# ----------------- Applications -----------------

def get_application(db: Session, application_id: int) -> Optional[Application]:
    return db.query(Application).filter(Application.id == application_id).first()


def get_application_by_candidate_and_job(
    db: Session, candidate_id: int, job_id: int
) -> Optional[Application]:
    return (
        db.query(Application)
        .filter(Application.candidate_id == candidate_id, Application.job_id == job_id)
        .first()
    )


def list_applications_by_candidate(db: Session, candidate_id: int) -> list[Application]:
    return db.query(Application).filter(Application.candidate_id == candidate_id).all()


def list_applications_by_job(db: Session, job_id: int) -> list[Application]:
    return db.query(Application).filter(Application.job_id == job_id).all()


def update_application(db: Session, application: Application, **fields) -> Application:
    for key, value in fields.items():
        setattr(application, key, value)
    db.commit()
    db.refresh(application)
    return application


# ----------------- Profiles -----------------

def get_candidate_profile(db: Session, user_id: int) -> Optional[CandidateProfile]:
    return db.query(CandidateProfile).filter(CandidateProfile.user_id == user_id).first()


def get_or_create_candidate_profile(db: Session, user_id: int) -> CandidateProfile:
    """Fetch a candidate's profile, creating an empty one on first access."""
    profile = get_candidate_profile(db, user_id)
    if profile is None:
        profile = CandidateProfile(
            user_id=user_id,
            skills=[],
            experience="",
            education="",
            resume_text="",
            ai_evaluation={},
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
    return profile


def update_candidate_profile(db: Session, profile: CandidateProfile, **fields) -> CandidateProfile:
    for key, value in fields.items():
        setattr(profile, key, value)
    db.commit()
    db.refresh(profile)
    return profile


def get_recruiter_profile(db: Session, user_id: int) -> Optional[RecruiterProfile]:
    return db.query(RecruiterProfile).filter(RecruiterProfile.user_id == user_id).first()
