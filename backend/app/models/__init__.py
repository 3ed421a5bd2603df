from app.models.user import User
from app.models.candidate import CandidateProfile
from app.models.recruiter import RecruiterProfile
from app.models.job import JobPosting
from app.models.application import Application, ApplicationStatus

__all__ = [
    "User",
    "CandidateProfile",
    "RecruiterProfile",
    "JobPosting",
    "Application",
    "ApplicationStatus",
]
