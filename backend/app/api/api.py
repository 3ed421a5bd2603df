"""
API Router Aggregator.

Combines all routers into a single router mounted under /api.
"""

from fastapi import APIRouter

from app.api.routes import applications, auth, candidate, jobs, recruiter

api_router = APIRouter()

# Include all routers with their prefixes and tags
api_router.include_router(
    auth.router,
    tags=["Authentication"],
)

api_router.include_router(
    jobs.router,
    tags=["Jobs"],
)

api_router.include_router(
    applications.router,
    tags=["Applications"],
)

api_router.include_router(
    candidate.router,
    prefix="/candidate",
    tags=["Candidate"],
)

api_router.include_router(
    recruiter.router,
    prefix="/recruiter",
    tags=["Recruiter"],
)
