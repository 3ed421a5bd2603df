"""
TalentMatch Database Seeder

Creates test users and data:
- Recruiter Sarah Chen (Acme Corp) with three job postings, one inactive
- Candidate John Doe with a filled-in profile and one application
"""

import sys
sys.path.insert(0, ".")

from app.db.session import SessionLocal, engine
from app.db.base import Base
from app.models import Application, CandidateProfile, JobPosting, RecruiterProfile, User
from app.core.security import get_password_hash

JOHN_RESUME = """John Doe
john.doe@example.com | San Francisco, CA

SUMMARY
Backend engineer with 4 years of experience building Python web services.

EXPERIENCE
Software Engineer, DataFlow Inc (2021 - present)
- Built FastAPI microservices handling 2M requests/day
- Migrated reporting jobs from cron scripts to Celery

EDUCATION
B.S. Computer Science, UC Davis (2020)

SKILLS
Python, FastAPI, PostgreSQL, Docker, React
"""


def seed_database():
    """Seed the database with test data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        existing_recruiter = db.query(User).filter(User.username == "sarah.chen").first()
        if existing_recruiter:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Create Recruiter User + profile
        recruiter = User(
            username="sarah.chen",
            email="recruiter@talentmatch.dev",
            hashed_password=get_password_hash("recruiter123"),
            full_name="Sarah Chen",
            role="recruiter",
        )
        db.add(recruiter)
        db.flush()  # Get IDs

        db.add(RecruiterProfile(
            user_id=recruiter.id,
            company="Acme Corp",
            position="Technical Recruiter",
        ))

        # 2. Job postings
        backend_job = JobPosting(
            title="Senior Backend Engineer",
            company="Acme Corp",
            location="Remote",
            description="Design and operate Python services powering our hiring platform.",
            salary="$150k - $180k",
            job_type="Full-time",
            department="Engineering",
            skills=["Python", "FastAPI", "PostgreSQL", "Docker"],
            recruiter_id=recruiter.id,
        )
        frontend_job = JobPosting(
            title="Frontend Developer",
            company="Acme Corp",
            location="New York, NY",
            description="Build candidate and recruiter dashboards in React.",
            job_type="Full-time",
            department="Engineering",
            skills=["React", "TypeScript", "CSS"],
            recruiter_id=recruiter.id,
        )
        closed_job = JobPosting(
            title="Data Analyst (Contract)",
            company="Acme Corp",
            location="Austin, TX",
            description="Six month contract analysing hiring funnel metrics.",
            salary="$60/hr",
            job_type="Contract",
            department="Analytics",
            skills=["SQL", "Python", "Tableau"],
            recruiter_id=recruiter.id,
            is_active=False,
        )
        db.add_all([backend_job, frontend_job, closed_job])
        db.flush()

        # 3. Candidate User - John Doe
        john_user = User(
            username="john.doe",
            email="john.doe@example.com",
            hashed_password=get_password_hash("candidate123"),
            full_name="John Doe",
            role="candidate",
        )
        db.add(john_user)
        db.flush()

        # 4. John Doe's Candidate Profile
        db.add(CandidateProfile(
            user_id=john_user.id,
            skills=["Python", "FastAPI", "PostgreSQL", "Docker", "React"],
            experience="4 years backend engineering at DataFlow Inc",
            education="B.S. Computer Science, UC Davis",
            resume_text=JOHN_RESUME,
            ai_evaluation={},
        ))

        # 5. John applied to the backend role, already under review
        db.add(Application(
            candidate_id=john_user.id,
            job_id=backend_job.id,
            status="under_review",
            ai_score=82,
            ai_notes="Strong Python and FastAPI background; limited people-management experience.",
        ))

        db.commit()

        print("Database seeded successfully!")
        print("\nTest Accounts:")
        print("  Recruiter: sarah.chen / recruiter123")
        print("  Candidate: john.doe / candidate123")

    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
