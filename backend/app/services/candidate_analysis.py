"""
Candidate Analysis Service.

Glues the resume parser and evaluation prompts to stored profiles and
applications. AI failures never propagate out of these functions, and a
failed AI call never overwrites previously stored AI fields.
"""

import json
from typing import Optional

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.db import crud
from app.models import Application, CandidateProfile, JobPosting
from app.services.evaluation import (
    analyze_candidate_comprehensive,
    analyze_candidate_job_match,
    analyze_candidate_profile,
    compare_job_fit,
    fallback_comprehensive_analysis,
    fallback_job_fit,
)
from app.services.llm import LLMServiceError
from app.services.resume_parser import (
    empty_parsed_resume,
    extract_skills_from_resume,
    generate_candidate_summary,
    parse_resume,
)

logger = get_logger("candidate_analysis")


def process_resume(db: Session, user_id: int, resume_text: str) -> tuple[CandidateProfile, dict]:
    """
    Parse a resume and write the structured data onto the candidate profile.

    The resume text is always saved. Structured fields (parsed resume, skills,
    summary, ...) are only replaced when parsing succeeds.

    Returns:
        (updated profile, parsed resume). The parsed resume is an empty
        structure when the AI call failed.
    """
    profile = crud.get_or_create_candidate_profile(db, user_id)
    logger.info(f"Processing resume for user {user_id} ({len(resume_text)} chars)")

    try:
        parsed = parse_resume(resume_text, fail_open=False)
    except LLMServiceError:
        logger.warning(f"Resume for user {user_id} saved without structured data")
        profile = crud.update_candidate_profile(db, profile, resume_text=resume_text)
        return profile, empty_parsed_resume()

    skills = extract_skills_from_resume(resume_text) or parsed["skills"]["technical"]
    summary = parsed.get("summary")
    if not summary:
        try:
            summary = generate_candidate_summary(resume_text, fail_open=False)
        except LLMServiceError:
            summary = profile.summary

    profile = crud.update_candidate_profile(
        db,
        profile,
        resume_text=resume_text,
        skills=skills,
        education=json.dumps(parsed["education"]),
        experience=json.dumps(parsed["experience"]),
        parsed_resume=parsed,
        contact_info=parsed["contactInfo"],
        detailed_experience=parsed["experience"],
        detailed_education=parsed["education"],
        detailed_skills=parsed["skills"],
        projects=parsed["projects"],
        summary=summary,
    )
    logger.info(f"Resume processed for user {user_id}: {len(skills)} skills found")
    return profile, parsed


def refresh_profile_evaluation(db: Session, profile: CandidateProfile) -> CandidateProfile:
    """
    Re-run the AI profile assessment when the profile has a resume and skills.

    Keeps the previous evaluation if the AI call fails.
    """
    if not profile.resume_text or not profile.skills:
        return profile

    try:
        assessment = analyze_candidate_profile(profile.resume_text, profile.skills, fail_open=False)
    except LLMServiceError:
        logger.warning(f"Keeping previous AI evaluation for user {profile.user_id}")
        return profile

    return crud.update_candidate_profile(db, profile, ai_evaluation=assessment)


def _stored_parsed_resume(profile: CandidateProfile) -> dict:
    """Use the stored parse when available, otherwise parse the resume text now."""
    if isinstance(profile.parsed_resume, dict) and profile.parsed_resume:
        return profile.parsed_resume
    if profile.resume_text:
        return parse_resume(profile.resume_text)
    return empty_parsed_resume()


def analyze_candidate(db: Session, profile: CandidateProfile) -> dict:
    """
    Comprehensive analysis of a candidate, stored as the profile's ai_evaluation.

    On AI failure the placeholder analysis is returned but not stored.
    """
    parsed = _stored_parsed_resume(profile)
    try:
        analysis = analyze_candidate_comprehensive(parsed, fail_open=False)
    except LLMServiceError:
        return fallback_comprehensive_analysis()

    crud.update_candidate_profile(db, profile, ai_evaluation=analysis)
    return analysis


def analyze_candidate_job_fit(
    db: Session, profile: Optional[CandidateProfile], candidate_id: int, job: JobPosting
) -> dict:
    """
    Compare a candidate with a job posting.

    When the candidate has applied to the job, the application's AI score and
    notes are updated with the result.
    """
    parsed = _stored_parsed_resume(profile) if profile else empty_parsed_resume()

    try:
        fit = compare_job_fit(parsed, job.title, job.description, job.skills or [], fail_open=False)
    except LLMServiceError:
        return fallback_job_fit()

    application = crud.get_application_by_candidate_and_job(db, candidate_id, job.id)
    if application is not None:
        crud.update_application(db, application, ai_score=fit["score"], ai_notes=json.dumps(fit))
    return fit


def score_application(
    db: Session, application: Application, profile: Optional[CandidateProfile], job: JobPosting
) -> Application:
    """
    Best-effort AI match scoring for a new application.

    Skipped when the candidate has no resume text or skills; on AI failure the
    application is returned unscored.
    """
    if profile is None or not profile.resume_text or not profile.skills:
        return application

    try:
        match = analyze_candidate_job_match(
            profile.resume_text,
            profile.skills,
            job.title,
            job.description,
            job.skills or [],
            fail_open=False,
        )
    except LLMServiceError:
        logger.warning(f"Application {application.id} left unscored")
        return application

    return crud.update_application(db, application, ai_score=match["score"], ai_notes=match["feedback"])
