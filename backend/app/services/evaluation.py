"""
Candidate Evaluation Service.

Prompt templates for scoring candidates with the LLM:
- profile assessment against the general job market
- match score against a specific job posting
- career recommendations
- comprehensive analysis of a parsed resume
- detailed job-fit comparison

Each function fills missing fields with defaults. With fail_open (the
default) an AI failure returns a zero-score placeholder result instead of
raising LLMServiceError.
"""

import json
from typing import Optional

from app.core.logging import get_logger
from app.services import llm
from app.services.llm import LLMServiceError, as_text, as_text_list, clamp_score

logger = get_logger("evaluation")

AI_ERROR_MESSAGE = "Unable to generate feedback due to an error with the AI service."


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _request(messages: list[dict], fail_open: bool, label: str) -> Optional[dict]:
    """Run an evaluation prompt. Returns None when falling back to defaults."""
    try:
        result = llm.call_llm(messages)
        if not isinstance(result, dict):
            raise LLMServiceError(f"{label} reply is not a JSON object")
        return result
    except LLMServiceError as e:
        logger.warning(f"{label} failed: {e}")
        if not fail_open:
            raise
        return None


# ============== Profile Assessment ==============


def analyze_candidate_profile(resume_text: str, skills: list[str], fail_open: bool = True) -> dict:
    """
    Evaluate a candidate's resume and skills against the overall job market.

    Returns:
        {"score", "strengths", "weaknesses", "developmentAreas",
         "overallFeedback", "skillsMatch": [{"skill", "score"}]}
    """
    result = _request(
        [
            {
                "role": "system",
                "content": (
                    "You are a professional AI talent evaluator. Analyze the candidate resume and skills, then provide "
                    "a comprehensive evaluation. Consider technical skills, experience, education, and other relevant "
                    "factors. Rate the candidate on a scale of 0-100 and identify strengths, weaknesses, and areas for "
                    "development. Format your response as JSON with the following structure: "
                    "{\"score\": number, \"strengths\": [string], \"weaknesses\": [string], "
                    "\"developmentAreas\": [string], \"overallFeedback\": string, "
                    "\"skillsMatch\": [{\"skill\": string, \"score\": number}]}"
                ),
            },
            {
                "role": "user",
                "content": f"Please evaluate this candidate profile:\n\nResume: {resume_text}\n\nSkills: {', '.join(skills)}",
            },
        ],
        fail_open,
        "Profile assessment",
    )

    if result is None:
        return {
            "score": 0,
            "strengths": [],
            "weaknesses": [],
            "developmentAreas": [],
            "overallFeedback": AI_ERROR_MESSAGE,
            "skillsMatch": [],
        }

    skills_match = [
        {"skill": as_text(item.get("skill")), "score": clamp_score(item.get("score"))}
        for item in _as_list(result.get("skillsMatch"))
        if isinstance(item, dict)
    ]
    return {
        "score": clamp_score(result.get("score"), default=75),
        "strengths": as_text_list(result.get("strengths")),
        "weaknesses": as_text_list(result.get("weaknesses")),
        "developmentAreas": as_text_list(result.get("developmentAreas")),
        "overallFeedback": as_text(result.get("overallFeedback")),
        "skillsMatch": skills_match,
    }


# ============== Job Matching ==============


def analyze_candidate_job_match(
    resume_text: str,
    candidate_skills: list[str],
    job_title: str,
    job_description: str,
    job_skills: list[str],
    fail_open: bool = True,
) -> dict:
    """
    Score a candidate against a specific job posting.

    Returns:
        {"score", "feedback", "skillsAnalysis": {skill: score}, "jobFitReasoning"}
    """
    result = _request(
        [
            {
                "role": "system",
                "content": (
                    "You are a professional AI recruiter. Analyze the candidate's resume and skills against the job "
                    "requirements. Provide a match score (0-100), detailed feedback, and a skills analysis. "
                    "Format your response as JSON with the following structure: "
                    "{\"score\": number, \"feedback\": string, \"skillsAnalysis\": {\"skill1\": score1, ...}, "
                    "\"jobFitReasoning\": string}"
                ),
            },
            {
                "role": "user",
                "content": (
                    f"Candidate Resume: {resume_text}\n\n"
                    f"Candidate Skills: {', '.join(candidate_skills)}\n\n"
                    f"Job Title: {job_title}\n\n"
                    f"Job Description: {job_description}\n\n"
                    f"Job Skills Required: {', '.join(job_skills)}"
                ),
            },
        ],
        fail_open,
        "Job match",
    )

    if result is None:
        return {
            "score": 0,
            "feedback": AI_ERROR_MESSAGE,
            "skillsAnalysis": {},
            "jobFitReasoning": "Unable to analyze job fit due to an error with the AI service.",
        }

    skills_analysis = result.get("skillsAnalysis")
    if not isinstance(skills_analysis, dict):
        skills_analysis = {}
    return {
        "score": clamp_score(result.get("score"), default=50),
        "feedback": as_text(result.get("feedback")),
        "skillsAnalysis": {str(k): clamp_score(v) for k, v in skills_analysis.items()},
        "jobFitReasoning": as_text(result.get("jobFitReasoning")),
    }


def fallback_job_fit() -> dict:
    return {
        "score": 0,
        "analysis": "Error occurred during analysis",
        "strengths": [],
        "gaps": [],
        "recommendation": "Unable to provide recommendation due to error",
    }


def compare_job_fit(
    parsed_resume: dict,
    job_title: str,
    job_description: str,
    required_skills: list[str],
    fail_open: bool = True,
) -> dict:
    """
    Compare a parsed resume with a job description.

    Returns:
        {"score", "analysis", "strengths", "gaps", "recommendation"}
    """
    result = _request(
        [
            {
                "role": "system",
                "content": (
                    "You are an AI recruitment specialist. Compare a candidate's resume with a job description "
                    "and evaluate how well they match. Provide a match score (0-100), detailed analysis, "
                    "strengths, skill gaps, and a hiring recommendation. Format your response as a JSON object "
                    "with the fields score, analysis, strengths, gaps and recommendation."
                ),
            },
            {
                "role": "user",
                "content": (
                    f"Candidate Resume: {json.dumps(parsed_resume, indent=2)}\n\n"
                    f"Job Title: {job_title}\n\n"
                    f"Job Description: {job_description}\n\n"
                    f"Required Skills: {', '.join(required_skills)}"
                ),
            },
        ],
        fail_open,
        "Job fit comparison",
    )

    if result is None:
        return fallback_job_fit()

    return {
        "score": clamp_score(result.get("score"), default=50),
        "analysis": as_text(result.get("analysis"), "No analysis available"),
        "strengths": as_text_list(result.get("strengths")),
        "gaps": as_text_list(result.get("gaps")),
        "recommendation": as_text(result.get("recommendation"), "No recommendation available"),
    }


# ============== Career Guidance ==============


def get_career_recommendations(resume_text: str, skills: list[str], fail_open: bool = True) -> dict:
    """Suggest skills, certifications and career paths for a candidate."""
    result = _request(
        [
            {
                "role": "system",
                "content": (
                    "You are a career advisor AI. Based on the candidate's resume and skills, suggest career "
                    "development recommendations. Focus on skills to develop, certifications to pursue, and career "
                    "paths that would be beneficial. Format your response as JSON with the following structure: "
                    "{\"recommendations\": [\"recommendation1\", \"recommendation2\", ...], "
                    "\"explanation\": \"detailed explanation\"}"
                ),
            },
            {
                "role": "user",
                "content": f"Resume: {resume_text}\n\nSkills: {', '.join(skills)}",
            },
        ],
        fail_open,
        "Career recommendations",
    )

    if result is None:
        return {
            "recommendations": ["Unable to generate recommendations due to an error with the AI service."],
            "explanation": "An error occurred when attempting to analyze your profile.",
        }

    return {
        "recommendations": as_text_list(result.get("recommendations")),
        "explanation": as_text(result.get("explanation")),
    }


def _default_candidate_assessment(score: int, note: str) -> dict:
    return {
        "professionalBackground": {
            "score": score,
            "strengths": [],
            "weaknesses": [],
            "experience": note,
        },
        "skills": {
            "technical": {"score": score, "strengths": [], "gaps": []},
            "soft": {"score": score, "strengths": [], "areas_for_improvement": []},
        },
        "education": {"score": score, "relevance": note, "notes": note},
    }


def fallback_comprehensive_analysis() -> dict:
    return {
        "overallScore": 0,
        "candidateAssessment": _default_candidate_assessment(0, "Error analyzing resume data"),
        "careerRecommendations": ["Unable to generate recommendations due to an error"],
        "developmentPlan": {"shortTerm": ["Try again later"], "longTerm": ["Try again later"]},
    }


def analyze_candidate_comprehensive(parsed_resume: dict, fail_open: bool = True) -> dict:
    """
    Full candidate assessment built from a parsed resume.

    Returns:
        {"overallScore", "candidateAssessment", "careerRecommendations", "developmentPlan"}
    """
    result = _request(
        [
            {
                "role": "system",
                "content": (
                    "You are an AI talent evaluator with expertise in analyzing professional backgrounds. "
                    "Provide a comprehensive candidate assessment based on their resume data. Consider technical "
                    "skills, experience, education and communication. Identify strengths, weaknesses and gaps. "
                    "Recommend career development paths and provide both short-term and long-term development plans. "
                    "Format your response as a JSON object with the fields overallScore, candidateAssessment "
                    "(professionalBackground, skills.technical, skills.soft, education), careerRecommendations and "
                    "developmentPlan (shortTerm, longTerm)."
                ),
            },
            {
                "role": "user",
                "content": f"Analyze this candidate's information:\n\n{json.dumps({'resume': parsed_resume}, indent=2)}",
            },
        ],
        fail_open,
        "Comprehensive analysis",
    )

    if result is None:
        return fallback_comprehensive_analysis()

    assessment = result.get("candidateAssessment")
    if not isinstance(assessment, dict):
        assessment = _default_candidate_assessment(50, "No data available")
    plan = result.get("developmentPlan")
    if not isinstance(plan, dict):
        plan = {"shortTerm": [], "longTerm": []}

    return {
        "overallScore": clamp_score(result.get("overallScore"), default=50),
        "candidateAssessment": assessment,
        "careerRecommendations": as_text_list(result.get("careerRecommendations")),
        "developmentPlan": {
            "shortTerm": as_text_list(plan.get("shortTerm")),
            "longTerm": as_text_list(plan.get("longTerm")),
        },
    }
