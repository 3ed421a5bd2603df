"""
Resume Parser Service.

Turns free-text resumes into structured data using the LLM:
contact info, education, experience, skills, projects and a summary.
"""

from typing import Any

from app.core.logging import get_logger
from app.services import llm
from app.services.llm import LLMServiceError, as_text

logger = get_logger("resume_parser")

SKILL_CATEGORIES = ("technical", "soft", "languages", "certifications")


def empty_parsed_resume() -> dict:
    """Minimal structurally-valid parsed resume, used when parsing fails."""
    return {
        "contactInfo": {"name": "", "email": ""},
        "education": [],
        "experience": [],
        "skills": {category: [] for category in SKILL_CATEGORIES},
        "projects": [],
        "summary": "",
    }


def _normalize_skills(raw: Any) -> dict:
    skills = {category: [] for category in SKILL_CATEGORIES}
    if isinstance(raw, dict):
        for category in SKILL_CATEGORIES:
            values = raw.get(category) or []
            if isinstance(values, list):
                skills[category] = [str(v) for v in values if v]
    elif isinstance(raw, list):
        skills["technical"] = [str(v) for v in raw if v]
    return skills


def parse_resume(resume_text: str, fail_open: bool = True) -> dict:
    """
    Parse resume text into structured sections.

    Args:
        resume_text: Raw resume text
        fail_open: Return an empty structure instead of raising on AI failure

    Returns:
        {"contactInfo", "education", "experience", "skills", "projects", "summary"}
    """
    messages = [
        {
            "role": "system",
            "content": (
                "You are an AI resume parser. Extract structured information from the resume text provided. "
                "Include contact information, education history, work experience, skills (technical and soft), "
                "projects, and a summary if available. Format the response as a JSON object with the fields "
                "contactInfo, education, experience, skills (technical, soft, languages, certifications), "
                "projects and summary. Be thorough but do not invent information that is not present in the resume."
            ),
        },
        {
            "role": "user",
            "content": f"Parse the following resume and extract structured information:\n\n{resume_text}",
        },
    ]

    try:
        result = llm.call_llm(messages)
        if not isinstance(result, dict):
            raise LLMServiceError("Parsed resume is not a JSON object")
    except LLMServiceError as e:
        logger.warning(f"Resume parsing failed, using empty structure: {e}")
        if not fail_open:
            raise
        return empty_parsed_resume()

    parsed = empty_parsed_resume()
    contact_info = result.get("contactInfo")
    if isinstance(contact_info, dict):
        parsed["contactInfo"] = {
            **contact_info,
            "name": as_text(contact_info.get("name")),
            "email": as_text(contact_info.get("email")),
        }
    for section in ("education", "experience", "projects"):
        if isinstance(result.get(section), list):
            parsed[section] = result[section]
    parsed["skills"] = _normalize_skills(result.get("skills"))
    parsed["summary"] = as_text(result.get("summary"))
    return parsed


def extract_skills_from_resume(resume_text: str) -> list[str]:
    """
    Extract a flat list of skills mentioned in a resume.

    Accepts either a bare JSON array or {"skills": [...]} from the model.
    Returns an empty list on failure.
    """
    messages = [
        {
            "role": "system",
            "content": (
                "You are an AI skills extractor. Analyze the resume text and identify all technical skills, "
                "tools, programming languages, frameworks, and technologies mentioned. Return a JSON object "
                "of the form {\"skills\": [...]}. Be comprehensive but do not invent skills not mentioned in the text."
            ),
        },
        {
            "role": "user",
            "content": f"Extract all technical and professional skills from this resume:\n\n{resume_text}",
        },
    ]

    try:
        result = llm.call_llm(messages)
    except LLMServiceError as e:
        logger.warning(f"Skill extraction failed: {e}")
        return []

    if isinstance(result, dict):
        result = result.get("skills")
    if not isinstance(result, list):
        return []

    # Keep first occurrence order, drop duplicates
    seen: set[str] = set()
    skills: list[str] = []
    for skill in result:
        name = str(skill).strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            skills.append(name)
    return skills


def generate_candidate_summary(resume_text: str, fail_open: bool = True) -> str:
    """Generate a short professional summary of a resume (plain text)."""
    messages = [
        {
            "role": "system",
            "content": (
                "You are an AI resume summarizer. Create a concise professional summary based on the resume provided. "
                "Highlight key qualifications, experience, and skills in 2-3 paragraphs. Use professional language and "
                "focus on the most impressive and relevant aspects of the candidate's background."
            ),
        },
        {
            "role": "user",
            "content": f"Generate a professional summary based on this resume:\n\n{resume_text}",
        },
    ]

    try:
        return llm.call_llm(messages, expect_json=False)
    except LLMServiceError as e:
        logger.warning(f"Summary generation failed: {e}")
        if not fail_open:
            raise
        return "Unable to generate summary due to an error."
