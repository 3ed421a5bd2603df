from app.services.llm import LLMServiceError, call_llm
from app.services.resume_parser import (
    parse_resume,
    extract_skills_from_resume,
    generate_candidate_summary,
    empty_parsed_resume,
)
from app.services.evaluation import (
    analyze_candidate_profile,
    analyze_candidate_job_match,
    analyze_candidate_comprehensive,
    compare_job_fit,
    get_career_recommendations,
)

__all__ = [
    "LLMServiceError",
    "call_llm",
    "parse_resume",
    "extract_skills_from_resume",
    "generate_candidate_summary",
    "empty_parsed_resume",
    "analyze_candidate_profile",
    "analyze_candidate_job_match",
    "analyze_candidate_comprehensive",
    "compare_job_fit",
    "get_career_recommendations",
]
