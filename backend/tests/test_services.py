from datetime import timezone

import pytest

from app.core.config import settings
from app.db.base import utcnow
from app.services import evaluation, llm, resume_parser
from app.services.llm import LLMServiceError, as_text, as_text_list, clamp_score


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    """Records construction and returns a canned reply."""

    instances: list = []
    reply = "{}"

    def __init__(self, model_name, system_instruction=None, generation_config=None):
        self.model_name = model_name
        self.system_instruction = system_instruction
        self.generation_config = generation_config
        self.contents = None
        FakeModel.instances.append(self)

    def generate_content(self, contents, request_options=None):
        self.contents = contents
        if isinstance(FakeModel.reply, Exception):
            raise FakeModel.reply
        return FakeResponse(FakeModel.reply)


@pytest.fixture()
def gemini(monkeypatch):
    FakeModel.instances = []
    FakeModel.reply = "{}"
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(llm.genai, "configure", lambda api_key: None)
    monkeypatch.setattr(llm.genai, "GenerativeModel", FakeModel)
    return FakeModel


def test_call_llm_without_key_raises():
    with pytest.raises(LLMServiceError):
        llm.call_llm([{"role": "user", "content": "hi"}])


def test_call_llm_maps_roles_and_decodes_json(gemini):
    gemini.reply = '{"score": 42}'

    result = llm.call_llm([
        {"role": "system", "content": "Be terse."},
        {"role": "user", "content": "Rate me"},
        {"role": "assistant", "content": "Sure"},
    ])

    assert result == {"score": 42}
    model = gemini.instances[0]
    assert model.system_instruction == "Be terse."
    assert model.generation_config == {"response_mime_type": "application/json"}
    assert [c["role"] for c in model.contents] == ["user", "model"]


def test_call_llm_invalid_json(gemini):
    gemini.reply = "not json"
    with pytest.raises(LLMServiceError):
        llm.call_llm([{"role": "user", "content": "hi"}])


def test_call_llm_transport_error(gemini):
    gemini.reply = ConnectionError("boom")
    with pytest.raises(LLMServiceError):
        llm.call_llm([{"role": "user", "content": "hi"}])


def test_call_llm_text_mode(gemini):
    gemini.reply = "  A fine summary.  "
    assert llm.call_llm([{"role": "user", "content": "hi"}], expect_json=False) == "A fine summary."
    assert gemini.instances[0].generation_config is None


@pytest.mark.parametrize("raw, expected", [(55, 55), ("87.6", 88), (-3, 0), (250, 100), (None, 0), ("n/a", 0)])
def test_clamp_score(raw, expected):
    assert clamp_score(raw) == expected


def test_parse_resume_fills_missing_sections(fake_llm):
    fake_llm.replies["resume parser"] = {
        "contactInfo": {"name": None, "email": "a@b.co"},
        "skills": ["Python"],
        "experience": "not a list",
    }

    parsed = resume_parser.parse_resume("resume")

    assert parsed["contactInfo"] == {"name": "", "email": "a@b.co"}
    assert parsed["skills"]["technical"] == ["Python"]
    assert parsed["skills"]["certifications"] == []
    assert parsed["experience"] == []
    assert parsed["summary"] == ""


def test_parse_resume_fail_closed_raises(fake_llm):
    with pytest.raises(LLMServiceError):
        resume_parser.parse_resume("resume", fail_open=False)


def test_extract_skills_accepts_bare_list(fake_llm):
    fake_llm.replies["skills extractor"] = ["Go", " Rust ", "go", ""]
    assert resume_parser.extract_skills_from_resume("resume") == ["Go", "Rust"]


def test_extract_skills_failure_returns_empty(fake_llm):
    assert resume_parser.extract_skills_from_resume("resume") == []


def test_job_match_defaults(fake_llm):
    fake_llm.replies["professional AI recruiter"] = {"skillsAnalysis": {"Python": "90"}}

    match = evaluation.analyze_candidate_job_match("r", ["Python"], "Dev", "desc", ["Python"])

    assert match == {
        "score": 50,
        "feedback": "",
        "skillsAnalysis": {"Python": 90},
        "jobFitReasoning": "",
    }


def test_evaluation_fallbacks_have_zero_scores(fake_llm):
    assert evaluation.analyze_candidate_profile("r", ["Python"])["score"] == 0
    assert evaluation.analyze_candidate_job_match("r", [], "Dev", "d", [])["score"] == 0
    assert evaluation.compare_job_fit({}, "Dev", "d", [])["score"] == 0
    assert evaluation.analyze_candidate_comprehensive({})["overallScore"] == 0


def test_non_object_reply_is_a_failure(fake_llm):
    fake_llm.replies["career advisor"] = ["just", "a", "list"]

    with pytest.raises(LLMServiceError):
        evaluation.get_career_recommendations("r", ["Python"], fail_open=False)


@pytest.mark.parametrize(
    "raw, expected",
    [("ok", "ok"), (None, ""), ("", ""), (7, "7"), ({"text": "good"}, '{"text": "good"}'), (["a", "b"], '["a", "b"]')],
)
def test_as_text(raw, expected):
    assert as_text(raw) == expected


def test_as_text_list():
    assert as_text_list(["Go", {"title": "AWS"}, None, 3]) == ["Go", '{"title": "AWS"}', "3"]
    assert as_text_list("not a list") == []


def test_profile_assessment_coerces_text_fields(fake_llm):
    fake_llm.replies["professional AI talent evaluator"] = {
        "score": 70,
        "strengths": [{"area": "Python"}],
        "weaknesses": "none",
        "overallFeedback": {"text": "good"},
        "skillsMatch": [{"skill": 5, "score": 80}, "junk"],
    }

    assessment = evaluation.analyze_candidate_profile("r", ["Python"])

    assert assessment["strengths"] == ['{"area": "Python"}']
    assert assessment["weaknesses"] == []
    assert assessment["overallFeedback"] == '{"text": "good"}'
    assert assessment["skillsMatch"] == [{"skill": "5", "score": 80}]


def test_job_match_coerces_text_fields(fake_llm):
    fake_llm.replies["professional AI recruiter"] = {
        "score": 80,
        "feedback": ["Good", "fit"],
        "jobFitReasoning": 3,
    }

    match = evaluation.analyze_candidate_job_match("r", ["Python"], "Dev", "desc", ["Python"])

    assert match["feedback"] == '["Good", "fit"]'
    assert match["jobFitReasoning"] == "3"


def test_comprehensive_analysis_coerces_lists(fake_llm):
    fake_llm.replies["expertise in analyzing professional backgrounds"] = {
        "overallScore": 64,
        "careerRecommendations": [{"title": "Learn Kubernetes"}],
        "developmentPlan": {"shortTerm": [1], "longTerm": "later"},
    }

    analysis = evaluation.analyze_candidate_comprehensive({})

    assert analysis["careerRecommendations"] == ['{"title": "Learn Kubernetes"}']
    assert analysis["developmentPlan"] == {"shortTerm": ["1"], "longTerm": []}


def test_summary_failure(fake_llm):
    assert resume_parser.generate_candidate_summary("resume") == "Unable to generate summary due to an error."
    with pytest.raises(LLMServiceError):
        resume_parser.generate_candidate_summary("resume", fail_open=False)


def test_column_timestamps_are_timezone_aware():
    assert utcnow().tzinfo is timezone.utc
