import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.services import llm
from app.services.llm import LLMServiceError

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


JOB_PAYLOAD = {
    "title": "Backend Engineer",
    "company": "Acme Corp",
    "location": "Remote",
    "description": "Build Python APIs.",
    "salary": "$120k",
    "jobType": "Full-time",
    "department": "Engineering",
    "skills": ["Python", "FastAPI"],
}


class FakeLLM:
    """
    Stand-in for call_llm.

    Replies are looked up by a keyword of the system prompt; a reply that is
    an exception gets raised. Unmatched prompts raise LLMServiceError.
    """

    def __init__(self):
        self.replies: dict = {}
        self.calls: list[list[dict]] = []

    def __call__(self, messages, expect_json=True):
        self.calls.append(messages)
        system = " ".join(m["content"] for m in messages if m["role"] == "system")
        for keyword, reply in self.replies.items():
            if keyword in system:
                if isinstance(reply, Exception):
                    raise reply
                return reply
        raise LLMServiceError("no scripted reply")


@pytest.fixture(autouse=True)
def no_llm_key(monkeypatch):
    """Never reach the real provider from tests."""
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "")


@pytest.fixture()
def fake_llm(monkeypatch):
    fake = FakeLLM()
    monkeypatch.setattr(llm, "call_llm", fake)
    return fake


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client, username, role="candidate", **extra):
    """Register a user and return Bearer auth headers for them."""
    payload = {
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
        "fullName": username.title(),
        "role": role,
        **extra,
    }
    response = client.post("/api/register", json=payload)
    assert response.status_code == 201, response.text
    client.cookies.clear()

    login = client.post("/api/login", json={"username": username, "password": "secret123"})
    assert login.status_code == 200, login.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {login.json()['accessToken']}"}


@pytest.fixture()
def recruiter(client):
    return register(client, "recruiter", role="recruiter", company="Acme Corp", position="Talent Lead")


@pytest.fixture()
def other_recruiter(client):
    return register(client, "otherrecruiter", role="recruiter")


@pytest.fixture()
def candidate(client):
    return register(client, "candidate")


@pytest.fixture()
def job(client, recruiter):
    response = client.post("/api/jobs", json=JOB_PAYLOAD, headers=recruiter)
    assert response.status_code == 201, response.text
    return response.json()
