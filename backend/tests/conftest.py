import json
import os

os.environ.setdefault("GOOGLE_API_KEY", "test-google-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("YOUTUBE_API_KEY", "")
os.environ.setdefault("FIREBASE_API_KEY", "test-firebase-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from resume_ia.api.deps import get_current_account
from resume_ia.core.config import settings
from resume_ia.db.session import get_db
from resume_ia.main import app
from resume_ia.models import Base
from resume_ia.services import flow_runner
from resume_ia.schemas.account import AccountOut

SAMPLE_QUIZ = {
    "questions": [
        {
            "id": "q1",
            "question_text": "Quelle est la capitale de la France ?",
            "options": [
                {"id": "q1a", "text": "Lyon"},
                {"id": "q1b", "text": "Paris"},
                {"id": "q1c", "text": "Marseille"},
            ],
            "correct_answer_id": "q1b",
            "explanation": "Paris est la capitale.",
        },
        {
            "id": "q2",
            "question_text": "Quel fleuve traverse Paris ?",
            "options": [
                {"id": "q2a", "text": "La Seine"},
                {"id": "q2b", "text": "La Loire"},
                {"id": "q2c", "text": "Le Rhône"},
                {"id": "q2d", "text": "La Garonne"},
            ],
            "correct_answer_id": "q2a",
        },
        {
            "id": "q3",
            "question_text": "Combien d'arrondissements compte Paris ?",
            "options": [
                {"id": "q3a", "text": "12"},
                {"id": "q3b", "text": "20"},
                {"id": "q3c", "text": "32"},
            ],
            "correct_answer_id": "q3b",
        },
    ]
}

SAMPLE_SHEET = {
    "summary": "Paris est la capitale de la France.\nElle est traversée par la Seine.",
    "key_points": ["Capitale de la France", "Traversée par la Seine", "20 arrondissements"],
    "qa_pairs": [
        {"question": "Quelle est la capitale ?", "answer": "Paris"},
        {"question": "Quel fleuve ?", "answer": "La Seine"},
        {"question": "Combien d'arrondissements ?", "answer": "20"},
    ],
}

SAMPLE_SUMMARY = (
    "Paris est la capitale de la France. Elle est traversée par la Seine. "
    "La ville compte vingt arrondissements et de nombreux monuments."
)

FRENCH_PARAGRAPH = "Paris est la capitale de la France et compte vingt arrondissements."


def default_responder(prompt: str, context: str) -> str:
    if "QCM" in prompt:
        return json.dumps(SAMPLE_QUIZ)
    if "revision sheet" in prompt:
        return json.dumps(SAMPLE_SHEET)
    if "professional translator" in prompt:
        text = context.split("Text to translate:\n", 1)[-1].strip()
        return json.dumps({"translated_text": f"[EN] {text}"})
    return json.dumps({"summary": SAMPLE_SUMMARY})


class FakeProvider:
    def __init__(self, responder=default_responder):
        self.responder = responder
        self.calls: list[dict] = []

    def generate(self, prompt: str, context: str, json_output: bool = False) -> str:
        self.calls.append({"prompt": prompt, "context": context, "json_output": json_output})
        return self.responder(prompt, context)


@pytest.fixture
def fake_llm(monkeypatch):
    provider = FakeProvider()
    monkeypatch.setattr(flow_runner, "get_provider", lambda: provider)
    return provider


@pytest.fixture
def no_fetch(monkeypatch):
    """Fail loudly if anything reaches the YouTube or Wikipedia fetchers."""
    from resume_ia.services import wikipedia, youtube

    def _boom(*args, **kwargs):
        raise AssertionError("unexpected network call")

    monkeypatch.setattr(youtube, "_http_client", _boom)
    monkeypatch.setattr(wikipedia, "_http_client", _boom)


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def account():
    return AccountOut(account_id="user-1", email="user@example.com", display_name="User", email_verified=True)


@pytest.fixture
def client(db_session, account, fake_llm, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "audio_dir", str(tmp_path / "audio"))

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_current_account] = lambda: account
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
