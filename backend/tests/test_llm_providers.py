import httpx
import pytest
from fastapi.testclient import TestClient
from resume_ia.core.config import settings
from resume_ia.core.errors import ConfigurationError, ModelClientError
from resume_ia.main import app
from resume_ia.services import llm_providers
from resume_ia.services.llm_providers import OpenAIProvider, get_provider


@pytest.fixture(autouse=True)
def _fresh_provider_cache():
    get_provider.cache_clear()
    yield
    get_provider.cache_clear()


def test_gemini_requires_key(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "gemini")
    monkeypatch.setattr(settings, "google_api_key", None)
    with pytest.raises(ConfigurationError) as excinfo:
        get_provider()
    assert "GOOGLE_API_KEY" in excinfo.value.message


def test_unknown_provider(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "mistral")
    with pytest.raises(ConfigurationError):
        get_provider()


def test_openai_provider_json_mode(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "openai")
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    seen = {}

    def handler(request):
        seen["body"] = request.read()
        return httpx.Response(200, json={"choices": [{"message": {"content": ' {"summary": "ok"} '}}]})

    transport = httpx.MockTransport(handler)
    real_client = httpx.Client
    monkeypatch.setattr(llm_providers.httpx, "Client", lambda **kwargs: real_client(transport=transport))

    provider = get_provider()
    assert isinstance(provider, OpenAIProvider)
    assert provider.generate("système", "contexte", json_output=True) == '{"summary": "ok"}'
    assert b"json_object" in seen["body"]


def test_openai_http_error_becomes_model_client_error(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    real_client = httpx.Client
    monkeypatch.setattr(llm_providers.httpx, "Client", lambda **kwargs: real_client(transport=transport))
    with pytest.raises(ModelClientError):
        OpenAIProvider().generate("système", "contexte")


def test_app_refuses_to_start_without_model_key(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "gemini")
    monkeypatch.setattr(settings, "google_api_key", None)
    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass


def test_app_starts_with_model_key(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "gemini")
    monkeypatch.setattr(settings, "google_api_key", "test-google-key")
    monkeypatch.setattr(settings, "auto_create_tables", False)
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
