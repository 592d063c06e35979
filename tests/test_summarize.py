import pytest

from memoapp.main import app
from memoapp.summarize import service
from memoapp.summarize.api import get_summarizer


class _FakeResponse:
    def __init__(self, text):
        self.text = text


class _FakeModels:
    def generate_content(self, model, contents):
        _FakeGemini.calls.append((model, contents))
        if _FakeGemini.error:
            raise _FakeGemini.error
        return _FakeResponse("line one\nline two")


class _FakeGemini:
    calls: list[tuple[str, str]] = []
    error: Exception | None = None

    def __init__(self, api_key):
        self.api_key = api_key
        self.models = _FakeModels()


@pytest.fixture
def gemini(monkeypatch):
    """Route the real summarizer through a fake Gemini client."""
    _FakeGemini.calls = []
    _FakeGemini.error = None
    monkeypatch.setattr(service.genai, "Client", _FakeGemini)
    app.dependency_overrides.pop(get_summarizer, None)
    return _FakeGemini


def test_summarize_returns_summary(client, summarizer):
    r = client.post("/api/summarize", json={"content": "# Groceries\n- milk\n- eggs"})
    assert r.status_code == 200
    assert r.json()["summary"] == "- short summary"
    assert summarizer.calls == ["# Groceries\n- milk\n- eggs"]


@pytest.mark.parametrize("body", [{}, {"content": ""}, {"content": None}])
def test_summarize_requires_content(client, summarizer, body):
    r = client.post("/api/summarize", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Content is required"}
    assert summarizer.calls == []


def test_summarize_without_body(client):
    r = client.post("/api/summarize")
    assert r.status_code == 400
    assert r.json()["error"] == "Content is required"


def test_summarize_malformed_json(client):
    r = client.post("/api/summarize", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"]


def test_summarize_without_credential(client, settings, gemini):
    settings.GEMINI_API_KEY = None
    r = client.post("/api/summarize", json={"content": "hello"})
    assert r.status_code == 500
    assert r.json() == {"error": "GEMINI_API_KEY is not configured"}
    assert gemini.calls == []


def test_summarize_through_gemini(client, gemini):
    r = client.post("/api/summarize", json={"content": "meeting at 3pm"})
    assert r.status_code == 200
    assert r.json() == {"summary": "line one\nline two"}
    assert gemini.calls == [("gemini-2.5-flash", f"{service.SUMMARY_INSTRUCTION}\n\nmeeting at 3pm")]


def test_summarize_provider_failure(client, gemini):
    gemini.error = RuntimeError("quota exceeded")
    r = client.post("/api/summarize", json={"content": "meeting at 3pm"})
    assert r.status_code == 500
    assert r.json() == {"error": "quota exceeded"}


def test_summarizer_checks_key_first():
    s = service.GeminiSummarizer(None, "gemini-2.5-flash")
    with pytest.raises(service.SummarizerNotConfigured):
        s.summarize("text")
