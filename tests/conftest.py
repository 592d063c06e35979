import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from memoapp.main import app
from memoapp.shared.config import Settings, get_settings
from memoapp.shared.db import Base, get_db
from memoapp.summarize.api import get_summarizer


class FakeSummarizer:
    def __init__(self, reply="- short summary"):
        self.reply = reply
        self.calls: list[str] = []

    def summarize(self, content: str) -> str:
        self.calls.append(content)
        return self.reply


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    s = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def settings():
    return Settings(ENV="test", GEMINI_API_KEY="test-key", GEMINI_MODEL="gemini-2.5-flash", DATABASE_URL="sqlite://")


@pytest.fixture
def summarizer():
    return FakeSummarizer()


@pytest.fixture
def client(engine, settings, summarizer):
    Session = sessionmaker(bind=engine, autoflush=False)

    def _get_db():
        s = Session()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_summarizer] = lambda: summarizer
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
