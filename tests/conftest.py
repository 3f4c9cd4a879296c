"""
Pytest configuration and fixtures for SoulBuddy API tests.
"""

import os
from typing import Generator, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment
os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["OPENAI_API_KEY"] = ""

from app.config import Settings
from app.db.base import Base, get_db
from app.main import app
from app.readings.router import get_text_generator


# Test database URL (SQLite in-memory for fast tests)
TEST_DATABASE_URL = "sqlite:///:memory:"

SAMPLE_PROVIDER_TEXT = (
    "Section 1: Your ascendant is Leo and the Moon rests in Taurus.\n\n"
    "Section 2: Wear a ruby on Sundays and offer water to the Sun.\n\n"
    "Section 3: Meditate for twenty minutes at dawn and chant the Gayatri mantra."
)


class FakeTextGenerator:
    """TextGenerator double that returns canned text or raises."""

    def __init__(self, response: Optional[str] = SAMPLE_PROVIDER_TEXT, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    async def generate(self, prompt: str, system_instruction: str) -> str:
        self.calls.append((prompt, system_instruction))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        environment="development",
        database_url=TEST_DATABASE_URL,
        openai_api_key="test-openai-key",
        openai_model="gpt-4o-mini",
        cors_origins="http://localhost:5173",
    )


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db(test_engine) -> Generator[Session, None, None]:
    """Create test database session."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=test_engine
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture(scope="function")
def client(test_db, fake_generator) -> Generator[TestClient, None, None]:
    """Create test client with overridden dependencies."""

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_text_generator] = lambda: fake_generator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def birth_details() -> dict:
    """Signup form body as the web client sends it."""
    return {
        "name": "Asha",
        "dateOfBirth": "1990-04-12",
        "time": "14:30",
        "gender": "female",
        "state": "Karnataka",
        "city": "Mysore",
    }


@pytest.fixture
def make_text_generator():
    """Factory for FakeTextGenerator instances with custom behaviour."""
    return FakeTextGenerator
