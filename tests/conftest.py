import os
import tempfile

import mongomock
import pytest

os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="placement_hub_uploads_"))
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from fastapi.testclient import TestClient  # noqa: E402

from placement_hub.db import mongodb  # noqa: E402
from placement_hub.main import app  # noqa: E402
from placement_hub.schemas.schemas import UserRole  # noqa: E402
from placement_hub.services.user_service import UserService  # noqa: E402


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch):
    """Fresh in-memory database for every test."""
    client = mongomock.MongoClient()
    db = client["placement_hub_test"]
    monkeypatch.setattr(mongodb, "_client", client)
    monkeypatch.setattr(mongodb, "_db", db)
    mongodb.init_mongo_indexes()
    yield db


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def student():
    return UserService().create("student1", "secret123")


@pytest.fixture
def moderator():
    return UserService().create("mod1", "secret123", role=UserRole.moderator)


def auth_headers(user):
    token = UserService().issue_token(user)["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(student):
    return auth_headers(student)


@pytest.fixture
def moderator_headers(moderator):
    return auth_headers(moderator)


@pytest.fixture
def quiz_payload():
    return {
        "topic": "Aptitude",
        "question_text": "If 20% of a number is 10, what is the number?",
        "options": ["40", "50", "60", "70"],
        "correct_answer": 1,
    }
