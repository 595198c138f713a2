import uuid

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from coursehub.main import app
from coursehub.courses.dependencies import get_db


@pytest.fixture()
def db():
    """Fresh in-memory database for each test."""
    return AsyncMongoMockClient()[f"coursehub_test_{uuid.uuid4().hex}"]


@pytest.fixture()
def client(db):
    # Startup hooks do not run without the context manager, so no real MongoDB is contacted
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(client):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        payload = {
            "name": f"User {counter['n']}",
            "email": f"user{counter['n']}@example.com",
            "role": "student",
        }
        payload.update(overrides)
        r = client.post("/api/users", json=payload)
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture()
def make_course(client, make_user):
    def _make(**overrides):
        payload = {"title": "Intro to Node.js"}
        payload.update(overrides)
        if "instructor" not in payload:
            payload["instructor"] = make_user(role="instructor")["id"]
        r = client.post("/api/courses", json=payload)
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture()
def make_lesson(client, make_course):
    def _make(**overrides):
        payload = {"title": "Event loop", "content": "Callbacks and promises"}
        payload.update(overrides)
        if "course" not in payload:
            payload["course"] = make_course()["id"]
        r = client.post("/api/lessons", json=payload)
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture()
def make_quiz(client, make_lesson):
    def _make(**overrides):
        payload = {
            "question": "What runs callbacks?",
            "options": ["Event loop", "Compiler"],
            "answer": "Event loop",
        }
        payload.update(overrides)
        if "lesson" not in payload:
            payload["lesson"] = make_lesson()["id"]
        r = client.post("/api/quizzes", json=payload)
        assert r.status_code == 201, r.text
        return r.json()
    return _make
