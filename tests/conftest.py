import os

# keep the module level app in taskmate.main off the working directory
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from taskmate.main import create_app


class RecordingChannel:
    """Stands in for Socket.IO and remembers who was told their tasks changed."""

    def __init__(self):
        self.published = []

    async def publish(self, identity):
        self.published.append(identity)


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def app(tmp_path, channel):
    return create_app(database_url=f"sqlite:///{tmp_path / 'test.db'}", channel=channel)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def login(app):
    """Return a TestClient holding a session cookie for the given email."""

    def _login(email: str) -> TestClient:
        c = TestClient(app)
        r = c.post("/jwt", json={"email": email})
        assert r.status_code == 200
        return c

    return _login
