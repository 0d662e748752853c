import pytest
from fastapi.testclient import TestClient

from backend_fastapi.main import create_app
from infrastructure.config import Settings


@pytest.fixture(params=["peewee", "sqlalchemy"])
def settings(request) -> Settings:
    return Settings(
        environment="test",
        database_url="sqlite:///:memory:",
        orm=request.param,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan, which opens the database.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def create_task(client):
    def _create(**body):
        body.setdefault("title", "Sample task")
        response = client.post("/api/tasks", json=body)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
