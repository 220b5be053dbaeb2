"""
Tests for liveness endpoints and error handling.
"""
from sqlalchemy.exc import OperationalError

from app.core.auth_dependency import get_db
from app.main import app


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Server is running!"
    assert "timestamp" in response.json()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


class BrokenSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))

    def query(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    def get(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is down"))

    def rollback(self):
        pass


def test_health_degraded_when_database_fails(client):
    app.dependency_overrides[get_db] = lambda: BrokenSession()

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert response.json()["database"] == "error"


def test_store_errors_become_generic_500(client):
    app.dependency_overrides[get_db] = lambda: BrokenSession()

    response = client.get("/counter", headers={"x-user-id": "1"})

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert "details" not in response.json()


def test_setup_store_error(client):
    app.dependency_overrides[get_db] = lambda: BrokenSession()

    response = client.get("/setup")

    assert response.status_code == 500
    assert response.json()["error"] == "Setup failed"
