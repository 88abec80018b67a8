import mongomock
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_report_analyzer
from database import get_database, get_database_manager
from fakes import FakeDatabaseManager, FakeModelClient
from main import app
from seed_admin import seed_admin
from services.report_analyzer import ReportAnalyzer


@pytest.fixture
def mongo_db():
    return mongomock.MongoClient()["safespeak_test"]


@pytest.fixture
def model_client():
    return FakeModelClient()


@pytest.fixture
def analyzer(model_client):
    return ReportAnalyzer(client=model_client, timeout=5.0)


@pytest.fixture
def db_manager():
    return FakeDatabaseManager()


@pytest.fixture
def client(mongo_db, analyzer, db_manager):
    app.dependency_overrides[get_database] = lambda: mongo_db
    app.dependency_overrides[get_report_analyzer] = lambda: analyzer
    app.dependency_overrides[get_database_manager] = lambda: db_manager
    # Not used as a context manager, so the lifespan (real MongoDB, real Gemini) never runs
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_credentials(mongo_db):
    seed_admin(mongo_db, username="triage", password="s3cret-pass", display_name="Triage Lead")
    return {"username": "triage", "password": "s3cret-pass"}


@pytest.fixture
def auth_headers(client, admin_credentials):
    response = client.post("/api/admin/login", json=admin_credentials)
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
