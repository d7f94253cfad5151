"""
Pytest configuration and fixtures
"""
import pytest

from pressure_tracker import create_app, db


TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "SQLALCHEMY_ENGINE_OPTIONS": {},
    "AUDIT_LOG_FILE": "",
    "API_PREFIX": "/api",
    "STATS_TIMEZONE": "UTC",
    "CORS_ORIGINS": [],
}


@pytest.fixture
def app():
    """
    Application backed by a fresh in-memory SQLite database
    """
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    """
    The injected measurement store, used inside an app context
    """
    with app.app_context():
        yield app.extensions["measurement_store"]


@pytest.fixture
def add_measurement(client):
    """
    POST a measurement and return the decoded response body
    """
    def _add(systolic=120, diastolic=80, **extra):
        payload = {"systolic": systolic, "diastolic": diastolic, **extra}
        response = client.post("/api/measurements", json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()
    return _add
