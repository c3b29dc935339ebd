import pytest

from app import create_app
from config import TestConfig
from models import db
from tests.factories import PASSWORD


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Logs ``email`` in on the shared client and returns the CSRF header for writes."""
    def _login(email, password=PASSWORD):
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return {"X-CSRF-Token": client.get_cookie("csrf_token").value}
    return _login
