"""
Shared fixtures: a FastAPI app built by create_app() against a throwaway
SQLite database, plus factories for registering and logging in users.
"""

import pytest
from fastapi.testclient import TestClient

from fitness_api.core.config import Settings
from fitness_api.main import create_app
from fitness_api.models.user import User

TEST_SECRET = "test-secret-key-that-is-long-enough-0123456789"
DEFAULT_PASSWORD = "longenough"
DEFAULT_MOBILE = "12345678901"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY=TEST_SECRET,
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        KEEP_ALIVE_URL="",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Контекстный менеджер запускает lifespan: таблицы создаются здесь
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    def _register(email="a@b.com", password=DEFAULT_PASSWORD, mobile_no=DEFAULT_MOBILE, **extra):
        body = {"email": email, "password": password, "mobileNo": mobile_no, **extra}
        return client.post("/users", json=body)

    return _register


@pytest.fixture
def login_user(client):
    def _login(email="a@b.com", password=DEFAULT_PASSWORD) -> str:
        resp = client.post("/users/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()["access"]

    return _login


@pytest.fixture
def make_admin(app):
    def _make_admin(email: str) -> None:
        db = app.state.session_factory()
        try:
            user = db.query(User).filter(User.email == email).first()
            user.is_admin = True
            db.commit()
        finally:
            db.close()

    return _make_admin


@pytest.fixture
def user_token(register_user, login_user):
    assert register_user("a@b.com").status_code == 201
    return login_user("a@b.com")


@pytest.fixture
def other_token(register_user, login_user):
    assert register_user("other@b.com").status_code == 201
    return login_user("other@b.com")


@pytest.fixture
def admin_token(register_user, login_user, make_admin):
    assert register_user("admin@b.com").status_code == 201
    make_admin("admin@b.com")
    return login_user("admin@b.com")


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return auth
