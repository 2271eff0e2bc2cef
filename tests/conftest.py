"""Shared fixtures: an app on in-memory SQLite and signed-in clients."""
import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from bet_tracker.config.settings import Settings
from bet_tracker.database.models import User, get_engine, get_session_factory, init_db

TEST_SECRET = "test-secret-key-for-session-tokens-0123456789"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        secret_key=TEST_SECRET,
        log_file=None,
        demo_mode=True,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


def signup_and_login(client, email="alice@example.com", password="correct-horse", name="Alice"):
    resp = client.post(
        "/api/auth/signup", json={"name": name, "email": email, "password": password}
    )
    assert resp.status_code == 201, resp.text
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return signup_and_login(client)


@pytest.fixture
def login(client):
    """Sign up and sign in another account."""

    def _login(email, password="correct-horse", name="Other"):
        return signup_and_login(client, email=email, password=password, name=name)

    return _login


def _make_pick(client, headers, **overrides):
    body = {
        "sport": "NFL",
        "bet_type": "SPREAD",
        "description": "Chiefs -3.5",
        "odds": -110,
        "stake": 100,
        "game_date": "2024-09-08T20:20:00Z",
    }
    body.update(overrides)
    resp = client.post("/api/picks", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def create_pick(client, auth_headers):
    """Record a pick for the signed-in user; keyword arguments override the body."""

    def _create(headers=None, **overrides):
        return _make_pick(client, headers or auth_headers, **overrides)

    return _create


@pytest.fixture
def session():
    """Bare database session for service-level tests."""
    engine = get_engine("sqlite://")
    init_db(engine)
    db = get_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def user(session):
    user = User(name="Bob", email="bob@example.com", starting_bankroll=1000.0)
    session.add(user)
    session.commit()
    return user
