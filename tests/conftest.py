import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from task_api.database import init_db, make_session_factory
from task_api.main import create_app


@pytest.fixture()
def engine():
    # one shared in-memory SQLite connection per test
    engine = init_db(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    app = create_app(session_factory)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_task(client):
    def _make(**fields):
        fields.setdefault("title", "Task")
        resp = client.post("/tasks/", json=fields)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make
