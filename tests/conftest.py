import os
import tempfile

# Point the app at a throwaway SQLite file before any app module is imported
_DB_DIR = tempfile.mkdtemp(prefix="forum-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'forum.db')}"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient

from app.db.init_db import create_all_tables
from app.db.session import Base, SessionLocal, engine
from app.main import app
from app.modules.auth.services.auth import register

PASSWORD = "secret1"


@pytest.fixture(scope="session", autouse=True)
def schema():
    create_all_tables()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def alice(db):
    return register(db, "alice@test.com", "alice", PASSWORD)


@pytest.fixture
def bob(db):
    return register(db, "bob@test.com", "bob", PASSWORD)


def api(path: str) -> str:
    return f"/api/v1{path}"


def login_client(client, email: str, password: str = PASSWORD):
    response = client.post(api("/auth/login"), json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response
