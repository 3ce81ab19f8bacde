import os

# Settings are read on first import of app.core.config
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("ACCESS_TOKEN_EXPIRE_MINUTES", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import enable_sqlite_foreign_keys, get_db
from app.core.security import password_context
from app.main import app
from app.models import Base

# Fast hashes for tests
password_context.update(bcrypt__rounds=4)

DEFAULT_PASSWORD = "password123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client, name="Adetunji Phillip", email="phillip@mail.com", password=DEFAULT_PASSWORD):
    return client.post("/register", json={"name": name, "email": email, "password": password})


def login(client, email="phillip@mail.com", password=DEFAULT_PASSWORD):
    return client.post("/login", json={"email": email, "password": password})


@pytest.fixture
def auth_headers(client):
    assert register(client).status_code == 201
    r = login(client)
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def customer(client):
    r = client.post("/customers", json={
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "123-456-7890",
        "address": "123 Main St",
    })
    assert r.status_code == 201
    return r.json()["data"]
