import os

# Configure before the application modules read the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SWEEP_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from taskboard.database import get_db
from taskboard.models import User, UserRole
from taskboard.services.bootstrap import create_tables
from taskboard.utils.security import hash_password

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Create and commit a user; returns the ORM object"""
    def _make_user(username, role=UserRole.EMPLOYEE, password=DEFAULT_PASSWORD,
                   name=None, department=None, is_active=True):
        user = User(
            username=username,
            name=name or username.title(),
            hashed_password=hash_password(password),
            role=role,
            department=department,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def login(client):
    """Return a fresh TestClient holding a session cookie for the given user"""
    def _login(username, password=DEFAULT_PASSWORD):
        user_client = TestClient(app)
        response = user_client.post("/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return user_client
    return _login
