"""
Pytest configuration for the CRM API tests

Every test gets a fresh in-memory SQLite database shared between the
test's own session and the app's get_db dependency.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from crm.database import Base, get_db  # noqa: E402
from crm.main import app  # noqa: E402
from crm.models import Business  # noqa: E402


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
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


def make_business(db, name="Acme Coffee", api_key="test-key-123"):
    business = Business(name=name, email=f"owner@{name.lower().replace(' ', '')}.com", api_key=api_key)
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


@pytest.fixture
def business(db):
    return make_business(db)


@pytest.fixture
def other_business(db):
    return make_business(db, name="Other Shop", api_key="other-key-456")


@pytest.fixture
def auth_headers(business):
    return {"X-API-Key": business.api_key}
