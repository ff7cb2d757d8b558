"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, jobs and users
- Auth tokens for a regular user and an admin
"""

import os

# Settings are read at import time, so configure the test environment first
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JSON_LOGS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_user_token, get_password_hash
from app.models import Application, Company, Job, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "before_cursor_execute", retval=True)
def sqlite_ilike(conn, cursor, statement, parameters, context, executemany):
    """SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII."""
    return statement.replace(" ILIKE ", " LIKE "), parameters


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_data(db_session):
    """
    Three companies, three jobs at c1, two regular users and one admin.

    u1 has applied to the first job. Returns the job ids in creation order.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db_session.flush()

    jobs = [
        Job(title="J1", salary=1, equity=0.1, company_handle="c1"),
        Job(title="J2", salary=2, equity=0.2, company_handle="c1"),
        Job(title="J3", salary=3, equity=None, company_handle="c1"),
    ]
    db_session.add_all(jobs)

    db_session.add_all([
        User(username="u1", first_name="U1F", last_name="U1L", email="user1@user.com",
             hashed_password=get_password_hash("password1"), is_admin=False),
        User(username="u2", first_name="U2F", last_name="U2L", email="user2@user.com",
             hashed_password=get_password_hash("password2"), is_admin=False),
        User(username="admin", first_name="AdF", last_name="AdL", email="admin@user.com",
             hashed_password=get_password_hash("password4"), is_admin=True),
    ])
    db_session.flush()

    db_session.add(Application(username="u1", job_id=jobs[0].id))
    db_session.commit()

    return [job.id for job in jobs]


@pytest.fixture
def u1_headers():
    """Authorization headers for the regular user u1"""
    return {"Authorization": f"Bearer {create_user_token('u1', False)}"}


@pytest.fixture
def admin_headers():
    """Authorization headers for an admin"""
    return {"Authorization": f"Bearer {create_user_token('admin', True)}"}
