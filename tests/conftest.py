"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Admin and non-admin bearer tokens
- Sample companies and jobs
"""

import sqlite3
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.crud import job as job_crud
from app.models.company import Company
from app.schemas.job import JobCreateRequest
from main import app


# sqlite3 cannot bind Decimal; NUMERIC affinity turns the text back into a number
sqlite3.register_adapter(Decimal, str)

# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
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
def admin_headers():
    token = create_access_token({"sub": "admin", "is_admin": True})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    token = create_access_token({"sub": "u1", "is_admin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def companies(db_session):
    """Two companies, c1 and c2"""
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
    ])
    db_session.commit()


@pytest.fixture
def make_job(db_session):
    """Insert a job through the CRUD layer and return its id"""
    def _make_job(**data):
        return job_crud.create(db_session, JobCreateRequest.model_validate(data))["id"]

    return _make_job


@pytest.fixture
def sample_jobs(make_job, companies):
    """
    Jobs covering every filter edge:
    - equity > 0, equity == 0 and equity null
    - salary above/below 50000 and null
    - "eng" in mixed and upper case
    """
    return {
        "engineer": make_job(title="Engineer", salary=100000, equity="0.5", companyHandle="c1"),
        "engine": make_job(title="ENGINE Operator", salary=40000, equity="0", companyHandle="c1"),
        "designer": make_job(title="Designer", salary=60000, companyHandle="c2"),
        "accountant": make_job(title="Accountant", equity="0.2", companyHandle="c2"),
    }
