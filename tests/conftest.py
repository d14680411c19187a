"""Pytest configuration for staffing portal tests."""

import os

# Plaintext password hashing and an in-memory database for every test
os.environ["TESTING"] = "1"
os.environ.setdefault("CUSTOM_DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_NOTIFICATIONS_ENABLED", "false")

from typing import Dict, Generator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Configure Hypothesis before importing test modules
from tests.property_based.config import PropertyTestConfig
PropertyTestConfig.configure_hypothesis()

from staffing_portal.auth.models import AdminUser, Principal, Role
from staffing_portal.auth.utils import create_access_token, create_admin_user
from staffing_portal.core.base import Base
from staffing_portal.core.database import get_db
from staffing_portal.models.client import Client
from staffing_portal.models.code_request import CodeRequest
from staffing_portal.models.job_posting import JobPosting
from staffing_portal.services.access_codes import generate_access_code
from tests.helpers import make_engine, make_session_factory


@pytest.fixture
def engine():
    engine = make_engine()
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Provide a database session bound to a fresh in-memory database."""
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def admin_user(db_session) -> AdminUser:
    return create_admin_user(db_session, "admin", "admin-password")


@pytest.fixture
def admin_principal(admin_user) -> Principal:
    return Principal(role=Role.ADMIN, subject_id=admin_user.id, token_id=str(uuid4()), name=admin_user.username)


@pytest.fixture
def make_client(db_session):
    """Factory inserting an active client with a generated access code."""
    def _make_client(company_name: str = "Acme Corporation", **overrides) -> Client:
        values = {
            "company_name": company_name,
            "contact_name": "John Smith",
            "email": "john.smith@acme-mail.com",
            "phone": "416-555-0001",
            "access_code": generate_access_code(),
            "is_active": True,
        }
        values.update(overrides)
        client = Client(**values)
        db_session.add(client)
        db_session.commit()
        return client

    return _make_client


@pytest.fixture
def client_principal_for():
    def _principal(client: Client) -> Principal:
        return Principal(role=Role.CLIENT, subject_id=client.id, token_id=str(uuid4()), name=client.company_name)

    return _principal


@pytest.fixture
def make_code_request(db_session):
    def _make_code_request(company_name: str = "Northwind Traders", **overrides) -> CodeRequest:
        values = {
            "company_name": company_name,
            "contact_name": "Nancy Davolio",
            "email": "nancy@northwind-mail.com",
            "phone": "905-555-0100",
            "reason": "We hire seasonal warehouse staff",
        }
        values.update(overrides)
        request = CodeRequest(**values)
        db_session.add(request)
        db_session.commit()
        return request

    return _make_code_request


@pytest.fixture
def make_job_posting(db_session):
    def _make_job_posting(owner: Client = None, **overrides) -> JobPosting:
        values = {
            "contact_name": "John Smith",
            "company_name": owner.company_name if owner else "Walk-in Ltd",
            "email": "hiring@example.com",
            "phone": "416-555-0199",
            "job_title": "Forklift Operator",
            "location": "Toronto, ON",
            "employment_type": "temporary",
            "is_existing_client": owner is not None,
            "owner_client_id": owner.id if owner else None,
        }
        values.update(overrides)
        posting = JobPosting(**values)
        db_session.add(posting)
        db_session.commit()
        return posting

    return _make_job_posting


@pytest.fixture
def api_client(db_session) -> Generator[TestClient, None, None]:
    """FastAPI test client sharing the test database session."""
    from staffing_portal.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with_client = TestClient(app)
    try:
        yield with_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(admin_user) -> Dict[str, str]:
    token = create_access_token(admin_user.id, Role.ADMIN, name=admin_user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client_headers_for():
    def _headers(client: Client) -> Dict[str, str]:
        token = create_access_token(client.id, Role.CLIENT, name=client.company_name)
        return {"Authorization": f"Bearer {token}"}

    return _headers


# Pytest markers for organizing tests
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "property_test: mark test as a property-based test"
    )
    config.addinivalue_line(
        "markers", "database: mark test as requiring database access"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        if "property_based" in str(item.fspath):
            item.add_marker(pytest.mark.property_test)

        if "test_api" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "property_based" not in str(item.fspath):
            item.add_marker(pytest.mark.unit)
