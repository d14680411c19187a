"""Tests for access code verification."""

from datetime import datetime, timedelta

import pytest

from staffing_portal.core.error_handling import (
    AccessCodeExpiredError, NotFoundError, ValidationError
)
from staffing_portal.models.client_activity import ClientActivity
from staffing_portal.services.verification_service import VerificationService


class TestVerificationService:
    """Test VerificationService.verify."""

    def test_success_records_login(self, db_session, make_client):
        client = make_client()

        result = VerificationService.verify(
            db_session, client.access_code, ip_address="203.0.113.7", user_agent="pytest"
        )

        assert result.success is True
        assert result.client.id == client.id
        assert result.client.login_count == 1
        assert result.client.last_login_at is not None

        activities = db_session.query(ClientActivity).filter(ClientActivity.client_id == client.id).all()
        assert len(activities) == 1
        assert activities[0].activity_type == "login"
        assert activities[0].ip_address == "203.0.113.7"
        assert activities[0].user_agent == "pytest"

    def test_each_success_increments_by_one(self, db_session, make_client):
        client = make_client()

        for expected in range(1, 4):
            result = VerificationService.verify(db_session, client.access_code)
            assert result.client.login_count == expected

    def test_surrounding_whitespace_is_ignored(self, db_session, make_client):
        client = make_client()
        result = VerificationService.verify(db_session, f"  {client.access_code}\n")
        assert result.client.id == client.id

    def test_lowercase_and_lookalike_letters_are_accepted(self, db_session, make_client):
        client = make_client(access_code="0A1B-10CD-EF01-GH0J-KM1N-PQRS-TV0W")

        result = VerificationService.verify(db_session, "oa1b-l0cd-efoi-gh0j-kmln-pqrs-tvOw")

        assert result.client.id == client.id

    def test_unknown_code(self, db_session, make_client):
        make_client()
        with pytest.raises(NotFoundError):
            VerificationService.verify(db_session, "ZZZZ-ZZZZ-ZZZZ-ZZZZ-ZZZZ-ZZZZ-ZZZZ")
        assert db_session.query(ClientActivity).count() == 0

    def test_empty_code(self, db_session):
        with pytest.raises(ValidationError):
            VerificationService.verify(db_session, "   ")

    def test_inactive_client_fails_without_side_effects(self, db_session, make_client):
        client = make_client(is_active=False)

        with pytest.raises(NotFoundError):
            VerificationService.verify(db_session, client.access_code)

        db_session.refresh(client)
        assert client.login_count == 0
        assert client.last_login_at is None
        assert db_session.query(ClientActivity).count() == 0

    def test_expired_code(self, db_session, make_client):
        client = make_client(code_expires_at=datetime.utcnow() - timedelta(minutes=1))

        with pytest.raises(AccessCodeExpiredError):
            VerificationService.verify(db_session, client.access_code)

        db_session.refresh(client)
        assert client.login_count == 0
        assert db_session.query(ClientActivity).count() == 0

    def test_future_expiry_still_valid(self, db_session, make_client):
        client = make_client(code_expires_at=datetime.utcnow() + timedelta(days=1))
        assert VerificationService.verify(db_session, client.access_code).success is True
