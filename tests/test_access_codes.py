"""Tests for access code generation and collision handling."""

import re

import pytest

from staffing_portal.core.config import settings
from staffing_portal.core.error_handling import ConflictError
from staffing_portal.models.client import Client
from staffing_portal.services import access_codes
from staffing_portal.services.access_codes import (
    ACCESS_CODE_ALPHABET, generate_access_code, issue_with_unique_code, normalize_access_code
)
from staffing_portal.services.admin_service import AdminService

CODE_PATTERN = re.compile(r"^[0-9A-HJKMNP-TV-Z]{4}(-[0-9A-HJKMNP-TV-Z]{4}){6}$")


def _client_fields(name="Acme Corporation"):
    return {
        "company_name": name,
        "contact_name": "John Smith",
        "email": "john@acme-mail.com",
    }


class TestNormalizeAccessCode:
    """Test how typed codes are canonicalised."""

    @pytest.mark.parametrize("typed,expected", [
        ("  7k2m-qx9p ", "7K2M-QX9P"),
        ("OOIL-oil0", "0011-0110"),
        ("ABCD-EFGH", "ABCD-EFGH"),
    ])
    def test_normalize(self, typed, expected):
        assert normalize_access_code(typed) == expected


class TestGenerateAccessCode:
    """Test the code generator."""

    def test_default_format(self):
        code = generate_access_code()
        assert CODE_PATTERN.match(code)
        assert len(code.replace("-", "")) == 28

    def test_alphabet_excludes_ambiguous_symbols(self):
        assert len(ACCESS_CODE_ALPHABET) == 32
        for symbol in "ILOU":
            assert symbol not in ACCESS_CODE_ALPHABET

    def test_custom_shape(self):
        code = generate_access_code(group_size=5, groups=3)
        assert [len(group) for group in code.split("-")] == [5, 5, 5]

    def test_codes_are_distinct(self):
        codes = {generate_access_code() for _ in range(10000)}
        assert len(codes) == 10000


class TestIssueWithUniqueCode:
    """Test the retry loop around access code inserts."""

    def test_collision_then_success(self, db_session, admin_principal, make_client, monkeypatch):
        taken = make_client(access_code="AAAA-AAAA-AAAA-AAAA-AAAA-AAAA-AAAA")
        codes = iter([taken.access_code, "BBBB-BBBB-BBBB-BBBB-BBBB-BBBB-BBBB"])

        monkeypatch.setattr(access_codes, "generate_access_code", lambda: next(codes))
        # Skip the pre-check so the unique constraint catches the duplicate
        monkeypatch.setattr(access_codes._client_repository, "access_code_exists", lambda db, code: False)

        client = AdminService(db_session, admin_principal).create_client(_client_fields("Globex"))

        assert client.access_code == "BBBB-BBBB-BBBB-BBBB-BBBB-BBBB-BBBB"
        assert db_session.query(Client).count() == 2

    def test_exhausted_retries_raise_conflict(self, db_session, admin_principal, make_client, monkeypatch):
        taken = make_client(access_code="CCCC-CCCC-CCCC-CCCC-CCCC-CCCC-CCCC")
        attempts = []

        def same_code():
            attempts.append(1)
            return taken.access_code

        monkeypatch.setattr(access_codes, "generate_access_code", same_code)
        monkeypatch.setattr(access_codes._client_repository, "access_code_exists", lambda db, code: False)

        with pytest.raises(ConflictError):
            AdminService(db_session, admin_principal).create_client(_client_fields("Globex"))

        assert len(attempts) == settings.access_code_max_attempts
        assert db_session.query(Client).count() == 1

    def test_precheck_skips_codes_in_use(self, db_session, make_client, monkeypatch):
        taken = make_client(access_code="DDDD-DDDD-DDDD-DDDD-DDDD-DDDD-DDDD")
        codes = iter([taken.access_code, "EEEE-EEEE-EEEE-EEEE-EEEE-EEEE-EEEE"])
        monkeypatch.setattr(access_codes, "generate_access_code", lambda: next(codes))

        seen = []

        def unit(code):
            seen.append(code)
            return code

        assert issue_with_unique_code(db_session, unit) == "EEEE-EEEE-EEEE-EEEE-EEEE-EEEE-EEEE"
        assert seen == ["EEEE-EEEE-EEEE-EEEE-EEEE-EEEE-EEEE"]

    def test_non_integrity_errors_are_not_retried(self, db_session):
        calls = []

        def unit(code):
            calls.append(code)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            issue_with_unique_code(db_session, unit)

        assert len(calls) == 1


@pytest.mark.slow
def test_ten_thousand_clients_get_distinct_codes(db_session, admin_principal):
    service = AdminService(db_session, admin_principal)

    for i in range(10000):
        service.create_client(_client_fields(f"Company {i}"))

    total = db_session.query(Client).count()
    distinct = db_session.query(Client.access_code).distinct().count()
    assert total == distinct == 10000
