"""HTTP tests for the staffing portal API."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from staffing_portal.models.job_posting import JobPosting
from tests.helpers import code_request_form, job_posting_form


def _assert_error(response, status_code, error):
    assert response.status_code == status_code
    body = response.json()
    assert body["success"] is False
    assert body["error"] == error
    assert body["message"]
    return body


class TestHealth:

    def test_health(self, api_client):
        response = api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["service"] == "staffing-portal"


class TestPublicEndpoints:
    """Test the anonymous endpoints."""

    def test_verify_client(self, api_client, make_client):
        client = make_client()

        response = api_client.post("/api/verify-client", json={"access_code": client.access_code})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["client"]["company_name"] == "Acme Corporation"
        assert body["client"]["email"] == client.email
        assert "access_code" not in body["client"]

    def test_verify_unknown_code(self, api_client):
        response = api_client.post("/api/verify-client", json={"access_code": "ABCD-EFGH"})
        _assert_error(response, 404, "not_found")

    def test_verify_expired_code(self, api_client, make_client):
        client = make_client(code_expires_at=datetime.utcnow() - timedelta(hours=1))
        response = api_client.post("/api/verify-client", json={"access_code": client.access_code})
        _assert_error(response, 410, "access_code_expired")

    def test_verify_requires_code(self, api_client):
        body = _assert_error(api_client.post("/api/verify-client", json={}), 400, "validation_error")
        assert body["errors"]

    def test_submit_job_posting(self, api_client, db_session):
        response = api_client.post("/api/job-postings", json=job_posting_form())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        posting = db_session.query(JobPosting).one()
        assert str(posting.id) == body["id"]
        assert posting.owner_client_id is None

    def test_submit_job_posting_with_code(self, api_client, db_session, make_client):
        client = make_client()

        response = api_client.post(
            "/api/job-postings", json=job_posting_form(access_code=client.access_code)
        )

        assert response.status_code == 201
        posting = db_session.query(JobPosting).one()
        assert posting.owner_client_id == client.id
        assert posting.is_existing_client is True

    def test_honeypot(self, api_client, db_session):
        response = api_client.post("/api/job-postings", json=job_posting_form(website="http://spam.example"))

        body = _assert_error(response, 400, "validation_error")
        assert body["message"] == "Invalid form data"
        assert db_session.query(JobPosting).count() == 0

    def test_invalid_job_posting(self, api_client, db_session):
        response = api_client.post("/api/job-postings", json=job_posting_form(email="nope", phone=""))

        body = _assert_error(response, 400, "validation_error")
        assert body["message"] == "Invalid form data"
        assert {e["field"] for e in body["errors"]} >= {"email", "phone"}
        assert db_session.query(JobPosting).count() == 0

    def test_non_object_body(self, api_client):
        _assert_error(api_client.post("/api/job-postings", json=["not", "a", "form"]), 400, "validation_error")

    def test_code_request_and_status(self, api_client):
        response = api_client.post("/api/code-requests", json=code_request_form())
        assert response.status_code == 201
        request_id = response.json()["id"]

        status_response = api_client.get(f"/api/code-requests/{request_id}")
        assert status_response.status_code == 200
        assert status_response.json()["status"] == "pending"
        assert "email" not in status_response.json()

    def test_code_request_status_unknown(self, api_client):
        _assert_error(api_client.get(f"/api/code-requests/{uuid4()}"), 404, "not_found")


class TestAuthEndpoints:
    """Test admin and client sessions over HTTP."""

    def test_admin_login_and_me(self, api_client, admin_user):
        response = api_client.post("/api/auth/admin/login", json={"username": "admin", "password": "admin-password"})

        assert response.status_code == 200
        token = response.json()["access_token"]

        me = api_client.get("/api/auth/admin/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["is_authenticated"] is True
        assert me.json()["user"]["username"] == "admin"

    def test_admin_login_failure(self, api_client, admin_user):
        response = api_client.post("/api/auth/admin/login", json={"username": "admin", "password": "wrong"})
        _assert_error(response, 401, "unauthorized")

    def test_admin_me_anonymous(self, api_client):
        assert api_client.get("/api/auth/admin/me").json() == {"is_authenticated": False}

    def test_admin_logout_revokes_token(self, api_client, admin_headers):
        assert api_client.post("/api/auth/admin/logout", headers=admin_headers).status_code == 200

        response = api_client.get("/api/admin/clients", headers=admin_headers)
        _assert_error(response, 401, "unauthorized")

    def test_client_login_logout(self, api_client, make_client):
        client = make_client()

        response = api_client.post("/api/auth/client/login", json={"access_code": client.access_code})
        assert response.status_code == 200
        headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
        assert response.json()["client"]["id"] == str(client.id)

        me = api_client.get("/api/auth/client/me", headers=headers)
        assert me.json()["is_authenticated"] is True

        assert api_client.post("/api/auth/client/logout", headers=headers).status_code == 200
        assert api_client.get("/api/auth/client/me", headers=headers).json() == {"is_authenticated": False}
        _assert_error(api_client.get("/api/client/job-postings", headers=headers), 401, "unauthorized")

    def test_client_login_bad_code(self, api_client):
        response = api_client.post("/api/auth/client/login", json={"access_code": "WRONG"})
        _assert_error(response, 404, "not_found")


class TestAccessControl:
    """Role checks over HTTP."""

    def test_admin_endpoints_need_a_token(self, api_client):
        _assert_error(api_client.get("/api/admin/job-postings"), 401, "unauthorized")

    def test_client_token_cannot_use_admin_endpoints(self, api_client, make_client, client_headers_for):
        headers = client_headers_for(make_client())
        _assert_error(api_client.get("/api/admin/job-postings", headers=headers), 403, "forbidden")

    def test_admin_token_cannot_use_client_endpoints(self, api_client, admin_headers):
        _assert_error(api_client.get("/api/client/job-postings", headers=admin_headers), 403, "forbidden")

    def test_deactivated_client_loses_session(self, api_client, admin_headers, make_client, client_headers_for):
        client = make_client()
        headers = client_headers_for(client)
        assert api_client.get("/api/client/job-postings", headers=headers).status_code == 200

        assert api_client.delete(f"/api/admin/clients/{client.id}", headers=admin_headers).status_code == 200

        _assert_error(api_client.get("/api/client/job-postings", headers=headers), 401, "unauthorized")
        _assert_error(
            api_client.post("/api/verify-client", json={"access_code": client.access_code}), 404, "not_found"
        )


class TestAdminEndpoints:
    """Test the admin dashboard endpoints."""

    def test_create_and_list_clients(self, api_client, admin_headers):
        response = api_client.post(
            "/api/admin/clients",
            headers=admin_headers,
            json={"company_name": "Globex", "contact_name": "Hank", "email": "hank@globex-mail.com"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["access_code"] == body["client"]["access_code"]

        listed = api_client.get("/api/admin/clients", headers=admin_headers).json()
        assert [c["company_name"] for c in listed] == ["Globex"]

    def test_create_client_invalid(self, api_client, admin_headers):
        response = api_client.post("/api/admin/clients", headers=admin_headers, json={"company_name": "Globex"})
        _assert_error(response, 400, "validation_error")

    def test_bulk_generate(self, api_client, admin_headers):
        response = api_client.post(
            "/api/admin/clients/bulk-generate",
            headers=admin_headers,
            json={"clients": [
                {"company_name": "One", "contact_name": "A", "email": "a@one-mail.com"},
                {"company_name": "Two", "contact_name": "B", "email": "broken"},
            ]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["created"] == 1
        assert body["failed"] == 1
        assert body["results"][0]["access_code"]
        assert body["results"][1]["success"] is False

    def test_bulk_generate_with_non_string_company(self, api_client, admin_headers):
        response = api_client.post(
            "/api/admin/clients/bulk-generate",
            headers=admin_headers,
            json={"clients": [
                {"company_name": "One", "contact_name": "A", "email": "a@one-mail.com"},
                {"company_name": 123, "contact_name": "B", "email": "b@two-mail.com"},
            ]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["created"] == 1
        assert body["failed"] == 1
        assert body["results"][0]["access_code"]
        assert body["results"][0]["client"]["company_name"] == "One"
        assert body["results"][1]["error"] == "validation_error"
        assert body["results"][1]["company_name"] is None

    def test_client_detail_and_update(self, api_client, admin_headers, make_client):
        client = make_client()

        response = api_client.patch(
            f"/api/admin/clients/{client.id}", headers=admin_headers, json={"phone": "905-555-0000"}
        )
        assert response.status_code == 200
        assert response.json()["phone"] == "905-555-0000"

        detail = api_client.get(f"/api/admin/clients/{client.id}", headers=admin_headers).json()
        assert detail["client"]["id"] == str(client.id)
        assert detail["activities"] == []

    def test_unknown_client(self, api_client, admin_headers):
        _assert_error(api_client.get(f"/api/admin/clients/{uuid4()}", headers=admin_headers), 404, "not_found")

    def test_job_posting_status(self, api_client, admin_headers, make_job_posting):
        posting = make_job_posting()

        response = api_client.patch(
            f"/api/admin/job-postings/{posting.id}/status", headers=admin_headers, json={"status": "posted"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "posted"

        listed = api_client.get("/api/admin/job-postings?status=posted", headers=admin_headers).json()
        assert [p["id"] for p in listed] == [str(posting.id)]

    def test_job_posting_unknown_status(self, api_client, admin_headers, make_job_posting):
        posting = make_job_posting()
        response = api_client.patch(
            f"/api/admin/job-postings/{posting.id}/status", headers=admin_headers, json={"status": "archived"}
        )
        _assert_error(response, 400, "validation_error")

    def test_reject_code_request(self, api_client, admin_headers, make_code_request):
        request = make_code_request()

        missing_reason = api_client.post(
            f"/api/admin/code-requests/{request.id}/reject", headers=admin_headers, json={"reason": "  "}
        )
        _assert_error(missing_reason, 400, "validation_error")

        response = api_client.post(
            f"/api/admin/code-requests/{request.id}/reject", headers=admin_headers, json={"reason": "Unknown company"}
        )
        assert response.status_code == 200
        assert response.json()["request"]["status"] == "rejected"

        again = api_client.post(f"/api/admin/code-requests/{request.id}/approve", headers=admin_headers)
        _assert_error(again, 409, "invalid_state")


class TestClientEndpoints:
    """Test the client portal endpoints."""

    def test_create_update_delete(self, api_client, make_client, client_headers_for):
        client = make_client()
        headers = client_headers_for(client)

        created = api_client.post(
            "/api/client/job-postings",
            headers=headers,
            json={"job_title": "Welder", "location": "Hamilton, ON", "employment_type": "permanent"},
        )
        assert created.status_code == 201
        job_id = created.json()["id"]
        assert created.json()["company_name"] == client.company_name

        updated = api_client.patch(f"/api/client/job-postings/{job_id}", headers=headers, json={"location": "Oakville, ON"})
        assert updated.status_code == 200
        assert updated.json()["location"] == "Oakville, ON"

        deleted = api_client.delete(f"/api/client/job-postings/{job_id}", headers=headers)
        assert deleted.json() == {"success": True}
        assert api_client.get("/api/client/job-postings", headers=headers).json() == []

    def test_status_is_not_editable(self, api_client, make_client, client_headers_for, make_job_posting):
        client = make_client()
        posting = make_job_posting(owner=client)

        response = api_client.patch(
            f"/api/client/job-postings/{posting.id}", headers=client_headers_for(client), json={"status": "posted"}
        )
        _assert_error(response, 400, "validation_error")

    def test_null_clears_optional_fields_only(self, api_client, make_client, client_headers_for, make_job_posting):
        client = make_client()
        posting = make_job_posting(owner=client, salary_range="$30/hr")
        headers = client_headers_for(client)

        cleared = api_client.patch(
            f"/api/client/job-postings/{posting.id}", headers=headers, json={"salary_range": None}
        )
        assert cleared.status_code == 200
        assert cleared.json()["salary_range"] is None

        body = _assert_error(
            api_client.patch(f"/api/client/job-postings/{posting.id}", headers=headers, json={"job_title": None}),
            400, "validation_error"
        )
        assert body["errors"][0]["field"] == "job_title"

    def test_other_clients_posting(self, api_client, make_client, client_headers_for, make_job_posting):
        theirs = make_job_posting(owner=make_client("Other Co"))
        headers = client_headers_for(make_client())

        _assert_error(
            api_client.patch(f"/api/client/job-postings/{theirs.id}", headers=headers, json={"job_title": "X"}),
            404, "not_found"
        )
        _assert_error(api_client.delete(f"/api/client/job-postings/{theirs.id}", headers=headers), 404, "not_found")


class TestEndToEnd:
    """Full workflows across every role."""

    def test_code_request_to_closed_posting(self, api_client, admin_headers, db_session):
        request_id = api_client.post("/api/code-requests", json=code_request_form()).json()["id"]

        approved = api_client.post(f"/api/admin/code-requests/{request_id}/approve", headers=admin_headers)
        assert approved.status_code == 200
        access_code = approved.json()["access_code"]
        assert api_client.get(f"/api/code-requests/{request_id}").json()["status"] == "approved"

        second = api_client.post(f"/api/admin/code-requests/{request_id}/approve", headers=admin_headers)
        _assert_error(second, 409, "invalid_state")

        login = api_client.post("/api/auth/client/login", json={"access_code": access_code})
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

        submitted = api_client.post(
            "/api/job-postings",
            json=job_posting_form(company_name="Globex", access_code=access_code),
        )
        assert submitted.status_code == 201

        own = api_client.get("/api/client/job-postings", headers=headers).json()
        assert [p["id"] for p in own] == [submitted.json()["id"]]
        job_id = own[0]["id"]

        for status in ("contacted", "contract_pending", "posted", "closed"):
            response = api_client.patch(
                f"/api/admin/job-postings/{job_id}/status", headers=admin_headers, json={"status": status}
            )
            assert response.json()["status"] == status

        _assert_error(
            api_client.patch(f"/api/client/job-postings/{job_id}", headers=headers, json={"job_title": "X"}),
            409, "invalid_state"
        )
        _assert_error(api_client.delete(f"/api/client/job-postings/{job_id}", headers=headers), 409, "invalid_state")

        detail = api_client.get(
            f"/api/admin/clients/{login.json()['client']['id']}", headers=admin_headers
        ).json()
        assert [a["activity_type"] for a in detail["activities"]].count("login") == 2

    @pytest.mark.parametrize("website", ["", None])
    def test_empty_honeypot_is_accepted(self, api_client, website):
        response = api_client.post("/api/job-postings", json=job_posting_form(website=website))
        assert response.status_code == 201
