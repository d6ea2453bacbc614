"""HTTP-level tests for the notification service endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.domain.exceptions import StoreUnavailableError
from app.infrastructure import email as email_module
from app.infrastructure.email import EmailDeliveryResult
from app.infrastructure.repositories import NotificationRepository, UserRepository
from app.interfaces.api.routes import notifications as notifications_routes

NEW_REPORT = {
    "reportId": "r1",
    "reportNumber": "RPT-001",
    "schoolId": "school-9",
    "reporterName": "Budi",
    "incidentCategory": "bullying",
}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["environment"] == "test"
    assert body["vercel"] is False
    assert body["timestamp"]


def test_new_report_fans_out_to_tppk(client, make_user, push_client):
    with_token = make_user("Ani", fcm_token="valid-token")
    without_token = make_user("Citra", fcm_token=None)

    response = client.post("/api/notifications/new-report", json=NEW_REPORT)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Notifications sent to 2 TPPK users"
    assert body["totalRecipients"] == 2
    results = {result["userId"]: result for result in body["results"]}
    assert results[with_token.id] == {
        "userId": with_token.id,
        "userName": "Ani",
        "fcmSent": True,
        "fcmError": None,
    }
    assert results[without_token.id]["fcmSent"] is False
    assert results[without_token.id]["fcmError"] == "no token available"
    assert push_client.tokens == ["valid-token"]


def test_new_report_accepts_scope_id_and_numeric_identifiers(client, make_user):
    make_user("Ani", fcm_token="valid-token", school_id="7")
    payload = {"reportId": 15, "reportNumber": "RPT-015", "scopeId": 7}

    response = client.post("/api/notifications/new-report", json=payload)

    assert response.status_code == 200
    assert response.json()["totalRecipients"] == 1


def test_new_report_without_required_fields_is_rejected(client, make_user, push_client):
    make_user("Ani", fcm_token="valid-token")

    response = client.post(
        "/api/notifications/new-report", json={"reportId": "r1", "schoolId": "school-9"}
    )

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Missing required fields: reportId, reportNumber, schoolId",
    }
    assert push_client.calls == []


def test_new_report_for_school_without_tppk_is_not_found(client, make_user):
    make_user("Guru", role="guru", fcm_token="valid-token")

    response = client.post("/api/notifications/new-report", json=NEW_REPORT)

    assert response.status_code == 404
    assert response.json()["error"] == "No TPPK users found for this school"


def test_update_fcm_token(client, make_user, session):
    user = make_user("Ani", fcm_token="old-token")

    response = client.post(
        "/api/notifications/update-fcm-token",
        json={"userId": user.id, "fcmToken": "new-token"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "FCM token updated successfully"}
    session.expire_all()
    assert UserRepository(session).get(user.id).fcm_token == "new-token"


def test_update_fcm_token_requires_both_fields(client):
    response = client.post("/api/notifications/update-fcm-token", json={"userId": "u1"})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing userId or fcmToken"


def test_update_fcm_token_for_unknown_user_succeeds(client):
    response = client.post(
        "/api/notifications/update-fcm-token",
        json={"userId": "ghost", "fcmToken": "token"},
    )

    assert response.status_code == 200


def test_inbox_pagination(client, make_user, session):
    user = make_user("Ani")
    repository = NotificationRepository(session)
    for index in range(1, 26):
        repository.append(user.id, "Title", f"n{index}", {"index": index})

    response = client.get(f"/api/notifications/{user.id}", params={"page": 3, "limit": 10})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["pagination"] == {"page": 3, "limit": 10, "total": 25, "totalPages": 3}
    assert len(body["notifications"]) == 5
    first = body["notifications"][0]
    assert set(first) >= {"id", "user_id", "title", "body", "data", "is_read", "created_at"}
    assert first["user_id"] == user.id


def test_inbox_read_filter_and_read_flags(client, make_user, session):
    user = make_user("Ani")
    repository = NotificationRepository(session)
    first = repository.append(user.id, "Title", "first", {})
    repository.append(user.id, "Title", "second", {})

    assert client.patch(f"/api/notifications/{first.id}/read").json() == {
        "success": True,
        "message": "Notification marked as read",
    }

    unread = client.get(f"/api/notifications/{user.id}", params={"isRead": "false"}).json()
    assert [item["body"] for item in unread["notifications"]] == ["second"]
    assert client.get(f"/api/notifications/{user.id}/unread-count").json() == {
        "success": True,
        "unreadCount": 1,
    }

    response = client.patch(f"/api/notifications/{user.id}/mark-all-read")
    assert response.status_code == 200
    assert response.json()["message"] == "All notifications marked as read"
    assert client.get(f"/api/notifications/{user.id}/unread-count").json()["unreadCount"] == 0


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
def test_inbox_rejects_bad_pagination(client, params):
    response = client.get("/api/notifications/u1", params=params)

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_test_notification(client, make_user, push_client):
    user = make_user("Ani", fcm_token="valid-token")

    response = client.post("/api/notifications/test", json={"userId": user.id})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Test notification sent",
        "error": None,
    }
    assert push_client.calls[0]["title"] == "Test Notification"
    assert push_client.calls[0]["data"] == {"type": "test"}


def test_test_notification_reports_provider_rejection(client, make_user, push_client):
    user = make_user("Ani", fcm_token="stale-token")
    push_client.failures["stale-token"] = "Requested entity was not found."

    response = client.post(
        "/api/notifications/test",
        json={"userId": user.id, "title": "Halo", "body": "Coba"},
    )

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["error"] == "Requested entity was not found."


def test_test_notification_without_token_is_not_found(client, make_user):
    user = make_user("Ani", fcm_token=None)

    response = client.post("/api/notifications/test", json={"userId": user.id})

    assert response.status_code == 404
    assert response.json()["error"] == "FCM token not found for user"


def test_test_notification_requires_user(client):
    response = client.post("/api/notifications/test", json={})

    assert response.status_code == 400


def test_verification_email_is_sent(client, monkeypatch):
    sent = []

    def fake_send(email):
        sent.append(email)
        return EmailDeliveryResult(
            success=True, recipient=email, status_code=202, message_id="msg-1"
        )

    monkeypatch.setattr(email_module, "send_verification_email", fake_send)

    response = client.post("/api/send-verification-email", json={"email": "siswa@example.com"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Verification email sent successfully",
        "info": {
            "success": True,
            "recipient": "siswa@example.com",
            "status_code": 202,
            "message_id": "msg-1",
        },
    }
    assert sent == ["siswa@example.com"]


def test_verification_email_requires_email(client):
    response = client.post("/api/send-verification-email", json={})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing 'email' in request body"}


def test_verification_email_rejects_malformed_address(client):
    response = client.post("/api/send-verification-email", json={"email": "not-an-email"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_verification_email_failure_includes_details_outside_production(client, monkeypatch):
    monkeypatch.setattr(
        email_module,
        "send_verification_email",
        lambda email: EmailDeliveryResult(
            success=False,
            recipient=email,
            status_code=403,
            error="SendGrid API responded with status 403",
            details="The from address does not match a verified Sender Identity.",
        ),
    )

    response = client.post("/api/send-verification-email", json={"email": "siswa@example.com"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "SendGrid API responded with status 403",
        "details": "The from address does not match a verified Sender Identity.",
    }


def test_unknown_endpoint(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Endpoint not found",
        "path": "/api/does-not-exist",
        "method": "GET",
    }


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("POST", "/health"),
        ("DELETE", "/api/notifications/u1"),
        ("GET", "/api/notifications/u1/mark-all-read"),
    ],
)
def test_wrong_method_on_known_path_is_endpoint_not_found(client, method, path):
    response = client.request(method, path)

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Endpoint not found",
        "path": path,
        "method": method,
    }


def test_store_outage_is_a_server_error(client, monkeypatch):
    def unavailable(session, user_id):
        raise StoreUnavailableError("Failed to count notifications: database is locked")

    monkeypatch.setattr(notifications_routes, "count_unread", unavailable)

    response = client.get("/api/notifications/u1/unread-count")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Failed to count notifications: database is locked",
    }


def test_unexpected_error_carries_timestamp(monkeypatch, push_client):
    from app.interfaces.api.dependencies import get_push_client
    from main import create_app

    def explode(session, user_id):
        raise RuntimeError("boom")

    monkeypatch.setattr(notifications_routes, "count_unread", explode)
    app = create_app()
    app.dependency_overrides[get_push_client] = lambda: push_client

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/api/notifications/u1/unread-count")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "boom"
    assert body["timestamp"]
