"""Integration tests for the notification API endpoints."""

from __future__ import annotations

import importlib
import logging

import pytest

from app.application.use_cases.notifications import NotificationStoreError
from app.infrastructure.models import NotificationModel, RecipientEntryModel
from app.infrastructure.security import create_access_token

ADMIN_ID = 100

notifications_routes = importlib.import_module("app.interfaces.api.routes.notifications")


@pytest.fixture()
def admin_headers(auth_headers):
    return auth_headers(ADMIN_ID, is_admin=True)


@pytest.fixture()
def jazz_night(client, session, make_users, make_event, admin_headers):
    """Broadcast the Jazz Night announcement to three recipients."""

    make_users(1, 2, 3)
    make_event(42)
    response = client.post(
        "/notifications/",
        json={"title": "New Event: Jazz Night", "message": "Starts 8pm", "link": "/events/42"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()["notification_id"]


def _entries_for(session, notification_id: int) -> list[RecipientEntryModel]:
    return (
        session.query(RecipientEntryModel)
        .filter(RecipientEntryModel.notification_id == notification_id)
        .all()
    )


def test_broadcast_fans_out_and_feed_shows_it(client, session, jazz_night, auth_headers):
    entries = _entries_for(session, jazz_night)
    assert sorted(entry.recipient_id for entry in entries) == [1, 2, 3]
    assert all(not entry.is_read and entry.seen_at is None for entry in entries)

    response = client.get("/notifications/", headers=auth_headers(2))

    assert response.status_code == 200
    body = response.json()
    assert body["unread_count"] == 1
    (item,) = body["items"]
    assert item["id"] == jazz_night
    assert item["notification_id"] == jazz_night
    assert item["title"] == "New Event: Jazz Night"
    assert item["message"] == "Starts 8pm"
    assert item["link"] == "/events/42"
    assert item["is_read"] is False
    assert item["seen_at"] is None


def test_mark_read_is_scoped_to_the_recipient(client, jazz_night, auth_headers):
    response = client.patch(f"/notifications/{jazz_night}/read", headers=auth_headers(2))
    assert response.status_code == 200
    assert response.json() == {"success": True}

    recipient_two = client.get("/notifications/", headers=auth_headers(2)).json()
    assert recipient_two["unread_count"] == 0
    assert recipient_two["items"][0]["is_read"] is True
    assert recipient_two["items"][0]["seen_at"] is not None

    recipient_one = client.get("/notifications/", headers=auth_headers(1)).json()
    assert recipient_one["unread_count"] == 1


def test_mark_read_twice_keeps_the_first_seen_at(client, jazz_night, auth_headers):
    client.patch(f"/notifications/{jazz_night}/read", headers=auth_headers(2))
    first = client.get("/notifications/", headers=auth_headers(2)).json()["items"][0]

    response = client.patch(f"/notifications/{jazz_night}/read", headers=auth_headers(2))

    assert response.status_code == 200
    second = client.get("/notifications/", headers=auth_headers(2)).json()["items"][0]
    assert second["seen_at"] == first["seen_at"]


def test_deleted_event_is_reconciled_for_everyone(
    client, session, jazz_night, auth_headers, delete_event
):
    delete_event(42)

    response = client.get("/notifications/", headers=auth_headers(1))

    assert response.status_code == 200
    assert response.json() == {"items": [], "unread_count": 0}
    assert _entries_for(session, jazz_night) == []
    assert session.query(NotificationModel).filter_by(id=jazz_night).count() == 0

    again = client.get("/notifications/", headers=auth_headers(2))
    assert again.json() == {"items": [], "unread_count": 0}


def test_dismiss_twice_reports_nothing_removed(client, session, jazz_night, auth_headers):
    first = client.delete(f"/notifications/{jazz_night}", headers=auth_headers(1))
    assert first.json() == {"success": True, "removed": 1}

    second = client.delete(f"/notifications/{jazz_night}", headers=auth_headers(1))

    assert second.status_code == 200
    assert second.json() == {"success": True, "removed": 0}
    assert sorted(entry.recipient_id for entry in _entries_for(session, jazz_night)) == [2, 3]


def test_unread_count_endpoint_matches_feed(client, jazz_night, auth_headers):
    response = client.get("/notifications/unread-count", headers=auth_headers(3))

    assert response.status_code == 200
    assert response.json() == {"unread_count": 1}


@pytest.mark.parametrize("recipient_id", ["abc", "-3", "0", "1.5"])
def test_feed_for_invalid_recipient_is_empty(client, jazz_night, auth_headers, recipient_id):
    response = client.get(
        "/notifications/", params={"recipient_id": recipient_id}, headers=auth_headers(1)
    )

    assert response.status_code == 200
    assert response.json() == {"items": [], "unread_count": 0}


def test_scoped_mutations_without_recipient_require_authentication(
    client, jazz_night, auth_headers
):
    headers = auth_headers(1)

    read = client.patch(
        f"/notifications/{jazz_night}/read", params={"recipient_id": "abc"}, headers=headers
    )
    removed = client.delete(
        f"/notifications/{jazz_night}", params={"recipient_id": "abc"}, headers=headers
    )

    assert read.status_code == 401
    assert removed.status_code == 401
    assert read.json() == {"detail": "Valid numeric recipient id is required"}


def test_recipient_can_be_selected_by_an_admin(client, jazz_night, admin_headers):
    response = client.get(
        "/notifications/", params={"recipient_id": 3}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["unread_count"] == 1


def test_recipient_cookie_is_honoured(client, jazz_night, admin_headers):
    headers = {**admin_headers, "Cookie": "userId=2"}

    response = client.get("/notifications/", headers=headers)

    assert response.status_code == 200
    assert response.json()["unread_count"] == 1


def test_users_cannot_read_another_users_feed(client, jazz_night, auth_headers):
    response = client.get(
        "/notifications/", params={"recipient_id": 2}, headers=auth_headers(1)
    )

    assert response.status_code == 403


def test_requests_without_a_valid_token_are_rejected(client):
    assert client.get("/notifications/").status_code == 401
    assert (
        client.get(
            "/notifications/", headers={"Authorization": "Bearer not-a-token"}
        ).status_code
        == 401
    )


def test_broadcast_requires_admin(client, make_users, auth_headers):
    make_users(1)

    response = client.post(
        "/notifications/",
        json={"title": "Hi", "message": "There"},
        headers=auth_headers(1),
    )

    assert response.status_code == 403


def test_broadcast_validates_required_fields(client, session, admin_headers):
    response = client.post("/notifications/", json={"title": ""}, headers=admin_headers)

    assert response.status_code == 400
    assert session.query(NotificationModel).count() == 0


def test_broadcast_store_failure_returns_500(client, admin_headers, monkeypatch):
    def _fail(*_args, **_kwargs):
        raise NotificationStoreError("db down")

    monkeypatch.setattr(notifications_routes, "broadcast_notification_uc", _fail)

    response = client.post(
        "/notifications/",
        json={"title": "Maintenance", "message": "System offline tonight"},
        headers=admin_headers,
    )

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to create notification"}


def test_feed_store_failure_returns_500(client, auth_headers, monkeypatch):
    def _fail(*_args, **_kwargs):
        raise NotificationStoreError("db down")

    monkeypatch.setattr(notifications_routes, "get_feed_uc", _fail)

    response = client.get("/notifications/", headers=auth_headers(1))

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to fetch notifications"}


def test_announce_event_endpoint(client, make_users, make_event, admin_headers, auth_headers):
    make_users(1)
    make_event(7, title="Poetry Slam", location="Library")

    response = client.post("/notifications/events/7", headers=admin_headers)

    assert response.status_code == 201
    (item,) = client.get("/notifications/", headers=auth_headers(1)).json()["items"]
    assert item["title"] == "New Event: Poetry Slam"
    assert item["message"] == "Location: Library"
    assert item["link"] == "/events/7"


def test_announce_unknown_event_returns_404(client, admin_headers):
    response = client.post("/notifications/events/999", headers=admin_headers)

    assert response.status_code == 404


def test_purge_event_notifications_endpoint(
    client, session, jazz_night, admin_headers, delete_event
):
    delete_event(42)

    response = client.delete("/notifications/events/42", headers=admin_headers)

    assert response.json() == {"success": True, "removed": 1}
    assert _entries_for(session, jazz_night) == []


def test_token_without_numeric_subject_cannot_pick_a_recipient(client, session, jazz_night):
    token = create_access_token({"sub": "someone@example.com", "is_admin": False})
    headers = {"Authorization": f"Bearer {token}"}
    params = {"recipient_id": 2}

    feed = client.get("/notifications/", params=params, headers=headers)
    read = client.patch(f"/notifications/{jazz_night}/read", params=params, headers=headers)
    removed = client.delete(f"/notifications/{jazz_night}", params=params, headers=headers)
    by_cookie = client.get(
        "/notifications/", headers={**headers, "Cookie": "userId=2"}
    )

    assert feed.status_code == 403
    assert read.status_code == 403
    assert removed.status_code == 403
    assert by_cookie.status_code == 403
    entries = _entries_for(session, jazz_night)
    assert sorted(entry.recipient_id for entry in entries) == [1, 2, 3]
    assert all(not entry.is_read for entry in entries)


def test_failed_stale_cleanup_is_logged_and_not_surfaced(
    client, session, jazz_night, auth_headers, delete_event, monkeypatch, caplog
):
    def _fail(*_args, **_kwargs):
        raise NotificationStoreError("db down")

    monkeypatch.setattr(notifications_routes, "purge_notifications_for_links_uc", _fail)
    delete_event(42)

    with caplog.at_level(logging.ERROR):
        response = client.get("/notifications/", headers=auth_headers(1))

    assert response.status_code == 200
    assert response.json() == {"items": [], "unread_count": 0}
    assert "Error purging stale notifications" in caplog.text
    assert len(_entries_for(session, jazz_night)) == 3

    again = client.get("/notifications/", headers=auth_headers(1))
    assert again.status_code == 200
    assert again.json() == {"items": [], "unread_count": 0}
