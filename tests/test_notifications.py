# tests/test_notifications.py

from app.services.notification_service import NotificationService
from app.services.social_service import SocialService
from tests.conftest import create_account


def test_follow_creates_notification(client, user, other_user):
    client.post(f"/api/v1/social/follow/{user['id']}", headers=other_user["headers"])

    data = client.get("/api/v1/notifications", headers=user["headers"]).json()["data"]

    assert data["total"] == 1
    notification = data["items"][0]
    assert notification["type"] == "follow"
    assert notification["message"] == "bobby started following you"
    assert notification["isRead"] is False


def test_unread_and_mark_read(client, db, user):
    service = NotificationService(db)
    first = service.create(user["id"], "system", "Welcome", "Hello there")
    service.create(user["id"], "system", "Tip", "Try playlists")

    count = client.get("/api/v1/notifications/unread-count", headers=user["headers"])
    assert count.json()["data"] == {"unread": 2}

    read = client.patch(
        f"/api/v1/notifications/{first.notification_id}/read", headers=user["headers"]
    )
    assert read.json()["data"]["isRead"] is True

    unread = client.get(
        "/api/v1/notifications?unreadOnly=true", headers=user["headers"]
    ).json()["data"]
    assert [item["title"] for item in unread["items"]] == ["Tip"]

    all_read = client.patch("/api/v1/notifications/read-all", headers=user["headers"])
    assert all_read.json()["data"] == {"updated": 1}
    count = client.get("/api/v1/notifications/unread-count", headers=user["headers"])
    assert count.json()["data"] == {"unread": 0}


def test_cannot_touch_other_users_notifications(client, db, user, other_user):
    notification = NotificationService(db).create(user["id"], "system", "Private", "Only alice")
    url = f"/api/v1/notifications/{notification.notification_id}"

    assert client.patch(f"{url}/read", headers=other_user["headers"]).status_code == 404
    assert client.delete(url, headers=other_user["headers"]).status_code == 404

    assert client.delete(url, headers=user["headers"]).status_code == 200
    data = client.get("/api/v1/notifications", headers=user["headers"]).json()["data"]
    assert data["total"] == 0


def test_notify_followers(db, user, other_user):
    third = create_account(db, "carol")
    service = NotificationService(db)
    social = SocialService(db)
    social.follow_user(other_user["id"], user["id"])
    social.follow_user(third["id"], user["id"])

    sent = service.notify_followers(user["id"], "announcement", "News", "Big news")

    assert sent == 2
    assert service.get_unread_count(other_user["id"]) == 1
    assert service.get_unread_count(third["id"]) == 1
