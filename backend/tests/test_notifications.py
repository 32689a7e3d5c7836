import pytest

from storefront.errors import NotFound
from storefront.services.notification_service import NotificationService


@pytest.fixture
def notes(db, user, other_user):
    svc = NotificationService(db)
    first = svc.notify(user.id, "Welcome", "Thanks for joining")
    second = svc.notify(user.id, "Sale", "Your wishlist item is on sale")
    svc.notify(other_user.id, "Hi", "Not yours")
    db.commit()
    return first, second


def test_list_newest_first(client, user_headers, notes):
    body = client.get("/api/notifications", headers=user_headers).json()
    assert body["results"] == 2
    titles = [n["title"] for n in body["data"]["notifications"]]
    assert titles == ["Sale", "Welcome"]
    assert body["data"]["notifications"][0]["isRead"] is False


def test_mark_as_read(client, user_headers, other_headers, notes):
    first, _ = notes
    assert client.put(f"/api/notifications/read/{first.id}", headers=other_headers).status_code == 404

    res = client.put(f"/api/notifications/read/{first.id}", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["data"]["notification"]["isRead"] is True


def test_clear(client, db, user, other_user, user_headers, notes):
    res = client.delete("/api/notifications/clear", headers=user_headers)
    assert res.status_code == 204
    svc = NotificationService(db)
    assert svc.list_for_user(user.id) == []
    assert len(svc.list_for_user(other_user.id)) == 1


def test_mark_missing(db, user):
    with pytest.raises(NotFound):
        NotificationService(db).mark_as_read(user.id, 12345)
