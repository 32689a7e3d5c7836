def test_get_profile(client, user, user_headers):
    body = client.get("/api/profile", headers=user_headers).json()
    assert body["data"]["user"] == {
        "id": user.id,
        "name": "Jane Doe",
        "email": "jane@example.com",
        "isAdmin": False,
        "createdAt": body["data"]["user"]["createdAt"],
    }


def test_update_profile(client, user_headers):
    res = client.put("/api/profile", json={"name": "Jane Q. Doe"}, headers=user_headers)
    assert res.status_code == 200
    assert res.json()["data"]["user"]["name"] == "Jane Q. Doe"
    assert res.json()["data"]["user"]["email"] == "jane@example.com"


def test_update_profile_email_conflict(client, user_headers, other_user):
    res = client.put("/api/profile", json={"email": "john@example.com"}, headers=user_headers)
    assert res.status_code == 409


def test_update_profile_invalid_email(client, user_headers):
    assert client.put("/api/profile", json={"email": "not-an-email"}, headers=user_headers).status_code == 400


def test_delete_account_revokes_access(client, user_headers):
    assert client.delete("/api/profile", headers=user_headers).status_code == 204
    res = client.get("/api/profile", headers=user_headers)
    assert res.status_code == 401
    assert res.json()["message"] == "The user belonging to this token no longer exists."


def test_admin_user_management(client, user, other_user, user_headers, admin_headers):
    assert client.get("/api/users", headers=user_headers).status_code == 403

    body = client.get("/api/users", headers=admin_headers).json()
    assert body["results"] == 3

    assert client.delete(f"/api/users/{other_user.id}", headers=admin_headers).status_code == 204
    emails = [u["email"] for u in client.get("/api/users", headers=admin_headers).json()["data"]["users"]]
    assert "john@example.com" not in emails
    assert client.delete(f"/api/users/{other_user.id}", headers=admin_headers).status_code == 404
