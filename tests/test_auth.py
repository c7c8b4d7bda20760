# tests/test_auth.py

import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.services.admin_service import AdminService
from tests.conftest import auth_headers


def signup(client, email="carol@example.com", username="carol", password="Secret123"):
    return client.post(
        "/api/v1/auth/signup",
        json={"email": email, "username": username, "password": password},
    )


def test_signup_returns_tokens_and_user(client):
    response = signup(client)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["statusCode"] == 201
    assert body["data"]["user"]["username"] == "carol"
    assert body["data"]["user"]["email"] == "carol@example.com"
    assert body["data"]["accessToken"]
    assert body["data"]["refreshToken"]
    assert body["data"]["expiresIn"] == 15 * 60
    assert "passwordHash" not in body["data"]["user"]


def test_signup_duplicate_email_conflicts(client):
    signup(client)
    response = signup(client, username="another")

    assert response.status_code == 409
    assert response.json()["message"] == "Email already registered"


def test_signup_duplicate_username_conflicts(client):
    signup(client)
    response = signup(client, email="other@example.com")

    assert response.status_code == 409


def test_signup_rejects_weak_password(client):
    response = signup(client, password="alllowercase")

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["errors"][0]["field"] == "password"


@pytest.mark.parametrize("email", ["not-an-email", "x@-.--", "carol@localhost"])
def test_signup_rejects_bad_email(client, email):
    response = signup(client, email=email)

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "email"


def test_signup_lowercases_email(client):
    response = signup(client, email="Carol@Example.com")

    assert response.status_code == 201
    assert response.json()["data"]["user"]["email"] == "carol@example.com"


def test_login(client, user):
    response = client.post(
        "/api/v1/auth/login", json={"email": user["email"], "password": user["password"]}
    )

    assert response.status_code == 200
    assert response.json()["data"]["user"]["userId"] == user["id"]


def test_login_wrong_password(client, user):
    response = client.post(
        "/api/v1/auth/login", json={"email": user["email"], "password": "Wrong1234"}
    )

    assert response.status_code == 401


def test_login_while_banned_is_forbidden(client, db, user, admin):
    AdminService(db).ban_user(admin["id"], user["id"], "spam")

    response = client.post(
        "/api/v1/auth/login", json={"email": user["email"], "password": user["password"]}
    )

    assert response.status_code == 403


def test_protected_route_requires_token(client):
    response = client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.json()["status"] == "error"


def test_protected_route_rejects_bad_token(client):
    response = client.get("/api/v1/auth/me", headers=auth_headers("not.a.jwt"))

    assert response.status_code == 401


def test_refresh_token_is_not_an_access_token(client, user):
    response = client.get("/api/v1/auth/me", headers=auth_headers(user["refresh_token"]))

    assert response.status_code == 401


def test_me(client, user):
    response = client.get("/api/v1/auth/me", headers=user["headers"])

    assert response.status_code == 200
    assert response.json()["data"]["username"] == "alice"


def test_refresh_rotates_session(client, user):
    response = client.post("/api/v1/auth/refresh", json={"refreshToken": user["refresh_token"]})

    assert response.status_code == 200
    new_refresh = response.json()["data"]["refreshToken"]
    assert new_refresh != user["refresh_token"]

    reused = client.post("/api/v1/auth/refresh", json={"refreshToken": user["refresh_token"]})
    assert reused.status_code == 401

    again = client.post("/api/v1/auth/refresh", json={"refreshToken": new_refresh})
    assert again.status_code == 200


def test_refresh_reads_cookie(client, user):
    cookie_client = TestClient(app, cookies={"refresh_token": user["refresh_token"]})
    response = cookie_client.post("/api/v1/auth/refresh")

    assert response.status_code == 200


def test_refresh_without_token(client):
    response = client.post("/api/v1/auth/refresh")

    assert response.status_code == 401


def test_logout_revokes_refresh_but_not_access(client, user):
    response = client.post("/api/v1/auth/logout", headers=user["headers"])
    assert response.status_code == 200

    refreshed = client.post("/api/v1/auth/refresh", json={"refreshToken": user["refresh_token"]})
    assert refreshed.status_code == 401

    me = client.get("/api/v1/auth/me", headers=user["headers"])
    assert me.status_code == 200


def test_update_profile(client, user):
    response = client.put(
        "/api/v1/auth/profile",
        json={"username": "alice2", "bio": "Film nerd", "avatar": "https://img.example.com/a.png"},
        headers=user["headers"],
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["username"] == "alice2"
    assert data["bio"] == "Film nerd"
    assert data["avatar"] == "https://img.example.com/a.png"


def test_update_profile_rejects_bad_avatar(client, user):
    response = client.put(
        "/api/v1/auth/profile", json={"avatar": "not a url"}, headers=user["headers"]
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "avatar"


def test_update_profile_username_taken(client, user, other_user):
    response = client.put(
        "/api/v1/auth/profile", json={"username": "bobby"}, headers=user["headers"]
    )

    assert response.status_code == 409


def test_change_password(client, user):
    response = client.put(
        "/api/v1/auth/password",
        json={"oldPassword": user["password"], "newPassword": "NewSecret456"},
        headers=user["headers"],
    )
    assert response.status_code == 200

    old_login = client.post(
        "/api/v1/auth/login", json={"email": user["email"], "password": user["password"]}
    )
    assert old_login.status_code == 401

    new_login = client.post(
        "/api/v1/auth/login", json={"email": user["email"], "password": "NewSecret456"}
    )
    assert new_login.status_code == 200


def test_change_password_wrong_current(client, user):
    response = client.put(
        "/api/v1/auth/password",
        json={"oldPassword": "Nope12345", "newPassword": "NewSecret456"},
        headers=user["headers"],
    )

    assert response.status_code == 401
