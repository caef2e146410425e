"""Session lifecycle over HTTP: register, login, refresh rotation, logout."""

from __future__ import annotations

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.http import API, assert_envelope, bearer, login, upload

HTTPS = "https://localhost"


def test_register_with_json(client, session):
    resp = client.post(
        f"{API}/auth/register",
        json={
            "username": "  NewUser ",
            "email": "New@Example.com",
            "full_name": "New User",
            "password": DEFAULT_PASSWORD,
        },
    )
    body = assert_envelope(resp, 201)
    assert body["message"] == "User registered successfully"
    assert body["data"]["username"] == "newuser"
    assert body["data"]["email"] == "new@example.com"
    assert "password" not in body["data"]
    assert "refresh_token" not in body["data"]
    assert "Set-Cookie" not in resp.headers


def test_register_multipart_with_avatar(client, session):
    resp = client.post(
        f"{API}/auth/register",
        data={
            "username": "artist",
            "email": "artist@example.com",
            "full_name": "The Artist",
            "password": DEFAULT_PASSWORD,
            "avatar": upload("face.png"),
        },
    )
    body = assert_envelope(resp, 201)
    assert body["data"]["avatar_url"].startswith("/media/avatars/")
    assert body["data"]["cover_image_url"] is None


def test_register_conflict_and_weak_password(client, session):
    UserFactory(username="taken")
    payload = {
        "username": "taken",
        "email": "other@example.com",
        "full_name": "X",
        "password": DEFAULT_PASSWORD,
    }
    assert_envelope(client.post(f"{API}/auth/register", json=payload), 409)

    payload.update(username="fresh", password="weak")
    body = assert_envelope(client.post(f"{API}/auth/register", json=payload), 400)
    assert body["message"].startswith("Password must")


def test_login_returns_tokens_and_cookies(client, session):
    UserFactory(username="alice")
    resp = client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": DEFAULT_PASSWORD})

    body = assert_envelope(resp, 200)
    assert body["data"]["user"]["username"] == "alice"
    assert body["data"]["access_token"]
    assert body["data"]["refresh_token"]
    cookies = " ".join(resp.headers.getlist("Set-Cookie"))
    assert "accessToken=" in cookies
    assert "refreshToken=" in cookies
    assert "HttpOnly" in cookies


def test_login_failures(client, session):
    UserFactory(username="bob")
    wrong = client.post(f"{API}/auth/login", json={"username": "bob", "password": "Wrong-pass1"})
    assert_envelope(wrong, 401)

    unknown = client.post(f"{API}/auth/login", json={"username": "ghost", "password": "x"})
    assert_envelope(unknown, 404)

    missing = client.post(f"{API}/auth/login", json={"password": "x"})
    assert_envelope(missing, 400)


def test_me_requires_a_valid_token(client, session):
    UserFactory(username="carol")
    tokens = login(client, "carol")

    me = assert_envelope(client.get(f"{API}/auth/me", headers=bearer(tokens["access_token"])), 200)
    assert me["data"]["username"] == "carol"

    assert_envelope(client.get(f"{API}/auth/me"), 401)
    assert_envelope(client.get(f"{API}/auth/me", headers=bearer("not-a-jwt")), 401)
    # a refresh token is not an access token
    assert_envelope(client.get(f"{API}/auth/me", headers=bearer(tokens["refresh_token"])), 401)


def test_refresh_rotates_and_rejects_replay(client, session):
    UserFactory(username="dave")
    first = login(client, "dave")

    resp = client.post(f"{API}/auth/refresh-token", headers={"X-Refresh-Token": first["refresh_token"]})
    rotated = assert_envelope(resp, 200)["data"]
    assert rotated["refresh_token"] != first["refresh_token"]

    replay = client.post(f"{API}/auth/refresh-token", headers={"X-Refresh-Token": first["refresh_token"]})
    assert_envelope(replay, 401)

    again = client.post(f"{API}/auth/refresh-token", headers={"X-Refresh-Token": rotated["refresh_token"]})
    assert_envelope(again, 200)


def test_refresh_without_token(client, session):
    assert_envelope(client.post(f"{API}/auth/refresh-token"), 401)


def test_logout_revokes_both_tokens(client, session):
    UserFactory(username="erin")
    tokens = login(client, "erin")
    headers = bearer(tokens["access_token"])

    resp = client.post(f"{API}/auth/logout", headers=headers)
    assert_envelope(resp, 200)
    cleared = " ".join(resp.headers.getlist("Set-Cookie"))
    assert "accessToken=;" in cleared

    assert_envelope(client.get(f"{API}/auth/me", headers=headers), 401)
    refresh = client.post(f"{API}/auth/refresh-token", headers={"X-Refresh-Token": tokens["refresh_token"]})
    assert_envelope(refresh, 401)


def test_cookie_session(cookie_client, session):
    UserFactory(username="frank")
    login_resp = cookie_client.post(
        f"{API}/auth/login",
        json={"username": "frank", "password": DEFAULT_PASSWORD},
        base_url=HTTPS,
    )
    assert_envelope(login_resp, 200)

    me = cookie_client.get(f"{API}/auth/me", base_url=HTTPS)
    assert assert_envelope(me, 200)["data"]["username"] == "frank"

    assert_envelope(cookie_client.post(f"{API}/auth/refresh-token", base_url=HTTPS), 200)
    assert_envelope(cookie_client.post(f"{API}/auth/logout", base_url=HTTPS), 200)
    assert_envelope(cookie_client.get(f"{API}/auth/me", base_url=HTTPS), 401)
