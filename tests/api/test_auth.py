"""Register, login and token refresh."""
from tests.factories import auth_headers, create_user


async def _register(client, username="alice", email="alice@example.com", password="s3cret-pass"):
    return await client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": email, "password": password},
    )


async def test_register_and_login(client):
    res = await _register(client)
    assert res.status_code == 201
    body = res.json()
    assert body["user"]["username"] == "alice"
    assert body["user"]["is_moderator"] is False
    assert body["access_token"]

    res = await client.post(
        "/api/v1/auth/login", json={"email": "alice@example.com", "password": "s3cret-pass"}
    )
    assert res.status_code == 200

    res = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {res.json()['access_token']}"})
    assert res.status_code == 200
    assert res.json()["email"] == "alice@example.com"


async def test_duplicate_email_is_rejected(client):
    await _register(client)
    res = await _register(client, username="alice2")
    assert res.status_code == 400


async def test_wrong_password(client):
    await _register(client)
    res = await client.post(
        "/api/v1/auth/login", json={"email": "alice@example.com", "password": "wrong-pass"}
    )
    assert res.status_code == 401


async def test_refresh_token(client):
    tokens = (await _register(client)).json()

    res = await client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert res.status_code == 200
    assert res.json()["user"]["username"] == "alice"

    # An access token is not accepted in place of a refresh token.
    res = await client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert res.status_code == 401


async def test_banned_user_is_rejected(client, db):
    banned = await create_user(db, banned=True)
    res = await client.get("/api/v1/auth/me", headers=auth_headers(banned))
    assert res.status_code == 403


async def test_invalid_token(client):
    res = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})
    assert res.status_code == 401


async def test_health(client):
    res = await client.get("/health")
    assert res.json() == {"status": "ok"}
