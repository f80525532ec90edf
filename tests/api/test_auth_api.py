"""/api/auth routes."""


async def test_signup_returns_token_and_user(client):
    resp = await client.post("/api/auth/signup", json={
        "email": "New@Example.com", "password": "secret123", "full_name": "New User",
    })
    assert resp.status_code == 201
    body = resp.json()
    assert body["token"]
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["role"] == "user"
    assert "hashed_password" not in body["user"]

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == body["user"]["id"]


async def test_signup_validation_message(client):
    resp = await client.post("/api/auth/signup", json={
        "email": "short@example.com", "password": "123", "full_name": "Short",
    })
    assert resp.status_code == 400
    assert resp.json() == {"message": "Password must be at least 6 characters"}


async def test_signup_duplicate_email(client, donor):
    resp = await client.post("/api/auth/signup", json={
        "email": donor.email, "password": "secret123", "full_name": "Again",
    })
    assert resp.status_code == 400
    assert resp.json()["message"] == "User with this email already exists"


async def test_login(client, donor):
    ok = await client.post("/api/auth/login", json={"email": donor.email, "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["user"]["id"] == donor.id

    bad = await client.post("/api/auth/login", json={"email": donor.email, "password": "wrong!"})
    assert bad.status_code == 401
    assert bad.json() == {"message": "Invalid email or password"}


async def test_me_requires_token(client):
    assert (await client.get("/api/auth/me")).status_code == 401
    resp = await client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid or expired token"}


async def test_forgot_password_does_not_leak_accounts(client, donor):
    known = await client.post("/api/auth/forgot-password", json={"email": donor.email})
    unknown = await client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"})
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()


async def test_reset_password_with_bad_token(client):
    resp = await client.post("/api/auth/reset-password", json={"token": "nope", "password": "secret123"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid or expired reset token"}


async def test_create_first_admin_once(client):
    payload = {"email": "root@example.com", "password": "secret123", "full_name": "Root"}
    first = await client.post("/api/auth/create-first-admin", json=payload)
    assert first.status_code == 201
    assert first.json()["user"]["role"] == "admin"

    payload["email"] = "other@example.com"
    second = await client.post("/api/auth/create-first-admin", json=payload)
    assert second.status_code == 403


async def test_unknown_route_renders_message(client):
    resp = await client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "message" in resp.json()


async def test_health(client):
    resp = await client.get("/health")
    assert resp.json()["status"] == "healthy"
