async def signup(client, **overrides):
    payload = {
        "username": "alice",
        "email": "alice@circula.io",
        "password": "secret-pass",
        "city": "Pune",
    }
    payload.update(overrides)
    return await client.post("/auth/signup", json=payload)


async def test_signup_returns_user_and_token(client):
    resp = await signup(client)

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["username"] == "alice"
    assert body["user"]["role"] == "Customer"
    assert body["user"]["status"] == "Active"
    assert body["token_type"] == "bearer"
    assert "hashed_password" not in body["user"]


async def test_duplicate_email_is_rejected(client):
    await signup(client)

    resp = await signup(client, username="alice2")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already exists"


async def test_duplicate_username_is_rejected(client):
    await signup(client)

    resp = await signup(client, email="other@circula.io")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username already exists"


async def test_signup_validates_input(client):
    resp = await signup(client, email="not-an-email", password="123")
    assert resp.status_code == 422


async def test_login_with_valid_credentials(client):
    await signup(client)

    resp = await client.post(
        "/auth/login", json={"email": "alice@circula.io", "password": "secret-pass"}
    )

    assert resp.status_code == 200
    token = resp.json()["access_token"]
    profile = await client.get("/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert profile.json()["email"] == "alice@circula.io"


async def test_login_with_wrong_password(client):
    await signup(client)

    resp = await client.post(
        "/auth/login", json={"email": "alice@circula.io", "password": "wrong-pass"}
    )

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"


async def test_disabled_account_cannot_log_in(market):
    admin = await market.admin()
    alice = await market.signup("alice")
    await market.client.put(
        f"/admin/users/{alice['id']}/status",
        json={"status": "Inactive"},
        headers=market.headers(admin),
    )

    resp = await market.client.post(
        "/auth/login", json={"email": "alice@circula.io", "password": "secret-pass"}
    )

    assert resp.status_code == 403


async def test_profile_update(market):
    alice = await market.signup("alice")

    resp = await market.client.put(
        "/auth/profile",
        json={"username": "alice_b", "email": "alice@circula.io", "phone": "5550199", "city": "Goa"},
        headers=market.headers(alice),
    )

    assert resp.status_code == 200
    assert resp.json()["username"] == "alice_b"
    assert resp.json()["city"] == "Goa"


async def test_profile_update_cannot_take_another_users_email(market):
    alice = await market.signup("alice")
    await market.signup("bob")

    resp = await market.client.put(
        "/auth/profile",
        json={"username": "alice", "email": "bob@circula.io"},
        headers=market.headers(alice),
    )

    assert resp.status_code == 400


async def test_profile_requires_token(client):
    assert (await client.get("/auth/profile")).status_code == 401
    bad = {"Authorization": "Bearer garbage"}
    assert (await client.get("/auth/profile", headers=bad)).status_code == 401


async def test_logout(market):
    alice = await market.signup("alice")
    resp = await market.client.post("/auth/logout", headers=market.headers(alice))
    assert resp.json() == {"message": "Logout successful"}
