import pytest

SEEDED_PASSWORD = "password123"


@pytest.mark.anyio
async def test_health_check(async_client):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


@pytest.mark.anyio
@pytest.mark.parametrize("headers", [{}, {"X-User-Id": "abc"}, {"X-User-Id": "9999"}])
async def test_unidentified_caller_is_rejected(async_client, headers):
    resp = await async_client.get("/api/v1/so-sessions", headers=headers)
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_inactive_user_is_rejected(async_client, inactive_headers):
    resp = await async_client.get("/api/v1/assets", headers=inactive_headers)
    assert resp.status_code == 401
    assert resp.json()["detail"] == "User account is disabled"


@pytest.mark.anyio
async def test_viewer_is_read_only(async_client, viewer_headers, active_session):
    session_id = active_session["id"]

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}", headers=viewer_headers)
    assert resp.status_code == 200

    resp = await async_client.post(
        f"/api/v1/so-sessions/{session_id}/scan", json={"assetNumber": "FA001"}, headers=viewer_headers,
    )
    assert resp.status_code == 403

    resp = await async_client.post(
        "/api/v1/assets", json={"assetNumber": "FA500", "name": "Not allowed"}, headers=viewer_headers,
    )
    assert resp.status_code == 403

    resp = await async_client.put(
        f"/api/v1/so-sessions/{session_id}/notes", json={"notes": "hi"}, headers=viewer_headers,
    )
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_session_lifecycle_is_admin_only(async_client, operator_headers, active_session):
    resp = await async_client.post(
        "/api/v1/so-sessions", json={"name": "Operator session", "year": 2025}, headers=operator_headers,
    )
    assert resp.status_code == 403

    resp = await async_client.post(
        f"/api/v1/so-sessions/{active_session['id']}/complete", headers=operator_headers,
    )
    assert resp.status_code == 403

    resp = await async_client.delete(f"/api/v1/so-sessions/{active_session['id']}", headers=operator_headers)
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_current_user_profile(async_client, viewer_headers):
    resp = await async_client.get("/api/v1/users/me", headers=viewer_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["email"] == "viewer@test.com"
    assert data["role"] == "VIEWER"
    assert "hashedPassword" not in data


@pytest.mark.anyio
async def test_change_own_password(async_client, viewer_headers):
    resp = await async_client.post(
        "/api/v1/users/me/password",
        json={"currentPassword": "wrong-password", "newPassword": "new-password-1"},
        headers=viewer_headers,
    )
    assert resp.status_code == 400

    resp = await async_client.post(
        "/api/v1/users/me/password",
        json={"currentPassword": SEEDED_PASSWORD, "newPassword": "new-password-1"},
        headers=viewer_headers,
    )
    assert resp.status_code == 200, resp.text

    resp = await async_client.post(
        "/api/v1/users/me/password",
        json={"currentPassword": SEEDED_PASSWORD, "newPassword": "new-password-2"},
        headers=viewer_headers,
    )
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_user_administration(async_client, admin_headers, viewer_headers):
    resp = await async_client.post(
        "/api/v1/users",
        json={"email": "auditor@test.com", "fullName": "New Auditor", "role": "SO_ASSET_USER"},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    created = resp.json()
    assert created["temporaryPassword"]
    assert created["mustChangePassword"] is True
    user_id = created["id"]

    resp = await async_client.post(
        "/api/v1/users", json={"email": "AUDITOR@test.com", "fullName": "Copy"}, headers=admin_headers,
    )
    assert resp.status_code == 409

    resp = await async_client.get("/api/v1/users?role=SO_ASSET_USER", headers=admin_headers)
    assert resp.status_code == 200
    assert sorted(u["email"] for u in resp.json()["users"]) == ["auditor@test.com", "operator@test.com"]

    resp = await async_client.get("/api/v1/users", headers=viewer_headers)
    assert resp.status_code == 403

    resp = await async_client.put(f"/api/v1/users/{user_id}", json={"role": "VIEWER"}, headers=admin_headers)
    assert resp.json()["role"] == "VIEWER"

    resp = await async_client.post(f"/api/v1/users/{user_id}/reset-password", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["temporaryPassword"]

    resp = await async_client.delete(f"/api/v1/users/{user_id}", headers=admin_headers)
    assert resp.status_code == 200

    # Deactivated users can no longer call the API
    resp = await async_client.get("/api/v1/users/me", headers={"X-User-Id": str(user_id)})
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_admin_cannot_deactivate_self(async_client, admin_headers, seeded):
    admin_id = seeded["users"]["admin"]

    resp = await async_client.delete(f"/api/v1/users/{admin_id}", headers=admin_headers)
    assert resp.status_code == 400

    resp = await async_client.put(f"/api/v1/users/{admin_id}", json={"isActive": False}, headers=admin_headers)
    assert resp.status_code == 400
