"""/api/admin and /api/profiles routes."""

import pytest


async def test_admin_routes_reject_regular_users(client, donor_headers):
    for path in ["/api/admin/stats", "/api/admin/users", "/api/admin/donations", "/api/admin/reasons"]:
        resp = await client.get(path, headers=donor_headers)
        assert resp.status_code == 403, path


async def test_admin_stats(client, donor_headers, admin_headers):
    await client.post("/api/donations", json={"amount": 500}, headers=donor_headers)

    body = (await client.get("/api/admin/stats", headers=admin_headers)).json()
    assert body["donations"] == [{"status": "pending", "count": 1, "total_amount": 500}]
    assert {u["role"] for u in body["users"]} == {"user", "admin"}
    assert body["recent_activity"][0]["action"] == "CREATE_DONATION"
    assert body["recent_activity"][0]["user"]["email"] == "donor@example.com"


async def test_admin_user_management(client, donor, admin_headers):
    created = await client.post("/api/admin/users", headers=admin_headers, json={
        "email": "staff@example.com", "password": "secret123", "full_name": "Staff", "role": "user",
    })
    assert created.status_code == 201
    assert created.json()["role"] == "user"

    promoted = await client.patch(f"/api/admin/users/{donor.id}/role", headers=admin_headers, json={"role": "admin"})
    assert promoted.json()["role"] == "admin"

    listing = (await client.get("/api/admin/users?limit=2", headers=admin_headers)).json()
    assert listing["pagination"]["total"] == 3
    assert len(listing["users"]) == 2


async def test_admin_donation_status(client, donor_headers, admin_headers):
    donation = (await client.post("/api/donations", json={"amount": 500}, headers=donor_headers)).json()

    resp = await client.patch(
        f"/api/admin/donations/{donation['id']}/status", headers=admin_headers, json={"status": "completed"}
    )
    assert resp.status_code == 200
    assert resp.json()["completed_at"] is not None

    listing = (await client.get("/api/admin/donations?status=completed", headers=admin_headers)).json()
    assert [d["id"] for d in listing["donations"]] == [donation["id"]]

    missing = await client.patch("/api/admin/donations/missing/status", headers=admin_headers, json={"status": "completed"})
    assert missing.status_code == 404
    assert missing.json() == {"message": "Donation not found"}


@pytest.mark.parametrize("path,payload,patch", [
    ("/api/admin/reasons", {"title": "Education"}, {"title": "Health"}),
    ("/api/admin/communication-methods",
     {"name": "Telegram", "type": "telegram", "value": "@donate"}, {"value": "@give"}),
    ("/api/admin/payment-methods",
     {"name": "Bitcoin", "type": "bitcoin", "label": "Wallet", "requires_address": True}, {"order": 3}),
])
async def test_reference_data_crud(client, admin_headers, path, payload, patch):
    created = await client.post(path, json=payload, headers=admin_headers)
    assert created.status_code == 201, created.text
    item_id = created.json()["id"]

    updated = await client.patch(f"{path}/{item_id}", json=patch, headers=admin_headers)
    assert updated.status_code == 200
    for key, value in patch.items():
        assert updated.json()[key] == value

    assert len((await client.get(path, headers=admin_headers)).json()) == 1

    deleted = await client.delete(f"{path}/{item_id}", headers=admin_headers)
    assert deleted.json()["message"].endswith("deleted successfully")
    assert (await client.delete(f"{path}/{item_id}", headers=admin_headers)).status_code == 404


async def test_reason_requires_title(client, admin_headers):
    resp = await client.post("/api/admin/reasons", json={"title": "  "}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Title is required"}


# -- profiles -------------------------------------------------------------------

async def test_profile_is_public(client, donor):
    resp = await client.get(f"/api/profiles/{donor.id}")
    assert resp.status_code == 200
    assert resp.json()["full_name"] == donor.full_name
    assert "role" not in resp.json()

    assert (await client.get("/api/profiles/missing")).json() == {"message": "Profile not found"}


async def test_profile_update_permissions(client, donor, make_user, headers_for, donor_headers, admin_headers):
    stranger = await make_user("stranger@example.com")

    denied = await client.patch(f"/api/profiles/{donor.id}", json={"full_name": "Nope"}, headers=headers_for(stranger))
    assert denied.status_code == 403

    own = await client.patch(f"/api/profiles/{donor.id}", json={"full_name": "Dana New"}, headers=donor_headers)
    assert own.json()["full_name"] == "Dana New"

    by_admin = await client.patch(f"/api/profiles/{donor.id}", json={"full_name": "Dana Admin"}, headers=admin_headers)
    assert by_admin.status_code == 200
