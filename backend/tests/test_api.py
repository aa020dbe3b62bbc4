from datetime import date, timedelta
from decimal import Decimal

from conftest import auth_headers, item_attributes


def future(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def item_payload(**overrides):
    payload = item_attributes(**overrides)
    payload["price_per_day"] = str(payload["price_per_day"])
    return payload


async def test_ping(client):
    res = await client.get("/ping")

    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


async def test_register_login_and_me(client):
    res = await client.post(
        "/api/auth/register",
        json={"name": "Lena Lister", "email": "lena@example.com", "password": "s3cret", "role": "lister"},
    )
    assert res.status_code == 200
    assert res.json()["user"]["profile"]["role"] == "lister"

    duplicate = await client.post(
        "/api/auth/register",
        json={"name": "Lena", "email": "lena@example.com", "password": "other"},
    )
    assert duplicate.status_code == 400

    bad = await client.post("/api/auth/login", json={"email": "lena@example.com", "password": "nope"})
    assert bad.status_code == 401

    login = await client.post("/api/auth/login", json={"email": "lena@example.com", "password": "s3cret"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "lena@example.com"


async def test_protected_routes_require_token(client):
    assert (await client.get("/api/rental-requests")).status_code == 401
    assert (await client.post("/api/rental-items", json=item_payload())).status_code == 401
    garbage = {"Authorization": "Bearer not-a-jwt"}
    assert (await client.get("/api/dashboard", headers=garbage)).status_code == 401


async def test_rental_types_are_localized(client, rental_types):
    res = await client.get("/api/rental-types", params={"locale": "id"})

    assert res.status_code == 200
    data = res.json()["data"]
    assert [t["key"] for t in data][:2] == ["car", "motorcycle"]
    assert data[0]["name"] == "Mobil"


async def test_create_show_and_list_item(client, rental_types, owner, renter):
    res = await client.post("/api/rental-items", json=item_payload(), headers=auth_headers(owner))
    assert res.status_code == 201
    item = res.json()["data"]
    assert Decimal(item["price_per_day"]) == Decimal("45.00")
    assert item["user_id"] == owner.id

    listing = await client.get("/api/rental-items", params={"type": "equipment", "search": "CAMERA"})
    page = listing.json()["data"]
    assert page["total"] == 1
    assert page["per_page"] == 12
    assert page["items"][0]["id"] == item["id"]

    anonymous = await client.get(f"/api/rental-items/{item['id']}")
    assert anonymous.status_code == 200
    assert anonymous.json()["data"]["can_request"] is False
    assert anonymous.json()["data"]["rental_item"]["owner"]["name"] == "Olivia Owner"

    as_renter = await client.get(f"/api/rental-items/{item['id']}", headers=auth_headers(renter))
    assert as_renter.json()["data"]["can_request"] is True

    as_owner = await client.get(f"/api/rental-items/{item['id']}", headers=auth_headers(owner))
    assert as_owner.json()["data"]["can_request"] is False

    assert (await client.get("/api/rental-items/999")).status_code == 404


async def test_create_item_validation_errors_are_field_level(client, rental_types, owner):
    res = await client.post(
        "/api/rental-items",
        json=item_payload(currency="US", minimum_rental_days=4, maximum_rental_days=2),
        headers=auth_headers(owner),
    )

    assert res.status_code == 422
    body = res.json()
    assert body["detail"] == "Validation failed"
    assert set(body["errors"]) == {"currency", "maximum_rental_days"}


async def test_update_and_delete_item_are_owner_only(client, item, owner, other_user):
    forbidden = await client.put(
        f"/api/rental-items/{item.id}", json={"title": "Hijacked"}, headers=auth_headers(other_user)
    )
    assert forbidden.status_code == 403
    assert forbidden.json() == {"detail": "Forbidden"}

    updated = await client.put(
        f"/api/rental-items/{item.id}", json={"title": "Camera Kit v2"}, headers=auth_headers(owner)
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["title"] == "Camera Kit v2"
    assert updated.json()["data"]["description"] == "Mirrorless camera with two lenses."

    assert (
        await client.delete(f"/api/rental-items/{item.id}", headers=auth_headers(other_user))
    ).status_code == 403
    assert (
        await client.delete(f"/api/rental-items/{item.id}", headers=auth_headers(owner))
    ).status_code == 200
    assert (await client.get(f"/api/rental-items/{item.id}")).status_code == 404


async def test_request_lifecycle_over_http(client, item, owner, renter, other_user):
    submitted = await client.post(
        "/api/rental-requests",
        json={
            "rental_item_id": item.id,
            "start_date": future(1),
            "end_date": future(4),
            "message": "Need it for a wedding",
        },
        headers=auth_headers(renter),
    )
    assert submitted.status_code == 201
    rental_request = submitted.json()["data"]
    assert rental_request["status"] == "pending"
    assert rental_request["total_days"] == 4
    assert Decimal(rental_request["total_amount"]) == Decimal("180.00")
    request_url = f"/api/rental-requests/{rental_request['id']}"

    as_renter = await client.get(request_url, headers=auth_headers(renter))
    assert as_renter.json()["data"]["is_renter"] is True
    assert as_renter.json()["data"]["is_lister"] is False
    assert (await client.get(request_url, headers=auth_headers(other_user))).status_code == 403

    renter_reply = await client.put(request_url, json={"status": "approved"}, headers=auth_headers(renter))
    assert renter_reply.status_code == 403

    approved = await client.put(
        request_url,
        json={"status": "approved", "response_message": "Enjoy!"},
        headers=auth_headers(owner),
    )
    assert approved.status_code == 200
    assert approved.json()["data"]["status"] == "approved"
    assert approved.json()["data"]["responded_at"] is not None

    again = await client.put(request_url, json={"status": "rejected"}, headers=auth_headers(owner))
    assert again.status_code == 409
    assert "already been approved" in again.json()["detail"]

    inbox = await client.get("/api/rental-requests", headers=auth_headers(owner))
    data = inbox.json()["data"]
    assert data["my_requests"]["total"] == 0
    assert data["received_requests"]["total"] == 1
    assert data["received_requests"]["items"][0]["renter"]["name"] == "Ravi Renter"

    dashboard = await client.get("/api/dashboard", headers=auth_headers(owner))
    assert dashboard.json()["data"]["stats"]["pending_requests"] == 0
    dashboard_item = dashboard.json()["data"]["my_items"][0]
    assert dashboard_item["id"] == item.id
    assert [r["id"] for r in dashboard_item["recent_requests"]] == [rental_request["id"]]
    assert dashboard_item["recent_requests"][0]["status"] == "approved"


async def test_submit_request_errors(client, item, renter):
    backwards = await client.post(
        "/api/rental-requests",
        json={"rental_item_id": item.id, "start_date": future(5), "end_date": future(2)},
        headers=auth_headers(renter),
    )
    assert backwards.status_code == 422
    assert "end_date" in backwards.json()["errors"]

    missing = await client.post(
        "/api/rental-requests",
        json={"rental_item_id": 999, "start_date": future(1), "end_date": future(2)},
        headers=auth_headers(renter),
    )
    assert missing.status_code == 404

    assert (
        await client.get("/api/rental-requests/999", headers=auth_headers(renter))
    ).status_code == 404
