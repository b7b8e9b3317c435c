"""
HTTP tests for the stock request routes.
"""
from datetime import timedelta

from stockflow.core.security import create_access_token
from stockflow.models.actor import ActorKind

BASE = "/api/v1/stock-requests"


async def create_via_api(client, headers, site, stock, qty=10):
    response = await client.post(
        f"{BASE}/",
        json={"siteId": site["_id"], "notes": "Weekly feed", "items": [{"stockInId": stock["_id"], "qtyRequested": qty}]},
        headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_returns_envelope(client, employee_headers, site, make_stock_item):
    feed = await make_stock_item()

    response = await client.post(
        f"{BASE}/",
        json={"siteId": site["_id"], "items": [{"stockInId": feed["_id"], "qtyRequested": 10}]},
        headers=employee_headers
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Stock request created successfully"
    assert body["data"]["status"] == "PENDING"
    assert body["data"]["items"][0]["qty_requested"] == 10
    assert "_id" in body["data"]


async def test_create_validation_error_has_kind(client, employee_headers, site, make_stock_item):
    feed = await make_stock_item()

    response = await client.post(
        f"{BASE}/",
        json={"siteId": site["_id"], "items": [{"stockInId": feed["_id"], "qtyRequested": 0}]},
        headers=employee_headers
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "validation_error"


async def test_missing_or_bad_token_is_unauthenticated(client):
    response = await client.get(f"{BASE}/")
    assert response.status_code == 401
    assert response.json()["kind"] == "unauthenticated"

    expired = create_access_token("someone", ActorKind.ADMIN, expires_delta=timedelta(minutes=-5))
    response = await client.get(f"{BASE}/", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401


async def test_employee_cannot_approve(client, employee_headers, site, make_stock_item):
    feed = await make_stock_item()
    request = await create_via_api(client, employee_headers, site, feed)

    response = await client.patch(f"{BASE}/{request['_id']}/approve", json={}, headers=employee_headers)

    assert response.status_code == 403
    assert response.json()["kind"] == "forbidden"


async def test_unknown_request_is_not_found(client, admin_headers):
    response = await client.get(f"{BASE}/64b7f0c2a1b2c3d4e5f6dddd", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


async def test_full_lifecycle_over_http(client, admin_headers, employee_headers, site, make_stock_item):
    feed = await make_stock_item(quantity=50)
    request = await create_via_api(client, employee_headers, site, feed, qty=10)
    item_id = request["items"][0]["_id"]

    response = await client.patch(
        f"{BASE}/{request['_id']}/approve",
        json={"itemModifications": [{"requestItemId": item_id, "qtyApproved": 8}], "comment": "Trimmed to budget"},
        headers=admin_headers
    )
    assert response.status_code == 200, response.text
    assert response.json()["data"]["status"] == "APPROVED"
    assert response.json()["data"]["items"][0]["qty_approved"] == 8

    response = await client.post(
        f"{BASE}/issue-materials",
        json={"requestId": request["_id"], "items": [{"requestItemId": item_id, "qtyIssued": 5}]},
        headers=admin_headers
    )
    assert response.status_code == 200, response.text
    issued = response.json()["data"]
    assert issued["request"]["status"] == "PARTIALLY_ISSUED"
    assert issued["issued_items"][0]["qty_remaining"] == 3
    assert issued["stock_history_records"][0]["qty_after"] == 45

    response = await client.post(
        f"{BASE}/receive-materials",
        json={"requestId": request["_id"], "items": [{"requestItemId": item_id, "qtyReceived": 6}]},
        headers=employee_headers
    )
    assert response.status_code == 400

    response = await client.post(
        f"{BASE}/receive-materials",
        json={"requestId": request["_id"], "items": [{"requestItemId": item_id, "qtyReceived": 5}]},
        headers=employee_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["received_items"][0]["qty_received"] == 5

    response = await client.patch(f"{BASE}/{request['_id']}/close", headers=admin_headers)
    assert response.json()["data"]["status"] == "CLOSED"


async def test_modify_approve_by_request_item_id(client, admin_headers, employee_headers, site, make_stock_item):
    feed = await make_stock_item()
    request = await create_via_api(client, employee_headers, site, feed, qty=10)
    item_id = request["items"][0]["_id"]

    response = await client.patch(
        f"{BASE}/{request['_id']}/approve",
        json={"itemModifications": [{"requestItemId": item_id, "qtyApproved": 0}]},
        headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["kind"] == "validation_error"

    await client.patch(f"{BASE}/{request['_id']}/approve", json={}, headers=admin_headers)
    response = await client.patch(
        f"{BASE}/{request['_id']}/modify-approve",
        json={"itemModifications": [{"requestItemId": item_id, "qtyApproved": 6}]},
        headers=admin_headers
    )

    assert response.status_code == 200, response.text
    assert response.json()["data"]["items"][0]["qty_approved"] == 6
    assert response.json()["data"]["items"][0]["qty_remaining"] == 6


async def test_issue_beyond_stock_is_conflict(client, admin_headers, employee_headers, site, make_stock_item):
    feed = await make_stock_item(quantity=2)
    request = await create_via_api(client, employee_headers, site, feed, qty=10)
    await client.patch(f"{BASE}/{request['_id']}/approve", json={}, headers=admin_headers)

    response = await client.post(
        f"{BASE}/issue-materials",
        json={"requestId": request["_id"], "items": [{"requestItemId": request["items"][0]["_id"], "qtyIssued": 3}]},
        headers=admin_headers
    )

    assert response.status_code == 409
    assert response.json()["kind"] == "insufficient_stock"


async def test_wrong_status_is_invalid_transition(client, admin_headers, employee_headers, site, make_stock_item):
    feed = await make_stock_item()
    request = await create_via_api(client, employee_headers, site, feed)

    response = await client.patch(f"{BASE}/{request['_id']}/close", headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["kind"] == "invalid_transition"


async def test_reject_comment_and_delete(client, admin_headers, employee_headers, site, make_stock_item):
    feed = await make_stock_item()
    request = await create_via_api(client, employee_headers, site, feed)

    response = await client.post(f"{BASE}/{request['_id']}/comments", json={"description": "Any update?"},
                                 headers=employee_headers)
    assert response.status_code == 201
    assert response.json()["data"]["comments"][0]["text"] == "Any update?"

    response = await client.patch(f"{BASE}/{request['_id']}/reject", json={"notes": "Out of season"},
                                  headers=admin_headers)
    assert response.json()["data"]["status"] == "REJECTED"
    assert response.json()["data"]["notes"] == "Out of season"

    response = await client.delete(f"{BASE}/{request['_id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"] == {"id": request["_id"]}


async def test_list_and_issuable(client, admin_headers, employee_headers, site, make_stock_item):
    feed = await make_stock_item()
    pending = await create_via_api(client, employee_headers, site, feed, qty=1)
    approved = await create_via_api(client, employee_headers, site, feed, qty=2)
    await client.patch(f"{BASE}/{approved['_id']}/approve", json={}, headers=admin_headers)

    response = await client.get(f"{BASE}/", params={"limit": 1, "page": 2}, headers=employee_headers)
    data = response.json()["data"]
    assert len(data["requests"]) == 1
    assert data["pagination"]["total_items"] == 2
    assert data["pagination"]["current_page"] == 2

    response = await client.get(f"{BASE}/", params={"status": "PENDING", "siteId": site["_id"]},
                                headers=employee_headers)
    assert [r["_id"] for r in response.json()["data"]["requests"]] == [pending["_id"]]

    response = await client.get(f"{BASE}/issuable", headers=admin_headers)
    assert [r["_id"] for r in response.json()["data"]["requests"]] == [approved["_id"]]
