"""
HTTP tests for the stock, store, site, client and egg-fish medication routes.
"""
import pytest

BASE = "/api/v1"


# Categories and stock items

async def test_category_crud(client, admin_headers, employee_headers):
    response = await client.post(f"{BASE}/stock/category", json={"name": "  Chemicals  "}, headers=admin_headers)
    assert response.status_code == 201
    category = response.json()
    assert category["name"] == "Chemicals"

    response = await client.put(f"{BASE}/stock/category/{category['_id']}", json={"description": "Pond treatment"},
                                headers=admin_headers)
    assert response.json()["name"] == "Chemicals"
    assert response.json()["description"] == "Pond treatment"

    response = await client.get(f"{BASE}/stock/category", headers=employee_headers)
    assert [c["_id"] for c in response.json()] == [category["_id"]]

    response = await client.delete(f"{BASE}/stock/category/{category['_id']}", headers=admin_headers)
    assert response.json() == {"id": category["_id"]}

    response = await client.get(f"{BASE}/stock/category/{category['_id']}", headers=admin_headers)
    assert response.status_code == 404


async def test_category_requires_name(client, admin_headers):
    response = await client.post(f"{BASE}/stock/category", json={"name": "   "}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Category name is required"


async def test_employee_cannot_write_stock(client, employee_headers):
    response = await client.post(f"{BASE}/stock/category", json={"name": "Feed"}, headers=employee_headers)
    assert response.status_code == 403


async def test_stock_item_generates_sku_and_embeds_relations(client, admin_headers, store, category):
    response = await client.post(
        f"{BASE}/stock/stockin",
        json={
            "productName": "Fish Feed Pellets",
            "quantity": 40,
            "unit": "KG",
            "unitPrice": 2.5,
            "categoryId": category["_id"],
            "storeId": store["_id"]
        },
        headers=admin_headers
    )

    assert response.status_code == 201, response.text
    stock_item = response.json()
    assert stock_item["sku"].startswith("FFP")
    assert len(stock_item["sku"]) == 7
    assert stock_item["category"]["name"] == "Feed"
    assert stock_item["store"]["code"] == "ST-001"

    response = await client.put(f"{BASE}/stock/stockin/{stock_item['_id']}", json={"quantity": 55},
                                headers=admin_headers)
    assert response.json()["quantity"] == 55
    assert response.json()["product_name"] == "Fish Feed Pellets"


@pytest.mark.parametrize("override, message", [
    ({"productName": " "}, "Product name is required"),
    ({"quantity": -1}, "Quantity cannot be negative"),
    ({"unitPrice": -0.5}, "Unit price cannot be negative"),
    ({"categoryId": "64b7f0c2a1b2c3d4e5f6aaaa"}, "Category does not exist"),
    ({"storeId": "64b7f0c2a1b2c3d4e5f6aaaa"}, "Store does not exist"),
])
async def test_stock_item_validation(client, admin_headers, store, category, override, message):
    body = {
        "productName": "Rock Salt",
        "quantity": 10,
        "unit": "KG",
        "unitPrice": 1,
        "categoryId": category["_id"],
        "storeId": store["_id"],
    }
    body.update(override)

    response = await client.post(f"{BASE}/stock/stockin", json=body, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == message


async def test_stock_history_queries(client, admin_headers, employee_headers, site, make_stock_item):
    feed = await make_stock_item(quantity=20)
    response = await client.post(
        f"{BASE}/stock-requests/",
        json={"siteId": site["_id"], "items": [{"stockInId": feed["_id"], "qtyRequested": 4}]},
        headers=employee_headers
    )
    request = response.json()["data"]
    await client.patch(f"{BASE}/stock-requests/{request['_id']}/approve", json={}, headers=admin_headers)
    await client.post(
        f"{BASE}/stock-requests/issue-materials",
        json={"requestId": request["_id"], "items": [{"requestItemId": request["items"][0]["_id"], "qtyIssued": 4}]},
        headers=admin_headers
    )

    by_stock = (await client.get(f"{BASE}/stock/history/stock/{feed['_id']}", headers=admin_headers)).json()
    assert [(h["movement_type"], h["qty_before"], h["qty_after"]) for h in by_stock] == [("OUT", 20, 16)]
    assert by_stock[0]["stock_in"]["product_name"] == "Fish Feed Pellets"

    by_request = (await client.get(f"{BASE}/stock/history/request/{request['_id']}", headers=admin_headers)).json()
    assert len(by_request) == 1

    outgoing = await client.get(f"{BASE}/stock/history/movement", params={"type": "out"}, headers=admin_headers)
    assert len(outgoing.json()) == 1

    incoming = await client.get(f"{BASE}/stock/history/movement", params={"type": "IN"}, headers=admin_headers)
    assert incoming.json() == []

    invalid = await client.get(f"{BASE}/stock/history/movement", params={"type": "SIDEWAYS"}, headers=admin_headers)
    assert invalid.status_code == 400


# Stores

async def test_store_search_and_pagination(client, admin_headers, employee_headers):
    for code, name, location in [("ST-001", "Main Warehouse", "Kigali"),
                                 ("ST-002", "Lake Depot", "Rubavu"),
                                 ("ST-003", "North Shed", "Musanze")]:
        response = await client.post(f"{BASE}/stores/", json={"code": code, "name": name, "location": location},
                                     headers=admin_headers)
        assert response.status_code == 201

    response = await client.get(f"{BASE}/stores/", params={"search": "rubavu"}, headers=employee_headers)
    body = response.json()
    assert [s["code"] for s in body["data"]] == ["ST-002"]
    assert body["pagination"]["total_items"] == 1

    response = await client.get(f"{BASE}/stores/", params={"limit": 2}, headers=employee_headers)
    body = response.json()
    assert len(body["data"]) == 2
    assert body["pagination"] == {"current_page": 1, "total_pages": 2, "total_items": 3, "items_per_page": 2}


async def test_store_update_and_delete(client, admin_headers, store):
    response = await client.put(f"{BASE}/stores/{store['_id']}", json={"managerName": "Eric"}, headers=admin_headers)
    assert response.json()["manager_name"] == "Eric"
    assert response.json()["name"] == "Main Warehouse"

    response = await client.delete(f"{BASE}/stores/{store['_id']}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.delete(f"{BASE}/stores/{store['_id']}", headers=admin_headers)
    assert response.status_code == 404


# Sites

async def test_site_manager_and_supervisor_must_differ(client, admin_headers, employee_record):
    response = await client.post(
        f"{BASE}/sites/",
        json={"name": "Hatchery B", "managerId": employee_record, "supervisorId": employee_record},
        headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Manager and Supervisor cannot be the same employee"


async def test_site_embeds_manager_without_private_fields(client, admin_headers, employee_record):
    response = await client.post(f"{BASE}/sites/", json={"name": "Hatchery B", "managerId": employee_record},
                                 headers=admin_headers)

    assert response.status_code == 201, response.text
    site = response.json()
    assert site["manager"] == {"_id": employee_record, "firstname": "Aline", "lastname": "Uwase",
                               "email": "aline@example.com"}
    assert site["supervisor"] is None


async def test_site_with_unknown_employee(client, admin_headers):
    response = await client.post(f"{BASE}/sites/", json={"name": "Hatchery C", "supervisorId": "nobody"},
                                 headers=admin_headers)
    assert response.status_code == 400


# Clients

async def test_client_created_active_and_unique(client, admin_headers):
    body = {"firstname": "Jean", "lastname": "Habimana", "email": "jean@example.com", "phone": "0788000000"}

    response = await client.post(f"{BASE}/clients/", json=body, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["status"] == "ACTIVE"

    response = await client.post(f"{BASE}/clients/", json=dict(body, phone="0788111111"), headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["kind"] == "conflict"

    response = await client.post(f"{BASE}/clients/", json=dict(body, email="other@example.com"),
                                 headers=admin_headers)
    assert response.status_code == 409


async def test_client_update_keeps_own_email(client, admin_headers):
    response = await client.post(
        f"{BASE}/clients/",
        json={"firstname": "Jean", "lastname": "Habimana", "email": "jean@example.com"},
        headers=admin_headers
    )
    client_id = response.json()["_id"]

    response = await client.put(f"{BASE}/clients/{client_id}",
                                json={"email": "jean@example.com", "status": "INACTIVE"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "INACTIVE"


# Egg-fish medication

async def test_medication_recorded_by_acting_employee(client, employee_headers, employee_record, medicine,
                                                      parent_egg_migration):
    response = await client.post(
        f"{BASE}/egg-fish-medication/",
        json={"parentEggMigrationId": parent_egg_migration, "medicationId": medicine},
        headers=employee_headers
    )

    assert response.status_code == 201, response.text
    record = response.json()
    assert record["employee_id"] == employee_record
    assert record["quantity"] == 0
    assert record["medication"]["name"] == "Formalin"
    assert "password" not in record["employee"]

    response = await client.put(f"{BASE}/egg-fish-medication/{record['_id']}", json={"quantity": 1.5},
                                headers=employee_headers)
    assert response.json()["quantity"] == 1.5


async def test_medication_requires_existing_references(client, employee_headers, employee_record,
                                                       parent_egg_migration):
    response = await client.post(
        f"{BASE}/egg-fish-medication/",
        json={"parentEggMigrationId": parent_egg_migration, "medicationId": "64b7f0c2a1b2c3d4e5f6aaaa"},
        headers=employee_headers
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Medicine not found"
