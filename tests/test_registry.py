import pytest


# --- Assets ---

@pytest.mark.anyio
async def test_create_and_get_asset(async_client, operator_headers, seeded):
    payload = {
        "assetNumber": "FA-2025-001",
        "name": "MacBook Pro 14",
        "brand": "Apple",
        "cost": 32000000,
        "purchaseDate": "2025-02-10",
        "siteId": seeded["sites"]["warehouse"],
        "categoryId": seeded["categories"]["computer"],
        "picId": seeded["employees"]["siti"],
        "pic": "ignored when picId is set",
    }
    resp = await async_client.post("/api/v1/assets", json=payload, headers=operator_headers)
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["assetNumber"] == "FA-2025-001"
    assert data["site"]["name"] == "Warehouse"
    assert data["category"]["name"] == "Computer"
    assert data["department"] is None
    assert data["picEmployee"]["name"] == "Siti Rahayu"
    assert data["pic"] is None

    resp = await async_client.get(f"/api/v1/assets/{data['id']}", headers=operator_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "MacBook Pro 14"


@pytest.mark.anyio
async def test_create_asset_rejections(async_client, operator_headers):
    resp = await async_client.post(
        "/api/v1/assets", json={"assetNumber": "FA001", "name": "Duplicate"}, headers=operator_headers,
    )
    assert resp.status_code == 409

    resp = await async_client.post(
        "/api/v1/assets", json={"assetNumber": "FA900", "name": "Nowhere", "siteId": 9999}, headers=operator_headers,
    )
    assert resp.status_code == 400

    resp = await async_client.post(
        "/api/v1/assets", json={"assetNumber": "   ", "name": "Blank"}, headers=operator_headers,
    )
    assert resp.status_code == 400

    resp = await async_client.post("/api/v1/assets", json={"name": "No number"}, headers=operator_headers)
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_update_asset(async_client, operator_headers, asset_ids, seeded):
    asset_id = asset_ids["FA001"]
    resp = await async_client.put(
        f"/api/v1/assets/{asset_id}",
        json={"status": "Broken", "pic": "Temporary Holder", "departmentId": seeded["departments"]["finance"]},
        headers=operator_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["status"] == "Broken"
    assert data["pic"] == "Temporary Holder"
    assert data["picId"] is None
    assert data["picEmployee"] is None
    assert data["department"]["name"] == "Finance"
    assert data["assetNumber"] == "FA001"

    resp = await async_client.get("/api/v1/assets/statuses", headers=operator_headers)
    assert resp.json()["statuses"] == ["Active", "Broken"]


@pytest.mark.anyio
async def test_list_assets_filters(async_client, viewer_headers, seeded):
    resp = await async_client.get(
        f"/api/v1/assets?siteId={seeded['sites']['warehouse']}", headers=viewer_headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["pagination"]["total"] == 3
    assert sorted(a["assetNumber"] for a in body["assets"]) == ["FA007", "FA008", "FA009"]

    resp = await async_client.get(
        "/api/v1/assets?search=laptop&sort=assetNumber&order=asc&limit=2", headers=viewer_headers,
    )
    body = resp.json()
    assert [a["assetNumber"] for a in body["assets"]] == ["FA001", "FA003"]
    assert body["pagination"]["total"] == 5
    assert body["pagination"]["totalPages"] == 3


@pytest.mark.anyio
async def test_lookup_by_number(async_client, viewer_headers):
    resp = await async_client.get("/api/v1/assets/by-number?number=fa.007", headers=viewer_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["assetNumber"] == "FA007"

    # Partial match as a last resort
    resp = await async_client.get("/api/v1/assets/by-number?number=A01", headers=viewer_headers)
    assert resp.status_code == 200
    assert resp.json()["assetNumber"] == "FA010"

    resp = await async_client.get("/api/v1/assets/by-number?number=XYZ", headers=viewer_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_delete_asset(async_client, admin_headers, operator_headers, asset_ids, active_session):
    resp = await async_client.delete(f"/api/v1/assets/{asset_ids['FA009']}", headers=operator_headers)
    assert resp.status_code == 403

    resp = await async_client.delete(f"/api/v1/assets/{asset_ids['FA009']}", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    resp = await async_client.get(f"/api/v1/assets/{asset_ids['FA009']}", headers=admin_headers)
    assert resp.status_code == 404

    resp = await async_client.post(
        f"/api/v1/so-sessions/{active_session['id']}/scan", json={"assetNumber": "FA008"}, headers=admin_headers,
    )
    assert resp.status_code == 201
    resp = await async_client.delete(f"/api/v1/assets/{asset_ids['FA008']}", headers=admin_headers)
    assert resp.status_code == 409


@pytest.mark.anyio
async def test_update_asset_rejects_cleared_name(async_client, operator_headers, asset_ids):
    asset_id = asset_ids["FA001"]
    for name in (None, "   "):
        resp = await async_client.put(f"/api/v1/assets/{asset_id}", json={"name": name}, headers=operator_headers)
        assert resp.status_code == 400, resp.text

    resp = await async_client.get(f"/api/v1/assets/{asset_id}", headers=operator_headers)
    assert resp.json()["name"] == "Laptop 1"


@pytest.mark.anyio
@pytest.mark.parametrize("typed", ["%", "_", "F%1"])
async def test_lookup_treats_wildcards_literally(async_client, viewer_headers, typed):
    resp = await async_client.get("/api/v1/assets/by-number", params={"number": typed}, headers=viewer_headers)
    assert resp.status_code == 404

    resp = await async_client.get("/api/v1/assets", params={"search": typed}, headers=viewer_headers)
    assert resp.json()["pagination"]["total"] == 0


@pytest.mark.anyio
async def test_generate_asset_number(async_client, viewer_headers, seeded):
    resp = await async_client.get("/api/v1/assets/generate-number", headers=viewer_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"assetNumber": "FA011/I/01", "categoryRoman": "I", "siteNumber": "01"}

    # Positions follow name order: Computer, Furniture / Head Office, Warehouse
    resp = await async_client.get(
        "/api/v1/assets/generate-number",
        params={"categoryId": seeded["categories"]["furniture"], "siteId": seeded["sites"]["warehouse"]},
        headers=viewer_headers,
    )
    assert resp.json()["assetNumber"] == "FA011/II/02"

    resp = await async_client.get(
        "/api/v1/assets/generate-number", params={"categoryId": 9999, "siteId": 9999}, headers=viewer_headers,
    )
    assert resp.json()["assetNumber"] == "FA011/I/01"


@pytest.mark.anyio
async def test_check_duplicates(async_client, operator_headers):
    resp = await async_client.post(
        "/api/v1/assets/check-duplicates",
        json={"assetNumbers": ["FA005", " FA001 ", "NEW-001", ""]},
        headers=operator_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["duplicates"] == ["FA001", "FA005"]

    resp = await async_client.post(
        "/api/v1/assets/check-duplicates", json={"assetNumbers": []}, headers=operator_headers,
    )
    assert resp.json()["duplicates"] == []


@pytest.mark.anyio
async def test_bulk_create_assets(async_client, operator_headers, viewer_headers):
    rows = [
        {
            "name": "Printer",
            "assetNumber": "BK-001",
            "cost": "1,500.50",
            "purchaseDate": "2024-02-03",
            "site": "Head Office",
            "category": "Printers",
            "department": "?",
        },
        {"name": "", "assetNumber": "BK-002"},
        {"name": "Duplicate", "assetNumber": "FA001"},
        {"name": "Scanner", "assetNumber": "BK-003", "status": "?", "cost": 250},
        {"name": "Printer again", "assetNumber": "BK-001"},
    ]
    resp = await async_client.post("/api/v1/assets/bulk", json={"assets": rows}, headers=operator_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["successCount"] == 2
    assert data["failedCount"] == 3
    assert data["errors"] == [
        "Asset 2: Name and asset number are required",
        'Asset 3: Asset number "FA001" already exists',
        'Asset 5: Asset number "BK-001" already exists',
    ]

    resp = await async_client.get("/api/v1/assets/by-number", params={"number": "BK-001"}, headers=viewer_headers)
    printer = resp.json()
    assert printer["name"] == "Printer"
    assert printer["status"] == "Active"
    assert printer["cost"] == 1500.5
    assert printer["purchaseDate"] == "2024-02-03"
    assert printer["site"]["name"] == "Head Office"
    assert printer["category"]["name"] == "Printers"
    assert printer["department"] is None

    resp = await async_client.get("/api/v1/assets/by-number", params={"number": "BK-003"}, headers=viewer_headers)
    assert resp.json()["status"] == "Active"
    assert resp.json()["cost"] == 250.0

    # Unknown category names are created at the end of the display order
    resp = await async_client.get("/api/v1/categories", headers=viewer_headers)
    assert [c["name"] for c in resp.json()] == ["Computer", "Furniture", "Printers"]

    resp = await async_client.post("/api/v1/assets/bulk", json={"assets": []}, headers=operator_headers)
    assert resp.status_code == 400
    resp = await async_client.post("/api/v1/assets/bulk", json={"assets": rows}, headers=viewer_headers)
    assert resp.status_code == 403


@pytest.mark.anyio
async def test_bulk_delete_keeps_scanned_assets(
    async_client, admin_headers, operator_headers, asset_ids, seeded, active_session,
):
    resp = await async_client.post(
        f"/api/v1/so-sessions/{active_session['id']}/scan", json={"assetNumber": "FA001"}, headers=operator_headers,
    )
    assert resp.status_code == 201
    resp = await async_client.post(
        "/api/v1/check-outs",
        json={
            "assetId": asset_ids["FA002"],
            "assignToId": seeded["employees"]["siti"],
            "checkoutDate": "2025-03-01T09:00:00Z",
        },
        headers=operator_headers,
    )
    assert resp.status_code == 201, resp.text

    resp = await async_client.post("/api/v1/assets/bulk-delete", json={}, headers=admin_headers)
    assert resp.status_code == 400
    resp = await async_client.post("/api/v1/assets/bulk-delete", json={"confirmAll": True}, headers=operator_headers)
    assert resp.status_code == 403

    resp = await async_client.post("/api/v1/assets/bulk-delete", json={"confirmAll": True}, headers=admin_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["deletedCount"] == 9
    assert data["skippedCount"] == 1

    resp = await async_client.get("/api/v1/assets", headers=admin_headers)
    assert [a["assetNumber"] for a in resp.json()["assets"]] == ["FA001"]


# --- Reference data ---

@pytest.mark.anyio
async def test_site_crud_and_ordering(async_client, operator_headers, viewer_headers, seeded):
    resp = await async_client.post(
        "/api/v1/sites", json={"name": "Surabaya Branch", "city": "Surabaya"}, headers=operator_headers,
    )
    assert resp.status_code == 201, resp.text
    site = resp.json()
    assert site["sortOrder"] == 3
    assert site["country"] == "Indonesia"

    resp = await async_client.post("/api/v1/sites", json={"name": "head office"}, headers=operator_headers)
    assert resp.status_code == 409

    resp = await async_client.post(
        f"/api/v1/sites/{site['id']}/move", json={"direction": "up"}, headers=operator_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["sortOrder"] == 2

    resp = await async_client.get("/api/v1/sites", headers=viewer_headers)
    assert [s["name"] for s in resp.json()] == ["Head Office", "Surabaya Branch", "Warehouse"]

    # Already first: no-op
    resp = await async_client.post(
        f"/api/v1/sites/{seeded['sites']['head_office']}/move", json={"direction": "up"}, headers=operator_headers,
    )
    assert resp.json()["sortOrder"] == 1

    resp = await async_client.put(
        f"/api/v1/sites/{site['id']}", json={"phone": "031-555-0101"}, headers=operator_headers,
    )
    assert resp.json()["phone"] == "031-555-0101"

    resp = await async_client.delete(f"/api/v1/sites/{site['id']}", headers=operator_headers)
    assert resp.status_code == 200

    resp = await async_client.post("/api/v1/sites", json={"name": "Blocked"}, headers=viewer_headers)
    assert resp.status_code == 403


@pytest.mark.anyio
@pytest.mark.parametrize(
    "path,key,group",
    [
        ("sites", "head_office", "sites"),
        ("categories", "computer", "categories"),
        ("departments", "finance", "departments"),
    ],
)
async def test_reference_in_use_cannot_be_deleted(async_client, operator_headers, seeded, path, key, group):
    resp = await async_client.delete(f"/api/v1/{path}/{seeded[group][key]}", headers=operator_headers)
    assert resp.status_code == 409, resp.text

    resp = await async_client.get(f"/api/v1/{path}/{seeded[group][key]}", headers=operator_headers)
    assert resp.status_code == 200


@pytest.mark.anyio
async def test_category_rename(async_client, operator_headers, seeded):
    category_id = seeded["categories"]["furniture"]
    resp = await async_client.put(
        f"/api/v1/categories/{category_id}",
        json={"name": "Office Furniture", "description": "Desks and chairs"},
        headers=operator_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["name"] == "Office Furniture"

    resp = await async_client.put(
        f"/api/v1/categories/{category_id}", json={"name": "Computer"}, headers=operator_headers,
    )
    assert resp.status_code == 409

    resp = await async_client.get("/api/v1/categories/9999", headers=operator_headers)
    assert resp.status_code == 404


# --- Employees ---

@pytest.mark.anyio
async def test_employee_crud(async_client, operator_headers, seeded):
    resp = await async_client.post(
        "/api/v1/employees",
        json={"employeeId": "E003", "name": "Andi Wijaya", "email": "andi@test.com", "department": "IT"},
        headers=operator_headers,
    )
    assert resp.status_code == 201, resp.text
    employee = resp.json()
    assert employee["isActive"] is True

    resp = await async_client.post(
        "/api/v1/employees", json={"employeeId": "E003", "name": "Copy"}, headers=operator_headers,
    )
    assert resp.status_code == 409

    resp = await async_client.get("/api/v1/employees?search=andi", headers=operator_headers)
    assert [e["employeeId"] for e in resp.json()["employees"]] == ["E003"]

    resp = await async_client.put(
        f"/api/v1/employees/{employee['id']}", json={"isActive": False}, headers=operator_headers,
    )
    assert resp.json()["isActive"] is False

    resp = await async_client.get("/api/v1/employees?isActive=true", headers=operator_headers)
    assert resp.json()["pagination"]["total"] == 2

    resp = await async_client.delete(f"/api/v1/employees/{employee['id']}", headers=operator_headers)
    assert resp.status_code == 200

    # PIC of FA001
    resp = await async_client.delete(f"/api/v1/employees/{seeded['employees']['budi']}", headers=operator_headers)
    assert resp.status_code == 409


@pytest.mark.anyio
@pytest.mark.parametrize("field", ["name", "employeeId", "isActive"])
async def test_update_employee_rejects_cleared_required_field(async_client, operator_headers, seeded, field):
    employee_id = seeded["employees"]["siti"]
    resp = await async_client.put(f"/api/v1/employees/{employee_id}", json={field: None}, headers=operator_headers)
    assert resp.status_code == 400, resp.text

    resp = await async_client.get(f"/api/v1/employees/{employee_id}", headers=operator_headers)
    assert resp.json()["name"] == "Siti Rahayu"


# --- Check-outs and history ---

@pytest.mark.anyio
async def test_check_out_and_return(async_client, operator_headers, asset_ids, seeded):
    asset_id = asset_ids["FA003"]
    payload = {
        "assetId": asset_id,
        "assignToId": seeded["employees"]["siti"],
        "checkoutDate": "2025-03-01T09:00:00Z",
        "dueDate": "2025-03-15T17:00:00Z",
        "notes": "Site visit",
    }
    resp = await async_client.post("/api/v1/check-outs", json=payload, headers=operator_headers)
    assert resp.status_code == 201, resp.text
    checkout = resp.json()
    assert checkout["status"] == "CHECKED_OUT"
    assert checkout["assignTo"]["name"] == "Siti Rahayu"

    resp = await async_client.post("/api/v1/check-outs", json=payload, headers=operator_headers)
    assert resp.status_code == 409

    resp = await async_client.post(
        f"/api/v1/check-outs/{checkout['id']}/return",
        json={"receivedById": seeded["employees"]["budi"], "returnNotes": "All good"},
        headers=operator_headers,
    )
    assert resp.status_code == 200, resp.text
    returned = resp.json()
    assert returned["status"] == "RETURNED"
    assert returned["returnedAt"] is not None
    assert returned["receivedBy"]["name"] == "Budi Santoso"

    resp = await async_client.post(f"/api/v1/check-outs/{checkout['id']}/return", headers=operator_headers)
    assert resp.status_code == 409

    resp = await async_client.get(f"/api/v1/check-outs?assetId={asset_id}", headers=operator_headers)
    assert resp.json()["pagination"]["total"] == 1

    resp = await async_client.get(f"/api/v1/assets/{asset_id}/history", headers=operator_headers)
    assert resp.status_code == 200, resp.text
    history = resp.json()
    assert history["assetId"] == asset_id
    assert [item["type"] for item in history["items"]] == ["CHECK_IN", "CHECK_OUT"]
    assert history["items"][1]["details"]["assignTo"] == "Siti Rahayu"
    assert history["items"][0]["checkoutId"] == checkout["id"]

    resp = await async_client.get(f"/api/v1/assets/{asset_id}/history?type=CHECK_OUT", headers=operator_headers)
    assert [item["type"] for item in resp.json()["items"]] == ["CHECK_OUT"]


@pytest.mark.anyio
async def test_check_out_validation(async_client, operator_headers, asset_ids, seeded):
    base = {"assetId": asset_ids["FA004"], "checkoutDate": "2025-03-10T09:00:00Z"}

    resp = await async_client.post(
        "/api/v1/check-outs", json={**base, "assignToId": 9999}, headers=operator_headers,
    )
    assert resp.status_code == 400

    resp = await async_client.post(
        "/api/v1/check-outs",
        json={**base, "assignToId": seeded["employees"]["budi"], "dueDate": "2025-03-01T09:00:00Z"},
        headers=operator_headers,
    )
    assert resp.status_code == 400

    resp = await async_client.post(
        "/api/v1/check-outs",
        json={**base, "assetId": 9999, "assignToId": seeded["employees"]["budi"]},
        headers=operator_headers,
    )
    assert resp.status_code == 404

    resp = await async_client.get("/api/v1/check-outs/9999", headers=operator_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_history_unknown_asset(async_client, viewer_headers):
    resp = await async_client.get("/api/v1/assets/9999/history", headers=viewer_headers)
    assert resp.status_code == 404


# --- Dashboard ---

@pytest.mark.anyio
async def test_dashboard_overview(async_client, operator_headers, viewer_headers, active_session):
    await async_client.post(
        f"/api/v1/so-sessions/{active_session['id']}/scan", json={"assetNumber": "FA001"}, headers=operator_headers,
    )

    resp = await async_client.get("/api/v1/dashboard", headers=viewer_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["totalAssets"] == 10
    assert data["totalCost"] == 55000.0
    assert data["totalSites"] == 2
    assert data["totalEmployees"] == 2
    assert data["checkedOutAssets"] == 0
    by_site = {item["name"]: item["value"] for item in data["assetsBySite"]}
    assert by_site == {"Head Office": 6, "Warehouse": 3, "Unknown Site": 1}
    assert data["activeSession"]["id"] == active_session["id"]
    assert data["activeSessionProgress"] == 10
    assert [s["id"] for s in data["recentSessions"]] == [active_session["id"]]
