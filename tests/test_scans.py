import pytest


def scan_url(session_id: int) -> str:
    return f"/api/v1/so-sessions/{session_id}/scan"


@pytest.mark.anyio
async def test_scan_then_rescan_is_idempotent(async_client, operator_headers, admin_headers, active_session):
    session_id = active_session["id"]

    resp = await async_client.post(scan_url(session_id), json={"assetNumber": "FA001"}, headers=operator_headers)
    assert resp.status_code == 201, resp.text
    first = resp.json()
    assert first["success"] is True
    assert first["alreadyScanned"] is False
    assert first["asset"]["assetNumber"] == "FA001"
    entry = first["entry"]
    assert entry["status"] == "Scanned"
    assert entry["scannedBy"] == "Test Operator"
    assert entry["isIdentified"] is True
    assert entry["isCrucial"] is False
    # Snapshot of the registry row, with the linked PIC's name
    assert entry["tempName"] == "Laptop 1"
    assert entry["tempAssetNumber"] == "FA001"
    assert entry["tempSerialNo"] == "SN-0001"
    assert entry["tempPic"] == "Budi Santoso"

    resp = await async_client.post(scan_url(session_id), json={"assetNumber": "FA001"}, headers=admin_headers)
    assert resp.status_code == 200, resp.text
    second = resp.json()
    assert second["alreadyScanned"] is True
    assert second["entry"]["id"] == entry["id"]
    assert second["entry"]["scannedBy"] == "Test Operator"

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}", headers=admin_headers)
    assert resp.json()["scannedAssets"] == 1


@pytest.mark.anyio
async def test_counter_matches_entries(async_client, operator_headers, active_session):
    session_id = active_session["id"]

    for number in ["FA001", "FA002", "FA003", "FA002", "fa001"]:
        resp = await async_client.post(scan_url(session_id), json={"assetNumber": number}, headers=operator_headers)
        assert resp.status_code in (200, 201), resp.text

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}", headers=operator_headers)
    assert resp.json()["scannedAssets"] == 3

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}/entries", headers=operator_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["pagination"]["total"] == 3
    assert sorted(e["asset"]["assetNumber"] for e in body["entries"]) == ["FA001", "FA002", "FA003"]


@pytest.mark.anyio
@pytest.mark.parametrize("typed", ["FA001", "fa001", "FA.001", "fa-001", " FA 001 "])
async def test_scan_resolves_number_variants(async_client, operator_headers, active_session, typed):
    resp = await async_client.post(
        scan_url(active_session["id"]), json={"assetNumber": typed}, headers=operator_headers,
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["asset"]["assetNumber"] == "FA001"


@pytest.mark.anyio
async def test_scan_by_asset_id(async_client, operator_headers, active_session, asset_ids):
    resp = await async_client.post(
        scan_url(active_session["id"]), json={"assetId": asset_ids["FA005"]}, headers=operator_headers,
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["entry"]["assetId"] == asset_ids["FA005"]

    # Matching id and number are accepted together
    resp = await async_client.post(
        scan_url(active_session["id"]),
        json={"assetId": asset_ids["FA005"], "assetNumber": "FA005"},
        headers=operator_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["alreadyScanned"] is True


@pytest.mark.anyio
async def test_scan_reference_errors(async_client, operator_headers, active_session, asset_ids):
    url = scan_url(active_session["id"])

    resp = await async_client.post(url, json={}, headers=operator_headers)
    assert resp.status_code == 400

    resp = await async_client.post(
        url, json={"assetId": asset_ids["FA001"], "assetNumber": "FA002"}, headers=operator_headers,
    )
    assert resp.status_code == 400

    resp = await async_client.post(url, json={"assetNumber": "ZZ999"}, headers=operator_headers)
    assert resp.status_code == 404

    resp = await async_client.post(url, json={"assetId": 9999}, headers=operator_headers)
    assert resp.status_code == 404

    resp = await async_client.post(scan_url(9999), json={"assetNumber": "FA001"}, headers=operator_headers)
    assert resp.status_code == 404

    resp = await async_client.get(f"/api/v1/so-sessions/{active_session['id']}", headers=operator_headers)
    assert resp.json()["scannedAssets"] == 0


@pytest.mark.anyio
async def test_scan_rejected_once_session_closed(async_client, admin_headers, operator_headers, active_session):
    session_id = active_session["id"]
    resp = await async_client.post(scan_url(session_id), json={"assetNumber": "FA001"}, headers=operator_headers)
    assert resp.status_code == 201

    resp = await async_client.post(f"/api/v1/so-sessions/{session_id}/cancel", headers=admin_headers)
    assert resp.status_code == 200

    resp = await async_client.post(scan_url(session_id), json={"assetNumber": "FA002"}, headers=operator_headers)
    assert resp.status_code == 409

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}", headers=admin_headers)
    assert resp.json()["scannedAssets"] == 1


@pytest.mark.anyio
async def test_same_asset_in_two_sessions(async_client, admin_headers, operator_headers, active_session):
    resp = await async_client.post(
        "/api/v1/so-sessions", json={"name": "SO 2025 Q2", "year": 2025}, headers=admin_headers,
    )
    other_id = resp.json()["id"]

    for session_id in (active_session["id"], other_id):
        resp = await async_client.post(scan_url(session_id), json={"assetNumber": "FA003"}, headers=operator_headers)
        assert resp.status_code == 201, resp.text


@pytest.mark.anyio
async def test_entry_list_filters(async_client, operator_headers, active_session):
    session_id = active_session["id"]
    for number in ["FA001", "FA002", "FA003"]:
        await async_client.post(scan_url(session_id), json={"assetNumber": number}, headers=operator_headers)

    base = f"/api/v1/so-sessions/{session_id}/entries"

    resp = await async_client.get(f"{base}?search=desk", headers=operator_headers)
    assert [e["tempName"] for e in resp.json()["entries"]] == ["Desk 2"]

    resp = await async_client.get(f"{base}?search=sn-0003", headers=operator_headers)
    assert resp.json()["pagination"]["total"] == 1

    resp = await async_client.get(f"{base}?status=all&limit=2", headers=operator_headers)
    body = resp.json()
    assert len(body["entries"]) == 2
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["hasNext"] is True


@pytest.mark.anyio
async def test_update_entry_records_history(async_client, operator_headers, viewer_headers, active_session, asset_ids):
    session_id = active_session["id"]
    resp = await async_client.post(scan_url(session_id), json={"assetNumber": "FA002"}, headers=operator_headers)
    entry_id = resp.json()["entry"]["id"]
    entry_url = f"/api/v1/so-sessions/{session_id}/entries/{entry_id}"

    resp = await async_client.put(
        entry_url,
        json={"tempName": "Standing Desk 2", "isCrucial": True, "crucialNotes": "Leg is broken"},
        headers=operator_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["tempName"] == "Standing Desk 2"
    assert data["isCrucial"] is True
    assert data["crucialNotes"] == "Leg is broken"
    assert data["isIdentified"] is True

    # Plain field names are accepted as well
    resp = await async_client.put(entry_url, json={"brand": "IKEA", "isCrucial": False}, headers=operator_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["tempBrand"] == "IKEA"
    assert resp.json()["crucialNotes"] is None

    # The registry row itself is untouched
    resp = await async_client.get(f"/api/v1/assets/{asset_ids['FA002']}", headers=viewer_headers)
    assert resp.json()["name"] == "Desk 2"

    resp = await async_client.get(
        f"/api/v1/assets/{asset_ids['FA002']}/history?type=SO_UPDATE", headers=viewer_headers,
    )
    assert resp.status_code == 200, resp.text
    items = resp.json()["items"]
    assert len(items) == 2
    assert all(item["type"] == "SO_UPDATE" for item in items)
    assert all(item["actor"] == "Test Operator" for item in items)
    changed = {c["field"]: c for item in items for c in item["details"]["changes"]}
    assert changed["tempName"]["before"] == "Desk 2"
    assert changed["tempName"]["after"] == "Standing Desk 2"
    assert changed["tempBrand"]["after"] == "IKEA"
    assert items[0]["details"]["sessionId"] == session_id


@pytest.mark.anyio
async def test_update_entry_without_changes_records_nothing(async_client, operator_headers, active_session, asset_ids):
    session_id = active_session["id"]
    resp = await async_client.post(scan_url(session_id), json={"assetNumber": "FA004"}, headers=operator_headers)
    entry_id = resp.json()["entry"]["id"]

    resp = await async_client.put(
        f"/api/v1/so-sessions/{session_id}/entries/{entry_id}",
        json={"tempName": "Desk 4"},
        headers=operator_headers,
    )
    assert resp.status_code == 200

    resp = await async_client.get(f"/api/v1/assets/{asset_ids['FA004']}/history", headers=operator_headers)
    assert resp.json()["items"] == []


@pytest.mark.anyio
async def test_update_entry_rules(async_client, admin_headers, operator_headers, active_session):
    session_id = active_session["id"]
    resp = await async_client.post(scan_url(session_id), json={"assetNumber": "FA001"}, headers=operator_headers)
    entry_id = resp.json()["entry"]["id"]

    resp = await async_client.post(
        "/api/v1/so-sessions", json={"name": "Other", "year": 2025}, headers=admin_headers,
    )
    other_id = resp.json()["id"]

    # Entry addressed through the wrong session
    resp = await async_client.get(f"/api/v1/so-sessions/{other_id}/entries/{entry_id}", headers=operator_headers)
    assert resp.status_code == 400

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}/entries/9999", headers=operator_headers)
    assert resp.status_code == 404

    resp = await async_client.post(f"/api/v1/so-sessions/{session_id}/complete", headers=admin_headers)
    assert resp.status_code == 200

    resp = await async_client.put(
        f"/api/v1/so-sessions/{session_id}/entries/{entry_id}",
        json={"tempName": "Too late"},
        headers=operator_headers,
    )
    assert resp.status_code == 409


@pytest.mark.anyio
async def test_update_entry_crucial_flag_and_notes(async_client, operator_headers, active_session):
    session_id = active_session["id"]
    resp = await async_client.post(scan_url(session_id), json={"assetNumber": "FA003"}, headers=operator_headers)
    entry_url = f"/api/v1/so-sessions/{session_id}/entries/{resp.json()['entry']['id']}"

    resp = await async_client.put(
        entry_url, json={"isCrucial": True, "crucialNotes": "  Screen cracked  "}, headers=operator_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["crucialNotes"] == "Screen cracked"

    # Blank notes are stored as null
    resp = await async_client.put(
        entry_url, json={"isCrucial": True, "crucialNotes": "   "}, headers=operator_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["crucialNotes"] is None

    resp = await async_client.put(
        entry_url, json={"isCrucial": True, "crucialNotes": "Battery swollen"}, headers=operator_headers,
    )
    assert resp.json()["crucialNotes"] == "Battery swollen"

    # null reads as "not crucial" and clears the notes
    resp = await async_client.put(entry_url, json={"isCrucial": None}, headers=operator_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["isCrucial"] is False
    assert data["crucialNotes"] is None
