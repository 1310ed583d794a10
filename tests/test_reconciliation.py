import pytest


async def scan_numbers(client, headers, session_id, numbers):
    entries = []
    for number in numbers:
        resp = await client.post(
            f"/api/v1/so-sessions/{session_id}/scan", json={"assetNumber": number}, headers=headers,
        )
        assert resp.status_code == 201, resp.text
        entries.append(resp.json()["entry"])
    return entries


@pytest.mark.anyio
async def test_missing_assets_report(async_client, operator_headers, viewer_headers, active_session):
    session_id = active_session["id"]
    await scan_numbers(async_client, operator_headers, session_id, ["FA001", "FA002", "FA003"])

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}/missing-assets", headers=viewer_headers)
    assert resp.status_code == 200, resp.text
    report = resp.json()

    assert report["session"]["id"] == session_id
    stats = report["statistics"]
    assert stats["totalAssets"] == 10
    assert stats["scannedAssets"] == 3
    assert stats["missingAssets"] == 7
    assert stats["identifiedAssets"] == 3
    assert stats["unidentifiedAssets"] == 0
    assert stats["completionPercentage"] == 30
    assert stats["identificationPercentage"] == 100

    missing = [a["assetNumber"] for a in report["missingAssets"]]
    scanned = [e["asset"]["assetNumber"] for e in report["scannedEntries"]]
    assert missing == ["FA004", "FA005", "FA006", "FA007", "FA008", "FA009", "FA010"]
    assert set(missing).isdisjoint(scanned)
    assert set(missing) | set(scanned) == {f"FA{n:03d}" for n in range(1, 11)}


@pytest.mark.anyio
async def test_missing_assets_grouping(async_client, operator_headers, active_session):
    session_id = active_session["id"]
    await scan_numbers(async_client, operator_headers, session_id, ["FA001", "FA002", "FA003"])

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}/missing-assets", headers=operator_headers)
    grouped = resp.json()["groupedBy"]

    by_site = {name: sorted(a["assetNumber"] for a in assets) for name, assets in grouped["site"].items()}
    assert by_site == {
        "Head Office": ["FA004", "FA005", "FA006"],
        "Warehouse": ["FA007", "FA008", "FA009"],
        "Unknown Site": ["FA010"],
    }
    assert sorted(grouped["category"]) == ["Computer", "Furniture", "Unknown Category"]
    assert len(grouped["department"]["Finance"]) == 4
    assert [a["assetNumber"] for a in grouped["department"]["Unknown Department"]] == ["FA010"]


@pytest.mark.anyio
async def test_identification_statistics(async_client, operator_headers, active_session):
    session_id = active_session["id"]
    entries = await scan_numbers(async_client, operator_headers, session_id, ["FA001", "FA002", "FA003"])

    resp = await async_client.put(
        f"/api/v1/so-sessions/{session_id}/entries/{entries[0]['id']}",
        json={"isIdentified": False},
        headers=operator_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["isIdentified"] is False

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}/missing-assets", headers=operator_headers)
    stats = resp.json()["statistics"]
    assert stats["identifiedAssets"] == 2
    assert stats["unidentifiedAssets"] == 1
    assert stats["identificationPercentage"] == 67


@pytest.mark.anyio
async def test_report_uses_live_registry(async_client, admin_headers, active_session):
    session_id = active_session["id"]
    resp = await async_client.post(
        "/api/v1/assets", json={"assetNumber": "FA011", "name": "New Monitor"}, headers=admin_headers,
    )
    assert resp.status_code == 201

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}/missing-assets", headers=admin_headers)
    report = resp.json()
    assert report["session"]["totalAssets"] == 10
    assert report["statistics"]["totalAssets"] == 11
    assert report["statistics"]["missingAssets"] == 11
    assert report["statistics"]["completionPercentage"] == 0
    assert report["statistics"]["identificationPercentage"] == 0


@pytest.mark.anyio
async def test_report_available_after_close(async_client, admin_headers, operator_headers, active_session):
    session_id = active_session["id"]
    await scan_numbers(async_client, operator_headers, session_id, ["FA010"])
    resp = await async_client.post(f"/api/v1/so-sessions/{session_id}/complete", headers=admin_headers)
    assert resp.status_code == 200

    resp = await async_client.get(f"/api/v1/so-sessions/{session_id}/missing-assets", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["statistics"]["completionPercentage"] == 10
    assert "Unknown Site" not in resp.json()["groupedBy"]["site"]


@pytest.mark.anyio
async def test_report_unknown_session(async_client, admin_headers):
    resp = await async_client.get("/api/v1/so-sessions/9999/missing-assets", headers=admin_headers)
    assert resp.status_code == 404
