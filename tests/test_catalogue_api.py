"""Asset groups, vendors and statuses."""

import pytest

API = "/api/1.0"


def url(company, resource, *rest):
    parts = [f"{API}/companies/{company['companyId']}/{resource}", *map(str, rest)]
    return "/".join(parts)


async def _groups(client, company):
    r = await client.get(url(company, "asset-groups"), params={"pagination": "false"}, headers=company["headers"])
    return {g["assetGroupName"]: g for g in r.json()["assetGroups"]}


async def _statuses(client, company):
    r = await client.get(url(company, "asset-status"), headers=company["headers"])
    return {s["statusName"]: s["id"] for s in r.json()["assetStatuses"]}


async def _create_asset(client, company, **fields):
    groups = await _groups(client, company)
    statuses = await _statuses(client, company)
    body = {
        "assetName": "Laptop",
        "statusCode": str(statuses["In Use"]),
        "assetgroupId": str(groups["miscellaneous"]["id"]),
        **fields,
    }
    r = await client.post(url(company, "assets"), json=body, headers=company["headers"])
    assert r.status_code == 200, r.text


# ═══════════════════════════════════════════════════════════
# Asset groups
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_and_list_asset_groups(client, company):
    r = await client.post(
        url(company, "asset-groups"), json={"assetGroupName": "Laptops"}, headers=company["headers"]
    )
    assert r.status_code == 200
    assert r.json() == {"message": "Asset Group is created"}

    r = await client.get(url(company, "asset-groups"), headers=company["headers"])
    body = r.json()
    assert body["totalAssetGroups"] == 2
    assert body["totalPages"] == 1
    assert [g["assetGroupName"] for g in body["content"]] == ["miscellaneous", "Laptops"]
    assert body["content"][1]["assets"] == []

    r = await client.get(
        url(company, "asset-groups"), params={"pagination": "false", "search": "lap"}, headers=company["headers"]
    )
    assert [g["assetGroupName"] for g in r.json()["assetGroups"]] == ["Laptops"]


@pytest.mark.asyncio
async def test_asset_group_validation(client, company):
    r = await client.post(url(company, "asset-groups"), json={}, headers=company["headers"])
    assert r.json()["validationErrors"] == {"assetGroupName": "Asset Group Name cannot be null"}

    r = await client.post(
        url(company, "asset-groups"), json={"assetGroupName": "miscellaneous"}, headers=company["headers"]
    )
    assert r.status_code == 400
    assert r.json()["validationErrors"] == {"assetGroupName": "Asset Group Name in use"}

    r = await client.post(
        url(company, "asset-groups"), json={"assetGroupName": "x" * 33}, headers=company["headers"]
    )
    assert r.json()["validationErrors"] == {"assetGroupName": "Must have min 1 and max 32 characters"}


@pytest.mark.asyncio
async def test_miscellaneous_group_is_protected(client, company):
    misc = (await _groups(client, company))["miscellaneous"]

    r = await client.patch(
        url(company, "asset-groups", misc["id"]), json={"assetGroupName": "Other"}, headers=company["headers"]
    )
    assert r.status_code == 403
    assert r.json()["message"] == "miscellaneous category's asset group name cannot be updated"

    r = await client.delete(url(company, "asset-groups", misc["id"]), headers=company["headers"])
    assert r.status_code == 403
    assert r.json()["message"] == "miscellaneous category cannot be deleted"


@pytest.mark.asyncio
async def test_rename_asset_group(client, company):
    await client.post(url(company, "asset-groups"), json={"assetGroupName": "Laptops"}, headers=company["headers"])
    group = (await _groups(client, company))["Laptops"]
    r = await client.patch(
        url(company, "asset-groups", group["id"]), json={"assetGroupName": "Notebooks"}, headers=company["headers"]
    )
    assert r.status_code == 200
    assert r.json()["assetGroupName"] == "Notebooks"


@pytest.mark.asyncio
async def test_delete_group_moves_assets_to_miscellaneous(client, company):
    await client.post(url(company, "asset-groups"), json={"assetGroupName": "Laptops"}, headers=company["headers"])
    groups = await _groups(client, company)
    await _create_asset(client, company, assetgroupId=str(groups["Laptops"]["id"]))

    r = await client.delete(url(company, "asset-groups", groups["Laptops"]["id"]), headers=company["headers"])
    assert r.status_code == 200
    assert r.json() == {"message": "Asset Group is deleted"}

    misc_id = groups["miscellaneous"]["id"]
    r = await client.get(url(company, "asset-groups", misc_id, "assets"), headers=company["headers"])
    body = r.json()
    assert body["totalAssets"] == 1
    assert body["content"][0]["assetgroup"] == {"id": misc_id, "assetGroupName": "miscellaneous"}


@pytest.mark.asyncio
async def test_other_company_group_is_not_found(client, company, other_company):
    misc = (await _groups(client, other_company))["miscellaneous"]
    r = await client.get(url(company, "asset-groups", misc["id"]), headers=company["headers"])
    assert r.status_code == 404
    assert r.json()["message"] == "Asset Group not found"


# ═══════════════════════════════════════════════════════════
# Vendors
# ═══════════════════════════════════════════════════════════

VENDOR = {"vendorName": "Dell", "email": "sales@dell.test", "contactPerson": "Pat"}


@pytest.mark.asyncio
async def test_vendor_crud(client, company):
    r = await client.post(url(company, "vendors"), json=VENDOR, headers=company["headers"])
    assert r.status_code == 200
    assert r.json() == {"message": "Vendor is created"}

    page = (await client.get(url(company, "vendors"), headers=company["headers"])).json()
    assert page["totalVendors"] == 1
    vendor = page["content"][0]
    assert vendor["vendorName"] == "Dell"
    assert vendor["notes"] is None

    r = await client.patch(
        url(company, "vendors", vendor["id"]), json={"notes": "Preferred"}, headers=company["headers"]
    )
    assert r.status_code == 200
    assert r.json()["notes"] == "Preferred"
    assert r.json()["contactPerson"] == "Pat"

    r = await client.get(url(company, "vendors"), params={"pagination": "false"}, headers=company["headers"])
    assert [v["vendorName"] for v in r.json()["vendors"]] == ["Dell"]

    r = await client.delete(url(company, "vendors", vendor["id"]), headers=company["headers"])
    assert r.json() == {"message": "Vendor is deleted"}
    r = await client.get(url(company, "vendors", vendor["id"]), headers=company["headers"])
    assert r.status_code == 404
    assert r.json()["message"] == "Vendor not found"


@pytest.mark.asyncio
async def test_vendor_validation(client, company):
    r = await client.post(url(company, "vendors"), json={}, headers=company["headers"])
    assert r.json()["validationErrors"] == {
        "vendorName": "Vendor Name cannot be null",
        "email": "E-mail cannot be null",
        "contactPerson": "Contact Person cannot be null",
    }

    r = await client.post(
        url(company, "vendors"),
        json={**VENDOR, "contactPerson": "c" * 51, "notes": "n" * 301, "email": "nope"},
        headers=company["headers"],
    )
    assert r.json()["validationErrors"] == {
        "contactPerson": "Must have max 50 characters",
        "notes": "Must have max 300 characters",
        "email": "E-mail is not valid",
    }

    await client.post(url(company, "vendors"), json=VENDOR, headers=company["headers"])
    r = await client.post(url(company, "vendors"), json=VENDOR, headers=company["headers"])
    assert r.json()["validationErrors"] == {"vendorName": "Vendor Name already exists"}


@pytest.mark.asyncio
async def test_deleting_vendor_unlinks_assets(client, company):
    await client.post(url(company, "vendors"), json=VENDOR, headers=company["headers"])
    vendor_id = (await client.get(url(company, "vendors"), headers=company["headers"])).json()["content"][0]["id"]
    await _create_asset(client, company, vendorId=str(vendor_id))

    r = await client.get(url(company, "vendors", vendor_id, "assets"), headers=company["headers"])
    assert r.json()["totalAssets"] == 1

    await client.delete(url(company, "vendors", vendor_id), headers=company["headers"])
    assets = (await client.get(url(company, "assets"), headers=company["headers"])).json()
    assert assets["content"][0]["vendor"] == []


# ═══════════════════════════════════════════════════════════
# Statuses
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_default_statuses(client, company):
    statuses = await _statuses(client, company)
    assert list(statuses) == ["Disposed", "Expired", "In Repair", "In Store", "In Use"]


@pytest.mark.asyncio
async def test_status_crud(client, company):
    r = await client.post(url(company, "asset-status"), json={"statusName": "Lost"}, headers=company["headers"])
    assert r.json() == {"message": "Asset Status is created"}

    r = await client.post(url(company, "asset-status"), json={"statusName": "Lost"}, headers=company["headers"])
    assert r.status_code == 400
    assert r.json()["validationErrors"] == {"statusName": "Asset Status Name in use"}

    status_id = (await _statuses(client, company))["Lost"]
    r = await client.patch(
        url(company, "asset-status", status_id), json={"statusName": "Missing"}, headers=company["headers"]
    )
    assert r.status_code == 200
    assert r.json()["statusName"] == "Missing"

    r = await client.delete(url(company, "asset-status", status_id), headers=company["headers"])
    assert r.json() == {"message": "Asset Status is deleted"}
    r = await client.get(url(company, "asset-status", status_id), headers=company["headers"])
    assert r.status_code == 404
    assert r.json()["message"] == "Status not found"


@pytest.mark.asyncio
async def test_status_in_use_cannot_be_deleted(client, company):
    await _create_asset(client, company)
    in_use = (await _statuses(client, company))["In Use"]

    r = await client.get(url(company, "asset-status", in_use, "assets"), headers=company["headers"])
    assert r.json()["totalAssets"] == 1

    r = await client.delete(url(company, "asset-status", in_use), headers=company["headers"])
    assert r.status_code == 403
    assert r.json()["message"] == "Asset Status is in use"
