"""Asset CRUD with status / vendor / group links."""

import pytest
from sqlalchemy import func, select

from assetdesk.db.models import AssetStatus, AssetVendor

API = "/api/1.0"


@pytest.fixture()
def assets_url(company):
    return f"{API}/companies/{company['companyId']}/assets"


async def _refs(client, company):
    base = f"{API}/companies/{company['companyId']}"
    groups = (await client.get(f"{base}/asset-groups", params={"pagination": "false"}, headers=company["headers"])).json()
    statuses = (await client.get(f"{base}/asset-status", headers=company["headers"])).json()
    await client.post(
        f"{base}/vendors",
        json={"vendorName": "Dell", "email": "sales@dell.test", "contactPerson": "Pat"},
        headers=company["headers"],
    )
    vendors = (await client.get(f"{base}/vendors", headers=company["headers"])).json()
    return {
        "group": groups["assetGroups"][0]["id"],
        "status": {s["statusName"]: s["id"] for s in statuses["assetStatuses"]},
        "vendor": vendors["content"][0]["id"],
    }


@pytest.mark.asyncio
async def test_create_and_get_asset(client, company, assets_url):
    refs = await _refs(client, company)
    r = await client.post(
        assets_url,
        json={
            "assetName": "Laptop",
            "serialCode": "SN-1",
            "statusCode": str(refs["status"]["In Use"]),
            "vendorId": str(refs["vendor"]),
            "assetgroupId": str(refs["group"]),
            "purchasingCost": 1200.5,
        },
        headers=company["headers"],
    )
    assert r.status_code == 200
    assert r.json() == {"message": "Asset is created"}

    page = (await client.get(assets_url, headers=company["headers"])).json()
    assert page["totalAssets"] == 1
    asset = page["content"][0]

    r = await client.get(f"{assets_url}/{asset['id']}", headers=company["headers"])
    assert r.status_code == 200
    body = r.json()
    assert body["assetName"] == "Laptop"
    assert body["serialCode"] == "SN-1"
    assert body["purchasingCost"] == 1200.5
    assert body["assetgroup"] == {"id": refs["group"], "assetGroupName": "miscellaneous"}
    assert body["status"] == [{"id": refs["status"]["In Use"], "statusName": "In Use"}]
    assert [v["vendorName"] for v in body["vendor"]] == ["Dell"]


@pytest.mark.asyncio
async def test_create_asset_validation(client, company, assets_url):
    r = await client.post(assets_url, json={}, headers=company["headers"])
    assert r.status_code == 400
    assert r.json()["validationErrors"] == {
        "assetName": "Asset name cannot be null",
        "statusCode": "Status cannot be null",
        "assetgroupId": "Asset Group cannot be null",
    }

    r = await client.post(
        assets_url,
        json={"assetName": "Laptop", "statusCode": "9999", "vendorId": "abc", "assetgroupId": "9999"},
        headers=company["headers"],
    )
    assert r.status_code == 400
    assert r.json()["validationErrors"] == {
        "statusCode": "Status does not exist",
        "vendorId": "Vendor does not exist",
        "assetgroupId": "Asset Group does not exist",
    }


@pytest.mark.asyncio
async def test_references_from_other_company_do_not_exist(client, company, other_company, assets_url):
    theirs = await _refs(client, other_company)
    r = await client.post(
        assets_url,
        json={
            "assetName": "Laptop",
            "statusCode": str(theirs["status"]["In Use"]),
            "assetgroupId": str(theirs["group"]),
        },
        headers=company["headers"],
    )
    assert r.status_code == 400
    assert set(r.json()["validationErrors"]) == {"statusCode", "assetgroupId"}


@pytest.mark.asyncio
async def test_duplicate_serial_code(client, company, assets_url):
    refs = await _refs(client, company)
    body = {
        "assetName": "Laptop",
        "serialCode": "SN-1",
        "statusCode": str(refs["status"]["In Use"]),
        "assetgroupId": str(refs["group"]),
    }
    assert (await client.post(assets_url, json=body, headers=company["headers"])).status_code == 200
    r = await client.post(assets_url, json=body, headers=company["headers"])
    assert r.status_code == 400
    assert r.json()["validationErrors"] == {"serialCode": "Asset with given serial code already exists"}


@pytest.mark.asyncio
async def test_partial_update_relinks(client, company, assets_url, db_session):
    refs = await _refs(client, company)
    await client.post(
        assets_url,
        json={
            "assetName": "Laptop",
            "serialCode": "SN-1",
            "statusCode": str(refs["status"]["In Use"]),
            "assetgroupId": str(refs["group"]),
        },
        headers=company["headers"],
    )
    asset_id = (await client.get(assets_url, headers=company["headers"])).json()["content"][0]["id"]

    r = await client.patch(
        f"{assets_url}/{asset_id}",
        json={"statusCode": str(refs["status"]["In Repair"]), "vendorId": str(refs["vendor"])},
        headers=company["headers"],
    )
    assert r.status_code == 200
    body = r.json()
    assert body["assetName"] == "Laptop"
    assert body["serialCode"] == "SN-1"
    assert [s["statusName"] for s in body["status"]] == ["In Repair"]
    assert [v["id"] for v in body["vendor"]] == [refs["vendor"]]

    r = await client.patch(
        f"{assets_url}/{asset_id}", json={"vendorId": None, "assetName": "Notebook"}, headers=company["headers"]
    )
    body = r.json()
    assert body["vendor"] == []
    assert body["assetName"] == "Notebook"

    links = (await db_session.execute(select(func.count(AssetStatus.id)))).scalar_one()
    assert links == 1


@pytest.mark.asyncio
async def test_delete_asset_removes_links(client, company, assets_url, db_session):
    refs = await _refs(client, company)
    await client.post(
        assets_url,
        json={
            "assetName": "Laptop",
            "statusCode": str(refs["status"]["In Use"]),
            "vendorId": str(refs["vendor"]),
            "assetgroupId": str(refs["group"]),
        },
        headers=company["headers"],
    )
    asset_id = (await client.get(assets_url, headers=company["headers"])).json()["content"][0]["id"]

    r = await client.delete(f"{assets_url}/{asset_id}", headers=company["headers"])
    assert r.json() == {"message": "Asset is deleted"}

    for model in (AssetStatus, AssetVendor):
        assert (await db_session.execute(select(func.count(model.id)))).scalar_one() == 0

    r = await client.get(f"{assets_url}/{asset_id}", headers=company["headers"])
    assert r.status_code == 404
    assert r.json()["message"] == "Asset not found"


@pytest.mark.asyncio
async def test_member_can_manage_assets(client, company, make_user, assets_url):
    member = await make_user()
    refs = await _refs(client, company)
    r = await client.post(
        assets_url,
        json={
            "assetName": "Phone",
            "statusCode": str(refs["status"]["In Store"]),
            "assetgroupId": str(refs["group"]),
        },
        headers=member["headers"],
    )
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_assets_of_other_company_are_unauthorized(client, company, other_company, assets_url):
    r = await client.get(assets_url, headers=other_company["headers"])
    assert r.status_code == 401
