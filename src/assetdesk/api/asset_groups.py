"""Asset group API routes.

GET /asset-groups?pagination=false returns {assetGroups: [...]} instead
of a page, for pickers that need every group at once.
"""

from typing import Union

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.api.pagination import PageRequest, page_request, pagination_enabled
from assetdesk.auth.dependencies import Identity
from assetdesk.auth.policies import SAME_COMPANY, guard
from assetdesk.db.engine import get_db
from assetdesk.schemas.asset import (
    AssetGroupCreate,
    AssetGroupList,
    AssetGroupPage,
    AssetGroupRead,
    AssetGroupUpdate,
    AssetPage,
)
from assetdesk.schemas.common import MessageResponse
from assetdesk.services.asset_group_service import AssetGroupService

router = APIRouter(prefix="/companies/{company_id}/asset-groups")

_member = guard(*SAME_COMPANY)


def _svc(db: AsyncSession = Depends(get_db)) -> AssetGroupService:
    return AssetGroupService(db)


@router.post("", response_model=MessageResponse)
async def create_asset_group(
    body: AssetGroupCreate,
    identity: Identity = Depends(_member),
    svc: AssetGroupService = Depends(_svc),
):
    await svc.create_asset_group(identity.company_id, identity.user_id, body)
    return {"message": "Asset Group is created"}


@router.get("", response_model=Union[AssetGroupPage, AssetGroupList])
async def list_asset_groups(
    identity: Identity = Depends(_member),
    page: PageRequest = Depends(page_request),
    paginated: bool = Depends(pagination_enabled),
    svc: AssetGroupService = Depends(_svc),
):
    if not paginated:
        return AssetGroupList.model_validate(
            await svc.list_all_asset_groups(identity.company_id, page.search)
        )
    return AssetGroupPage.model_validate(
        await svc.list_asset_groups(identity.company_id, page)
    )


@router.get("/{asset_group_id}", response_model=AssetGroupRead)
async def get_asset_group(
    asset_group_id: str,
    identity: Identity = Depends(_member),
    svc: AssetGroupService = Depends(_svc),
):
    return await svc.get_asset_group(identity.company_id, asset_group_id)


@router.get("/{asset_group_id}/assets", response_model=AssetPage)
async def list_asset_group_assets(
    asset_group_id: str,
    identity: Identity = Depends(_member),
    page: PageRequest = Depends(page_request),
    svc: AssetGroupService = Depends(_svc),
):
    return await svc.list_group_assets(identity.company_id, asset_group_id, page)


@router.patch("/{asset_group_id}", response_model=AssetGroupRead)
async def update_asset_group(
    asset_group_id: str,
    body: AssetGroupUpdate,
    identity: Identity = Depends(_member),
    svc: AssetGroupService = Depends(_svc),
):
    return await svc.update_asset_group(identity.company_id, asset_group_id, body)


@router.delete("/{asset_group_id}", response_model=MessageResponse)
async def delete_asset_group(
    asset_group_id: str,
    identity: Identity = Depends(_member),
    svc: AssetGroupService = Depends(_svc),
):
    await svc.delete_asset_group(identity.company_id, asset_group_id)
    return {"message": "Asset Group is deleted"}
