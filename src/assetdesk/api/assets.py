"""Asset API routes. Any member of the company may manage its assets."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.api.pagination import PageRequest, page_request
from assetdesk.auth.dependencies import Identity
from assetdesk.auth.policies import SAME_COMPANY, guard
from assetdesk.db.engine import get_db
from assetdesk.schemas.asset import AssetCreate, AssetPage, AssetRead, AssetUpdate
from assetdesk.schemas.common import MessageResponse
from assetdesk.services.asset_service import AssetService

router = APIRouter(prefix="/companies/{company_id}/assets")

_member = guard(*SAME_COMPANY)


def _svc(db: AsyncSession = Depends(get_db)) -> AssetService:
    return AssetService(db)


@router.post("", response_model=MessageResponse)
async def create_asset(
    body: AssetCreate,
    identity: Identity = Depends(_member),
    svc: AssetService = Depends(_svc),
):
    await svc.create_asset(identity, body)
    return {"message": "Asset is created"}


@router.get("", response_model=AssetPage)
async def list_assets(
    identity: Identity = Depends(_member),
    page: PageRequest = Depends(page_request),
    svc: AssetService = Depends(_svc),
):
    return await svc.list_assets(identity.company_id, page)


@router.get("/{asset_id}", response_model=AssetRead)
async def get_asset(
    asset_id: str,
    identity: Identity = Depends(_member),
    svc: AssetService = Depends(_svc),
):
    return await svc.get_asset(identity.company_id, asset_id)


@router.patch("/{asset_id}", response_model=AssetRead)
async def update_asset(
    asset_id: str,
    body: AssetUpdate,
    identity: Identity = Depends(_member),
    svc: AssetService = Depends(_svc),
):
    return await svc.update_asset(identity.company_id, asset_id, body)


@router.delete("/{asset_id}", response_model=MessageResponse)
async def delete_asset(
    asset_id: str,
    identity: Identity = Depends(_member),
    svc: AssetService = Depends(_svc),
):
    await svc.delete_asset(identity.company_id, asset_id)
    return {"message": "Asset is deleted"}
