"""Asset status API routes, mounted at /companies/{company_id}/asset-status."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.api.pagination import PageRequest, page_request
from assetdesk.auth.dependencies import Identity
from assetdesk.auth.policies import SAME_COMPANY, guard
from assetdesk.db.engine import get_db
from assetdesk.schemas.asset import (
    AssetPage,
    StatusCreate,
    StatusDetail,
    StatusList,
    StatusUpdate,
)
from assetdesk.schemas.common import MessageResponse
from assetdesk.services.status_service import StatusService

router = APIRouter(prefix="/companies/{company_id}/asset-status")

_member = guard(*SAME_COMPANY)


def _svc(db: AsyncSession = Depends(get_db)) -> StatusService:
    return StatusService(db)


@router.post("", response_model=MessageResponse)
async def create_status(
    body: StatusCreate,
    identity: Identity = Depends(_member),
    svc: StatusService = Depends(_svc),
):
    await svc.create_status(identity.company_id, identity.user_id, body)
    return {"message": "Asset Status is created"}


@router.get("", response_model=StatusList)
async def list_statuses(
    identity: Identity = Depends(_member),
    svc: StatusService = Depends(_svc),
):
    return await svc.list_statuses(identity.company_id)


@router.get("/{status_id}", response_model=StatusDetail)
async def get_status(
    status_id: str,
    identity: Identity = Depends(_member),
    svc: StatusService = Depends(_svc),
):
    return await svc.get_status(identity.company_id, status_id)


@router.get("/{status_id}/assets", response_model=AssetPage)
async def list_status_assets(
    status_id: str,
    identity: Identity = Depends(_member),
    page: PageRequest = Depends(page_request),
    svc: StatusService = Depends(_svc),
):
    return await svc.list_status_assets(identity.company_id, status_id, page)


@router.patch("/{status_id}", response_model=StatusDetail)
async def update_status(
    status_id: str,
    body: StatusUpdate,
    identity: Identity = Depends(_member),
    svc: StatusService = Depends(_svc),
):
    return await svc.update_status(identity.company_id, status_id, body)


@router.delete("/{status_id}", response_model=MessageResponse)
async def delete_status(
    status_id: str,
    identity: Identity = Depends(_member),
    svc: StatusService = Depends(_svc),
):
    await svc.delete_status(identity.company_id, status_id)
    return {"message": "Asset Status is deleted"}
