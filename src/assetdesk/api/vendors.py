"""Vendor API routes. ?pagination=false on the listing returns {vendors: [...]}."""

from typing import Union

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.api.pagination import PageRequest, page_request, pagination_enabled
from assetdesk.auth.dependencies import Identity
from assetdesk.auth.policies import SAME_COMPANY, guard
from assetdesk.db.engine import get_db
from assetdesk.schemas.asset import (
    AssetPage,
    VendorCreate,
    VendorList,
    VendorPage,
    VendorRead,
    VendorUpdate,
)
from assetdesk.schemas.common import MessageResponse
from assetdesk.services.vendor_service import VendorService

router = APIRouter(prefix="/companies/{company_id}/vendors")

_member = guard(*SAME_COMPANY)


def _svc(db: AsyncSession = Depends(get_db)) -> VendorService:
    return VendorService(db)


@router.post("", response_model=MessageResponse)
async def create_vendor(
    body: VendorCreate,
    identity: Identity = Depends(_member),
    svc: VendorService = Depends(_svc),
):
    await svc.create_vendor(identity.company_id, identity.user_id, body)
    return {"message": "Vendor is created"}


@router.get("", response_model=Union[VendorPage, VendorList])
async def list_vendors(
    identity: Identity = Depends(_member),
    page: PageRequest = Depends(page_request),
    paginated: bool = Depends(pagination_enabled),
    svc: VendorService = Depends(_svc),
):
    if not paginated:
        return VendorList.model_validate(
            await svc.list_all_vendors(identity.company_id, page.search)
        )
    return VendorPage.model_validate(await svc.list_vendors(identity.company_id, page))


@router.get("/{vendor_id}", response_model=VendorRead)
async def get_vendor(
    vendor_id: str,
    identity: Identity = Depends(_member),
    svc: VendorService = Depends(_svc),
):
    return await svc.get_vendor(identity.company_id, vendor_id)


@router.get("/{vendor_id}/assets", response_model=AssetPage)
async def list_vendor_assets(
    vendor_id: str,
    identity: Identity = Depends(_member),
    page: PageRequest = Depends(page_request),
    svc: VendorService = Depends(_svc),
):
    return await svc.list_vendor_assets(identity.company_id, vendor_id, page)


@router.patch("/{vendor_id}", response_model=VendorRead)
async def update_vendor(
    vendor_id: str,
    body: VendorUpdate,
    identity: Identity = Depends(_member),
    svc: VendorService = Depends(_svc),
):
    return await svc.update_vendor(identity.company_id, vendor_id, body)


@router.delete("/{vendor_id}", response_model=MessageResponse)
async def delete_vendor(
    vendor_id: str,
    identity: Identity = Depends(_member),
    svc: VendorService = Depends(_svc),
):
    await svc.delete_vendor(identity.company_id, vendor_id)
    return {"message": "Vendor is deleted"}
