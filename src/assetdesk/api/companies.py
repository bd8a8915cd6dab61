"""Company API routes: registration, detail, rename and deletion."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.auth.dependencies import Identity
from assetdesk.auth.policies import COMPANY_ADMIN, SAME_COMPANY, guard
from assetdesk.db.engine import get_db
from assetdesk.schemas.common import MessageResponse
from assetdesk.schemas.company import (
    CompanyDetail,
    CompanyRegister,
    CompanyRegistered,
    CompanyUpdate,
    CompanyUpdated,
)
from assetdesk.services.company_service import CompanyService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> CompanyService:
    return CompanyService(db)


@router.post("/companies", response_model=CompanyRegistered)
async def register_company(body: CompanyRegister, svc: CompanyService = Depends(_svc)):
    """Create a company together with its founding admin account."""
    return await svc.register(body)


@router.get("/companies/{company_id}", response_model=CompanyDetail)
async def get_company(
    company_id: str,
    identity: Identity = Depends(guard(*SAME_COMPANY)),
    svc: CompanyService = Depends(_svc),
):
    return await svc.get_company(identity.company_id)


@router.patch("/companies/{company_id}", response_model=CompanyUpdated)
async def update_company(
    company_id: str,
    body: CompanyUpdate,
    identity: Identity = Depends(guard(*COMPANY_ADMIN)),
    svc: CompanyService = Depends(_svc),
):
    return await svc.update_company(identity.user_id, identity.company_id, body)


@router.delete("/companies/{company_id}", response_model=MessageResponse)
async def delete_company(
    company_id: str,
    identity: Identity = Depends(guard(*COMPANY_ADMIN)),
    svc: CompanyService = Depends(_svc),
):
    await svc.delete_company(identity.company_id, identity.user_id)
    return {"message": "Company is deleted"}
