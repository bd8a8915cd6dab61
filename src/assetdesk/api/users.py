"""User API routes, all scoped under /companies/{company_id}/users.

Guards:
- create, reactivate, delete → company admin
- list, get → any member of the company
- update profile, change password → the user themself or the admin
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.api.pagination import PageRequest, page_request
from assetdesk.auth.dependencies import Identity
from assetdesk.auth.policies import COMPANY_ADMIN, SAME_COMPANY, SELF_OR_ADMIN, guard
from assetdesk.db.engine import get_db
from assetdesk.schemas.common import MessageResponse
from assetdesk.schemas.user import (
    PasswordUpdate,
    UserCreate,
    UserCreated,
    UserPage,
    UserRead,
    UserSummary,
    UserUpdate,
)
from assetdesk.services.user_service import UserService

router = APIRouter(prefix="/companies/{company_id}/users")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("", response_model=UserCreated)
async def create_user(
    body: UserCreate,
    identity: Identity = Depends(guard(*COMPANY_ADMIN)),
    svc: UserService = Depends(_svc),
):
    token = await svc.create_user(identity.company_id, body)
    return {"token": token}


@router.get("", response_model=UserPage)
async def list_users(
    identity: Identity = Depends(guard(*SAME_COMPANY)),
    page: PageRequest = Depends(page_request),
    svc: UserService = Depends(_svc),
):
    return await svc.list_users(identity, page)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: str,
    identity: Identity = Depends(guard(*SAME_COMPANY)),
    svc: UserService = Depends(_svc),
):
    return await svc.get_user(identity.company_id, user_id)


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    body: UserUpdate,
    identity: Identity = Depends(guard(*SELF_OR_ADMIN)),
    svc: UserService = Depends(_svc),
):
    return await svc.update_user(identity, identity.company_id, user_id, body)


@router.patch("/{user_id}/password", response_model=MessageResponse)
async def change_password(
    user_id: str,
    body: PasswordUpdate,
    identity: Identity = Depends(guard(*SELF_OR_ADMIN)),
    svc: UserService = Depends(_svc),
):
    await svc.change_password(identity.company_id, user_id, body)
    return {"message": "Password is changed successfully"}


# /deactivate is the historical name of this route; both paths reactivate.
@router.patch("/{user_id}/reactivate", response_model=UserSummary)
@router.patch("/{user_id}/deactivate", response_model=UserSummary, include_in_schema=False)
async def reactivate_user(
    user_id: str,
    identity: Identity = Depends(guard(*COMPANY_ADMIN)),
    svc: UserService = Depends(_svc),
):
    return await svc.reactivate_user(identity.company_id, user_id)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    identity: Identity = Depends(guard(*COMPANY_ADMIN)),
    svc: UserService = Depends(_svc),
):
    await svc.delete_user(identity.company_id, user_id)
    return {"message": "User is deleted"}
