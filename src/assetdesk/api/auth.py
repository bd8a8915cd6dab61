"""Auth API: e-mail/password login.

POST /auth → {id, username, companyId, isAdmin, token}
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.db.engine import get_db
from assetdesk.schemas.auth import LoginRequest, LoginResponse
from assetdesk.services.user_service import UserService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("/auth", response_model=LoginResponse)
async def login(body: Optional[LoginRequest] = None, svc: UserService = Depends(_svc)):
    body = body or LoginRequest()
    return await svc.authenticate(body.email, body.password)
