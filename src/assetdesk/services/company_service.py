"""Company service: registration, company detail and teardown.

Registration is the only way a company comes into existence. It creates,
in one transaction, the company, its founding user, the Admin row that
makes that user the system admin, the "miscellaneous" asset group and the
default statuses.
"""

from typing import Any

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.auth.password import hash_password
from assetdesk.db.engine import atomic
from assetdesk.db.models import (
    Admin,
    Asset,
    AssetGroup,
    AssetStatus,
    AssetVendor,
    Company,
    Status,
    User,
    Vendor,
)
from assetdesk.db.seeds import DEFAULT_STATUSES, MISCELLANEOUS_ASSET_GROUP
from assetdesk.errors import NOT_ALLOWED, CompanyNotFound, ForbiddenError, ValidationError
from assetdesk.schemas.company import CompanyRegister, CompanyUpdate
from assetdesk.services.user_service import UserService

logger = structlog.get_logger()

# Child tables first; the company row goes last.
_TEARDOWN_ORDER = (
    AssetVendor,
    AssetStatus,
    Asset,
    Vendor,
    Status,
    AssetGroup,
    Admin,
    User,
)


class CompanyService:
    """Business logic for the tenant root."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, payload: CompanyRegister) -> dict[str, Any]:
        if await UserService(self.db).find_by_email(payload.email):
            raise ValidationError({"email": "E-mail in use"})

        hashed = hash_password(payload.password)
        async with atomic(self.db, "company.register"):
            company = Company(company_name=payload.company_name)
            self.db.add(company)
            await self.db.flush()

            user = User(
                company_id=company.id,
                username=payload.username,
                email=payload.email,
                full_name=payload.full_name,
                password=hashed,
                inactive=False,
            )
            self.db.add(user)
            await self.db.flush()

            self.db.add(Admin(user_id=user.id, company_id=company.id))
            self.db.add(
                AssetGroup(
                    asset_group_name=MISCELLANEOUS_ASSET_GROUP,
                    company_id=company.id,
                    user_id=user.id,
                )
            )
            self.db.add_all(
                Status(status_name=name, company_id=company.id, user_id=user.id)
                for name in DEFAULT_STATUSES
            )
            await self.db.flush()

        logger.info("company.registered", company_id=company.id, user_id=user.id)
        token = await UserService(self.db).issue_token_for(user)
        return {"company_id": company.id, "user_id": user.id, "token": token}

    async def get_company(self, company_id: int) -> Company:
        result = await self.db.execute(
            select(Company)
            .where(Company.id == company_id)
            .options(
                selectinload(Company.vendors),
                selectinload(Company.users),
                selectinload(Company.assets),
                selectinload(Company.asset_groups),
            )
        )
        company = result.scalars().first()
        if company is None:
            raise CompanyNotFound()
        return company

    async def _require_system_admin(self, user_id: int, company_id: int) -> Admin:
        result = await self.db.execute(
            select(Admin).where(Admin.user_id == user_id, Admin.company_id == company_id)
        )
        admin = result.scalars().first()
        if admin is None:
            raise ForbiddenError(NOT_ALLOWED)
        return admin

    async def update_company(
        self, user_id: int, company_id: int, payload: CompanyUpdate
    ) -> dict[str, Any]:
        company = await self.db.get(Company, company_id)
        if company is None:
            raise CompanyNotFound()
        admin = await self._require_system_admin(user_id, company_id)

        if payload.company_name:
            company.company_name = payload.company_name
            await self.db.commit()
            logger.info("company.updated", company_id=company_id)

        return {
            "id": company.id,
            "company_name": company.company_name,
            "company_admin": admin.user_id,
        }

    async def delete_company(self, company_id: int, user_id: int) -> None:
        await UserService(self.db).get_user(company_id, user_id)
        await self._require_system_admin(user_id, company_id)
        await self.teardown(company_id)

    async def teardown(self, company_id: int) -> None:
        """Delete the company and every row it owns, all or nothing."""
        async with atomic(self.db, "company.teardown"):
            for model in _TEARDOWN_ORDER:
                await self.db.execute(delete(model).where(model.company_id == company_id))
            await self.db.execute(delete(Company).where(Company.id == company_id))
        logger.info("company.torn_down", company_id=company_id)
