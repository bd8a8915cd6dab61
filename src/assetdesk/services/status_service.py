"""Status service: the lifecycle labels an asset carries (In Use, In Repair, ...)."""

from typing import Any, Optional

import structlog
from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.db.engine import atomic
from assetdesk.db.models import Asset, AssetStatus, Status
from assetdesk.errors import ForbiddenError, StatusNotFound, ValidationError
from assetdesk.ids import parse_id
from assetdesk.schemas.asset import StatusCreate, StatusUpdate
from assetdesk.services.listing import PageRequest, name_filter, paginate

logger = structlog.get_logger()

NAME_IN_USE = "Asset Status Name in use"


class StatusService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_name(self, company_id: int, name: str) -> Optional[Status]:
        result = await self.db.execute(
            select(Status).where(Status.company_id == company_id, Status.status_name == name)
        )
        return result.scalars().first()

    async def find(self, company_id: int, status_id: Any) -> Optional[Status]:
        sid = parse_id(status_id)
        if sid is None:
            return None
        result = await self.db.execute(
            select(Status)
            .where(Status.company_id == company_id, Status.id == sid)
            .options(selectinload(Status.assets))
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_status(self, company_id: int, status_id: Any) -> Status:
        status = await self.find(company_id, status_id)
        if status is None:
            raise StatusNotFound()
        return status

    async def list_statuses(self, company_id: int) -> dict:
        result = await self.db.execute(
            select(Status)
            .where(Status.company_id == company_id)
            .options(selectinload(Status.assets))
            .order_by(Status.id)
        )
        return {"asset_statuses": list(result.scalars().all())}

    async def list_status_assets(
        self, company_id: int, status_id: Any, req: PageRequest
    ) -> dict:
        status = await self.get_status(company_id, status_id)
        stmt = (
            select(Asset)
            .join(AssetStatus, AssetStatus.asset_id == Asset.id)
            .where(
                Asset.company_id == company_id,
                AssetStatus.status_id == status.id,
                name_filter(Asset.asset_name, req.search),
            )
            .order_by(Asset.id)
        )
        page = await paginate(self.db, stmt, req)
        page["total_assets"] = page.pop("total")
        return page

    async def create_status(
        self, company_id: int, user_id: int, payload: StatusCreate
    ) -> Status:
        if await self.find_by_name(company_id, payload.status_name):
            raise ValidationError({"statusName": NAME_IN_USE})

        status = Status(status_name=payload.status_name, company_id=company_id, user_id=user_id)
        async with atomic(self.db, "status.create"):
            self.db.add(status)
        logger.info("status.created", status_id=status.id, company_id=company_id)
        return status

    async def update_status(
        self, company_id: int, status_id: Any, payload: StatusUpdate
    ) -> Status:
        status = await self.get_status(company_id, status_id)
        name = payload.status_name

        if name and name != status.status_name:
            if await self.find_by_name(company_id, name):
                raise ValidationError({"statusName": NAME_IN_USE})
            status.status_name = name
            await self.db.commit()
            logger.info("status.renamed", status_id=status.id)

        return await self.get_status(company_id, status.id)

    async def delete_status(self, company_id: int, status_id: Any) -> None:
        status = await self.get_status(company_id, status_id)
        in_use = await self.db.scalar(
            select(exists().where(AssetStatus.status_id == status.id))
        )
        if in_use:
            raise ForbiddenError("Asset Status is in use")

        async with atomic(self.db, "status.delete"):
            await self.db.execute(delete(Status).where(Status.id == status.id))
        logger.info("status.deleted", status_id=status.id, company_id=company_id)
