"""Asset group service.

Every company owns a "miscellaneous" group created at registration. It
can be neither renamed nor deleted: deleting any other group moves that
group's assets into it.
"""

from typing import Any, Optional

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.db.engine import atomic
from assetdesk.db.models import Asset, AssetGroup
from assetdesk.db.seeds import MISCELLANEOUS_ASSET_GROUP
from assetdesk.errors import AssetGroupNotFound, ForbiddenError, ValidationError
from assetdesk.ids import parse_id
from assetdesk.schemas.asset import AssetGroupCreate, AssetGroupUpdate
from assetdesk.services.listing import PageRequest, name_filter, paginate

logger = structlog.get_logger()

NAME_IN_USE = "Asset Group Name in use"


class AssetGroupService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_name(self, company_id: int, name: str) -> Optional[AssetGroup]:
        result = await self.db.execute(
            select(AssetGroup).where(
                AssetGroup.company_id == company_id,
                AssetGroup.asset_group_name == name,
            )
        )
        return result.scalars().first()

    async def find(self, company_id: int, group_id: Any) -> Optional[AssetGroup]:
        gid = parse_id(group_id)
        if gid is None:
            return None
        result = await self.db.execute(
            select(AssetGroup)
            .where(AssetGroup.company_id == company_id, AssetGroup.id == gid)
            .options(selectinload(AssetGroup.assets))
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_asset_group(self, company_id: int, group_id: Any) -> AssetGroup:
        group = await self.find(company_id, group_id)
        if group is None:
            raise AssetGroupNotFound()
        return group

    async def create_asset_group(
        self, company_id: int, user_id: int, payload: AssetGroupCreate
    ) -> AssetGroup:
        if await self.find_by_name(company_id, payload.asset_group_name):
            raise ValidationError({"assetGroupName": NAME_IN_USE})

        group = AssetGroup(
            asset_group_name=payload.asset_group_name,
            company_id=company_id,
            user_id=user_id,
        )
        async with atomic(self.db, "asset_group.create"):
            self.db.add(group)
        logger.info("asset_group.created", asset_group_id=group.id, company_id=company_id)
        return group

    def _listing(self, company_id: int, search: str):
        return (
            select(AssetGroup)
            .where(
                AssetGroup.company_id == company_id,
                name_filter(AssetGroup.asset_group_name, search),
            )
            .options(selectinload(AssetGroup.assets))
            .order_by(AssetGroup.id)
        )

    async def list_asset_groups(self, company_id: int, req: PageRequest) -> dict:
        page = await paginate(self.db, self._listing(company_id, req.search), req)
        page["total_asset_groups"] = page.pop("total")
        return page

    async def list_all_asset_groups(self, company_id: int, search: str = "") -> dict:
        result = await self.db.execute(self._listing(company_id, search))
        return {"asset_groups": list(result.scalars().all())}

    async def list_group_assets(
        self, company_id: int, group_id: Any, req: PageRequest
    ) -> dict:
        group = await self.get_asset_group(company_id, group_id)
        stmt = (
            select(Asset)
            .where(
                Asset.company_id == company_id,
                Asset.assetgroup_id == group.id,
                name_filter(Asset.asset_name, req.search),
            )
            .order_by(Asset.id)
        )
        page = await paginate(self.db, stmt, req)
        page["total_assets"] = page.pop("total")
        return page

    async def update_asset_group(
        self, company_id: int, group_id: Any, payload: AssetGroupUpdate
    ) -> AssetGroup:
        group = await self.get_asset_group(company_id, group_id)
        name = payload.asset_group_name

        if name and name != group.asset_group_name:
            if group.asset_group_name == MISCELLANEOUS_ASSET_GROUP:
                raise ForbiddenError(
                    "miscellaneous category's asset group name cannot be updated"
                )
            if await self.find_by_name(company_id, name):
                raise ValidationError({"assetGroupName": NAME_IN_USE})
            group.asset_group_name = name
            await self.db.commit()
            logger.info("asset_group.renamed", asset_group_id=group.id)

        return await self.get_asset_group(company_id, group.id)

    async def delete_asset_group(self, company_id: int, group_id: Any) -> None:
        """Delete a group after moving its assets to the company's miscellaneous group."""
        group = await self.get_asset_group(company_id, group_id)
        if group.asset_group_name == MISCELLANEOUS_ASSET_GROUP:
            raise ForbiddenError("miscellaneous category cannot be deleted")

        misc = await self.find_by_name(company_id, MISCELLANEOUS_ASSET_GROUP)
        async with atomic(self.db, "asset_group.delete"):
            if misc is not None:
                await self.db.execute(
                    update(Asset)
                    .where(Asset.company_id == company_id, Asset.assetgroup_id == group.id)
                    .values(assetgroup_id=misc.id)
                )
            await self.db.execute(delete(AssetGroup).where(AssetGroup.id == group.id))
        logger.info(
            "asset_group.deleted",
            asset_group_id=group.id,
            reassigned_to=misc.id if misc else None,
        )
