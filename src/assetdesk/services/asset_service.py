"""Asset service.

An asset always has exactly one status (an AssetStatus row) and at most
one vendor (an AssetVendor row). Both links are written in the same
transaction as the asset itself.
"""

from typing import Any, Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.auth.dependencies import Identity
from assetdesk.db.engine import atomic
from assetdesk.db.models import Asset, AssetStatus, AssetVendor
from assetdesk.errors import AssetNotFound, ValidationError
from assetdesk.ids import parse_id
from assetdesk.schemas.asset import AssetCreate, AssetUpdate
from assetdesk.services.asset_group_service import AssetGroupService
from assetdesk.services.listing import PageRequest, name_filter, paginate
from assetdesk.services.status_service import StatusService
from assetdesk.services.vendor_service import VendorService

logger = structlog.get_logger()

SERIAL_IN_USE = "Asset with given serial code already exists"

# Plain columns a create/update may set directly.
_ASSET_FIELDS = (
    "asset_name",
    "serial_code",
    "purchasing_cost",
    "current_value",
    "acquisition_date",
    "sale_date",
)


class AssetService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_serial(self, company_id: int, serial_code: str) -> Optional[Asset]:
        result = await self.db.execute(
            select(Asset).where(Asset.company_id == company_id, Asset.serial_code == serial_code)
        )
        return result.scalars().first()

    async def get_asset(self, company_id: int, asset_id: Any) -> Asset:
        aid = parse_id(asset_id)
        if aid is None:
            raise AssetNotFound()
        result = await self.db.execute(
            select(Asset)
            .where(Asset.company_id == company_id, Asset.id == aid)
            .execution_options(populate_existing=True)
        )
        asset = result.scalars().first()
        if asset is None:
            raise AssetNotFound()
        return asset

    async def _check_links(self, company_id: int, changes: dict) -> dict[str, str]:
        """Verify that referenced status, vendor and group belong to the company.

        Returns validation messages keyed by wire field name, and replaces
        the raw ids in changes with parsed integers.
        """
        errors: dict[str, str] = {}
        if "status_code" in changes:
            status = await StatusService(self.db).find(company_id, changes["status_code"])
            if status is None:
                errors["statusCode"] = "Status does not exist"
            else:
                changes["status_code"] = status.id
        if changes.get("vendor_id") is not None:
            vendor = await VendorService(self.db).find(company_id, changes["vendor_id"])
            if vendor is None:
                errors["vendorId"] = "Vendor does not exist"
            else:
                changes["vendor_id"] = vendor.id
        if "assetgroup_id" in changes:
            group = await AssetGroupService(self.db).find(company_id, changes["assetgroup_id"])
            if group is None:
                errors["assetgroupId"] = "Asset Group does not exist"
            else:
                changes["assetgroup_id"] = group.id
        return errors

    async def create_asset(self, identity: Identity, payload: AssetCreate) -> Asset:
        company_id = identity.company_id
        changes = payload.model_dump()

        errors: dict[str, str] = {}
        if payload.serial_code and await self.find_by_serial(company_id, payload.serial_code):
            errors["serialCode"] = SERIAL_IN_USE
        errors.update(await self._check_links(company_id, changes))
        if errors:
            raise ValidationError(errors)

        asset = Asset(
            company_id=company_id,
            user_id=identity.user_id,
            assetgroup_id=changes["assetgroup_id"],
            **{field: changes[field] for field in _ASSET_FIELDS},
        )
        async with atomic(self.db, "asset.create"):
            self.db.add(asset)
            await self.db.flush()
            self.db.add(
                AssetStatus(
                    asset_id=asset.id, status_id=changes["status_code"], company_id=company_id
                )
            )
            if changes["vendor_id"] is not None:
                self.db.add(
                    AssetVendor(
                        asset_id=asset.id, vendor_id=changes["vendor_id"], company_id=company_id
                    )
                )

        logger.info("asset.created", asset_id=asset.id, company_id=company_id)
        return asset

    async def list_assets(self, company_id: int, req: PageRequest) -> dict:
        stmt = (
            select(Asset)
            .where(Asset.company_id == company_id, name_filter(Asset.asset_name, req.search))
            .order_by(Asset.id)
        )
        page = await paginate(self.db, stmt, req)
        page["total_assets"] = page.pop("total")
        return page

    async def update_asset(
        self, company_id: int, asset_id: Any, payload: AssetUpdate
    ) -> Asset:
        """Partial update. Only fields present in the request change.

        vendorId present: link created, replaced, or removed when null/"".
        statusCode present: the status link is replaced.
        """
        asset = await self.get_asset(company_id, asset_id)
        changes = payload.model_dump(exclude_unset=True)

        errors: dict[str, str] = {}
        serial = changes.get("serial_code")
        if serial and serial != asset.serial_code and await self.find_by_serial(company_id, serial):
            errors["serialCode"] = SERIAL_IN_USE
        errors.update(await self._check_links(company_id, changes))
        if errors:
            raise ValidationError(errors)

        async with atomic(self.db, "asset.update"):
            for field in _ASSET_FIELDS:
                if field in changes:
                    setattr(asset, field, changes[field])
            if "assetgroup_id" in changes:
                asset.assetgroup_id = changes["assetgroup_id"]

            if "status_code" in changes:
                await self.db.execute(delete(AssetStatus).where(AssetStatus.asset_id == asset.id))
                self.db.add(
                    AssetStatus(
                        asset_id=asset.id, status_id=changes["status_code"], company_id=company_id
                    )
                )
            if "vendor_id" in changes:
                await self.db.execute(delete(AssetVendor).where(AssetVendor.asset_id == asset.id))
                if changes["vendor_id"] is not None:
                    self.db.add(
                        AssetVendor(
                            asset_id=asset.id, vendor_id=changes["vendor_id"], company_id=company_id
                        )
                    )

        logger.info("asset.updated", asset_id=asset.id, fields=sorted(changes))
        return await self.get_asset(company_id, asset.id)

    async def delete_asset(self, company_id: int, asset_id: Any) -> None:
        asset = await self.get_asset(company_id, asset_id)
        async with atomic(self.db, "asset.delete"):
            await self.db.execute(delete(AssetStatus).where(AssetStatus.asset_id == asset.id))
            await self.db.execute(delete(AssetVendor).where(AssetVendor.asset_id == asset.id))
            await self.db.execute(delete(Asset).where(Asset.id == asset.id))
        logger.info("asset.deleted", asset_id=asset.id, company_id=company_id)
