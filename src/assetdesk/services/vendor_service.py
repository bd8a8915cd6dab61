"""Vendor service: suppliers an asset can be linked to."""

from typing import Any, Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.db.engine import atomic
from assetdesk.db.models import Asset, AssetVendor, Vendor
from assetdesk.errors import ValidationError, VendorNotFound
from assetdesk.ids import parse_id
from assetdesk.schemas.asset import VendorCreate, VendorUpdate
from assetdesk.services.listing import PageRequest, name_filter, paginate

logger = structlog.get_logger()

NAME_IN_USE = "Vendor Name already exists"


class VendorService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_name(self, company_id: int, name: str) -> Optional[Vendor]:
        result = await self.db.execute(
            select(Vendor).where(Vendor.company_id == company_id, Vendor.vendor_name == name)
        )
        return result.scalars().first()

    async def find(self, company_id: int, vendor_id: Any) -> Optional[Vendor]:
        vid = parse_id(vendor_id)
        if vid is None:
            return None
        result = await self.db.execute(
            select(Vendor)
            .where(Vendor.company_id == company_id, Vendor.id == vid)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_vendor(self, company_id: int, vendor_id: Any) -> Vendor:
        vendor = await self.find(company_id, vendor_id)
        if vendor is None:
            raise VendorNotFound()
        return vendor

    async def create_vendor(
        self, company_id: int, user_id: int, payload: VendorCreate
    ) -> Vendor:
        if await self.find_by_name(company_id, payload.vendor_name):
            raise ValidationError({"vendorName": NAME_IN_USE})

        vendor = Vendor(
            vendor_name=payload.vendor_name,
            contact_person=payload.contact_person,
            email=payload.email,
            notes=payload.notes,
            company_id=company_id,
            user_id=user_id,
        )
        async with atomic(self.db, "vendor.create"):
            self.db.add(vendor)
        logger.info("vendor.created", vendor_id=vendor.id, company_id=company_id)
        return vendor

    def _listing(self, company_id: int, search: str):
        return (
            select(Vendor)
            .where(Vendor.company_id == company_id, name_filter(Vendor.vendor_name, search))
            .order_by(Vendor.id)
        )

    async def list_vendors(self, company_id: int, req: PageRequest) -> dict:
        page = await paginate(self.db, self._listing(company_id, req.search), req)
        page["total_vendors"] = page.pop("total")
        return page

    async def list_all_vendors(self, company_id: int, search: str = "") -> dict:
        result = await self.db.execute(self._listing(company_id, search))
        return {"vendors": list(result.scalars().all())}

    async def list_vendor_assets(
        self, company_id: int, vendor_id: Any, req: PageRequest
    ) -> dict:
        vendor = await self.get_vendor(company_id, vendor_id)
        stmt = (
            select(Asset)
            .join(AssetVendor, AssetVendor.asset_id == Asset.id)
            .where(
                Asset.company_id == company_id,
                AssetVendor.vendor_id == vendor.id,
                name_filter(Asset.asset_name, req.search),
            )
            .order_by(Asset.id)
        )
        page = await paginate(self.db, stmt, req)
        page["total_assets"] = page.pop("total")
        return page

    async def update_vendor(
        self, company_id: int, vendor_id: Any, payload: VendorUpdate
    ) -> Vendor:
        vendor = await self.get_vendor(company_id, vendor_id)
        changes = payload.model_dump(exclude_unset=True)

        name = changes.get("vendor_name")
        if name and name != vendor.vendor_name and await self.find_by_name(company_id, name):
            raise ValidationError({"vendorName": NAME_IN_USE})

        for field, value in changes.items():
            setattr(vendor, field, value)
        await self.db.commit()
        logger.info("vendor.updated", vendor_id=vendor.id, fields=sorted(changes))
        return await self.get_vendor(company_id, vendor.id)

    async def delete_vendor(self, company_id: int, vendor_id: Any) -> None:
        """Delete the vendor and unlink it from every asset it supplied."""
        vendor = await self.get_vendor(company_id, vendor_id)
        async with atomic(self.db, "vendor.delete"):
            await self.db.execute(delete(AssetVendor).where(AssetVendor.vendor_id == vendor.id))
            await self.db.execute(delete(Vendor).where(Vendor.id == vendor.id))
        logger.info("vendor.deleted", vendor_id=vendor.id, company_id=company_id)
