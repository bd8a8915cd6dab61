"""Pydantic schemas for assets, asset groups, vendors and statuses."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from assetdesk.schemas import common
from assetdesk.schemas.common import CamelModel


# ─── References nested inside other payloads ────────────

class AssetRef(CamelModel):
    id: int
    asset_name: str


class AssetGroupRef(CamelModel):
    id: int
    asset_group_name: str


class StatusRef(CamelModel):
    id: int
    status_name: str


# ─── Vendors ────────────────────────────────────────────

class VendorCreate(CamelModel):
    vendor_name: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    contact_person: Optional[str] = Field(None, validate_default=True)
    notes: Optional[str] = None

    @field_validator("vendor_name", mode="before")
    @classmethod
    def _vendor_name(cls, v: Any) -> str:
        return common.name(v, "Vendor Name cannot be null")

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v: Any) -> str:
        return common.email(v)

    @field_validator("contact_person", mode="before")
    @classmethod
    def _contact_person(cls, v: Any) -> str:
        text = common.required(v, "Contact Person cannot be null")
        return common.length(text, "Must have max 50 characters", max_len=50)

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, v: Any) -> Optional[str]:
        return common.optional_text(v, 300, "Must have max 300 characters")


class VendorUpdate(VendorCreate):
    """Same rules, but every field may be omitted."""

    vendor_name: Optional[str] = None
    email: Optional[str] = None
    contact_person: Optional[str] = None


class VendorRead(CamelModel):
    id: int
    vendor_name: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    company_id: int
    user_id: Optional[int] = None


class VendorPage(CamelModel):
    content: list[VendorRead]
    page: int
    size: int
    total_pages: int
    total_vendors: int


class VendorList(CamelModel):
    vendors: list[VendorRead]


# ─── Asset groups ───────────────────────────────────────

class AssetGroupCreate(CamelModel):
    asset_group_name: Optional[str] = Field(None, validate_default=True)

    @field_validator("asset_group_name", mode="before")
    @classmethod
    def _asset_group_name(cls, v: Any) -> str:
        return common.name(v, "Asset Group Name cannot be null")


class AssetGroupUpdate(AssetGroupCreate):
    asset_group_name: Optional[str] = None


class AssetGroupRead(CamelModel):
    id: int
    asset_group_name: str
    company_id: int
    user_id: Optional[int] = None
    assets: list[AssetRef] = []


class AssetGroupPage(CamelModel):
    content: list[AssetGroupRead]
    page: int
    size: int
    total_pages: int
    total_asset_groups: int


class AssetGroupList(CamelModel):
    asset_groups: list[AssetGroupRead]


# ─── Statuses ───────────────────────────────────────────

class StatusCreate(CamelModel):
    status_name: Optional[str] = Field(None, validate_default=True)

    @field_validator("status_name", mode="before")
    @classmethod
    def _status_name(cls, v: Any) -> str:
        return common.name(v, "Status Name cannot be null")


class StatusUpdate(StatusCreate):
    status_name: Optional[str] = None


class StatusRead(CamelModel):
    id: int
    status_name: str
    company_id: int
    user_id: Optional[int] = None


class StatusDetail(StatusRead):
    assets: list[AssetRef] = []


class StatusList(CamelModel):
    asset_statuses: list[StatusDetail]


# ─── Assets ─────────────────────────────────────────────

class AssetCreate(CamelModel):
    """statusCode / vendorId / assetgroupId are checked against the company
    by the service; here they only need to be present."""

    asset_name: Optional[str] = Field(None, validate_default=True)
    serial_code: Optional[str] = None
    status_code: Optional[str] = Field(None, validate_default=True)
    vendor_id: Optional[str] = None
    assetgroup_id: Optional[str] = Field(None, validate_default=True)
    purchasing_cost: Optional[float] = None
    current_value: Optional[float] = None
    acquisition_date: Optional[datetime] = None
    sale_date: Optional[datetime] = None

    @field_validator("asset_name", mode="before")
    @classmethod
    def _asset_name(cls, v: Any) -> str:
        return common.name(v, "Asset name cannot be null")

    @field_validator("serial_code", "vendor_id", mode="before")
    @classmethod
    def _optional(cls, v: Any) -> Optional[str]:
        return common.as_text(v) or None

    @field_validator(
        "purchasing_cost", "current_value", "acquisition_date", "sale_date",
        mode="before",
    )
    @classmethod
    def _blank_is_null(cls, v: Any) -> Any:
        return None if v == "" else v

    @field_validator("status_code", mode="before")
    @classmethod
    def _status_code(cls, v: Any) -> str:
        return common.required(v, "Status cannot be null")

    @field_validator("assetgroup_id", mode="before")
    @classmethod
    def _assetgroup_id(cls, v: Any) -> str:
        return common.required(v, "Asset Group cannot be null")


class AssetUpdate(AssetCreate):
    """Partial update. An explicit null/"" vendorId unlinks the vendor."""

    asset_name: Optional[str] = None
    status_code: Optional[str] = None
    assetgroup_id: Optional[str] = None


class AssetRead(CamelModel):
    id: int
    asset_name: str
    assetgroup_id: int
    company_id: int
    serial_code: Optional[str] = None
    user_id: Optional[int] = None
    purchasing_cost: Optional[float] = None
    current_value: Optional[float] = None
    acquisition_date: Optional[datetime] = None
    sale_date: Optional[datetime] = None
    assetgroup: Optional[AssetGroupRef] = None
    status: list[StatusRef] = []
    vendor: list[VendorRead] = []


class AssetPage(CamelModel):
    content: list[AssetRead]
    page: int
    size: int
    total_pages: int
    total_assets: int
