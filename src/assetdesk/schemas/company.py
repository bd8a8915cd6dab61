"""Pydantic schemas for company registration and company detail."""

from typing import Any, Optional

from pydantic import Field, field_validator

from assetdesk.schemas import common
from assetdesk.schemas.asset import AssetGroupRef, AssetRef
from assetdesk.schemas.common import CamelModel


class CompanyRegister(CamelModel):
    """Founding admin account plus the company it creates."""

    username: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)
    company_name: Optional[str] = Field(None, validate_default=True)
    full_name: Optional[str] = None

    @field_validator("username", mode="before")
    @classmethod
    def _username(cls, v: Any) -> str:
        return common.username(v)

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v: Any) -> str:
        return common.email(v)

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v: Any) -> str:
        return common.strong_password(v)

    @field_validator("company_name", mode="before")
    @classmethod
    def _company_name(cls, v: Any) -> str:
        return common.name(v, "Company name cannot be null", max_len=50)

    @field_validator("full_name", mode="before")
    @classmethod
    def _full_name(cls, v: Any) -> Optional[str]:
        return common.full_name(v)


class CompanyRegistered(CamelModel):
    company_id: int
    user_id: int
    token: str
    message: str = "Account is created"


class CompanyUpdate(CamelModel):
    company_name: Optional[str] = None

    @field_validator("company_name", mode="before")
    @classmethod
    def _company_name(cls, v: Any) -> str:
        return common.name(v, "Company name cannot be null", max_len=50)


class CompanyUpdated(CamelModel):
    id: int
    company_name: str
    company_admin: int


# ─── Detail ─────────────────────────────────────────────

class VendorRef(CamelModel):
    id: int
    vendor_name: str


class UserRef(CamelModel):
    id: int
    username: str


class CompanyDetail(CamelModel):
    id: int
    company_name: str
    vendors: list[VendorRef] = []
    users: list[UserRef] = []
    assets: list[AssetRef] = []
    asset_groups: list[AssetGroupRef] = Field(default_factory=list, alias="assetgroups")
