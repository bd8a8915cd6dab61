"""Pydantic schemas for users.

Separate "Create"/"Update" schemas (input) from "Read" schemas (output).
Read schemas are the field allowlist: nothing else (password hash,
timestamps) ever leaves the service.
"""

from typing import Any, Optional

from pydantic import Field, field_validator

from assetdesk.schemas import common
from assetdesk.schemas.common import CamelModel


class UserCreate(CamelModel):
    username: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)
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

    @field_validator("full_name", mode="before")
    @classmethod
    def _full_name(cls, v: Any) -> Optional[str]:
        return common.full_name(v)


class UserUpdate(CamelModel):
    """Profile fields only. Role and active state have their own routes."""

    username: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None

    @field_validator("username", mode="before")
    @classmethod
    def _username(cls, v: Any) -> str:
        return common.username(v)

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v: Any) -> str:
        return common.email(v)

    @field_validator("full_name", mode="before")
    @classmethod
    def _full_name(cls, v: Any) -> Optional[str]:
        return common.full_name(v)


class PasswordUpdate(CamelModel):
    old_password: Optional[str] = Field(None, validate_default=True)
    new_password: Optional[str] = Field(None, validate_default=True)

    @field_validator("old_password", mode="before")
    @classmethod
    def _old_password(cls, v: Any) -> str:
        return common.required(v, common.PASSWORD_NULL)

    @field_validator("new_password", mode="before")
    @classmethod
    def _new_password(cls, v: Any) -> str:
        return common.strong_password(v)


class UserCreated(CamelModel):
    token: str
    message: str = "User is created"


class UserRead(CamelModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    company_id: int
    inactive: bool
    is_admin: bool


class UserListItem(CamelModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    inactive: bool
    is_admin: bool


class UserSummary(CamelModel):
    id: int
    username: str
    email: str
    company_id: int


class UserPage(CamelModel):
    content: list[UserListItem]
    page: int
    size: int
    total_user: int
    total_pages: int
