"""SQLAlchemy ORM models: single source of truth for the database schema.

Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table.

Key concepts:
- Integer primary keys; every tenant-owned row carries company_id
- Admin rows are the only record of who administers a company.
  User.is_admin is a read-only EXISTS over that table, never stored.
- Asset <-> Status and Asset <-> Vendor links are explicit rows
  (AssetStatus, AssetVendor) so they can carry company_id and notes;
  the relationship() views over them are read-only.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
    select,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    column_property,
    mapped_column,
    relationship,
)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=utcnow
    )


# ══════════════════════════════════════════════════════════════
# Tenancy: companies, users, admins
# ══════════════════════════════════════════════════════════════


class Company(TimestampMixin, Base):
    """Multi-tenant root. Everything else hangs off a company."""

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_name: Mapped[str] = mapped_column(String(50), nullable=False)

    # Read paths only; teardown deletes children explicitly.
    users: Mapped[list["User"]] = relationship(viewonly=True, order_by="User.id")
    assets: Mapped[list["Asset"]] = relationship(viewonly=True, order_by="Asset.id")
    vendors: Mapped[list["Vendor"]] = relationship(viewonly=True, order_by="Vendor.id")
    asset_groups: Mapped[list["AssetGroup"]] = relationship(
        viewonly=True, order_by="AssetGroup.id"
    )


class Admin(Base):
    """System-admin relation: the user who administers a company."""

    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )


class User(TimestampMixin, Base):
    """A member of exactly one company."""

    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_company_username", "company_id", "username"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    username: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(70), nullable=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    inactive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    is_admin: Mapped[bool] = column_property(
        select(Admin.id)
        .where(Admin.user_id == id)
        .correlate_except(Admin)
        .exists()
    )


# ══════════════════════════════════════════════════════════════
# Catalogue: asset groups, statuses, vendors
# ══════════════════════════════════════════════════════════════


class AssetGroup(TimestampMixin, Base):
    __tablename__ = "asset_groups"
    __table_args__ = (
        Index("ix_asset_groups_company_name", "company_id", "asset_group_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    asset_group_name: Mapped[str] = mapped_column(String(32), nullable=False)
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    assets: Mapped[list["Asset"]] = relationship(
        viewonly=True, order_by="Asset.id"
    )


class Status(TimestampMixin, Base):
    __tablename__ = "statuses"
    __table_args__ = (
        Index("ix_statuses_company_name", "company_id", "status_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    status_name: Mapped[str] = mapped_column(String(32), nullable=False)
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    assets: Mapped[list["Asset"]] = relationship(
        secondary="assets_statuses", viewonly=True, order_by="Asset.id"
    )


class Vendor(TimestampMixin, Base):
    __tablename__ = "vendors"
    __table_args__ = (
        Index("ix_vendors_company_name", "company_id", "vendor_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    vendor_name: Mapped[str] = mapped_column(String(32), nullable=False)
    contact_person: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )


# ══════════════════════════════════════════════════════════════
# Assets and their status / vendor links
# ══════════════════════════════════════════════════════════════


class Asset(TimestampMixin, Base):
    __tablename__ = "assets"
    __table_args__ = (
        Index("ix_assets_company_serial", "company_id", "serial_code"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    asset_name: Mapped[str] = mapped_column(String(32), nullable=False)
    assetgroup_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("asset_groups.id"), nullable=False
    )
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    serial_code: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    purchasing_cost: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    current_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    acquisition_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    sale_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Eager: every asset response nests its group, status and vendor.
    assetgroup: Mapped["AssetGroup"] = relationship(
        viewonly=True, lazy="selectin"
    )
    status: Mapped[list["Status"]] = relationship(
        secondary="assets_statuses", viewonly=True, lazy="selectin"
    )
    vendor: Mapped[list["Vendor"]] = relationship(
        secondary="assets_vendors", viewonly=True, lazy="selectin"
    )


class AssetStatus(Base):
    """Current status of an asset (one row per asset)."""

    __tablename__ = "assets_statuses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    asset_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("statuses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    notes: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)


class AssetVendor(Base):
    """Vendor an asset was supplied by (at most one row per asset)."""

    __tablename__ = "assets_vendors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    asset_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    vendor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    notes: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    contact: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
