"""User service: login, membership and account lifecycle.

Account states:

    active ──delete──▶ inactive ──reactivate──▶ active
       └──────── company teardown ────────▶ (row removed)

Only the system admin's own deletion removes rows, and then it removes
the whole company (see CompanyService.teardown).
"""

from typing import Any, Optional

import structlog
from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.auth.dependencies import Identity
from assetdesk.auth.jwt import create_access_token
from assetdesk.auth.password import hash_password, verify_password
from assetdesk.db.engine import atomic
from assetdesk.db.models import Admin, User
from assetdesk.errors import (
    AuthenticationError,
    ForbiddenError,
    UserNotFound,
    ValidationError,
)
from assetdesk.ids import parse_id
from assetdesk.schemas.user import PasswordUpdate, UserCreate, UserUpdate
from assetdesk.services.listing import PageRequest, name_filter, paginate

logger = structlog.get_logger()


class UserService:
    """Business logic for users inside one company."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Lookups ────────────────────────────────────────

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def find_by_username(self, company_id: int, username: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.company_id == company_id, User.username == username)
        )
        return result.scalars().first()

    async def get_user(self, company_id: int, user_id: Any) -> User:
        """Load a user of the company, refreshing any copy already in the session."""
        uid = parse_id(user_id)
        if uid is None:
            raise UserNotFound()
        result = await self.db.execute(
            select(User)
            .where(User.company_id == company_id, User.id == uid)
            .execution_options(populate_existing=True)
        )
        user = result.scalars().first()
        if user is None:
            raise UserNotFound()
        return user

    async def is_system_admin(self, user_id: int, company_id: Optional[int] = None) -> bool:
        clause = Admin.user_id == user_id
        if company_id is not None:
            clause = clause & (Admin.company_id == company_id)
        return bool(await self.db.scalar(select(exists().where(clause))))

    async def issue_token_for(self, user: User) -> str:
        """Sign a token for user. isAdmin comes from the Admin relation only."""
        is_admin = await self.is_system_admin(user.id, user.company_id)
        return create_access_token(user.id, user.company_id, is_admin)

    # ─── Login ──────────────────────────────────────────

    async def authenticate(self, email: Any, password: Any) -> dict:
        """Check credentials and return the login payload.

        Unknown e-mail, wrong password and malformed input are all the
        same 401 so the response does not reveal which accounts exist.
        """
        if not isinstance(email, str) or not isinstance(password, str) or not email:
            raise AuthenticationError()

        user = await self.find_by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.info("auth.login_failed", reason="credentials")
            raise AuthenticationError()
        if user.inactive:
            logger.info("auth.login_failed", reason="inactive", user_id=user.id)
            raise ForbiddenError()

        token = await self.issue_token_for(user)
        logger.info("auth.login", user_id=user.id, company_id=user.company_id)
        return {
            "id": user.id,
            "username": user.username,
            "company_id": user.company_id,
            "is_admin": user.is_admin,
            "token": token,
        }

    # ─── Membership ─────────────────────────────────────

    async def create_user(self, company_id: int, payload: UserCreate) -> str:
        """Add a member to the company and return a token for the new account."""
        errors: dict[str, str] = {}
        if await self.find_by_username(company_id, payload.username):
            errors["username"] = "Username in use"
        if await self.find_by_email(payload.email):
            errors["email"] = "E-mail in use"
        if errors:
            raise ValidationError(errors)

        user = User(
            company_id=company_id,
            username=payload.username,
            email=payload.email,
            full_name=payload.full_name,
            password=hash_password(payload.password),
            inactive=False,
        )
        async with atomic(self.db, "user.create"):
            self.db.add(user)
            await self.db.flush()

        logger.info("user.created", user_id=user.id, company_id=company_id)
        return await self.issue_token_for(user)

    async def list_users(self, identity: Identity, req: PageRequest) -> dict:
        """Page through the company's users.

        The company admin also sees deactivated accounts; everyone else
        sees active members only. Active users sort first.
        """
        stmt = select(User).where(
            User.company_id == identity.company_id,
            name_filter(User.username, req.search),
        )
        if not identity.is_admin:
            stmt = stmt.where(User.inactive.is_(False))
        stmt = stmt.order_by(User.inactive.asc(), User.id.asc())

        page = await paginate(self.db, stmt, req)
        page["total_user"] = page.pop("total")
        return page

    # ─── Profile ────────────────────────────────────────

    async def update_user(
        self, identity: Identity, company_id: int, user_id: Any, payload: UserUpdate
    ) -> User:
        user = await self.get_user(company_id, user_id)
        changes = payload.model_dump(exclude_unset=True)

        errors: dict[str, str] = {}
        if "email" in changes:
            other = await self.find_by_email(changes["email"])
            if other is not None and other.id != user.id:
                errors["email"] = "E-mail in use"
        if "username" in changes and changes["username"] != user.username:
            if await self.find_by_username(company_id, changes["username"]):
                errors["username"] = "Username in use"
        if errors:
            raise ValidationError(errors)

        if not identity.is_admin and user.inactive:
            raise ForbiddenError()

        for field, value in changes.items():
            setattr(user, field, value)
        await self.db.commit()

        logger.info("user.updated", user_id=user.id, fields=sorted(changes))
        return await self.get_user(company_id, user.id)

    async def change_password(
        self, company_id: int, user_id: Any, payload: PasswordUpdate
    ) -> None:
        user = await self.get_user(company_id, user_id)

        errors: dict[str, str] = {}
        if not verify_password(payload.old_password, user.password):
            errors["oldPassword"] = "Password is incorrect"
        if verify_password(payload.new_password, user.password):
            errors["newPassword"] = "New password must be different than the previous one"
        if errors:
            raise ValidationError(errors)
        if user.inactive:
            raise ForbiddenError()

        user.password = hash_password(payload.new_password)
        await self.db.commit()
        logger.info("user.password_changed", user_id=user.id)

    # ─── Lifecycle ──────────────────────────────────────

    async def reactivate_user(self, company_id: int, user_id: Any) -> User:
        user = await self.get_user(company_id, user_id)
        if not user.inactive:
            raise ForbiddenError("User is already active")

        user.inactive = False
        await self.db.commit()
        logger.info("user.reactivated", user_id=user.id)
        return user

    async def delete_user(self, company_id: int, user_id: Any) -> None:
        """Soft-delete a member; deleting the system admin tears the company down."""
        user = await self.get_user(company_id, user_id)

        if await self.is_system_admin(user.id, company_id):
            from assetdesk.services.company_service import CompanyService

            await CompanyService(self.db).teardown(company_id)
            return

        if user.inactive:
            raise ForbiddenError()

        user.inactive = True
        await self.db.commit()
        logger.info("user.soft_deleted", user_id=user.id, company_id=company_id)
