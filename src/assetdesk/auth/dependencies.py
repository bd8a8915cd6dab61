"""FastAPI auth dependencies.

resolve_identity turns the Authorization header into an Identity, or
None. A missing or bad credential is not an error by itself: the policies
in policies.py decide whether the route needs an identity at all.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.auth.jwt import verify_token
from assetdesk.db.engine import get_db
from assetdesk.db.models import User

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, rebuilt from the credential per request."""

    user_id: int
    company_id: int
    is_admin: bool


def extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


async def resolve_identity(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Optional[Identity]:
    """Resolve the caller's identity (None if absent or no longer valid).

    A correctly signed token is still rejected when its user has been
    deactivated or removed, so revoking access needs no token blacklist.
    """
    token = extract_bearer(authorization)
    if token is None:
        return None

    claims = verify_token(token)
    if claims is None:
        return None

    result = await db.execute(
        select(User.id).where(User.id == claims.user_id, User.inactive.is_(False))
    )
    if result.scalar_one_or_none() is None:
        logger.info("auth.identity_revoked", user_id=claims.user_id)
        return None

    structlog.contextvars.bind_contextvars(
        user_id=claims.user_id, company_id=claims.company_id
    )
    return Identity(
        user_id=claims.user_id,
        company_id=claims.company_id,
        is_admin=claims.is_admin,
    )
