"""JWT credential creation and verification.

The credential carries {userId, isAdmin, companyId}. There is no expiry
claim: a token stays valid until the signing key rotates. Admin status is
fixed at issuance, so a promotion or demotion only shows up after the user
authenticates again.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import jwt
import structlog

from assetdesk.config import settings

logger = structlog.get_logger()


class TokenError(Exception):
    """Raised when a credential cannot be decoded into claims."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    company_id: int
    is_admin: bool


def create_access_token(user_id: int, company_id: int, is_admin: bool) -> str:
    """Sign a credential for the given identity."""
    payload = {
        "userId": user_id,
        "isAdmin": is_admin,
        "companyId": company_id,
        "iat": datetime.now(timezone.utc),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> TokenClaims:
    """Verify signature and claim shapes.

    Raises TokenError on failure.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")

    user_id = payload.get("userId")
    company_id = payload.get("companyId")
    is_admin = payload.get("isAdmin")
    # bool is an int subclass; an id of True is not an id.
    for value in (user_id, company_id):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TokenError("Invalid token: malformed identity claims")
    if not isinstance(is_admin, bool):
        raise TokenError("Invalid token: malformed role claim")

    return TokenClaims(user_id=user_id, company_id=company_id, is_admin=is_admin)


def verify_token(token: str) -> Optional[TokenClaims]:
    """Decode a credential, or None when it is unusable for any reason."""
    try:
        return decode_token(token)
    except TokenError as e:
        logger.debug("auth.token_rejected", reason=str(e))
        return None
