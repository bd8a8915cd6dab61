"""Pydantic schemas for login.

Login input is deliberately loose: any malformed credential is an
"Incorrect credentials" 401, not a 400 with field messages.
"""

from typing import Any

from assetdesk.schemas.common import CamelModel


class LoginRequest(CamelModel):
    email: Any = None
    password: Any = None


class LoginResponse(CamelModel):
    id: int
    username: str
    company_id: int
    is_admin: bool
    token: str
