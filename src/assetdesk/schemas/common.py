"""Shared schema plumbing: camelCase wire names and field rules.

Request models validate with the rule helpers below so each failure
carries the exact message clients display. Rules run in order and the
first failing rule's message is reported for the field.
"""

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    message: str


# ─── Rules ──────────────────────────────────────────────

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
STRONG_PASSWORD_RE = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z]).*$")

PASSWORD_NULL = "Password cannot be null"
PASSWORD_SHORT = "Password must be at least 6 characters"
PASSWORD_WEAK = (
    "Password must have at least 1 uppercase, 1 lowercase letter and 1 number"
)


def fail(message: str):
    raise PydanticCustomError("rule", message)


def as_text(value: Any) -> Optional[str]:
    """Trimmed string form of a JSON scalar; None stays None."""
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value).strip()


def required(value: Any, null_message: str) -> str:
    text = as_text(value)
    if not text:
        fail(null_message)
    return text


def length(text: str, message: str, min_len: int = 0, max_len: Optional[int] = None) -> str:
    if len(text) < min_len or (max_len is not None and len(text) > max_len):
        fail(message)
    return text


def optional_text(value: Any, max_len: int, message: str) -> Optional[str]:
    """Free text where "" means "clear the field"."""
    text = as_text(value)
    if not text:
        return None
    return length(text, message, max_len=max_len)


def email(value: Any) -> str:
    text = required(value, "E-mail cannot be null")
    if not EMAIL_RE.match(text):
        fail("E-mail is not valid")
    return text


def username(value: Any) -> str:
    text = required(value, "Username cannot be null")
    return length(text, "Must have min 4 and max 32 characters", 4, 32)


def full_name(value: Any) -> Optional[str]:
    return optional_text(value, 70, "Must have max 70 characters")


def strong_password(value: Any, null_message: str = PASSWORD_NULL) -> str:
    text = required(value, null_message)
    length(text, PASSWORD_SHORT, min_len=6)
    if not STRONG_PASSWORD_RE.match(text):
        fail(PASSWORD_WEAK)
    return text


def name(value: Any, null_message: str, max_len: int = 32) -> str:
    text = required(value, null_message)
    return length(text, f"Must have min 1 and max {max_len} characters", 1, max_len)
