"""Listing query parameters: page, size, search, pagination.

Bad values are clamped rather than rejected:
- page: default 0; negative or non-numeric -> 0; capped at MAX_ID
- size: default 10; outside [1, max_page_size] or non-numeric -> default

Numbers are read from their leading digits, so "5abc" is 5 and "1_0" is 1.
"""

import re
from typing import Optional

from fastapi import Query

from assetdesk.config import settings
from assetdesk.ids import MAX_ID
from assetdesk.services.listing import PageRequest, total_pages

__all__ = [
    "PageRequest",
    "clamp_page",
    "clamp_size",
    "page_request",
    "pagination_enabled",
    "total_pages",
]

_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")


def _to_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    match = _LEADING_INT_RE.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def clamp_page(raw: Optional[str]) -> int:
    page = _to_int(raw)
    if page is None or page < 0:
        return 0
    return min(page, MAX_ID)


def clamp_size(raw: Optional[str]) -> int:
    size = _to_int(raw)
    if size is None or size < 1 or size > settings.max_page_size:
        return settings.default_page_size
    return size


def page_request(
    page: Optional[str] = Query(None),
    size: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
) -> PageRequest:
    """FastAPI dependency for paginated listings."""
    return PageRequest(page=clamp_page(page), size=clamp_size(size), search=search or "")


def pagination_enabled(pagination: Optional[str] = Query(None)) -> bool:
    """?pagination=false switches a listing to return every row."""
    return pagination != "false"
