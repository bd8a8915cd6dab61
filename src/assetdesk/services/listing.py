"""Shared query helpers for paginated, company-scoped listings.

The HTTP side (api/pagination.py) turns query strings into a PageRequest;
services only ever see the clamped values.
"""

import math
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True)
class PageRequest:
    page: int
    size: int
    search: str = ""

    @property
    def offset(self) -> int:
        return self.page * self.size


def total_pages(total: int, size: int) -> int:
    return math.ceil(total / size)


def name_filter(column, search: str):
    """Case-insensitive substring match; empty search matches everything.

    % and _ in the search text match themselves, not any characters.
    """
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


async def paginate(db: AsyncSession, stmt: Select, req: PageRequest) -> dict[str, Any]:
    """Run stmt for one page and count the full result.

    Returns the common envelope with the row count under "total";
    callers rename it to their entity-specific key.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()
    rows = (await db.execute(stmt.offset(req.offset).limit(req.size))).scalars().all()
    return {
        "content": list(rows),
        "page": req.page,
        "size": req.size,
        "total_pages": total_pages(total, req.size),
        "total": total,
    }
