"""Shared page/limit/sort/search handling for list endpoints."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

MAX_LIMIT = 100
DEFAULT_SORT = "newest"

ItemT = TypeVar("ItemT")

SortOptions = Mapping[str, Sequence[Any]]


def clamp_page(page: int | None) -> int:
    if page is None or page < 1:
        return 1
    return page


def clamp_limit(limit: int | None, default: int) -> int:
    if limit is None:
        return default
    return max(1, min(limit, MAX_LIMIT))


def newest_oldest(model) -> dict[str, tuple]:
    """Sort options ordering ``model`` rows by creation time in either direction.

    ``id`` breaks ties so rows created in the same instant keep a stable
    position across pages.
    """
    return {
        "newest": (model.created_at.desc(), model.id.desc()),
        "oldest": (model.created_at.asc(), model.id.asc()),
    }


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int
    sort: str = DEFAULT_SORT
    query: str | None = None

    @classmethod
    def build(
        cls,
        page: int | None,
        limit: int | None,
        *,
        default_limit: int,
        sort: str | None = None,
        query: str | None = None,
    ) -> PageParams:
        return cls(
            page=clamp_page(page),
            limit=clamp_limit(limit, default_limit),
            sort=sort or DEFAULT_SORT,
            query=query.strip() if query and query.strip() else None,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PageMeta:
    total: int
    page: int
    limit: int
    pages: int


@dataclass
class Paginated(Generic[ItemT]):
    items: list[ItemT]
    meta: PageMeta


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def paginate(
    db_session: AsyncSession,
    statement: Select,
    params: PageParams,
    sort_options: SortOptions,
    search_column=None,
) -> Paginated:
    """Run ``statement`` as one page of results plus a total count.

    Args:
        db_session: Database session
        statement: Filtered select with no ordering or limit applied
        params: Clamped paging parameters
        sort_options: Recognized sort keys; must contain ``"newest"``
        search_column: Column matched case-insensitively against ``params.query``

    Returns:
        Paginated items with ``{total, page, limit, pages}`` metadata
    """
    if params.query and search_column is not None:
        statement = statement.where(search_column.ilike(f"%{_escape_like(params.query)}%", escape="\\"))

    count_query = select(func.count()).select_from(statement.order_by(None).subquery())
    total = (await db_session.execute(count_query)).scalar_one()

    ordering = sort_options.get(params.sort) or sort_options[DEFAULT_SORT]
    result = await db_session.execute(
        statement.order_by(*ordering).offset(params.offset).limit(params.limit)
    )
    items = list(result.scalars().all())

    return Paginated(
        items=items,
        meta=PageMeta(
            total=total,
            page=params.page,
            limit=params.limit,
            pages=math.ceil(total / params.limit),
        ),
    )
