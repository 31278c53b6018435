"""Dependencies and small helpers shared by the API controllers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any

from litestar.datastructures import State, UploadFile
from litestar.params import Parameter
from pydantic import BaseModel

from vidshare.config import Settings
from vidshare.lib.exceptions import ValidationError
from vidshare.lib.media import MediaStore
from vidshare.lib.pagination import PageParams, Paginated


@dataclass(frozen=True)
class ListQuery:
    """Raw list query parameters, before per-resource defaults apply."""

    page: int | None = None
    limit: int | None = None
    sort: str | None = None
    search: str | None = None

    def params(self, default_limit: int) -> PageParams:
        return PageParams.build(
            self.page,
            self.limit,
            default_limit=default_limit,
            sort=self.sort,
            query=self.search,
        )


def provide_settings(state: State) -> Settings:
    return state.settings


def provide_media_store(state: State) -> MediaStore:
    return state.media_store


async def provide_list_query(
    page: Annotated[int | None, Parameter(query="page")] = None,
    limit: Annotated[int | None, Parameter(query="limit")] = None,
    sort_by: Annotated[str | None, Parameter(query="sortBy")] = None,
    sort: Annotated[str | None, Parameter(query="sort")] = None,
    search: Annotated[str | None, Parameter(query="query")] = None,
    q: Annotated[str | None, Parameter(query="q")] = None,
) -> ListQuery:
    return ListQuery(page=page, limit=limit, sort=sort_by or sort, search=search or q)


def page_payload(page: Paginated, schema: type[BaseModel], key: str) -> dict[str, Any]:
    """Shape a page as ``{<key>: [...], "meta": {...}}``."""
    return {key: [schema.model_validate(item) for item in page.items], "meta": page.meta}


def form_text(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, str) else None


def form_file(data: dict[str, Any], key: str) -> UploadFile | None:
    value = data.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, UploadFile) else None


def form_float(data: dict[str, Any], key: str) -> float | None:
    value = form_text(data, key)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ValidationError(f"{key} must be a number") from exc
