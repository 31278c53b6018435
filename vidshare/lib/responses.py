"""Success envelope shared by every route."""

from __future__ import annotations

import dataclasses
from typing import Any

from litestar import MediaType, Response
from litestar.status_codes import HTTP_200_OK
from pydantic import BaseModel


def to_jsonable(data: Any) -> Any:
    """Dump pydantic models (by camelCase alias) and dataclasses to plain data."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return {f.name: to_jsonable(getattr(data, f.name)) for f in dataclasses.fields(data)}
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    return data


def envelope(
    data: Any = None,
    message: str = "Success",
    status_code: int = HTTP_200_OK,
    cookies: list | None = None,
) -> Response:
    """Wrap ``data`` as ``{"statusCode", "message", "data"}``."""
    return Response(
        content={"statusCode": status_code, "message": message, "data": to_jsonable(data)},
        status_code=status_code,
        media_type=MediaType.JSON,
        cookies=cookies,
    )
