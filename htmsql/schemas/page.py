"""Page and runtime API schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class PageSummary(BaseModel):
    """A routable page."""

    slug: str
    title: str


class PageListResponse(BaseModel):
    """All routable pages."""

    pages: list[PageSummary]


class QueryRequest(BaseModel):
    """Ad-hoc statement against the content store."""

    sql: str = Field(min_length=1, max_length=100_000)
    params: list[Any] | dict[str, Any] = Field(default_factory=list)


class QueryResponse(BaseModel):
    """Rows returned by a read statement; empty for mutations."""

    rows: list[dict[str, Any]]


class RenderResponse(BaseModel):
    """Slugs whose rendered output was replaced."""

    pages: list[str]
