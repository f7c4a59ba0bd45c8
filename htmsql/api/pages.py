"""Rendered site pages and the page list."""

from __future__ import annotations

import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from htmsql.api.deps import get_runtime, get_settings
from htmsql.config import Settings
from htmsql.exceptions import BootstrapError
from htmsql.runtime import SiteRuntime
from htmsql.schemas.page import PageListResponse

logger = logging.getLogger(__name__)

_PAGE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
_INDEX_NAME = "index"

router = APIRouter(tags=["pages"])


@router.get("/api/pages", response_model=PageListResponse)
async def list_pages_endpoint(
    runtime: Annotated[SiteRuntime, Depends(get_runtime)],
) -> PageListResponse:
    """List routable pages."""
    return PageListResponse(pages=await runtime.pages())


async def _serve(runtime: SiteRuntime, slug: str) -> HTMLResponse:
    try:
        document = await runtime.page_html(slug)
    except BootstrapError:
        return HTMLResponse(runtime.error_html(slug), status_code=503)
    if document is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return HTMLResponse(document)


@router.get("/", response_class=HTMLResponse)
async def index_page(
    runtime: Annotated[SiteRuntime, Depends(get_runtime)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HTMLResponse:
    """Serve the default page."""
    return await _serve(runtime, settings.default_page)


@router.get("/{name}.html", response_class=HTMLResponse)
async def site_page(
    name: str,
    runtime: Annotated[SiteRuntime, Depends(get_runtime)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HTMLResponse:
    """Serve ``<slug>.html``; ``index.html`` is the default page."""
    if not _PAGE_NAME_PATTERN.match(name):
        raise HTTPException(status_code=400, detail="Invalid page name")
    slug = settings.default_page if name == _INDEX_NAME else name.lower()
    return await _serve(runtime, slug)
