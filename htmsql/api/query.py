"""Public query and re-render endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from htmsql.api.deps import get_runtime
from htmsql.runtime import SiteRuntime
from htmsql.schemas.page import QueryRequest, QueryResponse, RenderResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["runtime"])


@router.post("/query", response_model=QueryResponse)
async def run_query(
    body: QueryRequest,
    runtime: Annotated[SiteRuntime, Depends(get_runtime)],
) -> QueryResponse:
    """Execute one statement against the content store and persist it."""
    rows = await runtime.execute(body.sql, body.params)
    logger.info("Executed ad-hoc statement (%d rows)", len(rows))
    return QueryResponse(rows=rows)


@router.post("/render", response_model=RenderResponse)
async def rerender(
    runtime: Annotated[SiteRuntime, Depends(get_runtime)],
) -> RenderResponse:
    """Recompose rendered pages from the current content."""
    return RenderResponse(pages=await runtime.render())
