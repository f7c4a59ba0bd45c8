"""Health check endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from htmsql import __version__
from htmsql.api.deps import get_runtime
from htmsql.exceptions import BootstrapError, StoreError
from htmsql.runtime import SiteRuntime

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str


@router.get("/api/health", response_model=HealthResponse)
async def health_check(
    runtime: Annotated[SiteRuntime, Depends(get_runtime)],
) -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    if not runtime.is_ready:
        db_status = "starting"
    else:
        db_status = "ok"
        try:
            await runtime.pages()
        except (BootstrapError, StoreError):
            logger.warning("Health check database query failed", exc_info=True)
            db_status = "error"

    return HealthResponse(
        status="ok" if db_status == "ok" else "degraded",
        version=__version__,
        database=db_status,
    )
