"""Shared API dependencies: settings and the site runtime."""

from __future__ import annotations

from fastapi import Request

from htmsql.config import Settings
from htmsql.runtime import SiteRuntime


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_runtime(request: Request) -> SiteRuntime:
    """Get the site runtime from app state."""
    runtime: SiteRuntime = request.app.state.runtime
    return runtime
