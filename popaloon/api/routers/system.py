"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from ...core import APP_VERSION

router = APIRouter(tags=["system"])


@router.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse("/docs")


@router.get("/status")
def status() -> Dict[str, str]:
    """Simple readiness probe."""

    return {"status": "up", "version": APP_VERSION}


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose extension configuration values."""

    return {
        "badge": {"color": "#26282b", "backgroundColor": "#7aa5eb"},
        "spawnInterval": {"min": 1000, "max": 10 * 60000},
    }


__all__ = ["router"]
