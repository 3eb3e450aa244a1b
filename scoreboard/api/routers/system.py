"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from ...core import isoformat_z, utcnow

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health() -> Dict[str, Any]:
    """Simple readiness check."""

    return {
        "success": True,
        "message": "Server is running",
        "timestamp": isoformat_z(utcnow()),
    }


__all__ = ["router"]
