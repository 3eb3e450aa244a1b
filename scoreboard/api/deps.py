"""Shared FastAPI dependencies."""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Header, Query, Request

from ..core import Unauthorized, admin_key
from ..services import RankingEngine, ScoreStore


def get_store(request: Request) -> ScoreStore:
    return request.app.state.store


def get_ranking(request: Request) -> RankingEngine:
    return request.app.state.ranking


def client_address(request: Request) -> Optional[str]:
    """Source address of the caller as seen by the transport."""

    return request.client.host if request.client else None


def require_admin(
    key: Optional[str] = Query(default=None),
    admin_key_header: Optional[str] = Header(default=None, alias="admin-key"),
) -> bool:
    """Check the shared admin key from the ``key`` query or ``admin-key`` header."""

    expected = admin_key()
    supplied = key or admin_key_header
    if not expected or not supplied:
        raise Unauthorized("Unauthorized. Admin key required.")
    if not secrets.compare_digest(supplied.encode(), expected.encode()):
        raise Unauthorized("Unauthorized. Admin key required.")
    return True


__all__ = ["client_address", "get_ranking", "get_store", "require_admin"]
