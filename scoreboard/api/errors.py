"""Translate scoreboard errors into JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core import ScoreboardError, StorageUnavailable

logger = logging.getLogger("uvicorn")


async def _scoreboard_error(request: Request, exc: ScoreboardError) -> JSONResponse:
    if isinstance(exc, StorageUnavailable):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.__cause__}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Malformed request.", "errors": jsonable_encoder(exc.errors())},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Map each error kind onto its own status code."""

    app.add_exception_handler(ScoreboardError, _scoreboard_error)
    app.add_exception_handler(RequestValidationError, _validation_error)


__all__ = ["register_error_handlers"]
