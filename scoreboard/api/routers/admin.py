"""Administrative endpoints: clearing records and exporting backups."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ...core import InvalidArgument, isoformat_z, utcnow
from ...services import ScoreStore, backup_filename, build_backup
from ..deps import get_store, require_admin

router = APIRouter(
    prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)
logger = logging.getLogger("uvicorn")


@router.delete("/clear-all")
def clear_all(store: ScoreStore = Depends(get_store)):
    """Delete every participant record. Irreversible."""

    deleted = store.delete_all()
    logger.warning(f"Database cleared by admin ({deleted} records removed)")
    return {
        "success": True,
        "message": "All tournament data has been cleared successfully.",
        "deletedRecords": deleted,
        "timestamp": isoformat_z(utcnow()),
    }


@router.delete("/clear-student")
def clear_student(
    reg: Optional[str] = None,
    body: Optional[Dict[str, Any]] = Body(default=None),
    store: ScoreStore = Depends(get_store),
):
    """Delete one participant, named by the ``reg`` query or the JSON body."""

    registration_number = reg or (body or {}).get("registrationNumber")
    if not isinstance(registration_number, str) or not registration_number.strip():
        raise InvalidArgument("Registration number is required.")
    registration_number = registration_number.strip()

    deleted = store.delete_one(registration_number)
    logger.warning(f"Student record deleted: {registration_number}")
    return {
        "success": True,
        "message": f"Student record for {registration_number} has been deleted.",
        "deletedRecords": deleted,
    }


@router.get("/backup")
def backup(store: ScoreStore = Depends(get_store)):
    """Download every record as a JSON attachment, newest submission first."""

    exported_at = utcnow()
    document = build_backup(store.snapshot(), exported_at=exported_at)
    logger.info(f"Backup exported with {document['totalRecords']} records")
    return JSONResponse(
        content=document,
        headers={
            "Content-Disposition": f'attachment; filename="{backup_filename(exported_at)}"'
        },
    )


__all__ = ["router"]
