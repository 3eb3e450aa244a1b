"""Score submission endpoint."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from ...services import ScoreStore, parse_submission
from ..deps import client_address, get_store

router = APIRouter(prefix="/api", tags=["scores"])


@router.post("/submit-score")
def submit_score(
    body: Dict[str, Any],
    store: ScoreStore = Depends(get_store),
    source_address: Optional[str] = Depends(client_address),
):
    """Merge a finished attempt into the participant's best score."""

    submission = parse_submission(body, source_address=source_address)
    result = store.submit(submission)

    return {
        "success": True,
        "message": "Score submitted successfully!",
        "scoreId": result.record_id,
        "created": result.created,
        "bestScore": result.best_score,
    }


__all__ = ["router"]
