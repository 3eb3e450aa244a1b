"""Leaderboard, statistics and rank lookup endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ...services import RankingEngine, ranked_to_dict, stats_to_dict
from ..deps import get_ranking

router = APIRouter(prefix="/api", tags=["leaderboard"])


@router.get("/leaderboard")
def get_leaderboard(
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    ranking: RankingEngine = Depends(get_ranking),
):
    """Get a page of the ranked leaderboard.

    ``limit`` and ``offset`` are taken as raw strings so malformed values fall
    back to the defaults instead of failing the request.
    """

    entries = ranking.leaderboard(limit, offset)
    leaderboard = [ranked_to_dict(entry) for entry in entries]
    return {
        "success": True,
        "leaderboard": leaderboard,
        "total": len(leaderboard),
    }


@router.get("/stats")
def get_stats(ranking: RankingEngine = Depends(get_ranking)):
    """Aggregate statistics over every participant."""

    return {"success": True, "stats": stats_to_dict(ranking.stats())}


@router.get("/rank/{registration_number}")
def get_rank(registration_number: str, ranking: RankingEngine = Depends(get_ranking)):
    """Get one participant's record and current rank."""

    entry = ranking.rank_of(registration_number)
    return {"success": True, "student": ranked_to_dict(entry)}


__all__ = ["router"]
