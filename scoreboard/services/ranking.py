"""Ranked reads over the participant store."""

from __future__ import annotations

from typing import Any, List, NamedTuple, Optional, Tuple

from sqlmodel import func, select

from ..core import DEFAULT_LEADERBOARD_LIMIT, NotFound
from ..models import ParticipantRecord
from .store import ScoreStore

# Highest score first, earliest submission wins a tie. Registration number
# only matters when two submissions share a timestamp to the microsecond.
RANKING_ORDER = (
    ParticipantRecord.best_score.desc(),
    ParticipantRecord.last_submitted_at.asc(),
    ParticipantRecord.registration_number.asc(),
)


class RankedParticipant(NamedTuple):
    rank: int
    record: ParticipantRecord


class LeaderboardStats(NamedTuple):
    total_participants: int
    highest_score: Optional[int]
    average_score: Optional[float]
    average_levels_completed: Optional[float]
    average_accuracy: Optional[float]


def parse_page(limit: Any = None, offset: Any = None) -> Tuple[int, int]:
    """Normalise leaderboard paging values, falling back to the defaults."""

    def _non_negative(value: Any) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        try:
            number = int(value)
        except (TypeError, ValueError):
            return None
        return number if number >= 0 else None

    page_limit = _non_negative(limit)
    page_offset = _non_negative(offset)
    return (
        DEFAULT_LEADERBOARD_LIMIT if page_limit is None else page_limit,
        0 if page_offset is None else page_offset,
    )


def _rank_column():
    return func.row_number().over(order_by=RANKING_ORDER).label("rank")


class RankingEngine:
    """Leaderboard pages, aggregate stats and single-participant rank.

    Ranks are computed over the whole table on every read with a window
    function, so a page deep into the board still carries global ranks.
    """

    def __init__(self, store: ScoreStore) -> None:
        self.store = store

    def leaderboard(self, limit: Any = None, offset: Any = None) -> List[RankedParticipant]:
        page_limit, page_offset = parse_page(limit, offset)
        stmt = (
            select(ParticipantRecord, _rank_column())
            .order_by(*RANKING_ORDER)
            .offset(page_offset)
            .limit(page_limit)
        )
        with self.store.read_session() as session:
            rows = session.exec(stmt).all()
        return [RankedParticipant(rank=rank, record=record) for record, rank in rows]

    def stats(self) -> LeaderboardStats:
        """Aggregate figures; every field but the count is ``None`` when empty."""

        stmt = select(
            func.count(ParticipantRecord.id),
            func.max(ParticipantRecord.best_score),
            func.avg(ParticipantRecord.best_score),
            func.avg(ParticipantRecord.levels_completed),
            func.avg(ParticipantRecord.accuracy_rate),
        )
        with self.store.read_session() as session:
            count, highest, avg_score, avg_levels, avg_accuracy = session.exec(stmt).one()

        if not count:
            return LeaderboardStats(0, None, None, None, None)
        return LeaderboardStats(
            total_participants=count,
            highest_score=highest,
            average_score=float(avg_score),
            average_levels_completed=float(avg_levels),
            average_accuracy=float(avg_accuracy),
        )

    def rank_of(self, registration_number: str) -> RankedParticipant:
        ranked = select(ParticipantRecord.id, _rank_column()).subquery()
        stmt = (
            select(ParticipantRecord, ranked.c.rank)
            .join(ranked, ranked.c.id == ParticipantRecord.id)
            .where(ParticipantRecord.registration_number == registration_number)
        )
        with self.store.read_session() as session:
            row = session.exec(stmt).first()
        if row is None:
            raise NotFound("Student not found in leaderboard.")
        record, rank = row
        return RankedParticipant(rank=rank, record=record)


__all__ = [
    "LeaderboardStats",
    "RankedParticipant",
    "RankingEngine",
    "RANKING_ORDER",
    "parse_page",
]
