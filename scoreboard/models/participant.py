"""Database model for tournament participants and their best score."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Index
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class ParticipantRecord(SQLModel, table=True):
    """One row per registration number holding the best score seen so far.

    ``best_score`` only ever grows. The remaining attempt fields always
    describe the most recent submission, even when that submission scored
    lower than the stored best.
    """

    __tablename__ = "tournament_scores"
    __table_args__ = (
        Index("idx_best_score", "best_score"),
        Index("idx_last_submitted_at", "last_submitted_at"),
    )

    id: Optional[int] = ORMField(default=None, primary_key=True)
    registration_number: str = ORMField(unique=True, nullable=False)
    student_name: str
    best_score: int
    levels_completed: int = 0
    accuracy_rate: float = 0.0
    time_remaining: int = 0
    level_breakdown_json: str = "{}"  # opaque, stored as sent
    last_submitted_at: datetime = ORMField(default_factory=utcnow)
    source_address: Optional[str] = None
    session_id: Optional[str] = None
    submission_count: int = 1


__all__ = ["ParticipantRecord"]
