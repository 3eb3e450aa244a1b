"""Validated, fully-defaulted score submission."""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlmodel import Field, SQLModel


class ScoreSubmission(SQLModel):
    """A single attempt, ready to be merged into the store."""

    registration_number: str
    final_score: int
    student_name: str
    levels_completed: int = 0
    accuracy_rate: float = 0.0
    time_remaining: int = 0
    level_breakdown: Dict[str, Any] = Field(default_factory=dict)
    source_address: Optional[str] = None
    session_id: Optional[str] = None


__all__ = ["ScoreSubmission"]
