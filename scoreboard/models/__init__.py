"""Database model exports."""

from .participant import ParticipantRecord
from .submission import ScoreSubmission

__all__ = [
    "ParticipantRecord",
    "ScoreSubmission",
]
