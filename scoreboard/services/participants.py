"""Serialisation helpers for participant records."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from ..core import isoformat_z, utcnow
from ..models import ParticipantRecord
from .ranking import LeaderboardStats, RankedParticipant
from .submissions import decode_breakdown


def participant_to_dict(record: ParticipantRecord) -> Dict[str, Any]:
    """Serialise a participant record to the API row shape."""

    return {
        "registration_number": record.registration_number,
        "student_name": record.student_name,
        "best_score": record.best_score,
        "levels_completed": record.levels_completed,
        "accuracy_rate": record.accuracy_rate,
        "time_remaining": record.time_remaining,
        "level_breakdown": decode_breakdown(record.level_breakdown_json),
        "last_submitted_at": isoformat_z(record.last_submitted_at),
    }


def ranked_to_dict(entry: RankedParticipant) -> Dict[str, Any]:
    """Serialise a leaderboard entry with its rank first."""

    return {"rank": entry.rank, **participant_to_dict(entry.record)}


def stats_to_dict(stats: LeaderboardStats) -> Dict[str, Any]:
    """Serialise aggregate stats, keeping None for an empty board."""

    return stats._asdict()


def build_backup(
    records: Iterable[ParticipantRecord], exported_at: Optional[datetime] = None
) -> Dict[str, Any]:
    """Assemble the admin backup document from a store snapshot.

    Records are dumped in the order given, which for
    :meth:`ScoreStore.snapshot` is most recent submission first.
    """

    exported_at = exported_at or utcnow()
    data = [
        {
            "id": record.id,
            **participant_to_dict(record),
            "source_address": record.source_address,
            "session_id": record.session_id,
            "submission_count": record.submission_count,
        }
        for record in records
    ]
    return {
        "exportDate": isoformat_z(exported_at),
        "totalRecords": len(data),
        "data": data,
    }


def backup_filename(exported_at: datetime) -> str:
    """Attachment name for a backup, stamped with the export date."""

    return f"tournament_backup_{exported_at.date().isoformat()}.json"


__all__ = [
    "backup_filename",
    "build_backup",
    "participant_to_dict",
    "ranked_to_dict",
    "stats_to_dict",
]
