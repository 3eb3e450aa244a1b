"""Service layer: score store, ranking and serialisation helpers."""

from .participants import (
    backup_filename,
    build_backup,
    participant_to_dict,
    ranked_to_dict,
    stats_to_dict,
)
from .ranking import (
    RANKING_ORDER,
    LeaderboardStats,
    RankedParticipant,
    RankingEngine,
    parse_page,
)
from .store import ScoreStore, SubmitResult
from .submissions import decode_breakdown, encode_breakdown, parse_submission

__all__ = [
    "RANKING_ORDER",
    "LeaderboardStats",
    "RankedParticipant",
    "RankingEngine",
    "ScoreStore",
    "SubmitResult",
    "backup_filename",
    "build_backup",
    "decode_breakdown",
    "encode_breakdown",
    "parse_page",
    "parse_submission",
    "participant_to_dict",
    "ranked_to_dict",
    "stats_to_dict",
]
