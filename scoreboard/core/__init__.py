"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    DATABASE_URL,
    DB_RESET,
    DB_TIMEOUT_SEC,
    DEFAULT_LEADERBOARD_LIMIT,
    DEFAULT_STUDENT_NAME,
    HOST,
    LOG_LEVEL,
    PORT,
    admin_key,
)
from .database import build_engine, create_tables, engine
from .errors import (
    InvalidArgument,
    NotFound,
    ScoreboardError,
    StorageUnavailable,
    Unauthorized,
)
from .time import isoformat_z, utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "DATABASE_URL",
    "DB_RESET",
    "DB_TIMEOUT_SEC",
    "DEFAULT_LEADERBOARD_LIMIT",
    "DEFAULT_STUDENT_NAME",
    "HOST",
    "LOG_LEVEL",
    "PORT",
    "InvalidArgument",
    "NotFound",
    "ScoreboardError",
    "StorageUnavailable",
    "Unauthorized",
    "admin_key",
    "build_engine",
    "create_tables",
    "engine",
    "isoformat_z",
    "utcnow",
]
