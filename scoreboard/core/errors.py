"""Error kinds raised by the score store and ranking layer."""

from __future__ import annotations


class ScoreboardError(Exception):
    """Base class for every failure the scoreboard reports to callers."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgument(ScoreboardError):
    """A submission or request parameter is missing or malformed."""

    status_code = 400


class Unauthorized(ScoreboardError):
    """An administrative operation was attempted without the admin key."""

    status_code = 403


class NotFound(ScoreboardError):
    """No record exists for the requested registration number."""

    status_code = 404


class StorageUnavailable(ScoreboardError):
    """The storage medium failed or timed out; the caller may retry."""

    status_code = 503


__all__ = [
    "InvalidArgument",
    "NotFound",
    "ScoreboardError",
    "StorageUnavailable",
    "Unauthorized",
]
