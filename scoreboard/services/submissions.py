"""Validation and defaulting of raw submission payloads."""

from __future__ import annotations

import json
import math
from typing import Any, Dict, Mapping, Optional

from ..core import DEFAULT_STUDENT_NAME, InvalidArgument
from ..models import ScoreSubmission

# SQLite INTEGER is a signed 64-bit value.
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


def _as_int(value: Any, field: str) -> int:
    number = _coerce_int(value, field)
    if not _INT_MIN <= number <= _INT_MAX:
        raise InvalidArgument(f"{field} is out of range")
    return number


def _coerce_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise InvalidArgument(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidArgument(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidArgument(f"{field} must be an integer")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidArgument(f"{field} must be a number")
    try:
        number = float(value)
    except ValueError as exc:
        raise InvalidArgument(f"{field} must be a number") from exc
    if not math.isfinite(number):
        raise InvalidArgument(f"{field} must be a finite number")
    return number


def _optional_str(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidArgument(f"{field} must be a string")
    return value


def parse_submission(
    body: Any, source_address: Optional[str] = None
) -> ScoreSubmission:
    """Turn a raw request body into a fully-populated :class:`ScoreSubmission`.

    Every optional field is defaulted here so the merge step never has to
    reason about missing values. ``finalScore`` must be present; ``0`` counts.
    """

    if not isinstance(body, Mapping):
        raise InvalidArgument("Submission body must be a JSON object.")

    registration_number = body.get("registrationNumber")
    if isinstance(registration_number, str):
        registration_number = registration_number.strip()
    if not registration_number or "finalScore" not in body or body["finalScore"] is None:
        raise InvalidArgument("Registration number and final score are required.")
    if not isinstance(registration_number, str):
        raise InvalidArgument("registrationNumber must be a string")

    final_score = _as_int(body["finalScore"], "finalScore")
    if final_score < 0:
        raise InvalidArgument("finalScore must not be negative")

    levels_completed = _as_int(body.get("levelsCompleted") or 0, "levelsCompleted")
    if levels_completed < 0:
        raise InvalidArgument("levelsCompleted must not be negative")

    level_breakdown = body.get("levelBreakdown") or {}
    if not isinstance(level_breakdown, Mapping):
        raise InvalidArgument("levelBreakdown must be an object")
    level_breakdown = dict(level_breakdown)
    try:
        encode_breakdown(level_breakdown)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(
            "levelBreakdown must be JSON serialisable without NaN or Infinity"
        ) from exc

    student_name = _optional_str(body.get("studentName"), "studentName")
    student_name = (student_name or "").strip() or DEFAULT_STUDENT_NAME

    return ScoreSubmission(
        registration_number=registration_number,
        final_score=final_score,
        student_name=student_name,
        levels_completed=levels_completed,
        accuracy_rate=_as_float(body.get("accuracyRate") or 0, "accuracyRate"),
        time_remaining=_as_int(body.get("timeRemaining") or 0, "timeRemaining"),
        level_breakdown=level_breakdown,
        source_address=source_address,
        session_id=_optional_str(body.get("sessionId"), "sessionId"),
    )


def encode_breakdown(breakdown: Mapping[str, Any]) -> str:
    """Encode a level breakdown for storage; NaN and Infinity are refused."""

    return json.dumps(breakdown, allow_nan=False)


def decode_breakdown(raw: Optional[str]) -> Dict[str, Any]:
    """Decode a stored level breakdown, treating empty storage as ``{}``."""

    return json.loads(raw or "{}")


__all__ = ["decode_breakdown", "encode_breakdown", "parse_submission"]
