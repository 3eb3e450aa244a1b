"""Durable participant store with monotonic best-score merging."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, List, NamedTuple

from sqlalchemy import DateTime, bindparam, case, delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError
from sqlmodel import Session, select

from ..core import InvalidArgument, NotFound, StorageUnavailable, utcnow
from ..models import ParticipantRecord, ScoreSubmission
from .submissions import encode_breakdown

_INT_MAX = 2**63 - 1


class SubmitResult(NamedTuple):
    record_id: int
    created: bool
    best_score: int


class ScoreStore:
    """Keyed store of :class:`ParticipantRecord` rows.

    Each submission is a single ``INSERT ... ON CONFLICT DO UPDATE`` in its
    own transaction, so merges for one registration number are linearized by
    the database and ``best_score`` can never regress under races. Reads are
    single statements and always observe one committed state.
    """

    def __init__(
        self, engine: Engine, *, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self.engine = engine
        self._clock = clock
        if engine.dialect.name == "postgresql":
            self._insert = postgresql.insert
        else:
            self._insert = sqlite.insert

    @contextmanager
    def read_session(self) -> Iterator[Session]:
        """Yield a session for read-only queries, mapping driver failures."""

        try:
            with Session(self.engine) as session:
                yield session
        except DBAPIError as exc:
            raise StorageUnavailable("Score storage is unavailable.") from exc

    @contextmanager
    def _transaction(self) -> Iterator[Connection]:
        try:
            with self.engine.begin() as conn:
                if conn.dialect.name == "sqlite":
                    # Take the writer lock up front so work done inside the
                    # transaction is ordered like the commits.
                    conn.exec_driver_sql("BEGIN IMMEDIATE")
                yield conn
        except DBAPIError as exc:
            raise StorageUnavailable("Score storage is unavailable.") from exc

    def submit(self, submission: ScoreSubmission) -> SubmitResult:
        """Merge one attempt into the participant's record."""

        if not submission.registration_number:
            raise InvalidArgument("Registration number is required.")
        if not 0 <= submission.final_score <= _INT_MAX:
            raise InvalidArgument("finalScore is out of range")
        try:
            level_breakdown_json = encode_breakdown(submission.level_breakdown)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(
                "levelBreakdown must be JSON serialisable without NaN or Infinity"
            ) from exc

        table = ParticipantRecord.__table__
        stmt = self._insert(table).values(
            registration_number=submission.registration_number,
            student_name=submission.student_name,
            best_score=submission.final_score,
            levels_completed=submission.levels_completed,
            accuracy_rate=submission.accuracy_rate,
            time_remaining=submission.time_remaining,
            level_breakdown_json=level_breakdown_json,
            last_submitted_at=bindparam("submitted_at", type_=DateTime()),
            source_address=submission.source_address,
            session_id=submission.session_id,
            submission_count=1,
        )
        incoming = stmt.excluded
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.registration_number],
            set_={
                "student_name": incoming.student_name,
                "best_score": case(
                    (incoming.best_score > table.c.best_score, incoming.best_score),
                    else_=table.c.best_score,
                ),
                "levels_completed": incoming.levels_completed,
                "accuracy_rate": incoming.accuracy_rate,
                "time_remaining": incoming.time_remaining,
                "level_breakdown_json": incoming.level_breakdown_json,
                "last_submitted_at": incoming.last_submitted_at,
                "source_address": incoming.source_address,
                "session_id": incoming.session_id,
                "submission_count": table.c.submission_count + 1,
            },
        ).returning(table.c.id, table.c.best_score, table.c.submission_count)

        with self._transaction() as conn:
            # Read the clock under the writer lock so last_submitted_at
            # follows commit order for racing submissions.
            row = conn.execute(stmt, {"submitted_at": self._clock()}).one()

        return SubmitResult(
            record_id=row.id,
            created=row.submission_count == 1,
            best_score=row.best_score,
        )

    def delete_one(self, registration_number: str) -> int:
        """Remove a single participant; raises :class:`NotFound` if absent."""

        if not registration_number:
            raise InvalidArgument("Registration number is required.")

        table = ParticipantRecord.__table__
        with self._transaction() as conn:
            result = conn.execute(
                delete(table).where(table.c.registration_number == registration_number)
            )
        if result.rowcount == 0:
            raise NotFound("Student not found.")
        return result.rowcount

    def delete_all(self) -> int:
        with self._transaction() as conn:
            result = conn.execute(delete(ParticipantRecord.__table__))
        return result.rowcount

    def snapshot(self) -> List[ParticipantRecord]:
        """Return every record, most recently submitted first."""

        with self.read_session() as session:
            return list(
                session.exec(
                    select(ParticipantRecord).order_by(
                        ParticipantRecord.last_submitted_at.desc(),
                        ParticipantRecord.registration_number.asc(),
                    )
                ).all()
            )


__all__ = ["ScoreStore", "SubmitResult"]
