"""Database mirror of session records using SQLModel."""

from __future__ import annotations

from datetime import UTC
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy.pool import NullPool
from sqlmodel import Session, SQLModel, col, create_engine, select

from pairwise_ranker.core.errors import SessionStateError
from pairwise_ranker.models import (
    HistoryRow,
    ItemRecord,
    ItemRow,
    SessionRecord,
    SessionRow,
    VoteRow,
)
from pairwise_ranker.models.item import ITEM_SCORE_FIELDS

from .repository import Repository

logger = structlog.get_logger()


class DBStore(Repository[Any]):
    """Persist sessions as rows: metadata, items, non-zero cells, history."""

    def __init__(self, db_path: Path | None = None) -> None:
        if db_path is None:
            engine = create_engine("sqlite://")
        else:
            engine = create_engine(f"sqlite:///{db_path}", poolclass=NullPool)
        SQLModel.metadata.create_all(engine)
        super().__init__(engine)

    def save_record(self, record: SessionRecord) -> None:
        """Insert or replace every row belonging to ``record``."""

        def _save(session: Session) -> None:
            self._delete_rows(session, record.session_id)
            session.add(
                SessionRow(
                    id=record.session_id,
                    topic=record.topic,
                    algorithm=record.algorithm,
                    size=len(record.items),
                    skipped=record.skipped,
                    finalized=record.finalized,
                    version=record.version,
                    created_at=record.created_at,
                )
            )
            # Parent row must exist before the foreign keys below
            session.flush()
            for position, item in enumerate(record.items):
                session.add(
                    ItemRow(session_id=record.session_id, position=position, **item.model_dump())
                )
            for winner, row in enumerate(record.votes):
                for loser, count in enumerate(row):
                    if count:
                        session.add(
                            VoteRow(
                                session_id=record.session_id,
                                winner=winner,
                                loser=loser,
                                count=count,
                            )
                        )
            for sequence, (winner, loser) in enumerate(record.history):
                session.add(
                    HistoryRow(
                        session_id=record.session_id,
                        sequence=sequence,
                        winner=winner,
                        loser=loser,
                    )
                )
            session.commit()

        self._run_session(_save)
        logger.debug("saved_db_record", session_id=record.session_id)

    def load_record(self, session_id: str) -> SessionRecord:
        """Rebuild a record from its rows.

        Raises:
            SessionStateError: If no session has that id.
        """

        def _load(session: Session) -> SessionRecord:
            meta = session.get(SessionRow, session_id)
            if meta is None:
                msg = f"No stored session with id '{session_id}'"
                raise SessionStateError(msg)

            items = session.exec(
                select(ItemRow)
                .where(ItemRow.session_id == session_id)
                .order_by(col(ItemRow.position))
            ).all()
            votes = [[0] * meta.size for _ in range(meta.size)]
            for cell in session.exec(select(VoteRow).where(VoteRow.session_id == session_id)):
                votes[cell.winner][cell.loser] = cell.count
            history = session.exec(
                select(HistoryRow)
                .where(HistoryRow.session_id == session_id)
                .order_by(col(HistoryRow.sequence))
            ).all()

            created_at = meta.created_at
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=UTC)

            return SessionRecord(
                session_id=meta.id,
                topic=meta.topic,
                algorithm=meta.algorithm,
                created_at=created_at,
                items=[
                    ItemRecord(
                        name=row.name,
                        **{key: getattr(row, key) for key in ITEM_SCORE_FIELDS},
                    )
                    for row in items
                ],
                votes=votes,
                history=[(row.winner, row.loser) for row in history],
                skipped=meta.skipped,
                finalized=meta.finalized,
                version=meta.version,
            )

        return self._run_session(_load)

    def list_session_ids(self) -> list[str]:
        """Ids of all stored sessions, oldest first."""

        def _list(session: Session) -> list[str]:
            rows = session.exec(select(SessionRow).order_by(col(SessionRow.created_at))).all()
            return [row.id for row in rows]

        return self._run_session(_list)

    def close(self) -> None:
        self._engine.dispose()

    @staticmethod
    def _delete_rows(session: Session, session_id: str) -> None:
        for table in (HistoryRow, VoteRow, ItemRow):
            for row in session.exec(select(table).where(table.session_id == session_id)).all():
                session.delete(row)
        existing = session.get(SessionRow, session_id)
        if existing is not None:
            session.delete(existing)
        session.flush()
