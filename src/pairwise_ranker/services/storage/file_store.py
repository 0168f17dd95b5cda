"""JSON file storage for session records."""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from pairwise_ranker.core.errors import SessionStateError
from pairwise_ranker.models import SessionRecord

logger = structlog.get_logger()


class FileStore:
    """Read and write one session record per JSON file."""

    def save_record(self, record: SessionRecord, path: Path) -> Path:
        """Write a record to ``path``, replacing any previous contents."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(record.model_dump(mode="json"), f, indent=2)
        logger.debug("saved_record", path=str(path), session_id=record.session_id)
        return path

    def load_record(self, path: Path) -> SessionRecord:
        """Read a record from ``path``.

        Raises:
            FileNotFoundError: If the file does not exist.
            SessionStateError: If the file is not a valid session record.
        """
        with path.open(encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                msg = f"{path} is not valid JSON: {e}"
                raise SessionStateError(msg) from e
        try:
            return SessionRecord.model_validate(data)
        except ValidationError as e:
            msg = f"{path} is not a valid session record"
            raise SessionStateError(msg, str(e)) from e

    def list_records(self, directory: Path) -> list[SessionRecord]:
        """Load every readable record in ``directory``, oldest first."""
        records = []
        for path in sorted(directory.glob("*.json")):
            try:
                records.append(self.load_record(path))
            except SessionStateError as e:
                logger.warning("skipped_record", path=str(path), error=e.message)
        return sorted(records, key=lambda r: r.created_at)
