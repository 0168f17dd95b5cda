"""Session persistence facade over JSON files, SQLite, and reports."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from pairwise_ranker import __version__
from pairwise_ranker.core.config import RankerConfig
from pairwise_ranker.core.identifiers import CounterIdSource, IdSource, SlugGenerator
from pairwise_ranker.models import SessionRecord
from pairwise_ranker.services.reporting import (
    export_standings_csv,
    generate_leaderboard_report,
)
from pairwise_ranker.session import RatingSession

from .db_store import DBStore
from .file_store import FileStore
from .paths import StoragePaths

logger = structlog.get_logger()


class SessionStore:
    """Unified persistence layer for rating sessions.

    Handles:
    - JSON records, one file per session
    - Optional SQLite mirror of the same records (SQLModel)
    - Markdown and CSV leaderboards

    The store owns the identifier source for new sessions. By default it
    numbers sessions sequentially, continuing after the highest numeric id
    already on disk.
    """

    def __init__(
        self,
        config: RankerConfig,
        id_source: IdSource | None = None,
    ) -> None:
        """Initialize session store.

        Args:
            config: Ranker configuration.
            id_source: Identifier source for new sessions.
        """
        self.config = config
        self.base_dir = Path(config.output_dir)
        self.paths = StoragePaths(self.base_dir, SlugGenerator(config.slug_max_length))
        self.files = FileStore()
        self.db = DBStore(self.paths.database_path()) if config.database else None
        self.id_source = id_source or CounterIdSource(start=self._next_sequential_id())
        logger.info("store_init", path=str(self.base_dir), database=config.database)

    def _next_sequential_id(self) -> int:
        sessions_dir = self.base_dir / "sessions"
        if not sessions_dir.exists():
            return 1
        numeric = [
            int(record.session_id)
            for record in self.files.list_records(sessions_dir)
            if record.session_id.isdigit()
        ]
        return max(numeric, default=0) + 1

    # ==================== Sessions ====================

    def new_session(self, names: Sequence[str]) -> RatingSession:
        """Create a session for ``names`` with a fresh identifier."""
        return RatingSession.from_config(names, self.config, self.id_source)

    def save(self, session: RatingSession) -> Path:
        """Persist a session and return the path of its JSON record."""
        record = session.to_record(version=__version__)
        path = self.files.save_record(
            record, self.paths.session_path(record.topic, record.session_id)
        )
        if self.db is not None:
            self.db.save_record(record)
        logger.info("session_saved", session_id=record.session_id, path=str(path))
        return path

    def load(self, path: Path) -> RatingSession:
        """Load a session from a JSON record file."""
        record = self.files.load_record(path)
        logger.info("session_loaded", session_id=record.session_id, path=str(path))
        return RatingSession.from_record(record, self.config)

    def load_from_database(self, session_id: str) -> RatingSession:
        """Load a session from the SQLite mirror.

        Raises:
            RuntimeError: If the database is disabled in the configuration.
        """
        if self.db is None:
            msg = "Database storage is disabled; set 'database: true' in the config"
            raise RuntimeError(msg)
        return RatingSession.from_record(self.db.load_record(session_id), self.config)

    def find(self, session_id: str) -> Path:
        """Locate the JSON record of a session by id.

        Raises:
            FileNotFoundError: If no record has that id.
        """
        stem_suffix = f"_{self.paths.slugs.slugify(session_id)}.json"
        for path in sorted(self.paths.sessions_dir().glob("*.json")):
            if path.name.endswith(stem_suffix):
                return path
        msg = f"No saved session with id '{session_id}' in {self.paths.sessions_dir()}"
        raise FileNotFoundError(msg)

    def list_records(self) -> list[SessionRecord]:
        """All saved records, oldest first."""
        return self.files.list_records(self.paths.sessions_dir())

    # ==================== Reports ====================

    def save_report(self, session: RatingSession) -> tuple[Path, Path]:
        """Write markdown and CSV leaderboards for a session.

        Returns:
            Tuple of (markdown_path, csv_path).
        """
        standings = session.standings()
        md_path = self.paths.report_path(session.topic, session.session_id, ".md")
        md_path.write_text(
            generate_leaderboard_report(
                standings,
                session.algorithm,
                session.topic,
                description=(
                    f"{session.matrix.total} votes, {session.skipped} skipped, "
                    f"{session.size} items."
                ),
            ),
            encoding="utf-8",
        )
        csv_path = export_standings_csv(
            standings,
            session.algorithm,
            self.paths.report_path(session.topic, session.session_id, ".csv"),
        )
        logger.info("report_saved", markdown=str(md_path), csv=str(csv_path))
        return md_path, csv_path

    def close(self) -> None:
        """Release database connections."""
        if self.db is not None:
            self.db.close()
