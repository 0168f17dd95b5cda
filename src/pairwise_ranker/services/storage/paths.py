"""Path utilities for saved sessions and reports."""

from __future__ import annotations

from pathlib import Path

from pairwise_ranker.core.identifiers import SlugGenerator


class StoragePaths:
    """Build and create filesystem paths used by storage services."""

    def __init__(self, base_dir: Path, slugs: SlugGenerator | None = None) -> None:
        self.base_dir = base_dir
        self.slugs = slugs or SlugGenerator()

    def sessions_dir(self) -> Path:
        """Get or create the directory holding session JSON files."""
        path = self.base_dir / "sessions"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def reports_dir(self) -> Path:
        """Get or create the directory holding reports."""
        path = self.base_dir / "reports"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def session_path(self, topic: str, session_id: str) -> Path:
        """Build path to a session JSON file."""
        return self.sessions_dir() / f"{self.slugs.session_slug(topic, session_id)}.json"

    def report_path(self, topic: str, session_id: str, suffix: str) -> Path:
        """Build path to a report artifact (``suffix`` like ``.md`` or ``.csv``)."""
        return self.reports_dir() / f"{self.slugs.session_slug(topic, session_id)}{suffix}"

    def database_path(self) -> Path:
        """Build path to the SQLite mirror of all sessions."""
        self.base_dir.mkdir(parents=True, exist_ok=True)
        return self.base_dir / "sessions.sqlite"
