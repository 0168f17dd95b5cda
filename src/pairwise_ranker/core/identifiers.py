"""Session identifier sources and filesystem-safe slugs."""

from __future__ import annotations

import re
import uuid
from typing import Protocol, runtime_checkable


@runtime_checkable
class IdSource(Protocol):
    """Supplies identifiers for new sessions.

    Owned by whoever creates sessions and passed in explicitly, so the
    engine never keeps a process-wide counter.
    """

    def next_id(self) -> str:
        """Return a fresh identifier."""
        ...


class CounterIdSource:
    """Sequential identifiers, e.g. for a store that numbers its sessions."""

    def __init__(self, start: int = 1, prefix: str = "") -> None:
        self._next = start
        self.prefix = prefix

    def next_id(self) -> str:
        value = self._next
        self._next += 1
        return f"{self.prefix}{value}"


class UuidIdSource:
    """Random identifiers, shortened to a fixed number of hex characters."""

    def __init__(self, length: int = 12) -> None:
        self.length = length

    def next_id(self) -> str:
        return uuid.uuid4().hex[: self.length]


class SlugGenerator:
    """Generate filesystem-safe slugs from arbitrary inputs."""

    def __init__(self, max_length: int | None = 50) -> None:
        """Initialize slug generator.

        Args:
            max_length: Maximum length for generated slugs. Use None to disable truncation.
        """
        self.max_length = max_length

    def slugify(self, value: str) -> str:
        """Generate a URL-safe slug from free text."""
        return self.truncate(re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-"))

    def truncate(self, value: str) -> str:
        """Truncate a value to the configured max length."""
        if self.max_length is None:
            return value
        return value[: self.max_length]

    def session_slug(self, topic: str, session_id: str) -> str:
        """Build the file stem for a saved session."""
        topic_slug = self.slugify(topic) or "items"
        return f"{topic_slug}_{self.slugify(session_id) or 'session'}"
