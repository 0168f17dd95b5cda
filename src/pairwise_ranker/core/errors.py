"""Custom exceptions for session validation and rating failures."""

from __future__ import annotations


class RankingError(Exception):
    """Base exception for rating engine failures with optional suggestions."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[Ranking Error] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class InvalidItemCountError(RankingError):
    """Error when a session has too few or too many items."""

    def __init__(self, count: int, max_items: int) -> None:
        self.count = count
        self.max_items = max_items
        super().__init__(
            f"Invalid number of items: {count}",
            f"Provide between 2 and {max_items} items.",
        )


class DuplicateNameError(RankingError):
    """Error when two items share a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Duplicate item name '{name}'",
            "Item names are case-sensitive and must be unique within a session.",
        )


class InvalidNameError(RankingError):
    """Error when an item name is empty or too long."""

    def __init__(self, name: str, max_length: int) -> None:
        self.name = name
        self.max_length = max_length
        super().__init__(
            f"Invalid item name {name!r}",
            f"Names must be non-empty and at most {max_length} characters.",
        )


class InvalidIndexError(RankingError):
    """Error when a vote references an unknown item or pits an item against itself."""

    def __init__(self, winner: int, loser: int, size: int) -> None:
        self.winner = winner
        self.loser = loser
        self.size = size
        if winner == loser:
            reason = f"An item cannot be compared with itself (index {winner})"
        else:
            reason = f"Vote ({winner}, {loser}) is outside 0..{size - 1}"
        super().__init__(reason, "Use two distinct indices of items in the session.")


class InvalidAlgorithmSelectionError(RankingError):
    """Error when an unknown rating algorithm is requested."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        super().__init__(
            f"Unknown rating algorithm '{name}'",
            f"Choose one of: {', '.join(available)}.",
        )


class NumericDegeneracyError(RankingError):
    """Error when a rating update or ranking key is not a finite number."""

    def __init__(self, algorithm: str, detail: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Non-finite {algorithm} score: {detail}")


class SessionStateError(RankingError):
    """Error when a session is modified illegally or a record is malformed."""


class ConfigurationError(Exception):
    """Base exception for configuration errors with optional suggestions."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[Configuration Error] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg
