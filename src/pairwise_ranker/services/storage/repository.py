"""Shared repository helpers for SQLModel session work."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Generic, TypeVar

from sqlmodel import Session

if TYPE_CHECKING:
    from sqlalchemy import Engine

T = TypeVar("T")


class Repository(Generic[T]):
    """Run work inside a SQLModel Session that is always closed afterwards."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _run_session(self, fn: Callable[[Session], T]) -> T:
        with Session(self._engine) as session:
            return fn(session)
