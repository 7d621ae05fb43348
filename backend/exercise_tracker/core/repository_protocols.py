"""Boundary Protocols - contract between the request handlers and the store.

Invariants:
    - Handlers depend on ExerciseStore, never on SQLAlchemy directly
    - Every store failure surfaces as StoreError or one of its refinements
      (UniquenessError, NotFoundError); library exceptions never cross this line

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any fake
    - Async methods: implementations do IO
"""

from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID


class UserLike(Protocol):
    id: UUID
    username: str


class ExerciseLike(Protocol):
    id: UUID
    user_id: UUID
    username: str
    description: str
    duration: int
    date: datetime


class ExerciseStore(Protocol):
    """Persistence operations used by the request handlers."""
    async def insert_user(self, username: str) -> UserLike: ...
    async def find_user_by_id(self, user_id: str | UUID) -> UserLike: ...
    async def list_users(self) -> Sequence[UserLike]: ...
    async def insert_exercise(self, fields: dict) -> ExerciseLike: ...
    async def find_exercises(
        self,
        user_id: UUID,
        date_from: datetime,
        date_to: datetime,
        limit: int | None = None,
    ) -> Sequence[ExerciseLike]: ...
