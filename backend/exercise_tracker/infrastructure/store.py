"""SQLAlchemy Exercise Store - the ExerciseStore protocol over an AsyncSession.

Invariants:
    - Library exceptions never leave this module: IntegrityError -> UniquenessError,
      any other SQLAlchemyError -> StoreError, always after a rollback
    - Unknown or malformed user ids raise NotFoundError (never a 500)
    - find_exercises applies no LIMIT when limit is None; non-positive limits
      return nothing; limits beyond the signed 64-bit range mean no LIMIT

Design Decisions:
    - Uniqueness message is the first line of the driver message, with any
      driver class prefix removed (no SQL, parameters or stack detail)
    - Exercises ordered by date so limited queries are deterministic
"""

import logging
import re
from datetime import datetime
from typing import Sequence
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.core.errors import NotFoundError, StoreError, UniquenessError
from exercise_tracker.infrastructure.database import get_db
from exercise_tracker.models.exercise import Exercise
from exercise_tracker.models.user import User

logger = logging.getLogger(__name__)

SQL_BIGINT_MAX = 2 ** 63 - 1

_driver_class_prefix = re.compile(r"^<class '[^']+'>:\s*")


def short_constraint_message(exc: IntegrityError) -> str:
    """Human-readable fragment of a constraint violation."""
    raw = str(getattr(exc, "orig", None) or exc).strip()
    first_line = raw.splitlines()[0] if raw else ""
    message = _driver_class_prefix.sub("", first_line).strip()
    return message or "Duplicate value violates a unique constraint"


class SqlAlchemyExerciseStore:
    """Store adapter backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_user(self, username: str) -> User:
        user = User(username=username)
        self.db.add(user)
        await self._commit("insert_user")
        return user

    async def find_user_by_id(self, user_id: str | UUID) -> User:
        try:
            key = user_id if isinstance(user_id, UUID) else UUID(str(user_id))
        except ValueError:
            raise NotFoundError("User", str(user_id))
        try:
            user = await self.db.get(User, key)
        except SQLAlchemyError as e:
            raise await self._store_error(e, "find_user_by_id")
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user

    async def list_users(self) -> Sequence[User]:
        return await self._scalars(select(User), "list_users")

    async def insert_exercise(self, fields: dict) -> Exercise:
        exercise = Exercise(**fields)
        self.db.add(exercise)
        await self._commit("insert_exercise")
        return exercise

    async def find_exercises(
        self,
        user_id: UUID,
        date_from: datetime,
        date_to: datetime,
        limit: int | None = None,
    ) -> Sequence[Exercise]:
        query = (
            select(Exercise)
            .where(Exercise.user_id == user_id)
            .where(Exercise.date >= date_from)
            .where(Exercise.date <= date_to)
            .order_by(Exercise.date)
        )
        if limit is not None and limit <= SQL_BIGINT_MAX:
            query = query.limit(max(limit, 0))
        return await self._scalars(query, "find_exercises")

    async def _scalars(self, query, operation: str) -> Sequence:
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise await self._store_error(e, operation)
        return result.scalars().all()

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            message = short_constraint_message(e)
            logger.warning(
                f"Constraint violated in {operation}: {message}",
                extra={"error_code": "UNIQUENESS"},
            )
            raise UniquenessError(message)
        except SQLAlchemyError as e:
            raise await self._store_error(e, operation)

    async def _store_error(self, exc: SQLAlchemyError, operation: str) -> StoreError:
        await self.db.rollback()
        logger.error(
            f"Store {operation} failed: {exc}",
            extra={"error_code": "STORE"},
        )
        return StoreError(f"Store {operation} failed", operation)


async def get_store(db: AsyncSession = Depends(get_db)) -> SqlAlchemyExerciseStore:
    """FastAPI dependency for the exercise store."""
    return SqlAlchemyExerciseStore(db)
