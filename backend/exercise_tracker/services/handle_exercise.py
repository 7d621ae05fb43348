"""Exercise Handlers - create user, list users, add exercise, query exercise log.

Invariants:
    - Handlers never catch domain errors; every failure propagates to the error normalizer
    - add_exercise resolves the user BEFORE writing anything;
      an unknown userId short-circuits with NotFoundError and nothing is persisted
    - query_log count equals len(log) (post-limit), never the total in range
"""

import logging

from exercise_tracker.core.errors import ValidationError
from exercise_tracker.core.exercise_log import (
    build_log_response, format_calendar_date, resolve_date_range,
)
from exercise_tracker.core.repository_protocols import ExerciseStore
from exercise_tracker.schemas.exercise import (
    ExerciseCreate, LogQuery, UserCreate, UserResponse, parse_input,
)

logger = logging.getLogger(__name__)


class ExerciseHandlers:
    """Request handlers for the exercise tracker API."""

    def __init__(self, store: ExerciseStore):
        self.store = store

    async def create_user(self, data: dict) -> dict:
        body = parse_input(UserCreate, data)
        user = await self.store.insert_user(body.username)
        logger.info("User created", extra={"user_id": str(user.id)})
        return UserResponse.model_validate(user).model_dump(mode="json")

    async def list_users(self) -> list[dict]:
        users = await self.store.list_users()
        return [
            UserResponse.model_validate(u).model_dump(mode="json") for u in users
        ]

    async def add_exercise(self, data: dict) -> dict:
        """Resolve the user, then validate and persist the exercise.

        Only userId presence is checked before the lookup; an unknown userId
        fails with 404 before the remaining fields are looked at, and never
        produces a write or a half-filled response.
        """
        user_id = data.get("userId")
        if user_id is None or not str(user_id).strip():
            raise ValidationError("userId", "userId is required")
        user = await self.store.find_user_by_id(str(user_id).strip())
        body = parse_input(ExerciseCreate, data)
        exercise = await self.store.insert_exercise({
            "user_id": user.id,
            "username": user.username,
            "description": body.description,
            "duration": body.duration,
            "date": body.date,
        })
        logger.info("Exercise logged", extra={"user_id": str(user.id)})
        return {
            "_id": str(user.id),
            "username": user.username,
            "description": exercise.description,
            "duration": exercise.duration,
            "date": format_calendar_date(exercise.date),
        }

    async def query_log(self, params: dict) -> dict:
        query = parse_input(LogQuery, params)
        date_from, date_to = resolve_date_range(query.date_from, query.date_to)
        user = await self.store.find_user_by_id(query.user_id)
        exercises = await self.store.find_exercises(
            user.id, date_from, date_to, query.limit,
        )
        return build_log_response(user, exercises)
