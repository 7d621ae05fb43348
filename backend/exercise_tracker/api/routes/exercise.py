"""Exercise Routes - user registration, exercise logging and the exercise log query.

Invariants:
    - Routes contain no business logic; they read the request and delegate to ExerciseHandlers
    - Bodies accepted as JSON or as form data (urlencoded or multipart)
    - Failures are not caught here; global handlers render them as plain text
"""

import logging

from fastapi import APIRouter, Depends, Request

from exercise_tracker.core.errors import ValidationError
from exercise_tracker.infrastructure.store import SqlAlchemyExerciseStore, get_store
from exercise_tracker.services.handle_exercise import ExerciseHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/exercise", tags=["exercise"])

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body(request: Request) -> dict:
    """Request body as a flat dict; unknown content types yield {}."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            raise ValidationError("body", "body: malformed JSON")
        return payload if isinstance(payload, dict) else {}
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return dict(form)
    return {}


@router.post("/new-user")
async def create_user(
    request: Request, store: SqlAlchemyExerciseStore = Depends(get_store),
):
    """Register a user. Duplicate usernames fail with 400."""
    return await ExerciseHandlers(store).create_user(await read_body(request))


@router.get("/users")
async def list_users(store: SqlAlchemyExerciseStore = Depends(get_store)):
    return await ExerciseHandlers(store).list_users()


@router.post("/add")
async def add_exercise(
    request: Request, store: SqlAlchemyExerciseStore = Depends(get_store),
):
    """Log an exercise for an existing user."""
    return await ExerciseHandlers(store).add_exercise(await read_body(request))


@router.get("/log")
async def exercise_log(
    request: Request, store: SqlAlchemyExerciseStore = Depends(get_store),
):
    """Exercise history filtered by from/to and truncated by limit."""
    return await ExerciseHandlers(store).query_log(dict(request.query_params))
