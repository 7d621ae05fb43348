"""Exercise Tracker Schemas - Pydantic models for request input and user output.

Invariants:
    - Text fields are stripped and must be non-empty
    - ExerciseCreate.duration is always a whole number
    - ExerciseCreate.date is never None after validation (defaults to now)
    - parse_input() raises the domain ValidationError for the FIRST failing field

Design Decisions:
    - Wire names (userId, from, to) kept as aliases, Python names stay snake_case
    - Validators delegate coercion to core.exercise_log so the rules live in one place
"""

from datetime import datetime
from typing import Any, TypeVar
from uuid import UUID

from pydantic import (
    BaseModel, ConfigDict, Field, field_validator, model_validator,
    ValidationError as PydanticValidationError,
)

from exercise_tracker.core.errors import ValidationError
from exercise_tracker.core.exercise_log import (
    parse_date, parse_limit, parse_whole_number, utc_now,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _required_text(value: Any, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{field} is required")
    return str(value).strip()


def _optional_text(value: Any) -> str | None:
    if value is None or not str(value).strip():
        return None
    return str(value).strip()


class UserCreate(BaseModel):
    """User registration - username only."""
    username: str

    @field_validator("username", mode="before")
    @classmethod
    def require_username(cls, v: Any) -> str:
        return _required_text(v, "username")


class UserResponse(BaseModel):
    """Public user shape - id and username only."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str


class ExerciseCreate(BaseModel):
    """Exercise input - userId, description, whole-number duration, optional date."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    description: str
    duration: int
    date: datetime | None = None

    @field_validator("user_id", mode="before")
    @classmethod
    def require_user_id(cls, v: Any) -> str:
        return _required_text(v, "userId")

    @field_validator("description", mode="before")
    @classmethod
    def require_description(cls, v: Any) -> str:
        return _required_text(v, "description")

    @field_validator("duration", mode="before")
    @classmethod
    def whole_number_duration(cls, v: Any) -> int:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("duration is required")
        try:
            return parse_whole_number(v, "duration")
        except ValidationError as e:
            raise ValueError(e.message)

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> datetime | None:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        try:
            return parse_date(v, "date")
        except ValidationError as e:
            raise ValueError(e.message)

    @model_validator(mode="after")
    def default_date_to_now(self):
        if self.date is None:
            self.date = utc_now()
        return self


class LogQuery(BaseModel):
    """Exercise log query string - from/to stay raw, resolved by the service."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    date_from: str | None = Field(None, alias="from")
    date_to: str | None = Field(None, alias="to")
    limit: int | None = None

    @field_validator("user_id", mode="before")
    @classmethod
    def require_user_id(cls, v: Any) -> str:
        return _required_text(v, "userId")

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def blank_as_missing(cls, v: Any) -> str | None:
        return _optional_text(v)

    @field_validator("limit", mode="before")
    @classmethod
    def lenient_limit(cls, v: Any) -> int | None:
        return parse_limit(v)


def to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Convert the first Pydantic error into the domain ValidationError."""
    first = exc.errors()[0]
    field = str(first["loc"][0]) if first["loc"] else "body"
    if first["type"] == "missing":
        return ValidationError(field, f"{field} is required")
    if first["type"] == "value_error":
        return ValidationError(field, str(first["ctx"]["error"]))
    return ValidationError(field, f"{field}: {first['msg']}")


def parse_input(model: type[ModelT], data: dict) -> ModelT:
    """Validate raw input against model or raise ValidationError."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise to_validation_error(e)
