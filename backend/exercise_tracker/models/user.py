"""User ORM - a registered person who logs exercises.

Invariants:
    - id is a UUID assigned on insert
    - username is non-nullable and UNIQUE (uniqueness enforced by the store)
    - Never updated or deleted by the service
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from exercise_tracker.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
