"""ORM Models - SQLAlchemy declarative models for users and exercises.

All models imported here so Base.metadata is complete before create_all runs.
"""

from exercise_tracker.models.user import User  # noqa: F401
from exercise_tracker.models.exercise import Exercise  # noqa: F401
