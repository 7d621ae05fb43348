"""Services Layer - request handlers that orchestrate validation, the store and shaping.

Invariants:
    - Handlers depend on the ExerciseStore protocol, not on SQLAlchemy
"""
