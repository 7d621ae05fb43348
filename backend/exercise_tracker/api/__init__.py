"""API Layer - FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in create_app() (no auto-discovery)
    - Errors render as plain text with a status code
"""
