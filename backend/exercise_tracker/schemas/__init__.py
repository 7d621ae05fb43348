"""Pydantic Schemas - request/response validation at the API boundary.

Invariants:
    - Schemas validate at the system boundary (request bodies, query strings)
    - Failures leave this package as the domain ValidationError, never Pydantic's
"""
