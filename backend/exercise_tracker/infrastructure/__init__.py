"""Infrastructure Layer - database access, the store adapter, and logging setup.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Library exceptions are translated to core.errors before leaving this package
"""
