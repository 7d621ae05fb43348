"""Exercise Tracker - users, exercise logging and a filtered exercise log over HTTP.

Invariants:
    - Package root has no import side effects
"""

__version__ = "1.0.0"
